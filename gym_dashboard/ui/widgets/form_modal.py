# gym_dashboard/ui/widgets/form_modal.py
"""
Generic create/edit form in a modal.

Fields are declared with `FormField`; the modal dismisses with the parsed
values dict, or None when cancelled. Validation errors stay in the modal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label, Select

from gym_dashboard.errors import ValidationError

KINDS = ("text", "int", "float", "date", "select", "bool")


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    kind: str = "text"
    required: bool = False
    placeholder: str = ""
    options: Sequence[Tuple[str, Any]] = ()
    default: Any = None


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def parse_form(fields: Sequence[FormField], raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert raw widget values into typed values.

    Raises `ValidationError` listing every bad field.
    """
    values: Dict[str, Any] = {}
    errors: List[str] = []

    for spec in fields:
        value = raw.get(spec.name)
        if isinstance(value, str):
            value = value.strip()

        if spec.kind == "bool":
            values[spec.name] = bool(value)
            continue
        if spec.kind == "select" and value not in [opt for _, opt in spec.options]:
            # Select's blank sentinel
            value = None

        if value in (None, ""):
            if spec.required:
                errors.append(f"{spec.label} is required")
            values[spec.name] = None
            continue

        try:
            if spec.kind == "int":
                values[spec.name] = int(value)
            elif spec.kind == "float":
                values[spec.name] = float(value)
            elif spec.kind == "date":
                values[spec.name] = date.fromisoformat(str(value))
            else:
                values[spec.name] = value
        except ValueError:
            hint = " (YYYY-MM-DD)" if spec.kind == "date" else ""
            errors.append(f"{spec.label} is invalid{hint}")

    if errors:
        raise ValidationError(", ".join(errors))
    return values


class FormModal(ModalScreen[Optional[Dict[str, Any]]]):
    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+s", "submit", "Save"),
    ]

    def __init__(
        self,
        title: str,
        fields: Sequence[FormField],
        values: Optional[Mapping[str, Any]] = None,
        *,
        submit_label: str = "Save",
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self.title_text = title
        self.fields = list(fields)
        self.initial = dict(values or {})
        self.submit_label = submit_label

    def _widget_id(self, spec: FormField) -> str:
        return f"field-{spec.name}"

    def compose(self) -> ComposeResult:
        with Vertical(id="form-container", classes="modal-container"):
            yield Label(self.title_text, classes="modal-title")
            with VerticalScroll(id="form-fields"):
                for spec in self.fields:
                    value = self.initial.get(spec.name, spec.default)
                    label = f"{spec.label} *" if spec.required else spec.label
                    if spec.kind == "bool":
                        yield Checkbox(spec.label, value=bool(value), id=self._widget_id(spec))
                        continue
                    yield Label(label, classes="input-label")
                    if spec.kind == "select":
                        select_kwargs = {"prompt": spec.placeholder or "Select..."}
                        if value in [opt for _, opt in spec.options]:
                            select_kwargs["value"] = value
                        yield Select(list(spec.options), id=self._widget_id(spec), **select_kwargs)
                    else:
                        placeholder = spec.placeholder or ("YYYY-MM-DD" if spec.kind == "date" else "")
                        yield Input(value=_to_text(value), placeholder=placeholder, id=self._widget_id(spec))
            yield Label("", id="form-error")
            with Horizontal(classes="modal-buttons"):
                yield Button("Cancel", variant="primary", id="cancel-button")
                yield Button(self.submit_label, variant="success", id="save-button")

    def on_mount(self) -> None:
        inputs = self.query(Input)
        if inputs:
            inputs.first().focus()

    def collect(self) -> Dict[str, Any]:
        raw: Dict[str, Any] = {}
        for spec in self.fields:
            widget = self.query_one(f"#{self._widget_id(spec)}")
            raw[spec.name] = widget.value
        return raw

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "cancel-button":
            self.action_cancel()
        elif event.button.id == "save-button":
            self.action_submit()

    def action_submit(self) -> None:
        try:
            values = parse_form(self.fields, self.collect())
        except ValidationError as e:
            self.query_one("#form-error", Label).update(str(e))
            return
        self.dismiss(values)

    def action_cancel(self) -> None:
        self.dismiss(None)
