# gym_dashboard/ui/screens/payments.py
"""Pending payments for a date, and recording a payment."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Input, Label

from gym_dashboard.models.pagination import extract_list, from_list_wrapper
from gym_dashboard.models.payment import PAYMENT_MODES, Payment, PaymentRequest
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import display, format_currency, format_date

PENDING_KEY = ("payments", "pending")

PAYMENT_FIELDS = [
    FormField("employee_id", "Member ID", kind="int", required=True),
    FormField("due_date", "Due Date", kind="date", required=True),
    FormField("paid_amount", "Paid Amount", kind="float", required=True),
    FormField("payment_mode", "Payment Mode", kind="select", options=[(m, m) for m in PAYMENT_MODES], default="Cash"),
    FormField("advance_in_months", "Advance (months)", kind="int", default=0),
    FormField("is_admission_fee", "Admission fee", kind="bool"),
]


def _matches(payment: Payment, term: str) -> bool:
    return payment.matches(term)


def pending_totals(payload: Any) -> Dict[str, float]:
    """Count and summed amount of the pending rows as the server sent them."""
    payments = [Payment.from_api(doc) for doc in extract_list(payload) if isinstance(doc, dict)]
    return {
        "count": len(payments),
        "amount": sum(p.amount or 0 for p in payments),
    }


class PaymentsScreen(ListScreen):
    PATH = "/payments"
    HEADING = "Payments"
    NOUN = "Pending payments"
    SEARCH_PLACEHOLDER = "Filter by member name or ID..."
    WATCH_KEYS = (("payments",),)

    BINDINGS = ListScreen.BINDINGS + [
        Binding("n", "record_payment", "Record Payment", show=True),
    ]

    def build_controller(self) -> ListStateController:
        payments = self.container.payment_service

        spec = FilterSpec(
            "pending", "Pending",
            query_key=lambda s: (*PENDING_KEY, self._date_param(s.param("date"))),
            fetch=lambda s: payments.get_pending_payments(self._date_param(s.param("date"))),
            decode=lambda payload, s: from_list_wrapper(payload, Payment.from_api, s, "data", _matches),
            sortable=False,
        )
        return ListStateController(
            [spec],
            default_filter="pending",
            page_size=self.per_page,
            url_params={"date": ""},
            search_debounce=self.debounce_delay,
            schedule=self.schedule,
            name="payments",
        )

    @staticmethod
    def _date_param(value: str) -> str:
        return value or date.today().isoformat()

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return [
            Column("member_id", "Member ID", lambda p: display(p.employee_id), width=10),
            Column("name", "Member", lambda p: p.employee_name),
            Column("due", "Due Date", lambda p: format_date(p.due_date)),
            Column("amount", "Amount", lambda p: format_currency(p.amount)),
            Column("kind", "Type", lambda p: Text(p.kind, style="magenta" if p.is_admission_fee else "cyan")),
        ]

    def compose_toolbar(self) -> ComposeResult:
        with Horizontal(classes="toolbar"):
            yield Input(placeholder="Due on or before (YYYY-MM-DD)", id="pending-date")
            yield Button("Apply", id="apply-date")
            yield Button("Record Payment", variant="success", id="record-payment")
        yield Label("", id="pending-totals", classes="summary")

    def after_seed(self) -> None:
        self.query_one("#pending-date", Input).value = self.controller.state.param("date")

    def render_result(self) -> None:
        super().render_result()
        state = self.controller.state
        entry = self.query_client.cache.get((*PENDING_KEY, self._date_param(state.param("date"))))
        totals = pending_totals(entry.data if entry else None)
        self.query_one("#pending-totals", Label).update(
            f"Total pending: {format_currency(totals['amount'])}  •  {totals['count']} payments"
        )

    # ---------- events ----------
    def on_input_submitted(self, event) -> None:
        if event.input.id == "pending-date":
            self._apply_date()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "apply-date":
            self._apply_date()
        elif event.button.id == "record-payment":
            self.action_record_payment()

    def _apply_date(self) -> None:
        raw = self.query_one("#pending-date", Input).value.strip()
        if raw:
            try:
                date.fromisoformat(raw)
            except ValueError:
                self.toast("Date must be YYYY-MM-DD", "warning")
                return
        self.controller.set_param("date", raw)

    def on_row_chosen(self, item: Payment) -> None:
        self.action_record_payment(item)

    # ---------- actions ----------
    def action_record_payment(self, pending: Optional[Payment] = None) -> None:
        values: Dict[str, Any] = {"due_date": date.today(), "payment_mode": "Cash", "advance_in_months": 0}
        if pending is not None:
            values.update(
                employee_id=pending.employee_id,
                due_date=pending.due_date,
                paid_amount=pending.amount,
                is_admission_fee=pending.is_admission_fee,
            )

        def handle(result: Optional[Dict[str, Any]]) -> None:
            if result is None:
                return
            result["payment_mode"] = result.get("payment_mode") or "Cash"
            result["advance_in_months"] = result.get("advance_in_months") or 0
            request = PaymentRequest(**result)
            self.mutate(
                self.container.payment_service.save_payment,
                request.to_api(),
                success_message="Payment recorded successfully!",
                invalidate_queries=[
                    PENDING_KEY,
                    ("members", "paid"),
                    ("members", "unpaid"),
                    ("member", str(request.employee_id)),
                ],
            )

        self.app.push_screen(FormModal("Record Payment", PAYMENT_FIELDS, values, submit_label="Record"), handle)
