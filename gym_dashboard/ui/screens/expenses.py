# gym_dashboard/ui/screens/expenses.py
"""Expense ledger: server-paginated by year/month, CRUD and bulk upload."""

from __future__ import annotations

import calendar
from dataclasses import asdict
from datetime import date
from typing import Any, Dict, List, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Input, Select

from gym_dashboard.models.expense import Expense
from gym_dashboard.models.pagination import from_data_wrapper
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import display, format_currency, format_date, truncate_text

EXPENSES_KEY = ("expenses",)

MONTH_OPTIONS = [(calendar.month_name[m], str(m)) for m in range(1, 13)]

EXPENSE_FIELDS = [
    FormField("expense_name", "Expense Name", required=True),
    FormField("amount", "Amount", kind="float", required=True),
    FormField("date", "Date", kind="date", required=True),
    FormField("paid_by_employee_id", "Paid By (Member ID)", kind="int"),
    FormField("remarks", "Remarks"),
]


def _paid_by(expense: Expense) -> str:
    if expense.paid_by_employee_id is None:
        return display(expense.paid_by_employee_name)
    return f"{display(expense.paid_by_employee_name)} (ID: {expense.paid_by_employee_id})"


class ExpensesScreen(ListScreen):
    PATH = "/expenses"
    HEADING = "Expenses"
    NOUN = "Expenses"
    SHOW_SEARCH = False
    WATCH_KEYS = (EXPENSES_KEY,)

    BINDINGS = ListScreen.BINDINGS + [
        Binding("n", "new_expense", "New Expense", show=True),
        Binding("e", "edit_expense", "Edit", show=True),
        Binding("delete", "delete_expense", "Delete", show=True),
    ]

    def build_controller(self) -> ListStateController:
        expenses = self.container.expense_service
        today = date.today()

        spec = FilterSpec(
            "all", "All",
            query_key=lambda s: (*EXPENSES_KEY, s.page, s.size, s.param("year"), s.param("month")),
            fetch=lambda s: expenses.get_expenses(s.page, s.size, s.param("year"), s.param("month")),
            decode=lambda payload, s: from_data_wrapper(payload, Expense.from_api, s.size),
            sortable=False,
            searchable=False,
        )
        return ListStateController(
            [spec],
            default_filter="all",
            page_size=self.per_page,
            url_params={"year": str(today.year), "month": str(today.month)},
            name="expenses",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return [
            Column("date", "Date", lambda e: format_date(e.date)),
            Column("name", "Expense Name", lambda e: e.expense_name),
            Column("amount", "Amount", lambda e: format_currency(e.amount)),
            Column("paid_by", "Paid By", _paid_by),
            Column("remarks", "Remarks", lambda e: truncate_text(e.remarks or "-", 40)),
        ]

    def compose_toolbar(self) -> ComposeResult:
        with Horizontal(classes="toolbar"):
            yield Input(placeholder="Year", id="expense-year", type="integer")
            yield Select(MONTH_OPTIONS, prompt="Month", id="expense-month")
            yield Button("New Expense", variant="success", id="new-expense")
            yield Button("Edit", id="edit-expense")
            yield Button("Delete", variant="error", id="delete-expense")
        with Horizontal(classes="toolbar"):
            yield Input(placeholder="Path to expenses .xlsx", id="expense-file")
            yield Button("Upload Expenses", variant="primary", id="upload-expenses")

    def after_seed(self) -> None:
        state = self.controller.state
        self.query_one("#expense-year", Input).value = state.param("year")
        month = state.param("month")
        if month in [value for _, value in MONTH_OPTIONS]:
            self.query_one("#expense-month", Select).value = month

    # ---------- events ----------
    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "expense-year":
            self.controller.set_param("year", event.value.strip())

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "expense-month":
            return
        if event.value in [value for _, value in MONTH_OPTIONS]:
            self.controller.set_param("month", str(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "new-expense":
            self.action_new_expense()
        elif button_id == "edit-expense":
            self.action_edit_expense()
        elif button_id == "delete-expense":
            self.action_delete_expense()
        elif button_id == "upload-expenses":
            self._upload()

    # ---------- actions ----------
    def _upload(self) -> None:
        file_input = self.query_one("#expense-file", Input)
        path = file_input.value.strip()
        if not path:
            self.toast("Please select an expense file to upload", "warning")
            return
        self.mutate(
            self.container.expense_service.upload_expenses,
            path,
            success_message="Expense records uploaded successfully!",
            invalidate_queries=[EXPENSES_KEY],
            on_success=lambda _data, _payload: setattr(file_input, "value", ""),
        )

    def action_new_expense(self) -> None:
        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None:
                return
            self.mutate(
                self.container.expense_service.create_expense,
                Expense(id=None, **values).to_api(),
                success_message="Expense created successfully!",
                invalidate_queries=[EXPENSES_KEY],
            )

        self.app.push_screen(FormModal("New Expense", EXPENSE_FIELDS, {"date": date.today()}), handle)

    def action_edit_expense(self) -> None:
        expense: Optional[Expense] = self.selected_item
        if expense is None or expense.id is None:
            self.toast("Select an expense to edit", "warning")
            return

        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None:
                return
            self.mutate(
                lambda body: self.container.expense_service.update_expense(expense.id, body),
                Expense(id=expense.id, **values).to_api(),
                success_message="Expense updated successfully!",
                invalidate_queries=[EXPENSES_KEY],
            )

        self.app.push_screen(FormModal("Edit Expense", EXPENSE_FIELDS, asdict(expense)), handle)

    def action_delete_expense(self) -> None:
        expense: Optional[Expense] = self.selected_item
        if expense is None or expense.id is None:
            self.toast("Select an expense to delete", "warning")
            return
        self.confirm(
            "Delete Expense",
            f"Delete '{expense.expense_name}' ({format_currency(expense.amount)})?",
            lambda: self.mutate(
                self.container.expense_service.delete_expense,
                expense.id,
                success_message="Expense deleted successfully!",
                invalidate_queries=[EXPENSES_KEY],
            ),
        )
