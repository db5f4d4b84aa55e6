from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient


class ExpenseService:
    """Expense ledger: server-paginated, filterable by year and month."""

    def __init__(self, api: ApiClient, *, default_page_size: int = 10) -> None:
        self._api = api
        self._per_page = default_page_size

    def get_expenses(
        self,
        page: int = 0,
        size: Optional[int] = None,
        year: Optional[int | str] = None,
        month: Optional[int | str] = None,
    ) -> Any:
        params: Dict[str, Any] = {"page": page, "size": size or self._per_page}
        if year:
            params["year"] = year
        if month:
            params["month"] = month
        return self._api.get("/expenses", params=params)

    def get_expense(self, expense_id: int | str) -> Any:
        return self._api.get(f"/expenses/{expense_id}")

    def create_expense(self, data: Dict[str, Any]) -> Any:
        return self._api.post("/expenses", json=data)

    def update_expense(self, expense_id: int | str, data: Dict[str, Any]) -> Any:
        return self._api.put(f"/expenses/{expense_id}", json=data)

    def delete_expense(self, expense_id: int | str) -> Any:
        return self._api.delete(f"/expenses/{expense_id}")

    def upload_expenses(self, file_path: str | Path) -> Any:
        return self._api.upload("/expenses/upload", file_path)
