from __future__ import annotations

from typing import Any, Dict

from gym_dashboard.api.client import ApiClient


class PartnerService:
    """Profit-sharing partners."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_all(self) -> Any:
        return self._api.get("/partners")

    def get_active(self) -> Any:
        return self._api.get("/partners/active")

    def get_by_id(self, partner_id: int | str) -> Any:
        return self._api.get(f"/partners/{partner_id}")

    def get_by_employee_id(self, employee_id: int | str) -> Any:
        return self._api.get(f"/partners/employee/{employee_id}")

    def create(self, data: Dict[str, Any]) -> Any:
        return self._api.post("/partners", json=data)

    def update(self, partner_id: int | str, data: Dict[str, Any]) -> Any:
        return self._api.put(f"/partners/{partner_id}", json=data)

    def delete(self, partner_id: int | str) -> Any:
        return self._api.delete(f"/partners/{partner_id}")
