from __future__ import annotations

from typing import Any, Dict

from gym_dashboard.api.client import ApiClient


class HolidayService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_all(self) -> Any:
        return self._api.get("/holidays")

    def get_by_id(self, holiday_id: int | str) -> Any:
        return self._api.get(f"/holidays/{holiday_id}")

    def create(self, data: Dict[str, Any]) -> Any:
        return self._api.post("/holidays", json=data)

    def update(self, holiday_id: int | str, data: Dict[str, Any]) -> Any:
        return self._api.put(f"/holidays/{holiday_id}", json=data)

    def delete(self, holiday_id: int | str) -> Any:
        return self._api.delete(f"/holidays/{holiday_id}")
