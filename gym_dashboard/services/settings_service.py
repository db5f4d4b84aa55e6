from __future__ import annotations

from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient


class SettingsService:
    """Dated fee settings. Dates are `YYYY-MM-DD` strings."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_all(self) -> Any:
        return self._api.get("/settings")

    def get_current(self) -> Any:
        return self._api.get("/settings/current")

    def get_future(self) -> Any:
        return self._api.get("/settings/future")

    def get_by_key(self, key: str) -> Any:
        return self._api.get(f"/settings/key/{key}")

    def get_by_key_and_date(self, key: str, date: str) -> Any:
        return self._api.get(f"/settings/key/{key}/date/{date}")

    def get_monthly_fee(self, date: Optional[str] = None) -> Any:
        if date:
            return self._api.get("/settings/monthly-fee/date", params={"date": date})
        return self._api.get("/settings/monthly-fee")

    def get_admission_fee(self, date: Optional[str] = None) -> Any:
        if date:
            return self._api.get("/settings/admission-fee/date", params={"date": date})
        return self._api.get("/settings/admission-fee")

    def create(self, data: Dict[str, Any]) -> Any:
        return self._api.post("/settings", json=data)

    def update(self, setting_id: int | str, data: Dict[str, Any]) -> Any:
        return self._api.put(f"/settings/{setting_id}", json=data)

    def deactivate(self, setting_id: int | str) -> Any:
        return self._api.put(f"/settings/{setting_id}/deactivate")

    def delete(self, setting_id: int | str) -> Any:
        return self._api.delete(f"/settings/{setting_id}")
