from __future__ import annotations

from typing import Any

from gym_dashboard.api.client import ApiClient


class BirthdayService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_upcoming(self, month_year: str) -> Any:
        """Birthdays in `MM/YYYY`."""
        return self._api.get("/birthday/upcoming", params={"input": month_year})

    def get_today(self) -> Any:
        return self._api.get("/birthday/today")

    def get_this_week(self) -> Any:
        return self._api.get("/birthday/this-week")

    def get_this_month(self) -> Any:
        return self._api.get("/birthday/this-month")
