# gym_dashboard/services/attendance_service.py
"""
Punch-data and attendance report endpoints.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient
from simple_logger import Slogger

INACTIVE_DAY_OPTIONS = (7, 15, 30, 60)
ACTIVE_PERIODS = ("today", "last-7-days", "last-30-days", "this-month")
EXPORT_FORMATS = {"excel": "xlsx", "pdf": "pdf"}


def _non_empty(**params: Any) -> Dict[str, Any]:
    """Keep only parameters that carry a value."""
    return {k: v for k, v in params.items() if v is not None and v != ""}


class AttendanceService:
    def __init__(self, api: ApiClient, *, default_page_size: int = 10) -> None:
        self._api = api
        self._per_page = default_page_size

    # --------------------------------------------------------------------- #
    # punches
    # --------------------------------------------------------------------- #

    def upload_punch_data(self, file_path: str | Path) -> Any:
        return self._api.upload("/punch/upload", file_path)

    def get_punch_details(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._api.get("/punch/details", params=params)

    def get_punch_details_paginated(
        self,
        employee_id: Optional[int | str] = None,
        employee_name: Optional[str] = None,
        date: Optional[str] = None,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_dir: Optional[str] = None,
    ) -> Any:
        if employee_id not in (None, ""):
            employee_id = int(employee_id)
        params = _non_empty(
            employeeId=employee_id,
            employeeName=employee_name,
            date=date,
            page=page,
            size=size or self._per_page,
            sortBy=sort_by,
            sortDir=sort_dir,
        )
        return self._api.get("/punch/details-paginated", params=params)

    def get_punch_details_by_year_paginated(
        self,
        year: int | str,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: str = "logDateTime",
        sort_dir: str = "desc",
    ) -> Any:
        params = {
            "year": str(year),
            "page": page,
            "size": size or self._per_page,
            "sortBy": sort_by,
            "sortDir": sort_dir,
        }
        return self._api.get("/punch/details-by-year-paginated", params=params)

    def get_punch_details_by_month_year_paginated(
        self,
        month_year: str,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: str = "logDateTime",
        sort_dir: str = "desc",
    ) -> Any:
        params = {
            "monthYear": str(month_year),
            "page": page,
            "size": size or self._per_page,
            "sortBy": sort_by,
            "sortDir": sort_dir,
        }
        return self._api.get("/punch/details-by-month-year-paginated", params=params)

    def get_todays_attendance(self) -> Any:
        return self._api.get("/punch/today")

    # --------------------------------------------------------------------- #
    # reports
    # --------------------------------------------------------------------- #

    def get_attendance_report(self, date_month_year: str, page: int = 0, size: Optional[int] = None) -> Any:
        params = {"dateMonthYear": date_month_year, "page": page, "size": size or self._per_page}
        return self._api.get("/report/employee-attendance", params=params)

    def get_employee_last_punch(self, from_date: str, to_date: str) -> Any:
        return self._api.get("/report/employee-last-punch", params={"fromDate": from_date, "toDate": to_date})

    def get_employees_without_punch(self, from_date: str, to_date: str) -> Any:
        return self._api.get("/report/employees-without-punch", params={"fromDate": from_date, "toDate": to_date})

    def get_inactive_employees(self, inactive_days: int) -> Any:
        return self._api.get("/report/inactive", params={"inactiveDays": inactive_days})

    def get_inactive_last_days(self, days: int) -> Any:
        self._check_days(days)
        return self._api.get(f"/report/inactive-last-{days}-days")

    def get_inactive_last_days_paginated(self, days: int, page: int = 0, size: Optional[int] = None) -> Any:
        self._check_days(days)
        params = {"page": page, "size": size or self._per_page}
        return self._api.get(f"/report/inactive-last-{days}-days-paginated", params=params)

    def get_active_employees(
        self,
        period: str,
        paginated: bool = False,
        page: int = 0,
        size: Optional[int] = None,
    ) -> Any:
        if period not in ACTIVE_PERIODS:
            raise ValueError(f"Unknown period {period!r}; expected one of {ACTIVE_PERIODS}")
        params = {"period": period, "paginated": paginated, "page": page, "size": size or self._per_page}
        return self._api.get("/report/active", params=params)

    def export_inactive_members(self, days: int, fmt: str, dest: str | Path) -> Path:
        """Download the inactive-members export (Excel or PDF) to `dest`."""
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format {fmt!r}")
        Slogger.info(f"Exporting inactive members ({days} days) as {fmt}")
        return self._api.download(f"/report/export/inactive-members/{fmt}", dest, params={"days": days})

    @staticmethod
    def _check_days(days: int) -> None:
        if days not in INACTIVE_DAY_OPTIONS:
            raise ValueError(f"Unsupported inactivity window {days}; expected one of {INACTIVE_DAY_OPTIONS}")
