# gym_dashboard/services/member_service.py
"""
Member (employee) endpoints.  Returns decoded JSON; decoding into pages and
models happens in the screens' query definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient


def _search_params(params: Dict[str, Any], search: Optional[str]) -> Dict[str, Any]:
    if search and search.strip():
        params["search"] = search.strip()
    return params


class MemberService:
    """Handles all member-related calls."""

    def __init__(self, api: ApiClient, *, default_page_size: int = 10) -> None:
        self._api = api
        self._per_page = default_page_size

    # --------------------------------------------------------------------- #
    # read side
    # --------------------------------------------------------------------- #

    def get_all_members(
        self,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: str = "id",
        sort_dir: str = "asc",
        is_admin: bool = False,
        search: str = "",
    ) -> Any:
        params = {
            "page": page,
            "size": size or self._per_page,
            "sortBy": sort_by,
            "sortDir": sort_dir,
            "isAdmin": is_admin,
        }
        return self._api.get("/members", params=_search_params(params, search))

    def get_admin_members(
        self,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: str = "id",
        sort_dir: str = "asc",
        search: str = "",
    ) -> Any:
        return self.get_all_members(page, size, sort_by, sort_dir, is_admin=True, search=search)

    def get_all_members_unpaginated(self) -> Any:
        return self._api.get("/members", params={"size": 1000})

    def get_member(self, member_id: int | str) -> Any:
        return self._api.get(f"/members/{member_id}")

    def get_paid_members(self) -> Any:
        return self._api.get("/members/paid")

    def get_unpaid_members(self) -> Any:
        return self._api.get("/members/unpaid")

    def get_unattended_members(self) -> Any:
        return self._api.get("/members/unattended-members")

    def get_unattended_members_paginated(
        self,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: str = "doj",
        sort_dir: str = "desc",
    ) -> Any:
        params = {"page": page, "size": size or self._per_page, "sortBy": sort_by, "sortDir": sort_dir}
        return self._api.get("/members/unattended-members-paginated", params=params)

    def get_active_members_paginated(self, page: int = 0, size: Optional[int] = None) -> Any:
        """Members who punched in during the last 7 days."""
        params = {"page": page, "size": size or self._per_page}
        return self._api.get("/report/active-last-7-days-paginated", params=params)

    def get_monthly_punch_summary(self, employee_id: int | str) -> Any:
        return self._api.get("/punch/employee-monthly-summary", params={"employeeId": employee_id})

    # --------------------------------------------------------------------- #
    # write side
    # --------------------------------------------------------------------- #

    def create_member(self, data: Dict[str, Any]) -> Any:
        return self._api.post("/members", json=data)

    def update_member(self, member_id: int | str, data: Dict[str, Any]) -> Any:
        return self._api.put(f"/members/{member_id}", json=data)

    def delete_member(self, member_id: int | str) -> Any:
        return self._api.delete(f"/members/{member_id}")

    def upload_members(self, file_path: str | Path) -> Any:
        return self._api.upload("/members/upload", file_path)

    def upload_access_file(self, file_path: str | Path) -> Any:
        return self._api.upload("/members/access-file/upload", file_path)
