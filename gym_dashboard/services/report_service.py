from __future__ import annotations

from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient


class ReportService:
    """Payment-side reports computed by the server."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_monthly_revenue(self, months: int = 12) -> Any:
        return self._api.get("/payments/reports/monthly-revenue", params={"months": months})

    def get_collection_summary(self, year: Optional[int] = None, month: Optional[int] = None) -> Any:
        return self._api.get("/payments/reports/collection-summary", params=self._period(year, month))

    def get_defaulters(self, page: int = 0, size: int = 10) -> Any:
        return self._api.get("/payments/reports/defaulters", params={"page": page, "size": size})

    def get_payment_mode_analysis(self, months: int = 12) -> Any:
        return self._api.get("/payments/reports/payment-mode-analysis", params={"months": months})

    def get_member_payment_history(self, member_id: int | str) -> Any:
        return self._api.get(f"/payments/reports/member-payment-history/{member_id}")

    def get_partner_settlement(self, year: Optional[int] = None, month: Optional[int] = None) -> Any:
        return self._api.get("/payments/reports/partner-settlement", params=self._period(year, month))

    @staticmethod
    def _period(year: Optional[int], month: Optional[int]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if year:
            params["year"] = year
        if month:
            params["month"] = month
        return params
