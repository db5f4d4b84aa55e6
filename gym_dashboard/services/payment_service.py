from __future__ import annotations

from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient


class PaymentService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def save_payment(self, data: Dict[str, Any]) -> Any:
        return self._api.post("/payments", json=data)

    def get_pending_payments(self, date: Optional[str] = None) -> Any:
        """Payments due on or before `date` (server default: today)."""
        return self._api.get("/payments/pending", params={"date": date} if date else None)

    def get_member_payments(self, member_id: int | str) -> Any:
        return self._api.get(f"/payments/member/{member_id}")
