# gym_dashboard/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from gym_dashboard.api.client import ApiClient
from gym_dashboard.query.cache import QueryCache
from gym_dashboard.query.client import Notifier, QueryClient
from gym_dashboard.services.attendance_service import AttendanceService
from gym_dashboard.services.birthday_service import BirthdayService
from gym_dashboard.services.expense_service import ExpenseService
from gym_dashboard.services.holiday_service import HolidayService
from gym_dashboard.services.member_service import MemberService
from gym_dashboard.services.partner_service import PartnerService
from gym_dashboard.services.payment_service import PaymentService
from gym_dashboard.services.report_service import ReportService
from gym_dashboard.services.settings_service import SettingsService
from gym_dashboard.services.whatsapp_service import WhatsAppService


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._api_client: ApiClient | None = None
        self._query_cache: QueryCache | None = None
        self._query_client: QueryClient | None = None
        self._services: Dict[str, Any] = {}

    @property
    def config(self) -> Dict[str, Any]:
        return self._cfg

    @property
    def per_page(self) -> int:
        return int(self._cfg.get("ui", {}).get("per_page", 10))

    # ---------- infra ----------
    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            api_cfg = self._cfg.get("api", {})
            self._api_client = ApiClient(
                api_cfg.get("base_url", ""),
                timeout=api_cfg.get("timeout", 10),
                impersonate=api_cfg.get("impersonate"),
            )
        return self._api_client

    @property
    def query_cache(self) -> QueryCache:
        if self._query_cache is None:
            self._query_cache = QueryCache()
        return self._query_cache

    @property
    def query_client(self) -> QueryClient:
        if self._query_client is None:
            query_cfg = self._cfg.get("query", {})
            self._query_client = QueryClient(
                self.query_cache,
                retry=query_cfg.get("retry", 1),
                stale_time=query_cfg.get("stale_time", 30.0),
                retry_delay=query_cfg.get("retry_delay", 1.0),
            )
        return self._query_client

    def set_notifier(self, notifier: Optional[Notifier]) -> None:
        """Route query/mutation toasts to the running app."""
        self.query_client.notifier = notifier

    # ---------- services ----------
    def _service(self, name: str, factory) -> Any:
        if name not in self._services:
            self._services[name] = factory()
        return self._services[name]

    @property
    def member_service(self) -> MemberService:
        return self._service(
            "member", lambda: MemberService(self.api_client, default_page_size=self.per_page)
        )

    @property
    def payment_service(self) -> PaymentService:
        return self._service("payment", lambda: PaymentService(self.api_client))

    @property
    def expense_service(self) -> ExpenseService:
        return self._service(
            "expense", lambda: ExpenseService(self.api_client, default_page_size=self.per_page)
        )

    @property
    def attendance_service(self) -> AttendanceService:
        return self._service(
            "attendance", lambda: AttendanceService(self.api_client, default_page_size=self.per_page)
        )

    @property
    def report_service(self) -> ReportService:
        return self._service("report", lambda: ReportService(self.api_client))

    @property
    def holiday_service(self) -> HolidayService:
        return self._service("holiday", lambda: HolidayService(self.api_client))

    @property
    def partner_service(self) -> PartnerService:
        return self._service("partner", lambda: PartnerService(self.api_client))

    @property
    def settings_service(self) -> SettingsService:
        return self._service("settings", lambda: SettingsService(self.api_client))

    @property
    def birthday_service(self) -> BirthdayService:
        return self._service("birthday", lambda: BirthdayService(self.api_client))

    @property
    def whatsapp_service(self) -> WhatsAppService:
        return self._service("whatsapp", lambda: WhatsAppService(self.api_client))


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
