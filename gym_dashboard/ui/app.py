"""
Main Textual application class for the Gym Dashboard
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from textual import events
from textual.app import App
from textual.binding import Binding
from textual.screen import Screen

from gym_dashboard.di import Container, build_container
from gym_dashboard.ui.routing import Route, match
from gym_dashboard.ui.screens.attendance import AttendanceScreen
from gym_dashboard.ui.screens.base import BaseScreen
from gym_dashboard.ui.screens.birthdays import BirthdaysScreen
from gym_dashboard.ui.screens.dashboard import DashboardScreen
from gym_dashboard.ui.screens.expenses import ExpensesScreen
from gym_dashboard.ui.screens.holidays import HolidaysScreen
from gym_dashboard.ui.screens.member_detail import MemberDetailScreen, PunchRecordsScreen
from gym_dashboard.ui.screens.members import MembersScreen
from gym_dashboard.ui.screens.partners import PartnersScreen
from gym_dashboard.ui.screens.payments import PaymentsScreen
from gym_dashboard.ui.screens.reports import ReportsScreen
from gym_dashboard.ui.screens.settings import SettingsScreen
from gym_dashboard.ui.screens.whatsapp import WhatsAppScreen
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.notification import NotificationContainer
from simple_logger import Slogger

# top-level pages replace each other; detail pages stack on top
PAGES = (
    DashboardScreen,
    MembersScreen,
    AttendanceScreen,
    PaymentsScreen,
    ExpensesScreen,
    ReportsScreen,
    HolidaysScreen,
    PartnersScreen,
    SettingsScreen,
    BirthdaysScreen,
    WhatsAppScreen,
)
DETAIL_PAGES = (MemberDetailScreen, PunchRecordsScreen)

ROUTES: Dict[str, type] = {screen.PATH: screen for screen in PAGES + DETAIL_PAGES}

NOTIFY_SEVERITY = {"info": "information", "success": "information", "warning": "warning", "error": "error"}

GOTO_FIELDS = [FormField("route", "Route", required=True, placeholder="/members?filter=unpaid")]


class GymDashboardApp(App):
    """Terminal front-end for the gym management REST API."""

    TITLE = "Rock Gym"
    CSS_PATH = "css/main.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("d", "go('/')", "Dashboard", show=True),
        Binding("m", "go('/members')", "Members", show=True),
        Binding("a", "go('/attendance')", "Attendance", show=True),
        Binding("p", "go('/payments')", "Payments", show=True),
        Binding("e", "go('/expenses')", "Expenses", show=False),
        Binding("o", "go('/reports')", "Reports", show=False),
        Binding("h", "go('/holidays')", "Holidays", show=False),
        Binding("t", "go('/partners')", "Partners", show=False),
        Binding("s", "go('/settings')", "Settings", show=False),
        Binding("b", "go('/birthdays')", "Birthdays", show=False),
        Binding("w", "go('/whatsapp')", "WhatsApp", show=False),
        Binding("g", "goto", "Go to", show=True),
    ]

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(self, config: Dict[str, Any], initial_route: str = "/", container: Optional[Container] = None) -> None:
        super().__init__()
        self.config = config
        self.container: Container = container or build_container(config)
        self.initial_route = Route.parse(initial_route)
        self.location: Route = self.initial_route

    def on_mount(self) -> None:
        self.container.set_notifier(self.toast)
        Slogger.info("Gym Dashboard started", {"base_url": self.config.get("api", {}).get("base_url")})
        self.navigate(self.initial_route)

    def on_unmount(self) -> None:
        self.container.set_notifier(None)

    def on_app_focus(self, event: events.AppFocus) -> None:
        refreshed = self.container.query_client.on_focus()
        if refreshed:
            Slogger.debug("Refetching on focus", {"keys": refreshed})

    # ------------------------------------------------------------------ #
    # routing
    # ------------------------------------------------------------------ #

    def build_screen(self, route: Route) -> Optional[Screen]:
        found = match(route, ROUTES)
        if found is None:
            return None
        pattern, segments = found
        factory: Callable[..., Screen] = ROUTES[pattern]
        if "id" in segments:
            return factory(self.container, route, member_id=segments["id"])
        return factory(self.container, route)

    def navigate(self, route: Route | str) -> None:
        if isinstance(route, str):
            route = Route.parse(route)
        screen = self.build_screen(route)
        if screen is None:
            Slogger.warning(f"Unknown route {route}")
            self.toast(f"Page not found: {route.path}", "warning")
            if len(self.screen_stack) > 1:
                return
            route, screen = Route("/"), DashboardScreen(self.container)

        Slogger.info(f"Navigating to {route}")
        if isinstance(screen, DETAIL_PAGES):
            self.push_screen(screen)
            return

        # leaving any detail/modal screens stacked above the current page
        while len(self.screen_stack) > 2:
            self.pop_screen()
        if len(self.screen_stack) < 2:
            self.push_screen(screen)
        else:
            self.switch_screen(screen)

    def go_back(self) -> None:
        if len(self.screen_stack) > 2:
            self.pop_screen()
        else:
            self.navigate(Route("/"))

    def sync_location(self, route: Route) -> None:
        """The visible screen changed its URL state."""
        current = self.screen
        # a page in the background does not own the location
        if isinstance(current, BaseScreen) and current.route is not route:
            return
        self.location = route
        self.sub_title = str(route)
        Slogger.debug("Location", {"route": str(route)})

    # ------------------------------------------------------------------ #
    # notifications
    # ------------------------------------------------------------------ #

    def toast(self, message: str, level: str = "info") -> None:
        for screen in reversed(self.screen_stack):
            containers = screen.query(NotificationContainer)
            if containers:
                containers.first().add_notification(message, level)
                return
        self.notify(message, severity=NOTIFY_SEVERITY.get(level, "information"))

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_go(self, path: str) -> None:
        self.navigate(Route.parse(path))

    def action_goto(self) -> None:
        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values:
                self.navigate(Route.parse(values["route"]))

        self.push_screen(FormModal("Go to", GOTO_FIELDS, {"route": str(self.location)}, submit_label="Go"), handle)
