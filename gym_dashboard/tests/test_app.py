import copy
import threading
import unittest
from unittest.mock import Mock

from gym_dashboard.config import DEFAULT_CONFIG
from gym_dashboard.di import build_container
from gym_dashboard.ui.app import GymDashboardApp
from gym_dashboard.ui.screens.dashboard import DashboardScreen
from gym_dashboard.ui.screens.holidays import HolidaysScreen
from gym_dashboard.ui.screens.members import MembersScreen
from gym_dashboard.ui.widgets.notification import NotificationContainer
from gym_dashboard.ui.widgets.pagination import Pagination
from gym_dashboard.ui.widgets.record_table import RecordTable
from gym_dashboard.ui.widgets.search_bar import SearchBar
from gym_dashboard.ui.widgets.stat_card import StatCard


def make_container():
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["query"]["retry_delay"] = 0
    container = build_container(config)

    members = Mock()
    members.get_paid_members.return_value = {"total": 14, "list": []}
    members.get_unpaid_members.return_value = {"total": 2, "list": []}
    members.get_all_members.return_value = {"content": [], "totalElements": 23, "totalPages": 3, "number": 0,
                                            "size": 1}
    payments = Mock()
    payments.get_pending_payments.return_value = [{"employeeId": 1}, {"employeeId": 2}, {"employeeId": 3}]
    attendance = Mock()
    attendance.get_inactive_last_days.return_value = {"count": 5, "employees": []}
    holidays = Mock()
    holidays.get_all.return_value = [
        {"id": 1, "holidayMonthYear": "01/2025", "numberOfHolidays": 4},
        {"id": 2, "holidayMonthYear": "02/2025", "numberOfHolidays": 2},
    ]

    container._services.update({
        "member": members,
        "payment": payments,
        "attendance": attendance,
        "holiday": holidays,
    })
    return container


async def settle(app, pilot):
    for _ in range(3):
        await app.workers.wait_for_complete()
        await pilot.pause()


class TestAppNavigation(unittest.IsolatedAsyncioTestCase):
    async def test_dashboard_cards(self):
        container = make_container()
        app = GymDashboardApp(container.config, container=container)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            self.assertIsInstance(app.screen, DashboardScreen)
            values = {card.id: card.value for card in app.screen.query(StatCard)}
            self.assertEqual(values, {
                "card-paid": "14",
                "card-unpaid": "2",
                "card-pending": "3",
                "card-unattended": "5/23",
            })

    async def test_bookmarked_route_opens_screen(self):
        container = make_container()
        app = GymDashboardApp(container.config, initial_route="/holidays", container=container)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            screen = app.screen
            self.assertIsInstance(screen, HolidaysScreen)
            self.assertEqual(len(screen.query_one(RecordTable).items), 2)
            self.assertEqual(str(app.location), "/holidays")

    async def test_navigation_replaces_top_level_pages(self):
        container = make_container()
        app = GymDashboardApp(container.config, container=container)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.navigate("/members?filter=unpaid")
            await settle(app, pilot)
            self.assertIsInstance(app.screen, MembersScreen)
            self.assertEqual(len(app.screen_stack), 2)
            self.assertEqual(app.screen.controller.state.filter, "unpaid")
            self.assertEqual(str(app.location), "/members?filter=unpaid")

    async def test_repeated_toasts_are_merged(self):
        container = make_container()
        app = GymDashboardApp(container.config, initial_route="/holidays", container=container)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.toast("Database unavailable", "error")
            app.toast("Database unavailable", "error")
            app.toast("Saved", "success")
            await pilot.pause()
            toasts = app.screen.query_one(NotificationContainer).toasts
            self.assertEqual([t.message for t in toasts], ["Database unavailable", "Saved"])
            self.assertEqual(toasts[0].repeats, 2)


def held_back(release, payload):
    def fetch(*args, **kwargs):
        release.wait(5)
        return payload
    return fetch


def spring_page(rows, total):
    return {"content": rows, "totalElements": total, "totalPages": -(-total // 10), "number": 0, "size": 10}


class TestFilterSwitching(unittest.IsolatedAsyncioTestCase):
    async def test_members_table_empties_while_new_filter_loads(self):
        container = make_container()
        members = container.member_service
        members.get_all_members.return_value = spring_page([{"id": i, "name": f"Member {i}"} for i in range(10)], 23)
        release = threading.Event()
        members.get_unpaid_members.side_effect = held_back(release, {"total": 0, "list": []})

        app = GymDashboardApp(container.config, initial_route="/members", container=container)
        async with app.run_test() as pilot:
            try:
                await settle(app, pilot)
                screen = app.screen
                self.assertEqual(len(screen.query_one(RecordTable).items), 10)
                self.assertEqual(screen.query_one(Pagination).summary_text, "Showing 1 to 10 of 23 results")

                screen.controller.set_filter("unpaid")
                await pilot.pause()
                await pilot.pause()

                self.assertEqual(screen.query_one(RecordTable).items, [])
                self.assertEqual(screen.query_one(Pagination).summary_text, "")
                self.assertFalse(screen.query_one(Pagination).display)
            finally:
                release.set()
            await settle(app, pilot)

    async def test_attendance_tab_empties_while_new_window_loads(self):
        container = make_container()
        rows = [{"employeeId": i, "employeeName": f"Member {i}"} for i in range(10)]
        release = threading.Event()
        seven_days = {"count": 23, "employees": rows}

        def inactive(days, page, size):
            if days == 7:
                return seven_days
            release.wait(5)
            return {"count": 0, "employees": []}

        container.attendance_service.get_inactive_last_days_paginated.side_effect = inactive

        app = GymDashboardApp(container.config, initial_route="/attendance?tab=inactive&filter=7days",
                              container=container)
        async with app.run_test() as pilot:
            try:
                await settle(app, pilot)
                screen = app.screen
                table = screen.query_one("#inactive-table", RecordTable)
                pagination = screen.query_one("#inactive-pagination", Pagination)
                self.assertEqual(len(table.items), 10)
                self.assertEqual(pagination.summary_text, "Showing 1 to 10 of 23 results")

                screen.tabs["inactive"].controller.set_filter("30days")
                await pilot.pause()
                await pilot.pause()

                self.assertEqual(table.items, [])
                self.assertEqual(pagination.summary_text, "")
            finally:
                release.set()
            await settle(app, pilot)

    async def test_search_bar_hidden_for_unsearchable_filter(self):
        container = make_container()
        container.member_service.get_unattended_members_paginated.return_value = spring_page([], 0)
        app = GymDashboardApp(container.config, initial_route="/members", container=container)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            screen = app.screen
            bar = screen.query_one("#search-bar", SearchBar)
            self.assertTrue(bar.display)

            bar.term = "asha"
            screen.controller.type_search("asha")
            screen.controller.set_filter("unattended")
            await settle(app, pilot)

            self.assertFalse(bar.display)
            self.assertEqual(bar.term, "")
            self.assertEqual(screen.controller.state.debounced_search_term, "")
            screen.controller.type_search("ravi")
            self.assertEqual(screen.controller.state.search_term, "")

            screen.controller.set_filter("all")
            await settle(app, pilot)
            self.assertTrue(bar.display)
