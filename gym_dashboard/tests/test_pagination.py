import unittest

from textual.app import App, ComposeResult
from textual.widgets import Button

from gym_dashboard.ui.widgets.pagination import (
    ELLIPSIS,
    Pagination,
    build_pagination_view,
    page_window,
)


class TestPageWindow(unittest.TestCase):
    def test_pinned_middle_page(self):
        self.assertEqual(page_window(4, 10), [1, 2, 3, 4, 5, 6, ELLIPSIS, 10])

    def test_ellipsis_on_both_sides(self):
        self.assertEqual(page_window(6, 20), [1, ELLIPSIS, 4, 5, 6, 7, 8, ELLIPSIS, 20])

    def test_first_page(self):
        self.assertEqual(page_window(0, 10), [1, 2, ELLIPSIS, 10])

    def test_last_page(self):
        self.assertEqual(page_window(9, 10), [1, ELLIPSIS, 7, 8, 9, 10])

    def test_small_totals(self):
        self.assertEqual(page_window(0, 2), [1, 2])
        self.assertEqual(page_window(1, 3), [1, 2, 3])
        self.assertEqual(page_window(0, 1), [1])
        self.assertEqual(page_window(0, 0), [])

    def test_always_bounded_and_increasing(self):
        for total in range(2, 15):
            for current in range(total):
                pages = page_window(current, total)
                self.assertEqual(pages[0], 1)
                self.assertEqual(pages[-1], total)
                numbers = [p for p in pages if p != ELLIPSIS]
                self.assertEqual(numbers, sorted(set(numbers)))
                self.assertLessEqual(pages.count(ELLIPSIS), 2)


class TestPaginationView(unittest.TestCase):
    def test_nothing_to_render_for_single_page(self):
        self.assertIsNone(build_pagination_view(0, 1, 5, 10))
        self.assertIsNone(build_pagination_view(0, 0, 0, 10))

    def test_non_numeric_inputs_use_defaults(self):
        self.assertIsNone(build_pagination_view("abc", None, float("nan"), True))
        view = build_pagination_view(None, "3", None, "junk")
        self.assertEqual(view.current_page, 0)
        self.assertEqual(view.total_pages, 3)
        self.assertEqual(view.total_elements, 0)
        self.assertEqual(view.page_size, 10)

    def test_summary_for_first_page(self):
        view = build_pagination_view(0, 3, 23, 10)
        self.assertEqual(view.summary, "Showing 1 to 10 of 23 results")
        self.assertFalse(view.has_prev)
        self.assertTrue(view.has_next)

    def test_summary_for_last_partial_page(self):
        view = build_pagination_view(2, 3, 23, 10)
        self.assertEqual(view.summary, "Showing 21 to 23 of 23 results")
        self.assertTrue(view.has_prev)
        self.assertFalse(view.has_next)

    def test_current_page_is_clamped(self):
        view = build_pagination_view(7, 3, 23, 10)
        self.assertEqual(view.current_page, 2)


class PaginationHost(App):
    def __init__(self):
        super().__init__()
        self.pages = []
        self.sizes = []

    def compose(self) -> ComposeResult:
        yield Pagination(id="pagination")

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        self.pages.append(event.page)

    def on_pagination_page_size_changed(self, event: Pagination.PageSizeChanged) -> None:
        self.sizes.append(event.size)


class TestPaginationWidget(unittest.IsolatedAsyncioTestCase):
    async def test_hidden_until_there_are_pages(self):
        app = PaginationHost()
        async with app.run_test() as pilot:
            pagination = app.query_one(Pagination)
            self.assertFalse(pagination.display)

            pagination.update_view(0, 1, 4, 10)
            await pilot.pause()
            self.assertFalse(pagination.display)

            pagination.update_view(0, 3, 23, 10)
            await pilot.pause()
            self.assertTrue(pagination.display)
            self.assertEqual(pagination.summary_text, "Showing 1 to 10 of 23 results")

    async def test_next_button_posts_page_change(self):
        app = PaginationHost()
        async with app.run_test() as pilot:
            pagination = app.query_one(Pagination)
            pagination.update_view(0, 3, 23, 10)
            await pilot.pause()
            pagination.query_one("#next-page", Button).press()
            await pilot.pause()
            self.assertEqual(app.pages, [1])
