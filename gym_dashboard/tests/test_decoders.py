import unittest

from gym_dashboard.models.attendance import InactiveEmployee
from gym_dashboard.models.member import Member
from gym_dashboard.models.pagination import (
    PageResult,
    PageState,
    extract_list,
    from_count_wrapper,
    from_data_wrapper,
    from_list_wrapper,
    from_spring_page,
    paginate_locally,
)


def _members(count, start=1):
    return [{"id": i, "name": f"Member {i}", "contactNo": f"98765{i:05d}"} for i in range(start, start + count)]


class TestSpringPage(unittest.TestCase):
    def test_first_page_of_all_members(self):
        payload = {"content": _members(10), "totalElements": 23, "totalPages": 3, "number": 0, "size": 10}
        page = from_spring_page(payload, Member.from_api)

        self.assertEqual(len(page.items), 10)
        self.assertEqual(page.total_elements, 23)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.current_page, 0)
        self.assertEqual(page.page_size, 10)
        self.assertEqual(page.items[0].name, "Member 1")

    def test_missing_totals_are_derived(self):
        page = from_spring_page({"content": _members(3)}, Member.from_api, fallback_size=2)
        self.assertEqual(page.total_elements, 3)
        self.assertEqual(page.total_pages, 2)

    def test_junk_payload_is_empty(self):
        self.assertEqual(from_spring_page(None, Member.from_api), PageResult.empty())
        self.assertEqual(from_spring_page("oops", Member.from_api).items, ())


class TestCountWrapper(unittest.TestCase):
    def test_employees_wrapper(self):
        payload = {
            "employees": [{"employeeId": 7, "employeeName": "Ravi", "inactiveDaysSinceLastPunch": 12}],
            "count": 11,
            "totalPages": 2,
            "pageNumber": 1,
        }
        page = from_count_wrapper(payload, InactiveEmployee.from_api)

        self.assertEqual(page.total_elements, 11)
        self.assertEqual(page.total_pages, 2)
        self.assertEqual(page.current_page, 1)
        self.assertEqual(page.items[0].employee_name, "Ravi")

    def test_result_field_with_total(self):
        payload = {"result": [{"employeeId": 1, "employeeName": "A"}], "total": 1}
        page = from_count_wrapper(payload, InactiveEmployee.from_api, "result")
        self.assertEqual(page.total_elements, 1)
        self.assertEqual(page.total_pages, 1)


class TestDataWrapper(unittest.TestCase):
    def test_data_with_page_meta(self):
        payload = {"data": _members(2), "page": {"number": 4, "totalPages": 5, "totalElements": 42, "size": 10}}
        page = from_data_wrapper(payload, Member.from_api)
        self.assertEqual(page.current_page, 4)
        self.assertEqual(page.total_pages, 5)
        self.assertEqual(page.total_elements, 42)

    def test_data_without_meta(self):
        page = from_data_wrapper({"data": _members(4)}, Member.from_api)
        self.assertEqual(page.total_elements, 4)
        self.assertEqual(page.total_pages, 1)


class TestLocalPaging(unittest.TestCase):
    def test_slices_requested_page(self):
        page = paginate_locally(list(range(23)), 2, 10)
        self.assertEqual(page.items, (20, 21, 22))
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.current_page, 2)

    def test_page_past_the_end_lands_on_last_page(self):
        page = paginate_locally(list(range(5)), 9, 2)
        self.assertEqual(page.current_page, 2)
        self.assertEqual(page.items, (4,))

    def test_empty_list(self):
        page = paginate_locally([], 0, 10)
        self.assertEqual(page.total_pages, 0)
        self.assertTrue(page.is_empty)

    def test_list_wrapper_filters_with_debounced_term(self):
        payload = {"list": _members(15), "total": 15}
        state = PageState(page=0, size=10, debounced_search_term="  member 1")

        page = from_list_wrapper(payload, Member.from_api, state, "list", lambda m, term: m.matches(term))

        # Member 1 and Member 10..15
        self.assertEqual(page.total_elements, 7)
        self.assertEqual(page.total_pages, 1)

    def test_list_wrapper_ignores_search_without_matcher(self):
        state = PageState(size=10, debounced_search_term="nobody")
        page = from_list_wrapper(_members(12), Member.from_api, state)
        self.assertEqual(page.total_elements, 12)
        self.assertEqual(len(page.items), 10)


class TestExtractList(unittest.TestCase):
    def test_known_wrappers(self):
        self.assertEqual(extract_list([1, 2]), [1, 2])
        self.assertEqual(extract_list({"list": [1]}), [1])
        self.assertEqual(extract_list({"data": [2]}), [2])
        self.assertEqual(extract_list({"employees": [3]}), [3])
        self.assertEqual(extract_list({"partners": [4]}, "partners"), [4])
        self.assertEqual(extract_list({"data": {"nested": True}}), [])
        self.assertEqual(extract_list(None), [])
