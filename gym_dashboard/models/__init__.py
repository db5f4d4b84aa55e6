from gym_dashboard.models.attendance import AttendanceSummary, InactiveEmployee, PunchRecord
from gym_dashboard.models.expense import Expense
from gym_dashboard.models.holiday import Holiday, holiday_totals
from gym_dashboard.models.member import Member, MonthlyPunchSummary, PunchEntry
from gym_dashboard.models.pagination import (
    DEFAULT_PAGE_SIZE,
    SORT_ASC,
    SORT_DESC,
    PageResult,
    PageState,
    extract_list,
    from_count_wrapper,
    from_data_wrapper,
    from_list_wrapper,
    from_spring_page,
    paginate_locally,
)
from gym_dashboard.models.partner import Partner
from gym_dashboard.models.payment import PAYMENT_MODES, Payment, PaymentRequest
from gym_dashboard.models.setting import SETTING_KEYS, Setting

__all__ = [
    "AttendanceSummary",
    "DEFAULT_PAGE_SIZE",
    "Expense",
    "Holiday",
    "InactiveEmployee",
    "Member",
    "MonthlyPunchSummary",
    "PAYMENT_MODES",
    "PageResult",
    "PageState",
    "Partner",
    "Payment",
    "PaymentRequest",
    "PunchEntry",
    "PunchRecord",
    "SETTING_KEYS",
    "SORT_ASC",
    "SORT_DESC",
    "Setting",
    "extract_list",
    "from_count_wrapper",
    "from_data_wrapper",
    "from_list_wrapper",
    "from_spring_page",
    "holiday_totals",
    "paginate_locally",
]
