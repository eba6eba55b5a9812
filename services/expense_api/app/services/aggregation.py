"""
Date-based aggregation over expense records.

Everything here is pure: callers hand in records that storage already
fetched, and get back response models. Records only need the attributes of
the Expense row (id, user_id, tenant, amount, created_at, deleted_at).

Soft-deleted records (deleted_at set) are dropped even if the caller forgot
to filter them out.
"""

from datetime import date
from typing import Dict, Iterable, List

from schemas.expense import DayDetail, ExpenseResponse, GroupedExpenseResponse

DAY_LABEL_FORMAT = "%A, %d %B %Y"


def format_day_label(day: date) -> str:
    return day.strftime(DAY_LABEL_FORMAT)


def day_of(record) -> date:
    """Calendar day of a record, in whatever zone created_at carries."""
    return record.created_at.date()


def is_active(record) -> bool:
    return getattr(record, "deleted_at", None) is None


def active_only(records: Iterable) -> list:
    return [r for r in records if is_active(r)]


def to_expense_response(record) -> ExpenseResponse:
    return ExpenseResponse(
        id=record.id,
        tenant=record.tenant,
        amount=record.amount,
        created_at=record.created_at,
    )


class _DayBucket:
    __slots__ = ("total", "expenses")

    def __init__(self):
        self.total = 0.0
        self.expenses: List[ExpenseResponse] = []

    def add(self, record) -> None:
        self.total += record.amount
        self.expenses.append(to_expense_response(record))


def group_by_day(records: Iterable) -> List[GroupedExpenseResponse]:
    """
    Group active records by calendar day, newest day first.

    Within a day, expenses keep the order they were given in. Ordering of
    the groups uses the day itself, never the display label.
    """
    buckets: Dict[date, _DayBucket] = {}
    for record in active_only(records):
        day = day_of(record)
        bucket = buckets.get(day)
        if bucket is None:
            bucket = buckets[day] = _DayBucket()
        bucket.add(record)

    return [
        GroupedExpenseResponse(
            date=format_day_label(day),
            total=buckets[day].total,
            expenses=buckets[day].expenses,
        )
        for day in sorted(buckets, reverse=True)
    ]


def detail_for_day(records: Iterable, day: date) -> DayDetail:
    """
    Active records created on `day`, with their total.

    An empty match is a valid answer: total 0.0 and no expenses.
    """
    bucket = _DayBucket()
    for record in active_only(records):
        if day_of(record) == day:
            bucket.add(record)

    return DayDetail(
        date=format_day_label(day),
        total=bucket.total,
        expenses=bucket.expenses,
    )


def matches_deletion(record, user_id: int, day: date) -> bool:
    """Whether deleting `day` for `user_id` should stamp this record."""
    return record.user_id == user_id and is_active(record) and day_of(record) == day
