"""Dashboard aggregator — paid/unpaid totals and daily revenue from the order list.

Everything here is a pure function of the orders and the instant passed in.
Calendar days run midnight to midnight in ``tz`` (process local time when
``tz`` is None). Orders whose amount cannot be read as a finite number are
skipped and counted in ``skipped_count``; they never break the totals.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ledger.domain.entities import (
    DailyRevenue,
    DashboardSummary,
    Order,
    PaymentStatus,
)

SERIES_DAYS = 7
TODAY_LABEL = "Today"

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def parse_amount(value: Any) -> Decimal | None:
    """Read an order amount as a Decimal, or None if it is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def to_cents(amount: Decimal) -> Decimal:
    """Quantize to exactly two fractional digits."""
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Any) -> str:
    """Render an amount the way the ledger displays money, e.g. ``$12.50``."""
    amount = parse_amount(value)
    if amount is None:
        return "n/a"
    return f"${to_cents(amount)}"


def local_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of ``moment``; naive datetimes are taken as already local."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()


def order_day(created_at: Any, tz: tzinfo | None = None) -> date | None:
    """Calendar day of an epoch-millisecond timestamp, or None if unreadable."""
    if created_at is None or isinstance(created_at, bool):
        return None
    try:
        return datetime.fromtimestamp(float(created_at) / 1000, tz).date()
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _day_label(day: date, today: date) -> str:
    if day == today:
        return TODAY_LABEL
    return f"{day:%b} {day.day}"


def compute_dashboard(
    orders: Iterable[Order],
    now: datetime,
    tz: tzinfo | None = None,
) -> DashboardSummary:
    """Compute the dashboard totals for ``orders`` as seen at ``now``."""
    today = local_day(now, tz)
    days = [today - timedelta(days=offset) for offset in range(SERIES_DAYS - 1, -1, -1)]
    per_day: dict[date, Decimal] = {day: _ZERO for day in days}

    total_paid = _ZERO
    total_unpaid = _ZERO
    order_count = 0
    skipped = 0

    for order in orders:
        order_count += 1
        amount = parse_amount(order.amount)
        if amount is None:
            skipped += 1
            continue

        if order.payment_status == PaymentStatus.PAID:
            total_paid += amount
            day = order_day(order.created_at, tz)
            if day in per_day:
                per_day[day] += amount
        elif order.payment_status == PaymentStatus.DEFERRED:
            total_unpaid += amount

    series = [
        DailyRevenue(label=_day_label(day, today), day=day, total=to_cents(per_day[day]))
        for day in days
    ]
    return DashboardSummary(
        total_paid=to_cents(total_paid),
        total_unpaid=to_cents(total_unpaid),
        today_revenue=series[-1].total,
        weekly_series=series,
        order_count=order_count,
        skipped_count=skipped,
    )
