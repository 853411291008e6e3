"""Unit tests for the dashboard aggregator."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from ledger.application.services.dashboard import (
    compute_dashboard,
    format_currency,
    order_day,
    parse_amount,
)
from ledger.domain.entities import Order

UTC = timezone.utc
NOON = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def _ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _order(order_id: str, amount, status: str, created: datetime) -> Order:
    return Order(
        id=order_id,
        client_id="c1",
        details="x",
        amount=amount,
        payment_method="cash",
        payment_status=status,
        order_stage="pending",
        created_at=_ms(created),
    )


def test_example_totals():
    orders = [
        _order("o1", 50, "paid", NOON),
        _order("o2", 30, "deferred", NOON),
    ]
    summary = compute_dashboard(orders, NOON, UTC)

    assert str(summary.total_paid) == "50.00"
    assert str(summary.total_unpaid) == "30.00"
    assert str(summary.today_revenue) == "50.00"
    assert summary.order_count == 2


def test_paid_plus_unpaid_covers_every_order():
    amounts = ["10.10", "0.20", "3", "7.45", "99.99"]
    orders = [
        _order(f"o{i}", amount, "paid" if i % 2 else "deferred", NOON - timedelta(days=i * 3))
        for i, amount in enumerate(amounts)
    ]
    summary = compute_dashboard(orders, NOON, UTC)

    assert summary.total_paid + summary.total_unpaid == sum(Decimal(a) for a in amounts)


def test_sums_are_decimal_safe():
    orders = [_order("a", 0.1, "paid", NOON), _order("b", 0.2, "paid", NOON)]
    summary = compute_dashboard(orders, NOON, UTC)
    assert str(summary.total_paid) == "0.30"
    assert str(summary.today_revenue) == "0.30"


def test_today_revenue_at_start_of_day_boundary():
    midnight = datetime(2026, 10, 19, 0, 0, 0, tzinfo=UTC)
    orders = [
        _order("late", 5, "paid", midnight - timedelta(seconds=1)),  # 23:59:59 yesterday
        _order("early", 7, "paid", midnight),                          # 00:00:00 today
    ]
    summary = compute_dashboard(orders, midnight, UTC)

    assert summary.today_revenue == Decimal("7.00")
    assert summary.weekly_series[-2].total == Decimal("5.00")


def test_today_revenue_at_end_of_day_boundary():
    last_second = datetime(2026, 10, 19, 23, 59, 59, tzinfo=UTC)
    orders = [
        _order("now", 4, "paid", last_second),
        _order("tomorrow", 9, "paid", last_second + timedelta(seconds=1)),
    ]
    summary = compute_dashboard(orders, last_second, UTC)

    assert summary.today_revenue == Decimal("4.00")
    assert summary.total_paid == Decimal("13.00")


def test_deferred_orders_never_count_as_revenue():
    summary = compute_dashboard([_order("o", 20, "deferred", NOON)], NOON, UTC)
    assert summary.today_revenue == Decimal("0.00")
    assert all(point.total == Decimal("0.00") for point in summary.weekly_series)


def test_weekly_series_covers_last_seven_days_oldest_first():
    orders = [
        _order("six", 6, "paid", NOON - timedelta(days=6)),
        _order("seven", 100, "paid", NOON - timedelta(days=7)),
        _order("today", 1, "paid", NOON),
    ]
    summary = compute_dashboard(orders, NOON, UTC)
    series = summary.weekly_series

    assert len(series) == 7
    assert [p.day for p in series] == [date(2026, 10, 13) + timedelta(days=i) for i in range(7)]
    assert series[0].label == "Oct 13"
    assert series[-1].label == "Today"
    assert series[0].total == Decimal("6.00")
    assert series[-1].total == Decimal("1.00")
    assert sum(p.total for p in series) == Decimal("7.00")
    assert summary.total_paid == Decimal("107.00")


def test_days_follow_the_given_timezone():
    plus_three = timezone(timedelta(hours=3))
    # 22:30 UTC on the 18th is already the 19th at UTC+3.
    order = _order("o", 8, "paid", datetime(2026, 10, 18, 22, 30, tzinfo=UTC))

    assert compute_dashboard([order], NOON, plus_three).today_revenue == Decimal("8.00")
    assert compute_dashboard([order], NOON, UTC).today_revenue == Decimal("0.00")


def test_unusable_amounts_are_skipped():
    orders = [
        _order("bad1", "abc", "paid", NOON),
        _order("bad2", None, "paid", NOON),
        _order("bad3", "NaN", "deferred", NOON),
        _order("bad4", True, "paid", NOON),
        _order("good", "12.5", "paid", NOON),
    ]
    summary = compute_dashboard(orders, NOON, UTC)

    assert summary.skipped_count == 4
    assert summary.total_paid == Decimal("12.50")
    assert summary.total_unpaid == Decimal("0.00")


def test_unreadable_created_at_counts_in_totals_but_not_in_days():
    order = _order("o", 3, "paid", NOON)
    order.created_at = "yesterday"
    summary = compute_dashboard([order], NOON, UTC)

    assert summary.total_paid == Decimal("3.00")
    assert summary.today_revenue == Decimal("0.00")


def test_empty_order_list():
    summary = compute_dashboard([], NOON, UTC)
    assert summary.total_paid == Decimal("0.00")
    assert len(summary.weekly_series) == 7
    assert summary.order_count == 0


def test_helpers():
    assert parse_amount(" 4.20 ") == Decimal("4.20")
    assert parse_amount(float("inf")) is None
    assert order_day(None) is None
    assert format_currency(12.5) == "$12.50"
    assert format_currency("7") == "$7.00"
    assert format_currency("oops") == "n/a"
