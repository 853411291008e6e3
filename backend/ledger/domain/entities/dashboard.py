"""Value objects produced by the dashboard aggregator."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class DailyRevenue:
    """Paid revenue for one local calendar day."""

    label: str  # "Today" or e.g. "Oct 13"
    day: date
    total: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Totals computed from the order list at a given instant.

    Every amount is quantized to exactly two fractional digits.
    """

    total_paid: Decimal
    total_unpaid: Decimal
    today_revenue: Decimal
    weekly_series: list[DailyRevenue] = field(default_factory=list)
    order_count: int = 0
    skipped_count: int = 0
