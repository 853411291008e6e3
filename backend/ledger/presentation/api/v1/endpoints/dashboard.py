"""Dashboard endpoint — totals recomputed from the current orders."""

from fastapi import APIRouter, Depends

from ledger.application.schemas import DailyRevenueResponse, DashboardResponse
from ledger.infrastructure.context import LedgerContext
from ledger.infrastructure.dependencies import get_ledger_context

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    context: LedgerContext = Depends(get_ledger_context),
) -> DashboardResponse:
    """Paid and unpaid totals, today's revenue and the last 7 days of revenue."""
    summary = context.dashboard()
    return DashboardResponse(
        total_paid=str(summary.total_paid),
        total_unpaid=str(summary.total_unpaid),
        today_revenue=str(summary.today_revenue),
        weekly_series=[
            DailyRevenueResponse(label=point.label, date=point.day, total=str(point.total))
            for point in summary.weekly_series
        ],
        order_count=summary.order_count,
        skipped_count=summary.skipped_count,
    )
