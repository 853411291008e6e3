"""Pydantic schemas for the dashboard API."""

import datetime

from pydantic import BaseModel


class DailyRevenueResponse(BaseModel):
    """One point of the 7-day revenue series."""

    label: str
    date: datetime.date
    total: str


class DashboardResponse(BaseModel):
    """Dashboard totals, amounts rendered with exactly two decimals."""

    total_paid: str
    total_unpaid: str
    today_revenue: str
    weekly_series: list[DailyRevenueResponse]
    order_count: int
    skipped_count: int
