from .client import Client
from .order import Order, OrderStage, PaymentMethod, PaymentStatus
from .dashboard import DailyRevenue, DashboardSummary
from .snapshot import ImportMode, ImportResult, LoadedState

__all__ = [
    "Client",
    "Order",
    "OrderStage",
    "PaymentMethod",
    "PaymentStatus",
    "DailyRevenue",
    "DashboardSummary",
    "ImportMode",
    "ImportResult",
    "LoadedState",
]
