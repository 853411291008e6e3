from .client import ClientCreate, ClientUpdate, ClientResponse
from .order import OrderCreate, OrderUpdate, OrderResponse
from .dashboard import DailyRevenueResponse, DashboardResponse
from .snapshot import ImportResultResponse

__all__ = [
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "OrderCreate",
    "OrderUpdate",
    "OrderResponse",
    "DailyRevenueResponse",
    "DashboardResponse",
    "ImportResultResponse",
]
