"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from ledger.presentation.api.v1.endpoints.health import router as health_router
from ledger.presentation.api.v1.endpoints.clients import router as clients_router
from ledger.presentation.api.v1.endpoints.orders import router as orders_router
from ledger.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from ledger.presentation.api.v1.endpoints.backup import router as backup_router
from ledger.presentation.api.v1.endpoints.events import router as events_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(clients_router)
router.include_router(orders_router)
router.include_router(dashboard_router)
router.include_router(backup_router)
router.include_router(events_router)
