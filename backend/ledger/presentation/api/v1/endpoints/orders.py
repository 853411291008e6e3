"""Order CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ledger.application.schemas import OrderCreate, OrderResponse, OrderUpdate
from ledger.application.services import RecordStore
from ledger.domain.exceptions import NotFoundError, ValidationError
from ledger.infrastructure.dependencies import get_record_store
from ledger.presentation.api.v1.endpoints.common import (
    flag_storage_warning,
    to_order_response,
)

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    store: RecordStore = Depends(get_record_store),
) -> list[OrderResponse]:
    """Retrieve every order with its client's name."""
    return [to_order_response(o, store) for o in store.list_orders()]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    store: RecordStore = Depends(get_record_store),
) -> OrderResponse:
    """Retrieve a single order by ID."""
    order = store.find_order_by_id(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(NotFoundError("Order", order_id)),
        )
    return to_order_response(order, store)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> OrderResponse:
    """Create a new order for an existing client."""
    try:
        order = await store.add_order(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    flag_storage_warning(response, store)
    return to_order_response(order, store)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    data: OrderUpdate,
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> OrderResponse:
    """Edit an existing order; its creation time is kept."""
    try:
        order = await store.update_order(order_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    flag_storage_warning(response, store)
    return to_order_response(order, store)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: str,
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> None:
    """Delete an order by ID."""
    try:
        await store.delete_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    flag_storage_warning(response, store)
