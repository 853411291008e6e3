"""Shared response helpers for the ledger endpoints."""

from fastapi import Response

from ledger.application.schemas import OrderResponse
from ledger.application.services import RecordStore, format_currency
from ledger.domain.entities import Order

STORAGE_WARNING_HEADER = "X-Storage-Warning"


def flag_storage_warning(response: Response, store: RecordStore) -> None:
    """Tell the caller the change was applied but could not be saved."""
    if store.last_storage_error is not None:
        response.headers[STORAGE_WARNING_HEADER] = store.last_storage_error.message


def to_order_response(order: Order, store: RecordStore) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        client_id=order.client_id,
        client_name=store.client_name_for(order),
        details=order.details,
        amount=order.amount,
        amount_display=format_currency(order.amount),
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        order_stage=order.order_stage,
        created_at=order.created_at,
    )
