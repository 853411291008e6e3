"""Pydantic DTOs (Data Transfer Objects) for the Order feature."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from ledger.domain.entities import OrderStage, PaymentMethod, PaymentStatus


class OrderCreate(BaseModel):
    """Schema for creating a new order."""

    client_id: str = Field(..., max_length=64)
    details: str = Field(..., max_length=2000, examples=["2 loaves, 1 cake"])
    amount: Decimal = Field(..., examples=["50.00"])
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_stage: OrderStage = OrderStage.PENDING


class OrderUpdate(OrderCreate):
    """Schema for editing an order — every editable field is replaced."""


class OrderResponse(BaseModel):
    """Schema returned to the client.

    Fields other than ``id`` are passed through untyped because imported
    orders are stored exactly as they arrived.
    """

    id: str
    client_id: Any
    client_name: str
    details: Any
    amount: Any
    amount_display: str
    payment_method: Any
    payment_status: Any
    order_stage: Any
    created_at: Any
