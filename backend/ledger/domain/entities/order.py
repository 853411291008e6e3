"""Domain entities for orders and their payment/progress states."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_ORDER_FIELDS = (
    "id",
    "clientId",
    "details",
    "amount",
    "paymentMethod",
    "paymentStatus",
    "orderStage",
    "createdAt",
)


class PaymentMethod(str, Enum):
    """How the client pays."""

    CASH = "cash"
    APP = "app"


class PaymentStatus(str, Enum):
    """Whether the order has been paid or is owed."""

    PAID = "paid"
    DEFERRED = "deferred"


class OrderStage(str, Enum):
    """Fulfilment progress of an order."""

    PENDING = "pending"
    READY = "ready"
    RECEIVED = "received"


@dataclass
class Order:
    """A single order placed by a client.

    Orders created through the record store carry validated values (enum
    strings, a non-negative amount rounded to cents). Orders that arrived
    through an import are kept exactly as they were imported, so ``amount``
    and the status fields may hold anything the snapshot contained.
    """

    id: str
    client_id: str
    details: str
    amount: Any
    payment_method: str
    payment_status: str
    order_stage: str
    created_at: int
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase wire shape used on disk and in snapshots."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "clientId": self.client_id,
                "details": self.details,
                "amount": self.amount,
                "paymentMethod": self.payment_method,
                "paymentStatus": self.payment_status,
                "orderStage": self.order_stage,
                "createdAt": self.created_at,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        """Build from the wire shape without validating values.

        Raises KeyError when any wire field is missing.
        """
        return cls(
            id=data["id"],
            client_id=data["clientId"],
            details=data["details"],
            amount=data["amount"],
            payment_method=data["paymentMethod"],
            payment_status=data["paymentStatus"],
            order_stage=data["orderStage"],
            created_at=data["createdAt"],
            extra={k: v for k, v in data.items() if k not in _ORDER_FIELDS},
        )
