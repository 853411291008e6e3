"""Domain entity — a client of the ledger."""

from dataclasses import dataclass, field
from typing import Any

_CLIENT_FIELDS = ("id", "name", "phone", "createdAt")


@dataclass
class Client:
    """A person or business that places orders.

    ``created_at`` is milliseconds since the epoch, set once at creation.
    Keys found on stored or imported records that the ledger does not know
    about are kept in ``extra`` and written back unchanged.
    """

    id: str
    name: str
    created_at: int
    phone: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase wire shape used on disk and in snapshots."""
        data: dict[str, Any] = dict(self.extra)
        data["id"] = self.id
        data["name"] = self.name
        if self.phone is not None:
            data["phone"] = self.phone
        data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Client":
        """Build from the wire shape without validating values.

        Raises KeyError when ``id``, ``name`` or ``createdAt`` is missing.
        """
        return cls(
            id=data["id"],
            name=data["name"],
            created_at=data["createdAt"],
            phone=data.get("phone"),
            extra={k: v for k, v in data.items() if k not in _CLIENT_FIELDS},
        )
