"""SQLAlchemy ORM model for one entry of the durable key-value store."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger.infrastructure.database.base import Base


class LedgerEntryModel(Base):
    """ORM model — maps to the 'ledger_entries' table (``clientsDB``, ``ordersDB``)."""

    __tablename__ = "ledger_entries"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<LedgerEntryModel(key='{self.key}', bytes={len(self.value or b'')})>"
