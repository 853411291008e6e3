"""Pydantic schemas for the backup (export/import) API."""

from pydantic import BaseModel

from ledger.domain.entities import ImportMode


class ImportResultResponse(BaseModel):
    """Summary of a committed import."""

    mode: ImportMode
    clients_added: int
    orders_added: int
    clients_skipped: int
    orders_skipped: int
    orphan_orders: int
    message: str = "Data imported successfully!"

    model_config = {"from_attributes": True}
