"""Domain-specific exceptions — framework-independent."""


class LedgerError(Exception):
    """Base class for every error raised by the ledger."""


class ValidationError(LedgerError):
    """Raised when a client or order payload breaks a field rule.

    Caller-correctable: only the offending mutation is blocked.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(LedgerError):
    """Raised when a requested record does not exist."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StorageFullError(LedgerError):
    """Raised when the durable store rejects a write (quota or availability)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidFormatError(LedgerError):
    """Raised when an imported snapshot is rejected as a whole."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid snapshot: {reason}")


class ImportInProgressError(LedgerError):
    """Raised when an import is requested while another one is still reading."""

    def __init__(self) -> None:
        super().__init__("Another import is already in progress")


class CorruptionWarning(UserWarning):
    """A persisted entry could not be parsed and was treated as empty.

    Reported, never raised: loading continues with an empty collection.
    """

    def __init__(self, entry: str, reason: str):
        self.entry = entry
        self.reason = reason
        super().__init__(f"Entry '{entry}' is corrupt: {reason}")
