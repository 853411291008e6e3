from .change_broadcaster import ChangeBroadcaster
from .dashboard import compute_dashboard, format_currency
from .id_generator import current_millis, generate_id
from .record_store import RecordStore
from .snapshot_service import SnapshotService, validate_snapshot

__all__ = [
    "ChangeBroadcaster",
    "compute_dashboard",
    "format_currency",
    "current_millis",
    "generate_id",
    "RecordStore",
    "SnapshotService",
    "validate_snapshot",
]
