"""Backup endpoints — JSON snapshot download and upload."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, UploadFile, status

from ledger.application.schemas import ImportResultResponse
from ledger.application.services import RecordStore, SnapshotService
from ledger.domain.entities import ImportMode
from ledger.domain.exceptions import (
    ImportInProgressError,
    InvalidFormatError,
    ValidationError,
)
from ledger.infrastructure.dependencies import get_record_store, get_snapshot_service
from ledger.presentation.api.v1.endpoints.common import flag_storage_warning

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("/export")
async def export_snapshot(
    service: SnapshotService = Depends(get_snapshot_service),
) -> Response:
    """Download the whole ledger as a JSON snapshot file."""
    return Response(
        content=service.export_json(),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{service.export_filename()}"',
        },
    )


@router.post("/import", response_model=ImportResultResponse)
async def import_snapshot(
    file: UploadFile,
    response: Response,
    mode: str = Query(ImportMode.MERGE.value, description="'replace' or 'merge'"),
    service: SnapshotService = Depends(get_snapshot_service),
    store: RecordStore = Depends(get_record_store),
) -> ImportResultResponse:
    """Import a snapshot file, replacing or merging into the current ledger.

    A rejected file leaves the ledger untouched.
    """
    try:
        result = await service.import_snapshot(file.read, mode)
    except ImportInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (InvalidFormatError, ValidationError) as e:
        logger.info("Rejected import of %s: %s", file.filename, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    flag_storage_warning(response, store)
    return ImportResultResponse.model_validate(result, from_attributes=True)
