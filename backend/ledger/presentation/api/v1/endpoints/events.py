"""Server-sent events — notifies live views that ledger data changed."""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ledger.infrastructure.context import LedgerContext
from ledger.infrastructure.dependencies import get_ledger_context

router = APIRouter(tags=["Events"])


@router.get("/events")
async def stream_events(
    context: LedgerContext = Depends(get_ledger_context),
) -> StreamingResponse:
    """SSE stream of 'data_changed' events carrying the refreshed totals."""
    return StreamingResponse(
        context.broadcaster.subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
