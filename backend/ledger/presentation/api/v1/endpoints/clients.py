"""Client CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ledger.application.schemas import (
    ClientCreate,
    ClientResponse,
    ClientUpdate,
    OrderResponse,
)
from ledger.application.services import RecordStore
from ledger.domain.exceptions import NotFoundError, ValidationError
from ledger.infrastructure.dependencies import get_record_store
from ledger.presentation.api.v1.endpoints.common import (
    flag_storage_warning,
    to_order_response,
)

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    store: RecordStore = Depends(get_record_store),
) -> list[ClientResponse]:
    """Retrieve every client, oldest first."""
    return [
        ClientResponse.model_validate(c, from_attributes=True)
        for c in store.list_clients()
    ]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    store: RecordStore = Depends(get_record_store),
) -> ClientResponse:
    """Retrieve a single client by ID."""
    client = store.find_client_by_id(client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(NotFoundError("Client", client_id)),
        )
    return ClientResponse.model_validate(client, from_attributes=True)


@router.get("/{client_id}/orders", response_model=list[OrderResponse])
async def list_client_orders(
    client_id: str,
    store: RecordStore = Depends(get_record_store),
) -> list[OrderResponse]:
    """Retrieve the orders placed by one client."""
    if store.find_client_by_id(client_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(NotFoundError("Client", client_id)),
        )
    return [to_order_response(o, store) for o in store.list_orders_for_client(client_id)]


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> ClientResponse:
    """Create a new client."""
    try:
        client = await store.add_client(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    flag_storage_warning(response, store)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> ClientResponse:
    """Edit an existing client; its creation time is kept."""
    try:
        client = await store.update_client(client_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    flag_storage_warning(response, store)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: str,
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> None:
    """Delete a client together with all of its orders."""
    try:
        await store.delete_client(client_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    flag_storage_warning(response, store)
