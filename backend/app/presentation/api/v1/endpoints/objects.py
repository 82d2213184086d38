"""Object endpoints — clone capabilities and record cloning.

Responses are built as RestResponse objects and rendered explicitly; domain
errors are turned into REST error responses by the registered handlers.
"""

from fastapi import APIRouter, Depends, status
from starlette.responses import Response

from app.application.schemas import (
    CloneHandlerResponse,
    CloneInfoResponse,
    CloneRecordRequest,
    CloneRecordResponse,
)
from app.application.services import CloneService
from app.infrastructure.dependencies import get_clone_service
from app.presentation.rest import RestResponse, to_http_response

router = APIRouter(prefix="/objects", tags=["Objects"])


@router.get("/{object_name}/clone-info", response_model=CloneInfoResponse)
async def get_clone_info(
    object_name: str,
    service: CloneService = Depends(get_clone_service),
) -> Response:
    """Report whether an object can be cloned and which fields are copied."""
    info = CloneInfoResponse(
        object_name=object_name,
        cloneable=service.is_cloneable(object_name),
        cloneable_fields=service.list_cloneable_fields(object_name),
        clone_handler=service.get_clone_handler(object_name),
    )
    return to_http_response(RestResponse().set_data(info.model_dump()).finish())


@router.post(
    "/{object_name}/records/{record_id}/clone",
    response_model=CloneRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_200_OK: {"model": CloneHandlerResponse}},
)
async def clone_record(
    object_name: str,
    record_id: str,
    body: CloneRecordRequest | None = None,
    service: CloneService = Depends(get_clone_service),
) -> Response:
    """Clone a record, optionally overriding field values of the copy."""
    data = body.data if body is not None else {}
    result = await service.clone_record(object_name, record_id, data)

    response = RestResponse()
    if service.get_clone_handler(object_name):
        response.set_data(CloneHandlerResponse(result=result).model_dump())
    else:
        response.set_data(CloneRecordResponse(id=result).model_dump())
        response.set_status(status.HTTP_201_CREATED, "Created")
    return to_http_response(response.finish())
