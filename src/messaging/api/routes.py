"""FastAPI routes for the Messaging domain.

Thin adapter: request body → ``RelayEvent`` → dispatcher → JSON response.
"""

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from messaging.api.schemas import ErrorResponse, RelayRequest
from messaging.dispatch.dispatcher import build_dispatcher
from messaging.dispatch.result import DispatchSuccess
from messaging.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/messaging", tags=["messaging"])


def result_to_response(result) -> JSONResponse:
    if isinstance(result, DispatchSuccess):
        return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.payload))
    return JSONResponse(
        status_code=result.status_code,
        content=ErrorResponse(error=result.message).model_dump(),
    )


@router.post("")
async def relay(request: Request) -> JSONResponse:
    """Register, unregister, message a user, or broadcast to a topic."""
    try:
        body = await request.json()
        relay_request = RelayRequest.model_validate(body)
    except (ValueError, PydanticValidationError) as e:
        logger.warning("Rejected malformed payload", error=str(e))
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=f"Exception processing event: {e}").model_dump(),
        )

    add_context(event_kind=relay_request.event)
    try:
        result = await build_dispatcher().dispatch(relay_request.to_event())
    finally:
        clear_context()
    return result_to_response(result)
