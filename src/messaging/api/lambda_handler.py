"""AWS Lambda entry point for API Gateway proxy integrations.

Accepts the proxy event, dispatches the relay request and returns the
``{statusCode, headers, body}`` shape API Gateway expects.

Handler path: ``messaging.api.lambda_handler.handler``
"""

import asyncio
import base64
import json

from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError as PydanticValidationError

from messaging.api.schemas import ErrorResponse, RelayRequest
from messaging.dispatch.dispatcher import build_dispatcher
from messaging.dispatch.result import DispatchSuccess
from messaging.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)

_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

# One loop per container so pooled HTTP connections survive warm invocations
_loop = None
_domain_ready = False


def _domain():
    global _domain_ready
    from messaging.domain import messaging

    if not _domain_ready:
        messaging.init()
        _domain_ready = True
    return messaging


def _event_loop():
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop


def find_payload(event: dict) -> dict:
    """Extract the relay payload from a proxy event: JSON body first, then query string."""
    body = event.get("body")
    if body:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return json.loads(body) if isinstance(body, str) else body
    return dict(event.get("queryStringParameters") or {})


def _response(status_code: int, content: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(_HEADERS),
        "body": json.dumps(jsonable_encoder(content)),
    }


def handler(event, context):
    logger.info(
        "Received API Gateway event",
        path=event.get("path"),
        method=event.get("httpMethod"),
        request_id=getattr(context, "aws_request_id", None),
    )

    try:
        payload = find_payload(event)
        relay_request = RelayRequest.model_validate(payload)
    except (ValueError, PydanticValidationError) as e:
        logger.warning("Failed to process event", error=str(e))
        return _response(400, ErrorResponse(error=f"Exception processing event: {e}").model_dump())

    add_context(event_kind=relay_request.event)
    try:
        with _domain().domain_context():
            dispatcher = build_dispatcher()
            result = _event_loop().run_until_complete(dispatcher.dispatch(relay_request.to_event()))
    finally:
        clear_context()

    if isinstance(result, DispatchSuccess):
        return _response(result.status_code, result.payload)
    return _response(result.status_code, ErrorResponse(error=result.message).model_dump())
