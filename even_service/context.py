import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from fastapi import Request, Response
from loguru import logger

REQUEST_ID_HEADER = "X-Request-ID"
UNKNOWN_REQUEST_ID = "unknown"


@dataclass(frozen=True)
class RequestContext:
    """Per-request values handed to handlers and the evaluator.

    ``log`` is bound to ``request_id`` so every event written through it
    carries the id of the request it belongs to.
    """

    request_id: str
    log: Any = field(repr=False, compare=False)


def new_request_context(request_id: Optional[str] = None) -> RequestContext:
    if request_id is None:
        request_id = str(uuid.uuid4())
    return RequestContext(request_id=request_id, log=logger.bind(request_id=request_id))


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    # Inbound ids are ignored; every request gets a fresh one.
    ctx = new_request_context()
    request.state.ctx = ctx
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = ctx.request_id
    return response


def get_request_context(request: Request) -> RequestContext:
    ctx = getattr(request.state, "ctx", None)
    if ctx is None:
        return new_request_context(UNKNOWN_REQUEST_ID)
    return ctx
