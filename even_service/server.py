import socket
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from even_service import __version__
from even_service.config import DEFAULT_HOST
from even_service.context import RequestContext, get_request_context, request_context_middleware
from even_service.errors import (
    BadRequestError,
    BindError,
    InternalError,
    MethodNotAllowedError,
    ServiceError,
)
from even_service.even import is_even
from even_service.models import EvenResponse, ErrorResponse, HealthResponse, NumberRequest

# Routes accept the common methods so the handlers can log and reject the wrong
# ones; anything else is answered by http_error_handler with the same events.
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _remote_addr(request: Request) -> str:
    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"


async def is_even_handler(
    request: Request, ctx: RequestContext = Depends(get_request_context)
) -> EvenResponse:
    path = request.url.path
    ctx.log.info(
        "Request received", method=request.method, path=path, remote_addr=_remote_addr(request)
    )

    if request.method != "POST":
        ctx.log.warning("Method not allowed", method=request.method, path=path)
        raise MethodNotAllowedError()

    raw = await request.body()
    try:
        req = NumberRequest.model_validate_json(raw)
    except ValidationError as exc:
        ctx.log.error("Invalid request body", error=str(exc), path=path)
        raise BadRequestError(detail=str(exc)) from exc

    try:
        result = is_even(ctx, req.number)
    except Exception as exc:
        ctx.log.error("Error processing IsEven request", error=str(exc), number=req.number)
        raise InternalError(detail=str(exc)) from exc

    ctx.log.info("Request completed successfully", number=req.number, is_even=result)
    return EvenResponse(is_even=result)


async def health_handler(
    request: Request, ctx: RequestContext = Depends(get_request_context)
) -> HealthResponse:
    ctx.log.info(
        "Health check received",
        method=request.method,
        path=request.url.path,
        remote_addr=_remote_addr(request),
    )

    if request.method != "GET":
        ctx.log.warning("Method not allowed on health endpoint", method=request.method)
        raise MethodNotAllowedError()

    response = HealthResponse(status="ok")
    ctx.log.debug("Health check completed successfully")
    return response


# (received, rejected) events per path, matching what the handlers log.
_METHOD_EVENTS = {
    "/": ("Request received", "Method not allowed"),
    "/health": ("Health check received", "Method not allowed on health endpoint"),
}


def _reject_unrouted_method(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Answer methods the router turned away before a handler ran (TRACE, PROPFIND...)."""
    ctx = get_request_context(request)
    path = request.url.path
    received, rejected = _METHOD_EVENTS.get(path, _METHOD_EVENTS["/"])
    ctx.log.info(received, method=request.method, path=path, remote_addr=_remote_addr(request))
    ctx.log.warning(rejected, method=request.method, path=path)
    error = MethodNotAllowedError()
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return _reject_unrouted_method(request, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


def create_app(enrich: bool = True) -> FastAPI:
    """Build the application: evaluation on ``/``, liveness on ``/health``.

    With ``enrich=False`` the request id middleware is left out and handlers
    log with the ``unknown`` id.
    """
    app = FastAPI(title="Even Service", version=__version__)
    if enrich:
        app.middleware("http")(request_context_middleware)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.add_api_route(
        "/",
        is_even_handler,
        methods=ANY_METHOD,
        response_model=EvenResponse,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
            status.HTTP_405_METHOD_NOT_ALLOWED: {"model": ErrorResponse},
            status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        },
    )
    app.add_api_route(
        "/health",
        health_handler,
        methods=ANY_METHOD,
        response_model=HealthResponse,
        responses={status.HTTP_405_METHOD_NOT_ALLOWED: {"model": ErrorResponse}},
    )
    return app


def bind_socket(host: str, port: str) -> socket.socket:
    port_num = int(port, 10)
    if not 0 <= port_num <= 65535:
        raise ValueError(f"port out of range: {port}")
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port_num))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def serve(port: str, host: str = DEFAULT_HOST, app: Optional[FastAPI] = None) -> None:
    """Listen on ``host:port`` and serve until terminated.

    Raises BindError when the socket cannot be acquired or the server never
    comes up.
    """
    addr = f"{host}:{port}"
    logger.info("Starting server", port=port, address=addr)

    try:
        sock = bind_socket(host, port)
    except (ValueError, OSError) as exc:
        logger.error("Server failed to start", error=str(exc), port=port)
        raise BindError(f"cannot listen on {addr}: {exc}") from exc

    # log_config=None keeps uvicorn on the loguru bridge set up by setup_logging.
    config = uvicorn.Config(app or create_app(), log_config=None)
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()

    if not server.started:
        logger.error("Server failed to start", error="server exited during startup", port=port)
        raise BindError(f"server on {addr} exited during startup")


app = create_app()
