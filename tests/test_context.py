import uuid

from starlette.requests import Request

from even_service.context import get_request_context, new_request_context


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "state": {}})


def test_new_context_generates_uuid4() -> None:
    ctx = new_request_context()
    assert uuid.UUID(ctx.request_id).version == 4


def test_new_contexts_are_distinct() -> None:
    ids = {new_request_context().request_id for _ in range(1000)}
    assert len(ids) == 1000


def test_log_is_bound_to_request_id(log_records) -> None:
    new_request_context("abc").log.info("hello")
    assert log_records[0]["extra"]["request_id"] == "abc"


def test_get_request_context_falls_back_to_unknown() -> None:
    assert get_request_context(_request()).request_id == "unknown"


def test_get_request_context_reads_request_state() -> None:
    request = _request()
    ctx = new_request_context()
    request.state.ctx = ctx
    assert get_request_context(request) is ctx
