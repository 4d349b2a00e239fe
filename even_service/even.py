from typing import Optional

from even_service.context import UNKNOWN_REQUEST_ID, RequestContext, new_request_context
from even_service.errors import InvalidArgumentError


def is_even(ctx: Optional[RequestContext], number: int) -> bool:
    """Return True when ``number`` divides by 2 with no remainder.

    Negative numbers are rejected with InvalidArgumentError.
    """
    if ctx is None:
        ctx = new_request_context(UNKNOWN_REQUEST_ID)
    if number < 0:
        raise InvalidArgumentError(detail=f"negative numbers are not supported: {number}")

    ctx.log.debug("IsEven called", number=number)
    result = number % 2 == 0
    ctx.log.debug("IsEven result", number=number, is_even=result)
    return result
