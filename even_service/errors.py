from fastapi import status


class ServiceError(Exception):
    """Base class for errors that end a request with an HTTP status.

    ``message`` is what the client sees; details belong in the log.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, *, detail: str = "") -> None:
        self.detail = detail or self.message
        super().__init__(self.detail)


class InvalidArgumentError(ServiceError):
    """A value outside the accepted domain, such as a negative number."""

    message = "Invalid argument"


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body"


class MethodNotAllowedError(ServiceError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    message = "Method not allowed"


class InternalError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Error processing request"


class BindError(Exception):
    """The server could not acquire its listening socket."""
