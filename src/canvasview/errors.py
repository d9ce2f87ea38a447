"""Exceptions raised while talking to the Canvas API."""


class CanvasError(Exception):
    """Base class for all errors surfaced to the user."""


class ConfigurationError(CanvasError):
    """The Canvas domain or access token has not been configured."""


class AuthError(CanvasError):
    """The Canvas API rejected the access token (HTTP 401)."""


class ForbiddenError(CanvasError):
    """The request was refused (HTTP 403) by the proxy or by Canvas."""


class RequestError(CanvasError):
    """Any other failed request: bad status, network failure, or unparseable body.

    Attributes:
        status: The HTTP status code, if a response was received.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
