"""Exceptions."""

from typing import Optional


class InvalidArgument(ValueError):
    """A required identifier is missing, or an option value is invalid."""


class Unauthorized(RuntimeError):
    """The session does not belong to the API key of this client."""


class SigningFailure(RuntimeError):
    """The token could not be signed."""


class SessionIDDecodeError(ValueError):
    """A session ID could not be decoded."""


class RequestFailed(IOError):
    """The request could not be completed, or its response was unreadable."""


class ResponseError(RequestFailed):
    """The API responded with an unexpected status code."""

    def __init__(self, status_code: int, message: Optional[str] = None) \
            -> None:
        """Keep the status code and the message returned by the API."""
        self.status_code = status_code
        self.message = message or ''
        super(ResponseError, self).__init__(
            f'OpenTok error: code: {status_code}; message: {self.message}'
        )
