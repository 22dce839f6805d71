"""Error types raised by the Riot API client."""

from typing import Dict, Optional, Type


class RiotAPIError(Exception):
    """A Riot API request that did not produce a usable body."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        """
        Args:
            message: Human readable reason
            status_code: HTTP status, None for transport failures
            url: Request URL that failed
            retry_after: Last Retry-After seen, for 429s
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
        self.retry_after = retry_after

    def __str__(self) -> str:
        if self.status_code is None:
            return f"Riot API Error: {self.message}"
        text = f"Riot API Error {self.status_code}: {self.message}"
        if self.retry_after is not None:
            text += f" (retry after {self.retry_after}s)"
        return text


class RateLimitError(RiotAPIError):
    """429 persisted past the retry budget."""


class AuthenticationError(RiotAPIError):
    """401, the API key is missing or expired."""


class ForbiddenError(RiotAPIError):
    """403"""


class NotFoundError(RiotAPIError):
    """404, the match or summoner does not exist."""


class ServiceUnavailableError(RiotAPIError):
    """503"""


class BadRequestError(RiotAPIError):
    """400"""


class MalformedResponseError(RiotAPIError):
    """200 whose body is not JSON or does not match the expected DTO."""


_STATUS_ERRORS: Dict[int, tuple[Type[RiotAPIError], str]] = {
    400: (BadRequestError, "Invalid request parameters"),
    401: (AuthenticationError, "Invalid API key"),
    403: (ForbiddenError, "Access forbidden"),
    404: (NotFoundError, "Resource not found"),
    503: (ServiceUnavailableError, "Service unavailable"),
}


def error_for_status(status_code: int, url: Optional[str] = None) -> RiotAPIError:
    """Build the error for a terminal (non-200, non-429) response status."""
    error_cls, message = _STATUS_ERRORS.get(
        status_code, (RiotAPIError, f"Unexpected status {status_code}")
    )
    return error_cls(message, status_code=status_code, url=url)
