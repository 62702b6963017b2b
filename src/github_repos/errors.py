"""Error taxonomy for the repository client.

Every failure surfaced by the client is a GitHubClientError subclass tagged
with an ErrorKind, so callers can branch on the kind without inspecting
message text. The underlying cause (httpx error, pydantic ValidationError,
ValueError) is kept as ``__cause__`` via exception chaining.
"""

from enum import Enum

__all__ = [
    "DecodeError",
    "ErrorKind",
    "GitHubClientError",
    "ProtocolViolationError",
    "TransportError",
    "UrlConstructionError",
]


class ErrorKind(str, Enum):
    """Kinds of failure the list operation can end with."""

    URL = "url"  # Base URL malformed or not joinable with the resource path
    TRANSPORT = "transport"  # Network failure or non-2xx status
    DECODE = "decode"  # Body does not match list[Repository]
    PROTOCOL = "protocol"  # Link header or page parameter not as expected


class GitHubClientError(Exception):
    """Raised when listing repositories fails.

    Base class for the closed set of variants below. Never raised directly.
    """

    kind: ErrorKind


class UrlConstructionError(GitHubClientError):
    """Raised when the request URL cannot be built from the base URL."""

    kind = ErrorKind.URL

    def __init__(self, base_url: str, message: str = "Cannot build request URL"):
        self.base_url = base_url
        super().__init__(f"{message} from base URL {base_url!r}")


class TransportError(GitHubClientError):
    """Raised on network failure or a non-2xx HTTP response.

    Attributes:
        url: Request URL that failed
        status_code: HTTP status when a response was received, else None
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, url: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeError(GitHubClientError):
    """Raised when a response body is not a JSON array of repositories."""

    kind = ErrorKind.DECODE

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class ProtocolViolationError(GitHubClientError):
    """Raised when pagination metadata is missing or malformed."""

    kind = ErrorKind.PROTOCOL
