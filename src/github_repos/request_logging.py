"""Request/response logging hooks for the shared httpx client.

Logs "begin request" before each request goes out and "received response"
once the status line arrives. Transport failures never reach a response hook,
so the fetcher logs those itself before wrapping them.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger("github_repos.http")

__all__ = ["RequestLogger"]


class RequestLogger:
    """httpx event hooks that log every request at a fixed level.

    Example:
        >>> hooks = RequestLogger(logging.INFO).event_hooks()
        >>> client = httpx.AsyncClient(event_hooks=hooks)
    """

    def __init__(self, level: int = logging.DEBUG) -> None:
        self.level = level

    async def on_request(self, request: httpx.Request) -> None:
        logger.log(self.level, "begin request %s %s", request.method, request.url)

    async def on_response(self, response: httpx.Response) -> None:
        logger.log(
            self.level,
            "received response %d",
            response.status_code,
            extra={"url": str(response.request.url)},
        )

    def log_failure(self, request_url: str, error: Exception) -> None:
        """Log a request that failed before any response arrived."""
        logger.log(self.level, "request failed %r", error, extra={"url": request_url})

    def event_hooks(self) -> dict[str, list[Any]]:
        """Build the ``event_hooks`` mapping for httpx.AsyncClient."""
        return {"request": [self.on_request], "response": [self.on_response]}
