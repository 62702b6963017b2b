"""GitHub REST API client for the authenticated user's repositories.

Provides an async httpx-based client with token auth. Pages are discovered
from the Link header of the first response and the remaining pages are
fetched concurrently; the merged list is sorted by full name.

Reference: https://docs.github.com/en/rest/repos/repos#list-repositories-for-the-authenticated-user
"""

import logging
from typing import Any

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ClientConfig
from .errors import UrlConstructionError
from .fetcher import PageFetcher
from .models import Repository
from .pagination import paginate
from .request_logging import RequestLogger

logger = logging.getLogger("github_repos.client")

__all__ = ["GitHubClient", "resolve_resource_url"]

USER_REPOS_PATH = "user/repos"


def resolve_resource_url(base_url: str, path: str = USER_REPOS_PATH) -> str:
    """Join an API base URL with a relative resource path.

    The base is treated as a directory, so ``https://host/api/v3`` and
    ``https://host/api/v3/`` both resolve to ``https://host/api/v3/user/repos``.

    Args:
        base_url: Absolute http(s) API base URL
        path: Relative resource path

    Returns:
        Absolute request URL

    Raises:
        UrlConstructionError: base_url is malformed or not absolute http(s)
    """
    try:
        base = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise UrlConstructionError(base_url, f"Malformed URL: {e}") from e

    if base.scheme not in ("http", "https") or not base.host:
        raise UrlConstructionError(base_url, "Base URL must be an absolute http(s) URL")

    if not base.path.endswith("/"):
        base = base.copy_with(path=base.path + "/")

    try:
        return str(base.join(path))
    except httpx.InvalidURL as e:
        raise UrlConstructionError(base_url, f"Cannot join {path!r}: {e}") from e


class GitHubClient:
    """Repository list client using httpx with Bearer token auth.

    Uses one long-lived httpx.AsyncClient for every page of every call, so
    connections are pooled. A client passed in by the caller stays owned by
    the caller; one created here is closed by close() / ``async with``.

    Attributes:
        base_url: GitHub API base URL
        user_agent: User-Agent header value

    Example:
        >>> async with GitHubClient("https://api.github.com/", "ghp_token") as client:
        ...     repos = await client.list_user_repos()
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        http_client: httpx.AsyncClient | None = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        log_level: int = logging.DEBUG,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: GitHub API base URL (e.g. https://api.github.com/)
            token: GitHub token sent as ``Authorization: Bearer``
            http_client: Shared httpx.AsyncClient; created when None
            user_agent: User-Agent header value
            timeout: Request timeout in seconds for a created client
            log_level: Level for request/response log lines
        """
        self.base_url = base_url
        self.user_agent = user_agent
        self._request_logger = RequestLogger(log_level)

        self._owns_http = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout),
                event_hooks=self._request_logger.event_hooks(),
            )
        self._http = http_client

        self._fetcher = PageFetcher(
            self._http,
            token,
            user_agent=user_agent,
            request_logger=self._request_logger,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> "GitHubClient":
        """Build a client from ClientConfig (base URL, token, UA, timeout)."""
        return cls(
            config.base_url or DEFAULT_BASE_URL,
            config.github_token.get_secret_value(),
            http_client,
            user_agent=config.user_agent,
            timeout=config.http_timeout,
        )

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit -- close httpx client if owned."""
        await self.close()

    async def close(self) -> None:
        """Close the httpx client and release connections (owned client only)."""
        if self._owns_http:
            await self._http.aclose()

    async def list_user_repos(self) -> list[Repository]:
        """List all repositories of the authenticated user.

        Returns:
            Every repository across all pages, sorted by full_name
            (stable, case-sensitive)

        Raises:
            UrlConstructionError: base_url cannot be resolved
            TransportError: Network failure or non-2xx on any page
            DecodeError: A page body is not a repository list
            ProtocolViolationError: Malformed pagination metadata
        """
        url = resolve_resource_url(self.base_url, USER_REPOS_PATH)
        logger.debug("list_user_repos: %s", url)

        repos = await paginate(self._fetcher, url)
        repos.sort(key=lambda repo: repo.full_name)

        logger.info("Fetched %d repositories", len(repos))
        return repos
