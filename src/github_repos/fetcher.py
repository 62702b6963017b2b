"""Single-page fetch against the GitHub REST API.

One call == one HTTP GET. No retries: any failure aborts the page.
"""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from .errors import DecodeError, TransportError
from .link_header import LinkUrls
from .models import Repository, RepositoryList
from .request_logging import RequestLogger

logger = logging.getLogger("github_repos.fetcher")

__all__ = ["API_VERSION", "MEDIA_TYPE", "PageFetcher", "PageResponse"]

MEDIA_TYPE = "application/vnd.github+json"
API_VERSION = "2022-11-28"


@dataclass
class PageResponse:
    """Items of one page plus the pagination links it carried (if any)."""

    items: list[Repository]
    links: LinkUrls | None


class PageFetcher:
    """Fetches one page of repositories with token auth.

    The httpx.AsyncClient is shared and owned by the caller; the fetcher
    never closes it.

    Attributes:
        user_agent: Value sent in the User-Agent header
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token: str,
        user_agent: str,
        request_logger: RequestLogger | None = None,
    ) -> None:
        self._http = http_client
        self._token = token
        self.user_agent = user_agent
        self._request_logger = request_logger

    def build_headers(self) -> dict[str, str]:
        """Headers every page request carries."""
        return {
            "User-Agent": self.user_agent,
            "Accept": MEDIA_TYPE,
            "X-GitHub-Api-Version": API_VERSION,
            "Authorization": f"Bearer {self._token}",
        }

    async def fetch(self, url: str, page: int | None = None) -> PageResponse:
        """GET one page and decode it.

        Args:
            url: Absolute resource URL (e.g. https://api.github.com/user/repos)
            page: Page number sent as ``?page=``; omitted when None

        Returns:
            PageResponse with decoded repositories and next/last links

        Raises:
            TransportError: Network failure or non-2xx status
            DecodeError: Body is not a JSON array of repositories
            ProtocolViolationError: Link header has next but no last
        """
        params = {"page": str(page)} if page is not None else None
        logger.debug("Fetching page %s of %s", page or 1, url)

        try:
            response = await self._http.get(
                url, params=params, headers=self.build_headers()
            )
        except httpx.HTTPError as e:
            if self._request_logger is not None:
                self._request_logger.log_failure(url, e)
            raise TransportError(f"HTTP error: {e}", url=url) from e

        if not response.is_success:
            raise TransportError(
                f"GitHub API error {response.status_code} for page {page or 1}: "
                f"{response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )

        links = LinkUrls.from_header(response.headers.get("link"))

        try:
            items = RepositoryList.validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(
                f"Cannot decode page {page or 1} as a repository list: "
                f"{e.error_count()} validation error(s)",
                url=url,
            ) from e

        return PageResponse(items=items, links=links)
