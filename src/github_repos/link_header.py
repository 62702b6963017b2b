"""Link header parsing for GitHub pagination.

Format: <https://api.github.com/user/repos?page=2>; rel="next", <...?page=5>; rel="last"

Reference: https://docs.github.com/en/rest/using-the-rest-api/using-pagination-in-the-rest-api
"""

import logging
from dataclasses import dataclass

import httpx

from .errors import ProtocolViolationError

logger = logging.getLogger("github_repos.link_header")

__all__ = ["LinkUrls", "get_page_number", "parse_link_header"]

REL_NEXT = "next"
REL_LAST = "last"


def _parse_url_part(part: str) -> str | None:
    part = part.strip()
    if len(part) >= 2 and part.startswith("<") and part.endswith(">"):
        return part[1:-1]
    return None


def _parse_rel_part(params: str) -> str | None:
    # First rel="..." wins; other parameters (type, title, ...) are ignored
    for param in params.split(";"):
        param = param.strip()
        if param.startswith('rel="') and param.endswith('"') and len(param) > 5:
            return param[5:-1]
    return None


def parse_link_header(value: str) -> dict[str, str]:
    """Parse a Link header into a relation -> URL mapping.

    Malformed segments are skipped. A duplicated relation keeps its last URL.

    Args:
        value: Raw Link header value

    Returns:
        Dict mapping relation name (next, last, prev, first, ...) to URL
    """
    links: dict[str, str] = {}
    if not value:
        return links

    for segment in value.split(","):
        url_part, sep, params = segment.partition(";")
        if not sep:
            continue
        url = _parse_url_part(url_part)
        rel = _parse_rel_part(params)
        if url is None or rel is None:
            logger.debug("Skipping malformed Link segment: %.100s", segment)
            continue
        links[rel] = url
    return links


@dataclass(frozen=True)
class LinkUrls:
    """The pagination links a page response points at."""

    next_url: str
    last_url: str

    @classmethod
    def from_header(cls, value: str | None) -> "LinkUrls | None":
        """Extract next/last links from a Link header value.

        Args:
            value: Raw Link header value, or None when the header is absent

        Returns:
            LinkUrls, or None when there is no next page

        Raises:
            ProtocolViolationError: next link present without a last link
        """
        if value is None:
            return None

        links = parse_link_header(value)
        next_url = links.get(REL_NEXT)
        if next_url is None:
            return None

        last_url = links.get(REL_LAST)
        if last_url is None:
            raise ProtocolViolationError(
                f"Link header has rel=\"next\" but no rel=\"last\": {value!r}"
            )
        return cls(next_url=next_url, last_url=last_url)


def get_page_number(url: str) -> int:
    """Read the ``page`` query parameter of a pagination URL.

    Args:
        url: Absolute URL taken from a Link header

    Returns:
        Page number

    Raises:
        ProtocolViolationError: URL unparseable, page missing or non-numeric
    """
    try:
        page = httpx.URL(url).params.get("page")
    except httpx.InvalidURL as e:
        raise ProtocolViolationError(f"Invalid pagination URL {url!r}: {e}") from e

    if page is None:
        raise ProtocolViolationError(f"page missing from query string of {url!r}")

    # ASCII digits only; int() would also take "3_0", " 3" and non-ASCII digits
    if not (page.isascii() and page.isdigit()):
        raise ProtocolViolationError(
            f"Non-numeric page {page!r} in pagination URL {url!r}"
        )
    number = int(page)

    # Pages are 1-based
    if number < 1:
        raise ProtocolViolationError(f"Invalid page {number} in pagination URL {url!r}")
    return number
