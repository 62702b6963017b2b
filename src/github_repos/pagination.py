"""Concurrent Link-header pagination.

Page 1 is fetched on its own. If it advertises a next page, the page range
[next, last] is read from the Link URLs and every page in it is fetched
concurrently. Items are merged in page order regardless of completion order.
"""

import asyncio
import logging

from .fetcher import PageFetcher
from .link_header import get_page_number
from .models import Repository

logger = logging.getLogger("github_repos.pagination")

__all__ = ["paginate"]


async def _gather_pages(
    fetcher: PageFetcher, url: str, pages: range
) -> list[list[Repository]]:
    """Fetch pages concurrently, returning their items in ``pages`` order.

    The first failure cancels the fetches still in flight and propagates.
    """
    tasks = [asyncio.create_task(fetcher.fetch(url, page)) for page in pages]
    try:
        responses = await asyncio.gather(*tasks)
    except BaseException:
        cancelled = 0
        for task in tasks:
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.debug("Cancelled %d in-flight page fetches", cancelled)
        raise
    return [response.items for response in responses]


async def paginate(fetcher: PageFetcher, url: str) -> list[Repository]:
    """Fetch every page of a paginated list endpoint.

    Args:
        fetcher: PageFetcher bound to the shared HTTP client
        url: Absolute resource URL

    Returns:
        Items of page 1, then pages next..last, in ascending page order

    Raises:
        GitHubClientError: First failure of any page fetch or of page number
            extraction; no partial result is returned
    """
    first = await fetcher.fetch(url)
    all_items = list(first.items)

    if first.links is None:
        logger.debug("Single page response: %d items", len(all_items))
        return all_items

    # Both page numbers are validated before any further request goes out
    next_page = get_page_number(first.links.next_url)
    last_page = get_page_number(first.links.last_url)
    pages = range(next_page, last_page + 1)

    logger.debug(
        "Fetching pages %d..%d concurrently (%d requests)",
        next_page,
        last_page,
        len(pages),
    )
    for items in await _gather_pages(fetcher, url, pages):
        all_items.extend(items)

    return all_items
