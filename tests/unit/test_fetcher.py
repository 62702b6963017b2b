"""Unit tests for PageFetcher (one request per page)."""

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from pydantic import ValidationError

from github_fakes import REPOS_URL, repo_json
from src.github_repos.errors import (
    DecodeError,
    ErrorKind,
    ProtocolViolationError,
    TransportError,
)
from src.github_repos.fetcher import PageFetcher
from src.github_repos.link_header import LinkUrls
from src.github_repos.request_logging import RequestLogger

# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def http_client():
    return httpx.AsyncClient()


@pytest.fixture
def fetcher(http_client):
    return PageFetcher(http_client, "ghp_test_token_123", user_agent="github-repos/test")


def _response(
    status_code: int = 200,
    json_data=None,
    headers: dict | None = None,
    content: bytes | None = None,
) -> httpx.Response:
    if content is not None:
        return httpx.Response(status_code, content=content, headers=headers)
    return httpx.Response(
        status_code, json=json_data if json_data is not None else [], headers=headers
    )


# =============================================================================
# Request Shape
# =============================================================================


class TestRequestShape:
    """Test headers and query parameters of the page request."""

    @pytest.mark.asyncio
    async def test_headers(self, fetcher, http_client):
        """Request carries UA, Accept, API version and Bearer token."""
        with patch.object(
            http_client, "get", new=AsyncMock(return_value=_response())
        ) as mock_get:
            await fetcher.fetch(REPOS_URL)

        headers = mock_get.call_args.kwargs["headers"]
        assert headers["User-Agent"] == "github-repos/test"
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["X-GitHub-Api-Version"] == "2022-11-28"
        assert headers["Authorization"] == "Bearer ghp_test_token_123"

    @pytest.mark.asyncio
    async def test_no_page_parameter_by_default(self, fetcher, http_client):
        """First page request has no page query parameter."""
        with patch.object(
            http_client, "get", new=AsyncMock(return_value=_response())
        ) as mock_get:
            await fetcher.fetch(REPOS_URL)

        assert mock_get.call_args.args[0] == REPOS_URL
        assert mock_get.call_args.kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_page_parameter(self, fetcher, http_client):
        """Page number is sent as ?page=N."""
        with patch.object(
            http_client, "get", new=AsyncMock(return_value=_response())
        ) as mock_get:
            await fetcher.fetch(REPOS_URL, page=4)

        assert mock_get.call_args.kwargs["params"] == {"page": "4"}

    @pytest.mark.asyncio
    async def test_page_parameter_on_the_wire(self):
        """The page parameter ends up in the URL query string."""
        seen: list[httpx.URL] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json=[])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            await PageFetcher(http, "t", user_agent="ua").fetch(REPOS_URL, page=3)

        assert str(seen[0]) == f"{REPOS_URL}?page=3"


# =============================================================================
# Response Handling
# =============================================================================


class TestResponseHandling:
    """Test decoding and link extraction."""

    @pytest.mark.asyncio
    async def test_decodes_repositories(self, fetcher, http_client):
        """JSON array is decoded into Repository models."""
        resp = _response(json_data=[repo_json("octo/hello", 42, private=True)])
        with patch.object(http_client, "get", new=AsyncMock(return_value=resp)):
            page = await fetcher.fetch(REPOS_URL)

        assert len(page.items) == 1
        repo = page.items[0]
        assert repo.id == 42
        assert repo.full_name == "octo/hello"
        assert repo.private is True
        assert repo.owner.login == "octo"
        assert page.links is None

    @pytest.mark.asyncio
    async def test_empty_page(self, fetcher, http_client):
        with patch.object(http_client, "get", new=AsyncMock(return_value=_response())):
            page = await fetcher.fetch(REPOS_URL)
        assert page.items == []

    @pytest.mark.asyncio
    async def test_link_header_extracted(self, fetcher, http_client):
        """next/last links are returned alongside the items."""
        resp = _response(
            headers={
                "link": f'<{REPOS_URL}?page=2>; rel="next", <{REPOS_URL}?page=3>; rel="last"'
            }
        )
        with patch.object(http_client, "get", new=AsyncMock(return_value=resp)):
            page = await fetcher.fetch(REPOS_URL)

        assert page.links == LinkUrls(
            next_url=f"{REPOS_URL}?page=2", last_url=f"{REPOS_URL}?page=3"
        )

    @pytest.mark.asyncio
    async def test_link_header_next_without_last(self, fetcher, http_client):
        resp = _response(headers={"link": f'<{REPOS_URL}?page=2>; rel="next"'})
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(ProtocolViolationError),
        ):
            await fetcher.fetch(REPOS_URL)


# =============================================================================
# Error Handling
# =============================================================================


class TestErrorHandling:
    """Test failure mapping to the error taxonomy."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403, 404, 500, 502])
    async def test_non_2xx_is_transport_error(self, fetcher, http_client, status):
        """Any non-2xx status raises TransportError with the status code."""
        resp = _response(status_code=status, json_data={"message": "nope"})
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(TransportError, match=str(status)) as exc_info,
        ):
            await fetcher.fetch(REPOS_URL, page=2)

        assert exc_info.value.status_code == status
        assert exc_info.value.kind is ErrorKind.TRANSPORT
        assert exc_info.value.url == REPOS_URL

    @pytest.mark.asyncio
    async def test_redirect_status_is_transport_error(self, fetcher, http_client):
        """3xx is not 2xx."""
        resp = _response(status_code=304, content=b"")
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(TransportError),
        ):
            await fetcher.fetch(REPOS_URL)

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self, fetcher, http_client):
        """httpx transport errors become TransportError with the cause chained."""
        error = httpx.ConnectError("Connection refused")
        with (
            patch.object(http_client, "get", new=AsyncMock(side_effect=error)),
            pytest.raises(TransportError, match="HTTP error") as exc_info,
        ):
            await fetcher.fetch(REPOS_URL)

        assert exc_info.value.status_code is None
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_network_error_logged(self, http_client):
        """Transport failures are reported to the request logger."""
        request_logger = Mock(spec=RequestLogger)
        fetcher = PageFetcher(http_client, "t", "ua", request_logger=request_logger)
        error = httpx.ReadTimeout("timed out")

        with (
            patch.object(http_client, "get", new=AsyncMock(side_effect=error)),
            pytest.raises(TransportError),
        ):
            await fetcher.fetch(REPOS_URL)

        request_logger.log_failure.assert_called_once_with(REPOS_URL, error)

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self, fetcher, http_client):
        resp = _response(content=b"<html>not json</html>")
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(DecodeError) as exc_info,
        ):
            await fetcher.fetch(REPOS_URL)

        assert exc_info.value.kind is ErrorKind.DECODE
        assert isinstance(exc_info.value.__cause__, ValidationError)

    @pytest.mark.asyncio
    async def test_object_body_is_decode_error(self, fetcher, http_client):
        """A JSON object where an array is expected fails decoding."""
        resp = _response(json_data={"message": "Moved"})
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(DecodeError),
        ):
            await fetcher.fetch(REPOS_URL)

    @pytest.mark.asyncio
    async def test_missing_required_field_is_decode_error(self, fetcher, http_client):
        item = repo_json("octo/hello")
        del item["owner"]
        resp = _response(json_data=[item])
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(DecodeError, match="validation error"),
        ):
            await fetcher.fetch(REPOS_URL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("field", "value"),
        [("id", "42"), ("id", 42.0), ("private", "false"), ("private", 0)],
    )
    async def test_wrong_scalar_type_is_decode_error(
        self, fetcher, http_client, field, value
    ):
        """Strings, floats and integers are not coerced into ids or flags."""
        item = repo_json("octo/hello")
        item[field] = value
        resp = _response(json_data=[item])
        with (
            patch.object(http_client, "get", new=AsyncMock(return_value=resp)),
            pytest.raises(DecodeError),
        ):
            await fetcher.fetch(REPOS_URL)
