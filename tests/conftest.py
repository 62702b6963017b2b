"""Shared pytest fixtures for github-repos tests.

Fixture Organization:
    - Fake backend fixtures: FakeGitHub (tests/github_fakes.py) serving
      paginated /user/repos responses through httpx.MockTransport
    - Client fixtures: GitHubClient wired to a fake backend
    - Logging fixtures: restore the github_repos logger after configuration

References:
    - pytest fixtures docs: https://docs.pytest.org/en/stable/how-to/fixtures.html
    - httpx transports: https://www.python-httpx.org/advanced/transports/
"""

import logging
import sys
from pathlib import Path

import pytest

from src.github_repos.client import GitHubClient
from src.github_repos.config import reset_config

# Add tests directory to sys.path so test modules can import github_fakes
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from github_fakes import API_BASE, FakeGitHub, repo_json  # noqa: E402


@pytest.fixture
def three_page_backend() -> FakeGitHub:
    """Backend with 3 pages whose names are deliberately out of order."""
    return FakeGitHub(
        {
            1: [repo_json("zed/zulu", 1), repo_json("alice/mango", 2)],
            2: [repo_json("bob/banana", 3), repo_json("Carol/apple", 4)],
            3: [repo_json("alice/apple", 5, private=True)],
        }
    )


@pytest.fixture
def make_client():
    """Factory: GitHubClient talking to a FakeGitHub backend."""

    def _make(backend: FakeGitHub, base_url: str = API_BASE) -> GitHubClient:
        return GitHubClient(base_url, "ghp_test_token_123", backend.http_client())

    return _make


@pytest.fixture(autouse=True)
def _fresh_config():
    """Clear the cached config singleton around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def reset_github_repos_logger():
    """Restore the github_repos logger after tests that configure it."""
    logger = logging.getLogger("github_repos")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
