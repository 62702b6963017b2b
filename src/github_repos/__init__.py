"""github-repos - list the authenticated user's GitHub repositories.

Provides:
- Async GitHub REST client with concurrent Link-header pagination
- Typed repository models (pydantic)
- Tagged error variants for every failure kind
- Configuration via pydantic-settings and structured logging setup

Python Version: 3.10+ required
"""

from .__version__ import __version__
from .client import GitHubClient, resolve_resource_url
from .config import ClientConfig, get_config, reset_config
from .errors import (
    DecodeError,
    ErrorKind,
    GitHubClientError,
    ProtocolViolationError,
    TransportError,
    UrlConstructionError,
)
from .link_header import LinkUrls, get_page_number, parse_link_header
from .logging_config import StructuredFormatter, TextFormatter, configure_logging
from .models import Owner, Repository

__all__ = [
    "ClientConfig",
    "DecodeError",
    "ErrorKind",
    "GitHubClient",
    "GitHubClientError",
    "LinkUrls",
    "Owner",
    "ProtocolViolationError",
    "Repository",
    "StructuredFormatter",
    "TextFormatter",
    "TransportError",
    "UrlConstructionError",
    "__version__",
    "configure_logging",
    "get_config",
    "get_page_number",
    "parse_link_header",
    "reset_config",
    "resolve_resource_url",
]
