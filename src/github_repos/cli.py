"""Command-line tool for listing the authenticated user's repositories.

Usage:
    github-repos                        # Public, non-archived repositories
    github-repos --private              # Private, non-archived repositories
    github-repos --private --archived   # Private, archived repositories
    github-repos --json                 # Machine-readable output

The token is read from --token or GITHUB_CLIENT_GITHUB_TOKEN (.env supported).
"""

import argparse
import asyncio
import json
import sys

from pydantic import ValidationError

from .client import GitHubClient
from .config import ClientConfig, get_config
from .errors import GitHubClientError
from .logging_config import configure_logging
from .models import Repository

BRIGHT_YELLOW = "\033[93m"
YELLOW = "\033[33m"
RED = "\033[91m"
RESET = "\033[0m"


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def filter_repos(
    repos: list[Repository], private: bool, archived: bool
) -> list[Repository]:
    """Keep repositories whose private and archived flags match exactly."""
    return [r for r in repos if r.private == private and r.archived == archived]


def format_repo(repo: Repository, color: bool = True) -> str:
    """One output line: ``<html_url>: <full_name> (<id>) [<html_url>]``."""
    return (
        f"{_paint(repo.html_url, BRIGHT_YELLOW, color)}: "
        f"{_paint(repo.full_name, YELLOW, color)} ({repo.id}) [{repo.html_url}]"
    )


async def fetch_repos(
    base_url: str, token: str, config: ClientConfig
) -> list[Repository]:
    """Fetch the full sorted repository list with a short-lived client."""
    async with GitHubClient(
        base_url,
        token,
        user_agent=config.user_agent,
        timeout=config.http_timeout,
    ) as client:
        return await client.list_user_repos()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-repos",
        description="List repositories of the authenticated GitHub user",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                         # Public, non-archived repositories
  %(prog)s -p                      # Private repositories
  %(prog)s -p -a                   # Private archived repositories
  %(prog)s --json > repos.json     # JSON output

Configuration:
  Set in environment or .env:
    GITHUB_CLIENT_GITHUB_TOKEN=ghp_your_token_here
    GITHUB_CLIENT_BASE_URL=https://api.github.com/
        """,
    )
    parser.add_argument("-t", "--token", help="GitHub REST API token")
    parser.add_argument(
        "-p", "--private", action="store_true", help="Show private repositories"
    )
    parser.add_argument(
        "-a", "--archived", action="store_true", help="Show archived repositories"
    )
    parser.add_argument("--base-url", help="GitHub API base URL")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: GITHUB_CLIENT_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
    except ValidationError as e:
        print(f"ERROR [config]: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(args.log_level or config.log_level, config.log_format)

    token = args.token or config.github_token.get_secret_value()
    if not token:
        print(
            "ERROR: no GitHub token. Pass --token or set GITHUB_CLIENT_GITHUB_TOKEN",
            file=sys.stderr,
        )
        sys.exit(1)

    base_url = args.base_url or config.base_url
    color = not args.no_color and sys.stdout.isatty()

    try:
        repos = asyncio.run(fetch_repos(base_url, token, config))
    except GitHubClientError as e:
        message = f"ERROR [{e.kind.value}]: {e}"
        print(_paint(message, RED, not args.no_color and sys.stderr.isatty()), file=sys.stderr)
        sys.exit(1)

    filtered = filter_repos(repos, private=args.private, archived=args.archived)

    if args.json:
        print(json.dumps([r.model_dump() for r in filtered], indent=2))
        return

    print(f"Filters: private={str(args.private).lower()}, archived={str(args.archived).lower()}")
    for repo in filtered:
        print(format_repo(repo, color=color))
    print(f"({len(filtered)} repos)")


if __name__ == "__main__":
    main()
