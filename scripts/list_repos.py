#!/usr/bin/env python3
"""List the authenticated user's GitHub repositories.

Usage:
    python scripts/list_repos.py --token ghp_xxx
    python scripts/list_repos.py --private --archived
    python scripts/list_repos.py --json

Same as the installed ``github-repos`` command.
"""

import sys
from pathlib import Path

# Allow running from repo root without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from github_repos.cli import main

if __name__ == "__main__":
    main()
