"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Riak HTTP, a product of Garudex Labs

Version information for Riak HTTP.

Installed distributions report their metadata version; source checkouts fall
back to the VERSION file at the repository root.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "riak-http"


def get_version() -> str:
    """
    Resolve the package version.

    Returns:
        str: The version string (e.g., "0.1.0"), or "unknown"
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        version_file = Path(__file__).parent.parent / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
        return "unknown"


__version__ = get_version()
