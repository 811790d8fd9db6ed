from __future__ import annotations

from importlib import metadata

DISTRIBUTION_NAME = "tailscale-client"


def _installed_version(distribution: str = DISTRIBUTION_NAME) -> str:
    # Source checkouts without an install report 0.0.0.
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = _installed_version()
