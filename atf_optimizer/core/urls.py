"""URL helpers used to build the request identity of a page."""

from __future__ import annotations


def untrailingslashit(url: str) -> str:
    """Remove any trailing forward or back slashes."""
    return url.rstrip("/\\")


def home_url(home: str, path: str = "") -> str:
    """Join the site home URL and a request path with exactly one slash."""
    base = untrailingslashit(home)
    if not path:
        return base
    return f"{base}/{path.lstrip('/')}"


def canonical_url(home: str, path: str) -> str:
    """Identity URL of a page: home + request path, no trailing slash."""
    return untrailingslashit(home_url(home, path))
