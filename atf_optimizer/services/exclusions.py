"""Lazy-load exclusion paths for above-the-fold resources."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import urlsplit

from atf_optimizer.schemas.lcp import (
    BgImgDescriptor,
    BgImgSetDescriptor,
    ElementDescriptor,
    ImgDescriptor,
    ImgSrcsetDescriptor,
    PictureDescriptor,
)

logger = logging.getLogger(__name__)


def get_atf_sources(atfs: Iterable[ElementDescriptor] | None) -> list[str]:
    """Every resource URL referenced by the above-the-fold elements."""
    if not atfs:
        return []

    sources: list[str] = []
    for atf in atfs:
        if isinstance(atf, (ImgDescriptor, ImgSrcsetDescriptor)):
            sources.append(atf.src)
        elif isinstance(atf, (BgImgSetDescriptor, BgImgDescriptor)):
            sources.extend(entry.src for entry in atf.bg_set)
        elif isinstance(atf, PictureDescriptor):
            sources.extend(source.srcset for source in atf.sources)
            sources.append(atf.src)
    return sources


def url_path(url: str) -> str | None:
    """Path component of a URL without its leading slash, or None."""
    try:
        path = urlsplit(url).path
    except ValueError:
        logger.debug(f"Skipping unparsable exclusion URL: {url!r}")
        return None
    path = path.lstrip("/")
    return path or None


def get_path_for_exclusion(urls: Iterable[str]) -> list[str]:
    paths = []
    for url in urls:
        path = url_path(url)
        if path is not None:
            paths.append(path)
    return paths


def merge_exclusions(*groups: Iterable[str]) -> list[str]:
    """Concatenate exclusion lists, dropping duplicates (first one wins)."""
    return list(dict.fromkeys(item for group in groups for item in group))
