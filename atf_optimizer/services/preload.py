"""Build `<link rel="preload">` markup for an LCP element."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field

from atf_optimizer.schemas.lcp import (
    BgImgDescriptor,
    BgImgSetDescriptor,
    ElementDescriptor,
    ImgDescriptor,
    ImgSrcsetDescriptor,
    PictureDescriptor,
)
from atf_optimizer.services.media_query import chain_picture_sources

logger = logging.getLogger(__name__)

START_TAG = '<link rel="preload" as="image" '
END_TAG = ' fetchpriority="high">'


@dataclass
class PreloadResult:
    """Concatenated preload markup plus every URL it references, in order."""
    tags: str = ""
    sources: list[str] = field(default_factory=list)


def _attr(name: str, value: str) -> str:
    return f'{name}="{html.escape(value, quote=True)}"'


def _link(*attrs: str) -> str:
    return START_TAG + " ".join(attrs) + END_TAG


def build_preload_tags(lcp: ElementDescriptor | None) -> PreloadResult:
    """Generate preload link tags and their sources for an LCP descriptor.

    A missing descriptor gives an empty result; callers treat that as
    "nothing to preload".
    """
    result = PreloadResult()
    if lcp is None:
        return result

    if isinstance(lcp, ImgDescriptor):
        result.sources.append(lcp.src)
        result.tags = _link(_attr("href", lcp.src))

    elif isinstance(lcp, ImgSrcsetDescriptor):
        result.sources.append(lcp.src)
        result.tags = _link(
            _attr("href", lcp.src),
            _attr("imagesrcset", lcp.srcset),
            _attr("imagesizes", lcp.sizes),
        )

    elif isinstance(lcp, BgImgSetDescriptor):
        result.sources.extend(entry.src for entry in lcp.bg_set)
        result.tags = _link(_attr("imagesrcset", ",".join(result.sources)))

    elif isinstance(lcp, BgImgDescriptor):
        for entry in lcp.bg_set:
            result.sources.append(entry.src)
            result.tags += _link(_attr("href", entry.src))

    elif isinstance(lcp, PictureDescriptor):
        for hint in chain_picture_sources(lcp):
            result.sources.append(hint.href)
            result.tags += _link(_attr("href", hint.href), _attr("media", hint.media))

    else:
        logger.debug(f"No preload rule for descriptor {type(lcp).__name__}")

    return result
