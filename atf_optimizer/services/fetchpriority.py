"""Mark the LCP <img> tag with fetchpriority="high"."""

from __future__ import annotations

import re

from atf_optimizer.schemas.lcp import (
    ElementDescriptor,
    ImgDescriptor,
    ImgSrcsetDescriptor,
    PictureDescriptor,
)

# Background images are not <img> elements
IMG_DESCRIPTOR_TYPES = (ImgDescriptor, ImgSrcsetDescriptor, PictureDescriptor)

FETCHPRIORITY_ATTR = re.compile(r"""fetchpriority\s*=\s*['"]([^'"]+)['"]""", re.IGNORECASE)


def img_tag_pattern(src: str) -> re.Pattern:
    """Match an <img> tag whose src attribute is exactly `src`."""
    return re.compile(
        r"""<img(?:[^>]*?\s+)?src=["']""" + re.escape(src) + r"""["'](?:\s+[^>]*?)?>"""
    )


def _add_fetchpriority(match: re.Match) -> str:
    tag = match.group(0)
    if FETCHPRIORITY_ATTR.search(tag):
        return tag
    return tag.replace("<img", '<img fetchpriority="high"', 1)


def set_fetchpriority(lcp: ElementDescriptor | None, html: str) -> str:
    """Add fetchpriority="high" to the first <img> matching the LCP src.

    Tags that already carry a fetchpriority attribute are left alone, so
    running this twice is the same as running it once.
    """
    if not isinstance(lcp, IMG_DESCRIPTOR_TYPES) or not lcp.src:
        return html
    return img_tag_pattern(lcp.src).sub(_add_fetchpriority, html, count=1)
