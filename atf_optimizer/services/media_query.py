"""Turn the ordered <source> list of a <picture> into preload media ranges.

Each source's media condition only states its upper bound. Preload hints are
matched independently by the browser, so without a lower bound every hint
would fire on small viewports. The chainer prefixes each condition with the
previous source's max-width (+0.1px) so the ranges tile the width axis
without overlapping, and adds a last open-ended range for the <img> fallback.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from atf_optimizer.schemas.lcp import PictureDescriptor

MAX_WIDTH_PATTERN = re.compile(r"\(max-width: (\d+(\.\d+)?)px\)")

# Gap between one range's max-width and the next range's min-width
BOUNDARY_STEP = 0.1


@dataclass(frozen=True)
class MediaHint:
    href: str
    media: str


def format_px(value: float) -> str:
    """Format a pixel value the way float-to-string conversion does: 600.1, 900.1, 1200."""
    return f"{value:.14g}"


def min_width_after(max_width: float) -> str:
    return f"(min-width: {format_px(max_width + BOUNDARY_STEP)}px)"


def chain_picture_sources(picture: PictureDescriptor) -> list[MediaHint]:
    prev_max_width: float | None = None
    hints: list[MediaHint] = []

    for source in picture.sources:
        media = source.media
        if prev_max_width is not None:
            media = f"{min_width_after(prev_max_width)} and {media}"
        hints.append(MediaHint(href=source.srcset, media=media))

        # Sources without a max-width keep the last known bound
        match = MAX_WIDTH_PATTERN.search(source.media)
        if match:
            prev_max_width = float(match.group(1))

    if prev_max_width is not None:
        hints.append(MediaHint(href=picture.src, media=min_width_after(prev_max_width)))

    return hints
