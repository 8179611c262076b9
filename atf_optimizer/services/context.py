"""Per-request facts and the "may we optimize this page" decision."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from atf_optimizer.services.filters import FilterRegistry

logger = logging.getLogger(__name__)

BYPASS_QUERY_ARG = "nowprocket"

# Substrings that mark a user agent as a mobile browser
MOBILE_UA_MARKERS = (
    "Mobile",
    "Android",
    "Silk/",
    "Kindle",
    "BlackBerry",
    "Opera Mini",
    "Opera Mobi",
)


def is_mobile_user_agent(user_agent: str | None) -> bool:
    if not user_agent:
        return False
    return any(marker in user_agent for marker in MOBILE_UA_MARKERS)


def is_bypass_query(query: Mapping[str, str] | None) -> bool:
    """True when the request asks to skip optimizations (?nowprocket=1)."""
    if not query or BYPASS_QUERY_ARG not in query:
        return False
    return query[BYPASS_QUERY_ARG] not in ("", "0")


@dataclass(frozen=True)
class PageRequest:
    """The page being served, as seen by the optimizer."""

    path: str
    user_agent: str = ""
    query: Mapping[str, str] = field(default_factory=dict)
    cacheable: bool = True
    is_page_request: bool = True

    @property
    def is_mobile_device(self) -> bool:
        return is_mobile_user_agent(self.user_agent)

    @property
    def bypass(self) -> bool:
        """Optimizations are switched off for this response."""
        return not self.cacheable or is_bypass_query(self.query)


class AboveTheFoldContext:
    """Decides whether above-the-fold optimizations run for a request."""

    def __init__(self, enabled: bool, filters: FilterRegistry):
        self.enabled = enabled
        self.filters = filters

    def is_allowed(self, request: PageRequest) -> bool:
        if not self.enabled:
            return False
        if not request.is_page_request:
            return False
        return bool(self.filters.apply("above_the_fold_optimization", True, request))
