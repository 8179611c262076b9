"""Above-the-fold optimization entry points.

`lcp()` rewrites a rendered page: preload the LCP resource right after
</title> and raise the fetch priority of its <img>, or, when the page has not
been measured yet, inject the measurement beacon. `add_exclusions()` gives
the lazy-load subsystem the resources that must never be deferred.
"""

from __future__ import annotations

import logging
import re

from atf_optimizer.core.metrics import lcp_exclusions_total, lcp_optimizations_total
from atf_optimizer.core.options import OptionsProvider
from atf_optimizer.core.urls import canonical_url
from atf_optimizer.models.above_the_fold import AboveTheFold
from atf_optimizer.services.beacon import BeaconInjector
from atf_optimizer.services.context import AboveTheFoldContext, PageRequest
from atf_optimizer.services.exclusions import (
    get_atf_sources,
    get_path_for_exclusion,
    merge_exclusions,
)
from atf_optimizer.services.fetchpriority import set_fetchpriority
from atf_optimizer.services.preload import build_preload_tags
from atf_optimizer.services.queries import MetadataStore

logger = logging.getLogger(__name__)

TITLE_CLOSE_PATTERN = re.compile(r"</title\s*>", re.IGNORECASE)


class AboveTheFoldController:
    def __init__(
        self,
        options: OptionsProvider,
        store: MetadataStore,
        context: AboveTheFoldContext,
        beacon: BeaconInjector,
        home_url: str,
    ):
        self.options = options
        self.store = store
        self.context = context
        self.beacon = beacon
        self.home_url = home_url

    def is_mobile(self, request: PageRequest) -> bool:
        """Mobile visitors get their own row only when mobile files are cached separately."""
        return bool(
            self.options.get("cache_mobile", False)
            and self.options.get("do_caching_mobile_files", False)
            and request.is_mobile_device
        )

    def page_url(self, request: PageRequest) -> str:
        return canonical_url(self.home_url, request.path)

    def lcp(self, html: str, request: PageRequest) -> str:
        """Optimize the LCP element of a rendered page."""
        if not self.context.is_allowed(request):
            lcp_optimizations_total.labels(outcome="not_allowed").inc()
            return html

        if request.bypass:
            lcp_optimizations_total.labels(outcome="bypassed").inc()
            return html

        url = self.page_url(request)
        is_mobile = self.is_mobile(request)
        row = self.store.get_row(url, is_mobile)

        if row is None:
            injected = self.beacon.inject(html, url, is_mobile)
            outcome = "beacon" if injected != html else "beacon_skipped"
            lcp_optimizations_total.labels(outcome=outcome).inc()
            return injected

        if not row.has_lcp():
            lcp_optimizations_total.labels(outcome="no_lcp").inc()
            return html

        return self.preload_lcp(html, row)

    def preload_lcp(self, html: str, row: AboveTheFold) -> str:
        match = TITLE_CLOSE_PATTERN.search(html)
        if not match:
            logger.debug(f"No </title> in page for {row.url}, not preloading")
            lcp_optimizations_total.labels(outcome="no_title").inc()
            return html

        lcp = row.lcp_descriptor()
        if lcp is None:
            lcp_optimizations_total.labels(outcome="no_lcp").inc()
            return html

        preload = build_preload_tags(lcp)

        end = match.end()
        replaced = html[:end] + preload.tags + html[end:]
        replaced = set_fetchpriority(lcp, replaced)

        logger.info(f"Preloaded {len(preload.sources)} LCP source(s) for {row.url}")
        lcp_optimizations_total.labels(outcome="preloaded").inc()
        return replaced

    def add_exclusions(self, exclusions: list[str], request: PageRequest) -> list[str]:
        """Add above-the-fold resources to the lazy-load exclusion patterns."""
        if not self.context.is_allowed(request):
            lcp_exclusions_total.labels(outcome="not_allowed").inc()
            return exclusions

        row = self.store.get_row(self.page_url(request), self.is_mobile(request))
        if row is None:
            lcp_exclusions_total.labels(outcome="no_row").inc()
            return exclusions

        lcp: list[str] = []
        atf: list[str] = []

        if row.has_lcp():
            lcp = get_path_for_exclusion(build_preload_tags(row.lcp_descriptor()).sources)

        if row.has_viewport():
            atf = get_path_for_exclusion(get_atf_sources(row.viewport_descriptors()))

        lcp_exclusions_total.labels(outcome="excluded").inc()
        return merge_exclusions(exclusions, lcp, atf)
