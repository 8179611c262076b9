"""Inject the LCP measurement beacon into pages that have no metadata yet."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Protocol

from atf_optimizer.services.filters import FilterRegistry, absint, string_list

logger = logging.getLogger(__name__)

BEACON_SCRIPT = "lcp-beacon"
NONCE_ACTION = "rocket_lcp"

DEFAULT_ELEMENTS = ["img", "video", "picture", "p", "main", "div", "li", "svg"]

MOBILE_WIDTH_THRESHOLD = 393
MOBILE_HEIGHT_THRESHOLD = 830
DESKTOP_WIDTH_THRESHOLD = 1920
DESKTOP_HEIGHT_THRESHOLD = 1080


class FileExistenceProbe(Protocol):
    def exists(self, path: str) -> bool: ...


class LocalFilesystem:
    def exists(self, path: str) -> bool:
        return Path(path).is_file()


class BeaconInjector:
    """Appends the beacon config and script before the closing body tag."""

    def __init__(
        self,
        filesystem: FileExistenceProbe,
        filters: FilterRegistry,
        nonce_factory: Callable[[str], str],
        ajax_url: str,
        assets_path: str,
        assets_url: str,
        script_debug: bool = False,
    ):
        self.filesystem = filesystem
        self.filters = filters
        self.nonce_factory = nonce_factory
        self.ajax_url = ajax_url
        self.assets_path = assets_path
        self.assets_url = assets_url
        self.script_debug = script_debug

    @property
    def script_name(self) -> str:
        suffix = "" if self.script_debug else ".min"
        return f"{BEACON_SCRIPT}{suffix}.js"

    def width_threshold(self, is_mobile: bool, url: str) -> int:
        default = MOBILE_WIDTH_THRESHOLD if is_mobile else DESKTOP_WIDTH_THRESHOLD
        return self.filters.apply_typed("lcp_width_threshold", default, absint, is_mobile, url)

    def height_threshold(self, is_mobile: bool, url: str) -> int:
        default = MOBILE_HEIGHT_THRESHOLD if is_mobile else DESKTOP_HEIGHT_THRESHOLD
        return self.filters.apply_typed("lcp_height_threshold", default, absint, is_mobile, url)

    def lcp_atf_elements(self) -> str:
        """CSS selectors the beacon considers as LCP/ATF candidates."""
        elements = self.filters.apply_typed(
            "above_the_fold_elements", list(DEFAULT_ELEMENTS), string_list
        )
        return ", ".join(elements)

    def build_config(self, url: str, is_mobile: bool) -> dict:
        return {
            "ajax_url": self.ajax_url,
            "nonce": self.nonce_factory(NONCE_ACTION),
            "url": url,
            "is_mobile": is_mobile,
            "elements": self.lcp_atf_elements(),
            "width_threshold": self.width_threshold(is_mobile, url),
            "height_threshold": self.height_threshold(is_mobile, url),
        }

    def inject(self, html: str, url: str, is_mobile: bool) -> str:
        """Insert the beacon before the first </body>; no-op if either is missing."""
        script_path = str(Path(self.assets_path) / self.script_name)
        if not self.filesystem.exists(script_path):
            logger.debug(f"Beacon asset {script_path} missing, skipping injection")
            return html

        if "</body>" not in html:
            return html

        # "</" inside a JSON string would close the inline script element
        payload = json.dumps(self.build_config(url, is_mobile)).replace("</", "<\\/")
        inline_script = f"<script>var rocket_lcp_data = {payload}</script>"
        script_tag = f"<script src='{self.assets_url}{self.script_name}' async></script>"

        logger.info(f"Injecting LCP beacon for {url} (mobile={is_mobile})")
        return html.replace("</body>", inline_script + script_tag + "</body>", 1)
