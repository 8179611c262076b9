"""Read-only access to the optimizer's feature options."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

from atf_optimizer.config import Settings


class OptionsProvider(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


class Options:
    """Immutable option bag with `get(key, default)` lookups."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    @classmethod
    def from_settings(cls, settings: Settings) -> "Options":
        return cls({
            "cache_mobile": settings.CACHE_MOBILE,
            "do_caching_mobile_files": settings.DO_CACHING_MOBILE_FILES,
        })

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self._values
