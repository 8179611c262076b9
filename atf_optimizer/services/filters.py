"""Filter registry for overriding optimizer defaults.

Filters are plain callables registered under a name. `apply` threads a value
through every callback registered for that name, in registration order; each
callback receives the current value plus the call's context and returns the
new value.

Supported filter names:
- above_the_fold_optimization: (enabled, request) -> bool
- lcp_width_threshold: (width, is_mobile, url) -> int
- lcp_height_threshold: (height, is_mobile, url) -> int
- above_the_fold_elements: (elements) -> list[str]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

FILTER_NAMES = frozenset({
    "above_the_fold_optimization",
    "lcp_width_threshold",
    "lcp_height_threshold",
    "above_the_fold_elements",
})


class FilterRegistry:
    """Manages and applies value filters."""

    def __init__(self):
        self._filters: dict[str, list[Callable[..., Any]]] = {
            name: [] for name in FILTER_NAMES
        }
        self._errors: dict[str, list[str]] = {}

    def register(self, name: str, callback: Callable[..., Any]) -> None:
        """Register a filter callback under `name`."""
        if name not in FILTER_NAMES:
            raise ValueError(
                f"Invalid filter: {name}. "
                f"Valid: {', '.join(sorted(FILTER_NAMES))}"
            )
        if not callable(callback):
            raise TypeError(f"Filter callback must be callable, got {type(callback)}")
        self._filters[name].append(callback)

    def unregister(self, name: str, callback: Callable | None = None) -> None:
        """Remove a filter callback (or all callbacks for a name)."""
        if name not in FILTER_NAMES:
            return
        if callback is None:
            self._filters[name] = []
        else:
            self._filters[name] = [f for f in self._filters[name] if f is not callback]

    def apply(self, name: str, value: T, *context: Any) -> T:
        """Run `value` through the filters registered for `name`.

        A callback that raises is logged and skipped; the value it received
        carries on to the next callback.
        """
        for callback in self._filters.get(name, []):
            try:
                value = callback(value, *context)
            except Exception as e:
                error_msg = f"Filter {getattr(callback, '__name__', callback)!s} failed: {e}"
                logger.warning(error_msg)
                self._errors.setdefault(name, []).append(error_msg)
        return value

    def apply_typed(
        self,
        name: str,
        default: T,
        coerce: Callable[[Any], T],
        *context: Any,
    ) -> T:
        """Apply filters, then coerce; fall back to `default` if coercion fails."""
        value = self.apply(name, default, *context)
        try:
            return coerce(value)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Filter {name} returned {value!r}; using default {default!r}")
            return default

    @property
    def errors(self) -> dict[str, list[str]]:
        return self._errors

    def has_filters(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def clear(self) -> None:
        """Remove all filters and reset errors."""
        for name in FILTER_NAMES:
            self._filters[name] = []
        self._errors = {}


def absint(value: Any) -> int:
    """Non-negative integer of a numeric value; raises for anything else."""
    if isinstance(value, bool):
        raise TypeError("boolean is not a threshold")
    return abs(int(value))


def string_list(value: Any) -> list[str]:
    """Accept a list/tuple of strings; raises for anything else."""
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return [str(item) for item in value]
