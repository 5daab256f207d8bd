"""Property plumbing shared by the adapters.

Setters across the adapters store values through ``set_property`` so
dict-valued properties (footers per side) and plain ones go through the
same path.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional


class PropertyMixin:
    """Named get/set access to an object's configuration attributes."""

    def has_property(self, name: str) -> bool:
        if name.startswith("_") or not hasattr(self, name):
            return False
        return not callable(getattr(self, name))

    def set_property(self, name: str, value: Any, key: Optional[Hashable] = None):
        """Assign *value* to *name*, or to ``name[key]`` when *key* is given.

        Returns ``self`` so it can sit at the end of fluent setters.
        """
        if not self.has_property(name):
            raise AttributeError(f"Unknown property: {name}")

        if key is None:
            setattr(self, name, value)
            return self

        current = getattr(self, name)
        if not isinstance(current, dict):
            current = {}
            setattr(self, name, current)
        current[key] = value
        return self

    def get_property(self, name: str, key: Optional[Hashable] = None) -> Any:
        """Return the value of *name*, or ``name[key]`` (None when absent)."""
        if not self.has_property(name):
            raise AttributeError(f"Unknown property: {name}")

        value = getattr(self, name)
        if key is None:
            return value
        if isinstance(value, dict):
            return value.get(key)
        return None
