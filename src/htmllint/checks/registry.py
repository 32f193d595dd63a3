"""Tag check registry: element name -> extra validation function."""

from __future__ import annotations

import logging
from collections.abc import Callable

from htmllint.models.errors import Finding

logger = logging.getLogger("htmllint.checks")

TagCheck = Callable[[str, dict[str, str | None]], list[Finding]]


class TagCheckRegistry:
    """Registry of per-element checks. Unregistered elements get none."""

    _checks: dict[str, TagCheck] = {}

    @classmethod
    def register(cls, tag: str) -> Callable[[TagCheck], TagCheck]:
        """Register a check for *tag*. Used as a decorator."""

        def decorator(check: TagCheck) -> TagCheck:
            cls._checks[tag.lower()] = check
            logger.debug("Registered check %s for <%s>", check.__name__, tag)
            return check

        return decorator

    @classmethod
    def get(cls, tag: str) -> TagCheck | None:
        return cls._checks.get(tag.lower())

    @classmethod
    def available(cls) -> list[str]:
        """List element names with a registered check."""
        return sorted(cls._checks.keys())

    @classmethod
    def unregister(cls, tag: str) -> None:
        cls._checks.pop(tag.lower(), None)
