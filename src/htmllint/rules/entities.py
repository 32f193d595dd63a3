"""Canonical named character references: the HTML 4 set shipped with Python, plus ``apos``."""

from __future__ import annotations

from functools import cache
from html.entities import codepoint2name, name2codepoint


@cache
def entity_names() -> frozenset[str]:
    """Names of all canonical entities, without ``&`` or ``;``."""
    return frozenset(name2codepoint) | {"apos"}


def entity_for_char(char: str) -> str | None:
    """Return the named reference for *char* (e.g. ``&eacute;``), if one exists."""
    name = codepoint2name.get(ord(char))
    return f"&{name};" if name is not None else None
