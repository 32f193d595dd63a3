"""Text scanner: unescaped characters and entity reference syntax."""

from __future__ import annotations

import re

from htmllint.models.errors import Finding
from htmllint.rules.entities import entity_for_char

# ``&`` that cannot start a reference
_BARE_AMPERSAND_RE = re.compile(r"&(?![#0-9a-z])", re.IGNORECASE)
# Anything outside printable ASCII, tab, LF and CR
_SPECIAL_CHAR_RE = re.compile(r"[^\x09\x0A\x0D\x20-\x7E]")
# A terminated reference; the body may not contain whitespace or another ``&``
_ENTITY_REF_RE = re.compile(r"&([^;&\s]+);")
_DECIMAL_REF_RE = re.compile(r"#([0-9]+)")
_HEX_REF_RE = re.compile(r"#x([0-9a-f]+)", re.IGNORECASE)

_MAX_DECIMAL_CODEPOINT = 65536
_MAX_HEX_DIGITS = 4


class TextScanner:
    """Runs the character and entity passes over one text run at a time.

    Holds no per-run state. The unclosed-entity pattern is built from the
    entity set on first use and rebuilt only when that set changes.
    """

    def __init__(self, entities: frozenset[str]) -> None:
        self._entities = entities
        self._unclosed_re: re.Pattern[str] | None = None
        self._unclosed_source: frozenset[str] | None = None

    @property
    def entities(self) -> frozenset[str]:
        return self._entities

    @entities.setter
    def entities(self, entities: frozenset[str]) -> None:
        self._entities = entities

    def scan(self, text: str) -> list[Finding]:
        findings: list[Finding] = []
        findings.extend(self._check_bare_ampersands(text))
        findings.extend(self._check_special_chars(text))
        findings.extend(self._check_unclosed_entities(text))
        findings.extend(self._check_entity_refs(text))
        return findings

    # -- characters that should have been escaped ----------------------------

    def _check_bare_ampersands(self, text: str) -> list[Finding]:
        return [
            Finding("text-use-entity", {"char": "&", "entity": "&amp;"})
            for _ in _BARE_AMPERSAND_RE.finditer(text)
        ]

    def _check_special_chars(self, text: str) -> list[Finding]:
        findings: list[Finding] = []
        for match in _SPECIAL_CHAR_RE.finditer(text):
            char = match.group()
            findings.append(
                Finding(
                    "text-use-entity",
                    {"char": f"\\x{ord(char):02X}", "entity": entity_for_char(char)},
                )
            )
        return findings

    # -- attempted but malformed references ----------------------------------

    def _unclosed_pattern(self) -> re.Pattern[str] | None:
        if not self._entities:
            return None
        if self._unclosed_re is None or self._unclosed_source != self._entities:
            # Reverse order puts every name ahead of its own prefixes
            # (``notin`` before ``not``). The atomic group keeps a name that is
            # followed by ``;`` from being retried as one of its prefixes.
            names = "|".join(re.escape(name) for name in sorted(self._entities, reverse=True))
            self._unclosed_re = re.compile(rf"&((?>{names}))(?!;)")
            self._unclosed_source = self._entities
        return self._unclosed_re

    def _check_unclosed_entities(self, text: str) -> list[Finding]:
        pattern = self._unclosed_pattern()
        if pattern is None:
            return []
        return [
            Finding("text-unclosed-entity", {"entity": f"&{match.group(1)};"})
            for match in pattern.finditer(text)
        ]

    def _check_entity_refs(self, text: str) -> list[Finding]:
        findings: list[Finding] = []
        for match in _ENTITY_REF_RE.finditer(text):
            body = match.group(1)
            entity = f"&{body};"

            decimal = _DECIMAL_REF_RE.fullmatch(body)
            if decimal:
                if int(decimal.group(1)) > _MAX_DECIMAL_CODEPOINT:
                    findings.append(Finding("text-invalid-entity", {"entity": entity}))
                continue

            hexadecimal = _HEX_REF_RE.fullmatch(body)
            if hexadecimal:
                if len(hexadecimal.group(1)) > _MAX_HEX_DIGITS:
                    findings.append(Finding("text-invalid-entity", {"entity": entity}))
                continue

            if body not in self._entities:
                findings.append(Finding("text-unknown-entity", {"entity": entity}))
        return findings
