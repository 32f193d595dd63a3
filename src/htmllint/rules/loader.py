"""YAML loader for rule tables, with safety and shape checks."""

from __future__ import annotations

import logging
import re
from functools import cache
from importlib.resources import files
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from htmllint.rules.tables import RuleTables

logger = logging.getLogger("htmllint.rules")

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 1_000_000  # 1M characters

# Anchor definitions (&name) at line start or after whitespace/sequence
# indicators.  Rule tables never need them.
_ANCHOR_RE = re.compile(r"(?:^|[\s\-:\[,])&(\w+)", re.MULTILINE)

_TAG_LIST_KEYS = ("required", "nonrepeatable", "optional_end_tag", "empty")
_TOP_LEVEL_KEYS = frozenset({"attribute_groups", "elements", "entities", *_TAG_LIST_KEYS})

BUNDLED_RULES = "html4.yaml"


class RuleTableError(Exception):
    """Raised when a rule table document is unsafe or malformed."""


class RuleLoader:
    """Builds :class:`RuleTables` from a YAML description.

    Element and attribute names are lower-cased, matching what the
    tokenizer reports.
    """

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe", pure=True)

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def _check_yaml_safety(content: str) -> None:
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise RuleTableError(
                f"Rule table exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )
        if _ANCHOR_RE.search(content):
            raise RuleTableError("YAML anchors/aliases are not supported in rule tables")

    # -- public loading API --------------------------------------------------

    def load(self, path: Path) -> RuleTables:
        """Load rule tables from a YAML file."""
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        return self.load_string(content, filename=str(path))

    def load_string(self, content: str, filename: str = "<string>") -> RuleTables:
        """Load rule tables from YAML text."""
        self._check_yaml_safety(content)
        try:
            data = self._yaml.load(content)
        except YAMLError as exc:
            raise RuleTableError(f"{filename}: invalid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise RuleTableError(f"{filename}: top level must be a mapping")
        tables = self._build(data, filename)
        logger.debug(
            "Loaded rule tables from %s: %d elements, %d entities",
            filename,
            len(tables.known_attributes),
            len(tables.entities),
        )
        return tables

    # -- construction --------------------------------------------------------

    def _build(self, data: dict[str, Any], filename: str) -> RuleTables:
        unknown = sorted(set(map(str, data)) - _TOP_LEVEL_KEYS)
        if unknown:
            raise RuleTableError(f"{filename}: unknown top-level key(s): {', '.join(unknown)}")

        groups: dict[str, frozenset[str]] = {}
        raw_groups = data.get("attribute_groups") or {}
        if not isinstance(raw_groups, dict):
            raise RuleTableError(f"{filename}: 'attribute_groups' must be a mapping")
        for name, attrs in raw_groups.items():
            groups[str(name).lower()] = frozenset(
                self._names(attrs, f"attribute_groups.{name}", filename)
            )

        known_attributes: dict[str, frozenset[str]] = {}
        raw_elements = data.get("elements") or {}
        if not isinstance(raw_elements, dict):
            raise RuleTableError(f"{filename}: 'elements' must be a mapping")
        for tag, entry in raw_elements.items():
            tag = str(tag).lower()
            entry = entry or {}
            if not isinstance(entry, dict):
                raise RuleTableError(f"{filename}: elements.{tag} must be a mapping")
            attrs: set[str] = set()
            for group in self._names(entry.get("groups"), f"elements.{tag}.groups", filename):
                if group not in groups:
                    raise RuleTableError(
                        f"{filename}: element '{tag}' references unknown "
                        f"attribute group '{group}'"
                    )
                attrs |= groups[group]
            attrs.update(
                self._names(entry.get("attributes"), f"elements.{tag}.attributes", filename)
            )
            known_attributes[tag] = frozenset(attrs)

        tag_lists = {
            key: frozenset(self._names(data.get(key), key, filename)) for key in _TAG_LIST_KEYS
        }
        for key, tags in tag_lists.items():
            for tag in sorted(tags - known_attributes.keys()):
                logger.debug(
                    "%s: '%s' lists undeclared element '%s'", filename, key, tag
                )

        extra: dict[str, Any] = {}
        if "entities" in data:
            names = self._names(data["entities"], "entities", filename, lower=False)
            extra["entities"] = frozenset(name.rstrip(";") for name in names)

        return RuleTables(known_attributes=known_attributes, **tag_lists, **extra)

    @staticmethod
    def _names(value: Any, path: str, filename: str, lower: bool = True) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise RuleTableError(f"{filename}: '{path}' must be a list")
        return [str(item).lower() if lower else str(item) for item in value]


@cache
def default_rules() -> RuleTables:
    """The bundled HTML 4.01 rule tables, loaded once per process."""
    content = files("htmllint.rules").joinpath(BUNDLED_RULES).read_text(encoding="utf-8")
    return RuleLoader().load_string(content, filename=BUNDLED_RULES)
