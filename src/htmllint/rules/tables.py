"""Rule tables consulted by the validating consumer."""

from __future__ import annotations

from pydantic import BaseModel, Field

from htmllint.rules.entities import entity_names


class RuleTables(BaseModel):
    """Read-only element and entity rules for one markup vocabulary.

    The known-element set is the key set of ``known_attributes``.
    """

    model_config = {"frozen": True}

    known_attributes: dict[str, frozenset[str]]
    required: frozenset[str] = frozenset()
    nonrepeatable: frozenset[str] = frozenset()
    optional_end_tag: frozenset[str] = frozenset()
    empty: frozenset[str] = frozenset()
    entities: frozenset[str] = Field(default_factory=entity_names)

    @property
    def known_elements(self) -> frozenset[str]:
        return frozenset(self.known_attributes)

    def is_known(self, tag: str) -> bool:
        return tag in self.known_attributes

    def attributes_for(self, tag: str) -> frozenset[str] | None:
        """Known attributes of *tag*, or ``None`` if the element is unknown."""
        return self.known_attributes.get(tag)
