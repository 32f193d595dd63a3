"""Rule tables: known elements and attributes, document rules, entities."""

from htmllint.rules.entities import entity_for_char, entity_names
from htmllint.rules.loader import RuleLoader, RuleTableError, default_rules
from htmllint.rules.tables import RuleTables

__all__ = [
    "RuleLoader",
    "RuleTableError",
    "RuleTables",
    "default_rules",
    "entity_for_char",
    "entity_names",
]
