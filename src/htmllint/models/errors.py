"""Structured lint defects with source position tracking."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, field_validator


class Category(StrEnum):
    """Defect class used for filtering."""

    STRUCTURE = "structure"
    HELPER = "helper"
    FLUFF = "fluff"


class UnknownErrorCodeError(KeyError):
    """Raised when a defect is reported under a code missing from the catalog."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown error code '{code}'")


# code -> (category, message template)
ERROR_CATALOG: dict[str, tuple[Category, str]] = {
    "attr-repeated": (Category.STRUCTURE, "{attr} attribute in <{tag}> is repeated"),
    "attr-unknown": (Category.STRUCTURE, 'Unknown attribute "{attr}" for tag <{tag}>'),
    "doc-tag-required": (Category.STRUCTURE, "<{tag}> tag is required"),
    "elem-empty-but-closed": (
        Category.STRUCTURE,
        "<{tag}> is not a container -- </{tag}> is not allowed",
    ),
    "elem-img-alt-missing": (Category.HELPER, '<img src="{src}"> does not have ALT text defined'),
    "elem-img-sizes-missing": (
        Category.HELPER,
        '<img src="{src}"> tag has no HEIGHT and WIDTH attributes',
    ),
    "elem-nonrepeatable": (
        Category.STRUCTURE,
        "<{tag}> is not repeatable, but already appeared at {where}",
    ),
    "elem-unclosed": (Category.STRUCTURE, "<{tag}> at {where} is never closed"),
    "elem-unknown": (Category.STRUCTURE, "Unknown element <{tag}>"),
    "elem-unopened": (Category.STRUCTURE, "</{tag}> with no opening <{tag}>"),
    "text-invalid-entity": (Category.FLUFF, "Entity {entity} is invalid"),
    "text-unclosed-entity": (Category.FLUFF, "Entity {entity} is missing its closing semicolon"),
    "text-unknown-entity": (Category.FLUFF, "Entity {entity} is unknown"),
    "text-use-entity": (Category.FLUFF, 'Character "{char}" should be written as {entity}'),
}


def where(line: int, column: int) -> str:
    """Format a source position the way messages quote it."""
    return f"({line}:{column})"


class _BlankMissing(dict[str, Any]):
    def __missing__(self, key: str) -> str:
        return ""


@dataclass(frozen=True)
class Finding:
    """A defect detected by a rule, before a source position is attached."""

    code: str
    context: dict[str, Any] = field(default_factory=dict)


class ErrorRecord(BaseModel):
    """One lint defect: what went wrong, how bad, and where."""

    model_config = {"frozen": True}

    code: str
    category: Category
    line: int
    column: int
    file: str | None = None
    context: Mapping[str, Any] = MappingProxyType({})

    @field_validator("context")
    @classmethod
    def _freeze_context(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @classmethod
    def create(
        cls, code: str, *, file: str | None, line: int, column: int, **context: Any
    ) -> ErrorRecord:
        """Build a record, taking the category from the error catalog."""
        try:
            category, _ = ERROR_CATALOG[code]
        except KeyError:
            raise UnknownErrorCodeError(code) from None
        return cls(
            code=code, category=category, file=file, line=line, column=column, context=context
        )

    @property
    def message(self) -> str:
        _, template = ERROR_CATALOG[self.code]
        values = _BlankMissing(
            {key: "" if value is None else value for key, value in self.context.items()}
        )
        return template.format_map(values)

    def where(self) -> str:
        return where(self.line, self.column)

    def is_type(self, *categories: Category) -> bool:
        return self.category in categories

    def as_string(self) -> str:
        """Human-readable rendering: ``file (line:column) message``."""
        prefix = f"{self.file} " if self.file is not None else ""
        return f"{prefix}{self.where()} {self.message}"

    def __str__(self) -> str:
        return self.as_string()
