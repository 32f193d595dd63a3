"""Pydantic domain models for htmllint."""

from htmllint.models.errors import (
    ERROR_CATALOG,
    Category,
    ErrorRecord,
    Finding,
    UnknownErrorCodeError,
    where,
)

__all__ = [
    "ERROR_CATALOG",
    "Category",
    "ErrorRecord",
    "Finding",
    "UnknownErrorCodeError",
    "where",
]
