"""Lint session services: error sink and the top-level linter."""

from htmllint.service.linter import Linter
from htmllint.service.sink import ErrorSink

__all__ = [
    "ErrorSink",
    "Linter",
]
