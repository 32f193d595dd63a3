"""htmllint: HTML well-formedness and style linter."""

from htmllint.models.errors import Category, ErrorRecord, UnknownErrorCodeError
from htmllint.rules import RuleLoader, RuleTableError, RuleTables, default_rules
from htmllint.service.linter import Linter
from htmllint.settings import Settings

__all__ = [
    "Category",
    "ErrorRecord",
    "Linter",
    "RuleLoader",
    "RuleTableError",
    "RuleTables",
    "Settings",
    "UnknownErrorCodeError",
    "default_rules",
]

__version__ = "0.1.0"
