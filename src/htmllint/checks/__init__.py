"""Per-element extra checks, applied after the generic open-tag rules."""

# Import checks to trigger registration
import htmllint.checks.img as _img  # noqa: F401
from htmllint.checks.registry import TagCheck, TagCheckRegistry

__all__ = [
    "TagCheck",
    "TagCheckRegistry",
]
