"""Image checks: explicit dimensions and alternative text."""

from __future__ import annotations

from htmllint.checks.registry import TagCheckRegistry
from htmllint.models.errors import Finding


@TagCheckRegistry.register("img")
def check_img(tag: str, attrs: dict[str, str | None]) -> list[Finding]:
    # A valueless attribute (``<img alt>``) still counts as present.
    findings: list[Finding] = []
    src = attrs.get("src")
    if "height" not in attrs or "width" not in attrs:
        findings.append(Finding("elem-img-sizes-missing", {"src": src}))
    if "alt" not in attrs:
        findings.append(Finding("elem-img-alt-missing", {"src": src}))
    return findings
