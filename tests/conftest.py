"""Shared test fixtures for htmllint."""

from __future__ import annotations

import pytest

from htmllint.models.errors import ErrorRecord
from htmllint.parser.consumer import ValidatingConsumer
from htmllint.rules.loader import RuleLoader, default_rules
from htmllint.rules.tables import RuleTables
from htmllint.service.linter import Linter
from htmllint.settings import Settings


@pytest.fixture
def rules() -> RuleTables:
    return default_rules()


@pytest.fixture
def rule_loader() -> RuleLoader:
    return RuleLoader()


@pytest.fixture
def reported() -> list[ErrorRecord]:
    """Records handed to the consumer's reporter, in order."""
    return []


@pytest.fixture
def consumer(rules: RuleTables, reported: list[ErrorRecord]) -> ValidatingConsumer:
    return ValidatingConsumer(
        rules, reported.append, file="test.html", ignore_elements=["script", "style"]
    )


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, only_types=[], ignore_elements=["script", "style"])


@pytest.fixture
def linter(settings: Settings) -> Linter:
    return Linter(settings=settings)


def codes(errors: list[ErrorRecord]) -> list[str]:
    return [error.code for error in errors]


def page(body: str) -> str:
    """A complete document with *body* starting at line 3, column 7."""
    return (
        "<html>\n"
        "<head><title>Test</title></head>\n"
        f"<body>{body}</body>\n"
        "</html>\n"
    )


VALID_DOCUMENT = """\
<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN">
<html>
<head>
<title>Sample</title>
<style type="text/css">p > em { color: red; }</style>
</head>
<body>
<!-- greeting -->
<p>Hello &amp; welcome.
<p>Caf&eacute; &#169; 2024 &#xA9;
<img src="logo.png" alt="Logo" width="10" height="10"><br>
<ul>
  <li>one
  <li>two
</ul>
<script type="text/javascript">if (a && b < c) { go(); }</script>
</body>
</html>
"""

MINIMAL_RULES_YAML = """\
attribute_groups:
  core: [id, class]
elements:
  html: {}
  div:
    groups: [core]
    attributes: [align]
  br:
    groups: [core]
required: [html]
nonrepeatable: [html]
optional_end_tag: []
empty: [br]
"""
