"""Lint session, the public entry point for checking HTML documents."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from htmllint.models.errors import Category, ErrorRecord
from htmllint.parser.consumer import ValidatingConsumer
from htmllint.parser.tokenizer import HTMLTokenizer
from htmllint.rules.loader import RuleLoader, default_rules
from htmllint.rules.tables import RuleTables
from htmllint.service.sink import ErrorSink
from htmllint.settings import Settings

logger = logging.getLogger("htmllint.linter")


class Linter:
    """Checks one document at a time and collects defects across a batch.

    Typical use::

        linter = Linter(only_types=Category.STRUCTURE)
        linter.begin_document("index.html")
        linter.parse(html)
        linter.end_of_input()
        for error in linter.errors():
            print(error)

    ``end_of_input()`` must be called after the last chunk of a document;
    the required-element sweep only runs then. Errors are kept across
    documents until :meth:`clear_errors` is called.
    """

    def __init__(
        self,
        only_types: Category | Iterable[Category] | None = None,
        *,
        rules: RuleTables | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings()
        if rules is None:
            if self._settings.rules_path is not None:
                rules = RuleLoader().load(self._settings.rules_path)
            else:
                rules = default_rules()
        self._rules = rules
        self._sink = ErrorSink(_as_types(only_types, self._settings.only_types))
        self._file: str | None = None
        self._tokenizer: HTMLTokenizer | None = None

    # -- configuration -------------------------------------------------------

    @property
    def rules(self) -> RuleTables:
        return self._rules

    @property
    def file(self) -> str | None:
        return self._file

    @property
    def type_filter(self) -> frozenset[Category]:
        return self._sink.types

    def set_type_filter(self, categories: Category | Iterable[Category]) -> None:
        """Keep only future errors in *categories*; an empty filter keeps all."""
        self._sink.set_types(_as_types(categories, []))

    # -- document lifecycle --------------------------------------------------

    @property
    def tokenizer(self) -> HTMLTokenizer:
        """The tokenizer for the current document, created on first use."""
        if self._tokenizer is None:
            consumer = ValidatingConsumer(
                self._rules,
                self._sink.add,
                file=self._file,
                ignore_elements=self._settings.ignore_elements,
            )
            self._tokenizer = HTMLTokenizer(consumer)
        return self._tokenizer

    def begin_document(self, label: str | None) -> str | None:
        """Start a new document named *label*. Stored errors are kept."""
        self._tokenizer = None
        self._file = label
        logger.debug("Begin document %s", label)
        return label

    def parse(self, text: str) -> None:
        """Feed a chunk of HTML. May be called repeatedly for one document."""
        self.tokenizer.feed(text)

    def parse_file(self, path: str | Path) -> None:
        """Feed the whole contents of an HTML file."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        self.tokenizer.feed(content)

    def end_of_input(self) -> Any:
        """Finish the current document and run the end-of-document checks."""
        result = self.tokenizer.close()
        self._tokenizer = None
        logger.debug("End of document %s: %d error(s) stored", self._file, len(self._sink))
        return result

    # -- results -------------------------------------------------------------

    def errors(self) -> list[ErrorRecord]:
        """All stored errors in the order they were found."""
        return self._sink.records()

    @property
    def error_count(self) -> int:
        return len(self._sink)

    def clear_errors(self) -> None:
        """Drop stored errors without touching the document in progress."""
        self._sink.clear()


def _as_types(
    types: Category | Iterable[Category] | None, default: Iterable[Category]
) -> list[Category]:
    if types is None:
        return list(default)
    if isinstance(types, Category):
        return [types]
    return [Category(t) for t in types]
