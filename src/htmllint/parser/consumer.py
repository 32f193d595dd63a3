"""Validating consumer: applies the lint rules to tokenizer events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from htmllint.checks import TagCheckRegistry
from htmllint.models.errors import ErrorRecord, Finding, where
from htmllint.parser.scanner import TextScanner
from htmllint.parser.stack import ElementStack
from htmllint.rules.tables import RuleTables

logger = logging.getLogger("htmllint.parser")

Reporter = Callable[[ErrorRecord], Any]


class ValidatingConsumer:
    """Event consumer for a single document.

    Events arrive in document order, each carrying the 1-based position of
    the token that produced it. Every defect becomes an :class:`ErrorRecord`
    stamped with that position and handed to *report*; nothing here ever
    stops processing.
    """

    def __init__(
        self,
        rules: RuleTables,
        report: Reporter,
        file: str | None = None,
        ignore_elements: Iterable[str] = (),
    ) -> None:
        self._rules = rules
        self._report = report
        self._file = file
        self._ignore = frozenset(tag.lower() for tag in ignore_elements)
        self._stack = ElementStack()
        self._first_seen: dict[str, tuple[int, int]] = {}
        self._scanner = TextScanner(rules.entities)
        self._ignoring: str | None = None
        self._line = 0
        self._column = 0

    # -- state ---------------------------------------------------------------

    @property
    def file(self) -> str | None:
        return self._file

    @property
    def position(self) -> tuple[int, int]:
        return self._line, self._column

    @property
    def stack(self) -> ElementStack:
        return self._stack

    @property
    def first_seen(self) -> dict[str, tuple[int, int]]:
        return dict(self._first_seen)

    def gripe(self, code: str, **context: Any) -> None:
        """Report a defect at the current position."""
        self._report(
            ErrorRecord.create(
                code, file=self._file, line=self._line, column=self._column, **context
            )
        )

    def _gripe_findings(self, findings: Iterable[Finding]) -> None:
        for finding in findings:
            self.gripe(finding.code, **finding.context)

    def _move(self, line: int, column: int) -> None:
        self._line = line
        self._column = column

    # -- tokenizer callbacks -------------------------------------------------

    def on_document_start(self) -> None:
        logger.debug("Document start: %s", self._file or "<unnamed>")

    def on_tag_open(
        self, tag: str, attrs: list[tuple[str, str | None]], line: int, column: int
    ) -> None:
        if self._ignoring is not None:
            return
        if tag in self._ignore:
            self._ignoring = tag
            return
        self._move(line, column)

        known = self._rules.attributes_for(tag)
        if known is None:
            self.gripe("elem-unknown", tag=tag)
        else:
            seen: set[str] = set()
            for attr, _value in attrs:
                if attr in seen:
                    self.gripe("attr-repeated", tag=tag, attr=attr)
                seen.add(attr)
                if attr not in known:
                    self.gripe("attr-unknown", tag=tag, attr=attr)

        if tag not in self._rules.empty:
            self._stack.push(tag, line, column)

        first = self._first_seen.get(tag)
        if first is None:
            self._first_seen[tag] = (line, column)
        elif tag in self._rules.nonrepeatable:
            self.gripe("elem-nonrepeatable", tag=tag, where=where(*first))

        check = TagCheckRegistry.get(tag)
        if check is not None:
            self._gripe_findings(check(tag, dict(attrs)))

    def on_tag_close(self, tag: str, has_token_position: bool, line: int, column: int) -> None:
        if self._ignoring is not None:
            if tag == self._ignoring:
                self._ignoring = None
            return
        self._move(line, column)

        if not has_token_position:
            # Synthesized close of a self-closed tag such as <br/>
            return
        if tag in self._rules.empty:
            self.gripe("elem-empty-but-closed", tag=tag)
            return

        leftovers = self._stack.pop_back_to(tag)
        if leftovers is None:
            self.gripe("elem-unopened", tag=tag)
            return
        for entry in leftovers:
            if entry.tag not in self._rules.optional_end_tag:
                self.gripe("elem-unclosed", tag=entry.tag, where=where(entry.line, entry.column))

    def on_text(self, text: str, line: int, column: int) -> None:
        if self._ignoring is not None:
            return
        self._move(line, column)
        self._gripe_findings(self._scanner.scan(text))

    def on_document_end(self, line: int, column: int) -> None:
        self._move(line, column)
        for tag in sorted(self._rules.required):
            if tag not in self._first_seen:
                self.gripe("doc-tag-required", tag=tag)
        logger.debug(
            "Document end: %s, %d element(s) left open", self._file or "<unnamed>", len(self._stack)
        )
