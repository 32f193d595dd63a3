"""Adapter from the standard library HTML tokenizer to consumer callbacks."""

from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import Any

from htmllint.parser.consumer import ValidatingConsumer

_NEWLINE_RE = re.compile("\n")


class HTMLTokenizer(HTMLParser):
    """Drives a :class:`ValidatingConsumer` from ``html.parser`` events.

    Character references are not converted: the tokenizer reports them
    through separate callbacks, so each text run is cut from the source
    between two markup tokens and handed to the consumer exactly as
    written. Columns passed on are 1-based.
    """

    def __init__(self, consumer: ValidatingConsumer) -> None:
        super().__init__(convert_charrefs=False)
        self._consumer = consumer
        self._source = ""
        self._line_starts = [0]
        self._text_start: tuple[int, int, int] | None = None
        self._started = False

    @property
    def consumer(self) -> ValidatingConsumer:
        return self._consumer

    # -- input ---------------------------------------------------------------

    def feed(self, data: str) -> None:
        self._start_document()
        base = len(self._source)
        self._line_starts.extend(base + match.end() for match in _NEWLINE_RE.finditer(data))
        self._source += data
        super().feed(data)

    def close(self) -> Any:
        self._start_document()
        result = super().close()
        self._flush_text(len(self._source))
        _, line, column = self._here()
        self._consumer.on_document_end(line, column)
        return result

    def _start_document(self) -> None:
        if not self._started:
            self._started = True
            self._consumer.on_document_start()

    # -- positions -----------------------------------------------------------

    def _here(self) -> tuple[int, int, int]:
        """Source index, line and 1-based column of the token being handled."""
        line, offset = self.getpos()
        return self._line_starts[line - 1] + offset, line, offset + 1

    def _mark_text(self) -> None:
        if self._text_start is None:
            self._text_start = self._here()

    def _flush_text(self, end: int | None = None) -> None:
        if self._text_start is None:
            return
        start, line, column = self._text_start
        self._text_start = None
        if end is None:
            end = self._here()[0]
        text = self._source[start:end]
        if text:
            self._consumer.on_text(text, line, column)

    # -- markup --------------------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._flush_text()
        _, line, column = self._here()
        self._consumer.on_tag_open(tag, attrs, line, column)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._flush_text()
        _, line, column = self._here()
        self._consumer.on_tag_open(tag, attrs, line, column)
        self._consumer.on_tag_close(tag, False, line, column)

    def handle_endtag(self, tag: str) -> None:
        self._flush_text()
        _, line, column = self._here()
        self._consumer.on_tag_close(tag, True, line, column)

    def handle_comment(self, data: str) -> None:
        self._flush_text()

    def handle_decl(self, decl: str) -> None:
        self._flush_text()

    def handle_pi(self, data: str) -> None:
        self._flush_text()

    def unknown_decl(self, data: str) -> None:
        self._flush_text()

    # -- text ----------------------------------------------------------------

    def handle_data(self, data: str) -> None:
        self._mark_text()

    def handle_entityref(self, name: str) -> None:
        self._mark_text()

    def handle_charref(self, name: str) -> None:
        self._mark_text()
