"""End-to-end tests: HTML documents through the Linter session."""

from __future__ import annotations

from pathlib import Path

from htmllint.models.errors import Category, ErrorRecord
from htmllint.service.linter import Linter
from htmllint.settings import Settings
from tests.conftest import VALID_DOCUMENT, codes, page


def _lint(linter: Linter, html: str, label: str = "test.html") -> list[ErrorRecord]:
    linter.begin_document(label)
    linter.parse(html)
    linter.end_of_input()
    return linter.errors()


class TestCleanDocuments:
    def test_valid_document(self, linter: Linter) -> None:
        assert _lint(linter, VALID_DOCUMENT) == []

    def test_page_skeleton(self, linter: Linter) -> None:
        assert _lint(linter, page("Hello")) == []


class TestStructure:
    def test_unclosed_span(self, linter: Linter) -> None:
        errors = _lint(linter, page("<div><span></div>"))
        assert codes(errors) == ["elem-unclosed"]
        assert errors[0].context == {"tag": "span", "where": "(3:12)"}
        assert (errors[0].line, errors[0].column) == (3, 18)
        assert errors[0].as_string() == "test.html (3:18) <span> at (3:12) is never closed"

    def test_unopened_close(self, linter: Linter) -> None:
        errors = _lint(linter, page("</span>"))
        assert codes(errors) == ["elem-unopened"]
        assert str(errors[0]) == "test.html (3:7) </span> with no opening <span>"

    def test_implicitly_closed_paragraph(self, linter: Linter) -> None:
        assert _lint(linter, page("<p>one<div>two</div>")) == []

    def test_repeated_attribute(self, linter: Linter) -> None:
        errors = _lint(linter, page('<div id="1" id="2"></div>'))
        assert codes(errors) == ["attr-repeated"]

    def test_unknown_element_and_attribute(self, linter: Linter) -> None:
        errors = _lint(linter, page('<blink></blink><table border="1" foo="x"></table>'))
        assert codes(errors) == ["elem-unknown", "attr-unknown"]
        assert errors[1].message == 'Unknown attribute "foo" for tag <table>'

    def test_closing_void_element(self, linter: Linter) -> None:
        errors = _lint(linter, page("line<br></br>"))
        assert codes(errors) == ["elem-empty-but-closed"]

    def test_self_closed_void_element(self, linter: Linter) -> None:
        assert _lint(linter, page("line<br/>next<hr />")) == []

    def test_nonrepeatable_title(self, linter: Linter) -> None:
        html = "<html><head><title>a</title><title>b</title></head><body></body></html>"
        errors = _lint(linter, html)
        assert codes(errors) == ["elem-nonrepeatable"]
        assert errors[0].context == {"tag": "title", "where": "(1:13)"}
        assert errors[0].column == 29

    def test_required_title_missing(self, linter: Linter) -> None:
        linter.begin_document("test.html")
        linter.parse("<html><head></head><body></body></html>")
        assert linter.errors() == []
        linter.end_of_input()
        errors = linter.errors()
        assert codes(errors) == ["doc-tag-required"]
        assert errors[0].message == "<title> tag is required"

    def test_no_input_lacks_all_required(self, linter: Linter) -> None:
        linter.end_of_input()
        assert codes(linter.errors()) == ["doc-tag-required"] * 4


class TestText:
    def test_bare_ampersand(self, linter: Linter) -> None:
        errors = _lint(linter, page("A & B"))
        assert codes(errors) == ["text-use-entity"]
        assert errors[0].context == {"char": "&", "entity": "&amp;"}
        assert errors[0].message == 'Character "&" should be written as &amp;'

    def test_escaped_ampersand(self, linter: Linter) -> None:
        assert _lint(linter, page("A &amp; B")) == []

    def test_entity_defects(self, linter: Linter) -> None:
        errors = _lint(linter, page("&foo; &amp x &#99999; &#x10000;"))
        assert sorted(codes(errors)) == [
            "text-invalid-entity",
            "text-invalid-entity",
            "text-unclosed-entity",
            "text-unknown-entity",
        ]

    def test_unescaped_character(self, linter: Linter) -> None:
        errors = _lint(linter, page("Café"))
        assert codes(errors) == ["text-use-entity"]
        assert errors[0].message == 'Character "\\xE9" should be written as &eacute;'

    def test_script_contents_ignored(self, linter: Linter) -> None:
        assert _lint(linter, page("<script>if (a && b < c) { x = '&bogus;'; }</script>")) == []


class TestHelpers:
    def test_img_helpers(self, linter: Linter) -> None:
        errors = _lint(linter, page('<img src="a.png">'))
        assert codes(errors) == ["elem-img-sizes-missing", "elem-img-alt-missing"]
        assert {error.category for error in errors} == {Category.HELPER}
        assert errors[1].message == '<img src="a.png"> does not have ALT text defined'


class TestFiltering:
    BROKEN = page("<img src='x.png'>Café & <blink></blink>")

    def test_structure_only(self, settings: Settings) -> None:
        linter = Linter(Category.STRUCTURE, settings=settings)
        errors = _lint(linter, self.BROKEN)
        assert codes(errors) == ["elem-unknown"]
        assert all(error.category == Category.STRUCTURE for error in errors)

    def test_all_categories(self, linter: Linter) -> None:
        errors = _lint(linter, self.BROKEN)
        assert {error.category for error in errors} == set(Category)

    def test_filter_change_not_retroactive(self, linter: Linter) -> None:
        _lint(linter, page("A & B"), label="one.html")
        linter.set_type_filter([Category.STRUCTURE])
        _lint(linter, page("C & D <blink></blink>"), label="two.html")
        assert [(e.file, e.code) for e in linter.errors()] == [
            ("one.html", "text-use-entity"),
            ("two.html", "elem-unknown"),
        ]

    def test_empty_filter_restores_all(self, linter: Linter) -> None:
        linter.set_type_filter(Category.HELPER)
        linter.set_type_filter([])
        assert codes(_lint(linter, page("A & B"))) == ["text-use-entity"]


class TestSession:
    def test_clear_errors_keeps_document_state(self, linter: Linter) -> None:
        linter.begin_document("test.html")
        linter.parse("<html><head><title>x & y</title></head>")
        assert linter.error_count == 1
        linter.clear_errors()
        assert linter.errors() == []
        linter.parse("<body></body></html>")
        linter.end_of_input()
        assert linter.errors() == []

    def test_errors_accumulate_across_documents(self, linter: Linter) -> None:
        _lint(linter, page("</b>"), label="one.html")
        _lint(linter, page("</i>"), label="two.html")
        assert [(e.file, e.context["tag"]) for e in linter.errors()] == [
            ("one.html", "b"),
            ("two.html", "i"),
        ]

    def test_new_document_resets_first_seen(self, linter: Linter) -> None:
        _lint(linter, page("x"), label="one.html")
        assert _lint(linter, page("y"), label="two.html") == []

    def test_begin_document_discards_partial_state(self, linter: Linter) -> None:
        linter.begin_document("partial.html")
        linter.parse("<html><div>")
        linter.begin_document("full.html")
        linter.parse(page("ok"))
        linter.end_of_input()
        assert linter.errors() == []
        assert linter.file == "full.html"

    def test_rerun_is_identical(self, linter: Linter) -> None:
        html = page("<div><span>Café & &foo;</div><img src=x.png></br>")
        first = _lint(linter, html)
        linter.clear_errors()
        second = _lint(linter, html)
        assert first == second
        assert [e.as_string() for e in first] == [e.as_string() for e in second]

    def test_chunked_input_matches_whole(self, settings: Settings) -> None:
        html = page("<div><span>A &am" + "p; B & C</div>")
        whole = _lint(Linter(settings=settings), html)
        chunked = Linter(settings=settings)
        chunked.begin_document("test.html")
        for start in range(0, len(html), 7):
            chunked.parse(html[start : start + 7])
        chunked.end_of_input()
        assert chunked.errors() == whole

    def test_parse_file(self, linter: Linter, tmp_path: Path) -> None:
        path = tmp_path / "doc.html"
        path.write_text(page("</span>"), encoding="utf-8")
        linter.begin_document(str(path))
        linter.parse_file(path)
        linter.end_of_input()
        errors = linter.errors()
        assert codes(errors) == ["elem-unopened"]
        assert errors[0].file == str(path)

    def test_end_of_input_returns_tokenizer_result(self, linter: Linter) -> None:
        linter.begin_document("test.html")
        linter.parse(VALID_DOCUMENT)
        assert linter.end_of_input() is None
        assert linter.errors() == []
