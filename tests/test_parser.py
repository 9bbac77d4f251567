"""Unit tests for the infobook XML parser.

These tests cover how ``XmlInfoBookParser`` turns section documents into
``Section`` trees: paragraph keys, nested sections, tags, the flat section
index, and how appendix elements are dispatched to registered handlers.

Usage
-----
Run ``pytest tests/test_parser.py -v``. The tests only need pytest's built-in
``tmp_path`` and ``caplog`` fixtures.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest
from lxml import etree

from infobook_html.appendix.base import AppendixHandler, InfoAppendix
from infobook_html.errors import AppendixRegistrationError, ParseError
from infobook_html.parser import XmlInfoBookParser

if typ.TYPE_CHECKING:
    from pathlib import Path

    from infobook_html.infobook.models import Section


class _StubAppendix(InfoAppendix):
    def __init__(self, text: str) -> None:
        self.text = text

    def to_html(self, context: typ.Any, file_writer: typ.Any, serializer: typ.Any) -> str:
        return self.text


class _StubHandler(AppendixHandler):
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:
        self.calls.append(((element.text or "").strip(), mod_id))
        return _StubAppendix((element.text or "").strip())


def _section(xml: str, parser: XmlInfoBookParser | None = None) -> tuple[Section, dict[str, Section]]:
    sections: dict[str, Section] = {}
    section = (parser or XmlInfoBookParser()).element_to_section(
        etree.fromstring(xml), "mymod", sections
    )
    return section, sections


def test_paragraphs_are_collected_in_order() -> None:
    """Paragraph texts become translation keys in document order."""
    section, sections = _section(
        '<section name="abc"><paragraph>p1</paragraph><paragraph> p2 </paragraph></section>'
    )
    assert section.paragraph_translation_keys == ["p1", "p2"], (
        "Expected stripped paragraph keys in order"
    )
    assert section.is_leaf, "A section without children should be a leaf"
    assert sections == {"abc": section}, "Expected the section in the flat index"


def test_nested_sections_are_indexed() -> None:
    """Every nested section is reachable from the flat index by its name."""
    root, sections = _section(
        '<section name="root">'
        '<section name="root.a"><paragraph>a</paragraph></section>'
        '<section name="root.b"><section name="root.b.c"/></section>'
        "</section>"
    )
    assert [child.name for child in root.sub_sections] == ["root.a", "root.b"]
    assert sorted(sections) == ["root", "root.a", "root.b", "root.b.c"], (
        f"Expected all four sections to be indexed, got {sorted(sections)}"
    )
    assert sections["root.b.c"].mod_id == "mymod", "Sections should carry the mod id"
    assert not root.is_leaf, "A section with children is not a leaf"


def test_tags_from_attribute_and_child_elements() -> None:
    """Tags are split on commas and whitespace and merged with <tag> children."""
    section, _ = _section(
        '<section name="abc" tag="mymod:a, mymod:b">'
        "<tag>mymod:c mymod:d</tag></section>"
    )
    assert section.tags == ["mymod:a", "mymod:b", "mymod:c", "mymod:d"]


def test_section_without_name_fails() -> None:
    with pytest.raises(ParseError, match="without a name"):
        _section("<section><paragraph>p1</paragraph></section>")


def test_appendix_dispatches_to_registered_handler() -> None:
    """Appendix elements are created by the handler registered for their type."""
    parser = XmlInfoBookParser()
    handler = _StubHandler()
    parser.register_appendix_handler("stub", handler)
    section, _ = _section(
        '<section name="abc">'
        '<appendix type="stub">first</appendix>'
        '<appendix_list><appendix factory="stub">second</appendix>'
        '<appendix type="stub">third</appendix></appendix_list>'
        "</section>",
        parser,
    )
    assert handler.calls == [("first", "mymod"), ("second", "mymod"), ("third", "mymod")]
    assert [typ.cast("_StubAppendix", a).text for a in section.appendix] == [
        "first",
        "second",
        "third",
    ]


def test_unknown_appendix_type_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    """Unknown appendix types log a warning and leave a None placeholder."""
    parser = XmlInfoBookParser()
    parser.register_appendix_handler("stub", _StubHandler())
    with caplog.at_level(logging.WARNING, logger="infobook_html.parser"):
        section, _ = _section(
            '<section name="abc">'
            '<appendix type="stub">before</appendix>'
            '<appendix type="mystery">x</appendix>'
            '<appendix type="stub">after</appendix>'
            "</section>",
            parser,
        )
    first, unknown, last = section.appendix
    assert unknown is None, "Expected a None placeholder for the unknown type"
    assert typ.cast("_StubAppendix", first).text == "before"
    assert typ.cast("_StubAppendix", last).text == "after"
    assert "mystery" in caplog.text, "Expected the unknown type to be logged"


def test_appendix_without_type_fails() -> None:
    with pytest.raises(
        ParseError, match="No type or factory was found for the appendix"
    ) as excinfo:
        _section('<section name="abc"><appendix>x</appendix></section>')
    assert "<appendix>x</appendix>" in str(excinfo.value)


def test_duplicate_handler_registration_fails() -> None:
    parser = XmlInfoBookParser()
    parser.register_appendix_handler("stub", _StubHandler())
    with pytest.raises(AppendixRegistrationError, match="stub"):
        parser.register_appendix_handler("stub", _StubHandler())
    assert parser.appendix_types == ["stub"]


def test_parse_reads_document(tmp_path: Path) -> None:
    """``parse`` reads a file, ignores comments and returns the book."""
    path = tmp_path / "book.xml"
    path.write_text(
        '<?xml version="1.0"?>\n<section name="root"><!-- note -->'
        '<section name="root.a"><paragraph>a</paragraph></section></section>',
        encoding="utf-8",
    )
    book = XmlInfoBookParser().parse(path, "mymod")
    assert book.root_section.name == "root"
    assert set(book.sections) == {"root", "root.a"}


def test_parse_rejects_non_section_root(tmp_path: Path) -> None:
    path = tmp_path / "book.xml"
    path.write_text("<book><section name='a'/></book>", encoding="utf-8")
    with pytest.raises(ParseError, match="No valid root section was found."):
        XmlInfoBookParser().parse(path, "mymod")


def test_parse_rejects_malformed_xml(tmp_path: Path) -> None:
    path = tmp_path / "book.xml"
    path.write_text("<section name='a'>", encoding="utf-8")
    with pytest.raises(ParseError, match="Could not parse"):
        XmlInfoBookParser().parse(path, "mymod")


def test_parse_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        XmlInfoBookParser().parse(tmp_path / "missing.xml", "mymod")


def test_parse_fills_supplied_index(tmp_path: Path) -> None:
    """A caller-supplied index is filled in place and returned on the book."""
    path = tmp_path / "book.xml"
    path.write_text('<section name="root"/>', encoding="utf-8")
    sections: dict[str, Section] = {}
    book = XmlInfoBookParser().parse(path, "mymod", sections)
    assert book.sections is sections
    assert "root" in sections


def test_parsing_twice_yields_equal_books(tmp_path: Path) -> None:
    """Parsing the same document twice gives equal trees and index keys."""
    path = tmp_path / "book.xml"
    path.write_text(
        '<section name="root">'
        '<section name="root.a" tag="mymod:widget"><paragraph>a</paragraph></section>'
        '<section name="root.b"><section name="root.b.c"><paragraph>c</paragraph>'
        '<tag>mymod:gadget</tag></section></section>'
        "</section>",
        encoding="utf-8",
    )
    parser = XmlInfoBookParser()
    first = parser.parse(path, "mymod")
    second = parser.parse(path, "mymod")
    assert first.root_section == second.root_section
    assert list(first.sections) == list(second.sections)
    assert first.sections == second.sections
