r"""Parse infobook XML documents into :class:`~infobook_html.infobook.models.Section` trees.

The parser reads a document whose root is a ``<section name="...">`` element.
Sections nest, carry ``<paragraph>`` translation keys, optional tags and
``<appendix>`` / ``<appendix_list>`` elements. Appendix elements are handed to
the :class:`~infobook_html.appendix.base.AppendixHandler` registered for their
``type`` (or legacy ``factory``) attribute.

Every converted section is recorded in a flat, caller-supplied index keyed by
its name, so independent documents can be parsed into separate indices and
merged explicitly afterwards.

Example
-------
>>> from lxml import etree
>>> parser = XmlInfoBookParser()
>>> root = etree.fromstring('<section name="abc"><paragraph>p1</paragraph></section>')
>>> sections = {}
>>> section = parser.element_to_section(root, "mymod", sections)
>>> section.paragraph_translation_keys, list(sections)
(['p1'], ['abc'])
"""

from __future__ import annotations

import logging
import re
import typing as typ

from lxml import etree

from infobook_html.errors import AppendixRegistrationError, ParseError
from infobook_html.infobook.models import InfoBook, Section

if typ.TYPE_CHECKING:
    from pathlib import Path

    from infobook_html.appendix.base import AppendixHandler, InfoAppendix

logger = logging.getLogger(__name__)

TAG_SPLIT_PATTERN = re.compile(r"[\s,]+")


class XmlInfoBookParser:
    """Convert infobook XML into sections using registered appendix handlers."""

    def __init__(self) -> None:
        self._appendix_handlers: dict[str, AppendixHandler] = {}

    def register_appendix_handler(self, appendix_type: str, handler: AppendixHandler) -> None:
        """Register ``handler`` for appendices of ``appendix_type``.

        Raises
        ------
        AppendixRegistrationError
            If a handler was already registered for the type.
        """
        if appendix_type in self._appendix_handlers:
            msg = f"An infobook appendix handler with id {appendix_type} has already been registered."
            raise AppendixRegistrationError(msg)
        self._appendix_handlers[appendix_type] = handler

    @property
    def appendix_types(self) -> list[str]:
        return sorted(self._appendix_handlers)

    def parse(
        self, path: Path, mod_id: str, sections: dict[str, Section] | None = None
    ) -> InfoBook:
        """Parse the infobook document at ``path``.

        Parameters
        ----------
        path : Path
            XML document to read.
        mod_id : str
            Mod that authored the document; stored on every section.
        sections : dict[str, Section], optional
            Flat index to fill. A fresh dictionary is used when omitted.

        Returns
        -------
        InfoBook
            The root section and the filled flat index.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        ParseError
            If the XML is malformed or its root is not a ``section``.
        """
        contents = path.read_bytes()
        try:
            root = etree.fromstring(contents, etree.XMLParser(remove_comments=True))
        except etree.XMLSyntaxError as exc:
            msg = f"Could not parse infobook XML {path}: {exc}"
            raise ParseError(msg) from exc
        return self.element_to_book(root, mod_id, {} if sections is None else sections)

    def element_to_book(
        self, root: etree._Element, mod_id: str, sections: dict[str, Section]
    ) -> InfoBook:
        """Convert a parsed root element into an :class:`InfoBook`."""
        if root.tag != "section":
            msg = "No valid root section was found."
            raise ParseError(msg)
        root_section = self.element_to_section(root, mod_id, sections)
        return InfoBook(root_section=root_section, sections=sections)

    def element_to_section(
        self, element: etree._Element, mod_id: str, sections: dict[str, Section]
    ) -> Section:
        """Convert a ``<section>`` element and record it in ``sections``."""
        name = element.get("name")
        if not name:
            msg = f"Found a section without a name: {_serialize(element)}"
            raise ParseError(msg)

        section = Section(name=name, mod_id=mod_id, tags=_split_tags(element.get("tag")))
        for child in element:
            match child.tag:
                case "section":
                    section.sub_sections.append(
                        self.element_to_section(child, mod_id, sections)
                    )
                case "paragraph":
                    section.paragraph_translation_keys.append(self.element_to_paragraph(child))
                case "appendix":
                    section.appendix.append(self.element_to_appendix(child, mod_id))
                case "appendix_list":
                    section.appendix.extend(
                        self.element_to_appendix(entry, mod_id)
                        for entry in child
                        if entry.tag == "appendix"
                    )
                case "tag":
                    section.tags.extend(_split_tags(child.text))
                case _:
                    logger.debug("Ignoring <%s> in section %s", child.tag, name)
        sections[name] = section
        return section

    @staticmethod
    def element_to_paragraph(element: etree._Element) -> str:
        return (element.text or "").strip()

    def element_to_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix | None:
        """Create an appendix through the handler registered for its type.

        Unknown types are logged and yield ``None`` so the rest of the book
        still renders.

        Raises
        ------
        ParseError
            If the element carries neither a ``type`` nor a ``factory``.
        """
        appendix_type = element.get("type") or element.get("factory")
        if not appendix_type:
            msg = f"No type or factory was found for the appendix {_serialize(element)}."
            raise ParseError(msg)
        handler = self._appendix_handlers.get(appendix_type)
        if handler is None:
            logger.warning("Skipped unknown appendix type '%s'", appendix_type)
            return None
        return handler.create_appendix(element, mod_id)


def _split_tags(value: str | None) -> list[str]:
    if not value:
        return []
    return [tag for tag in TAG_SPLIT_PATTERN.split(value.strip()) if tag]


def _serialize(element: etree._Element) -> str:
    return etree.tostring(element, encoding="unicode", with_tail=False).strip()


__all__ = ["XmlInfoBookParser"]
