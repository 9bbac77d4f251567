"""Contracts shared by every appendix type.

An :class:`AppendixHandler` is registered with the parser under a type string
and turns an ``<appendix>`` XML element into an :class:`InfoAppendix`. The
appendix is rendered later, once per language, by the serializer.
"""

from __future__ import annotations

import abc
import typing as typ

if typ.TYPE_CHECKING:
    from lxml import etree

    from infobook_html.serializer.context import SerializeContext
    from infobook_html.serializer.file_writer import FileWriter
    from infobook_html.serializer.html_serializer import HtmlInfoBookSerializer


class InfoAppendix(abc.ABC):
    """A rich content block rendered below a leaf section's paragraphs."""

    skip_wrapper: bool = False
    """Render without the standard titled box when true."""

    @abc.abstractmethod
    def to_html(
        self,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        """Return the HTML fragment of this appendix."""

    def get_name(self, context: SerializeContext) -> str | None:  # noqa: ARG002
        """Return the localized box title, or None for an untitled box."""
        return None


class AppendixHandler(abc.ABC):
    """Create appendices of a single registered type."""

    @abc.abstractmethod
    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:
        """Convert the raw ``element`` authored by ``mod_id`` into an appendix."""


def element_text(element: etree._Element) -> str:
    """Return the stripped text content of ``element``."""
    return (element.text or "").strip()


__all__ = ["AppendixHandler", "InfoAppendix", "element_text"]
