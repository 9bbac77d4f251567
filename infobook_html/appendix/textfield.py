"""Preformatted text appendices."""

from __future__ import annotations

import typing as typ

from markupsafe import escape

from .base import AppendixHandler, InfoAppendix

if typ.TYPE_CHECKING:
    from lxml import etree

    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext


def preformat(text: str) -> str:
    """Escape ``text`` and keep its spacing and line breaks in HTML."""
    return str(escape(text)).replace(" ", "&nbsp;").replace("\n", "<br />")


class TextfieldAppendix(InfoAppendix):
    def __init__(self, contents: str, scale: str = "1") -> None:
        self.contents = contents
        self.scale = scale

    def to_html(
        self,
        context: SerializeContext,  # noqa: ARG002
        file_writer: FileWriter,  # noqa: ARG002
        serializer: HtmlInfoBookSerializer,  # noqa: ARG002
    ) -> str:
        return (
            f'<div class="appendix-textfield" style="font-size: {escape(self.scale)}em">'
            f"{self.contents}</div>"
        )


class TextfieldAppendixHandler(AppendixHandler):
    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:  # noqa: ARG002
        return TextfieldAppendix(preformat(element.text or ""), element.get("scale") or "1")


__all__ = ["TextfieldAppendix", "TextfieldAppendixHandler", "preformat"]
