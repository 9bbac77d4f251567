"""Keybinding appendices showing an action and its default key."""

from __future__ import annotations

import typing as typ

from infobook_html.templating import get_template

from .base import AppendixHandler, InfoAppendix, element_text

if typ.TYPE_CHECKING:
    from lxml import etree

    from infobook_html.resources import ResourceHandler
    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext

NAME_TRANSLATION_KEY = "gui.infobook.keybinding"


class KeybindingAppendix(InfoAppendix):
    def __init__(self, resource_handler: ResourceHandler, keybinding_id: str, key: str) -> None:
        self.resource_handler = resource_handler
        self.keybinding_id = keybinding_id
        self.key = key
        self.template = get_template("appendix/keybinding.jinja")

    def get_name(self, context: SerializeContext) -> str | None:
        return self.resource_handler.get_translation(NAME_TRANSLATION_KEY, context.language)

    def to_html(
        self,
        context: SerializeContext,
        file_writer: FileWriter,  # noqa: ARG002
        serializer: HtmlInfoBookSerializer,  # noqa: ARG002
    ) -> str:
        name = self.resource_handler.get_translation(self.keybinding_id, context.language)
        return self.template.render(name=name, key=self.key)


class KeybindingAppendixHandler(AppendixHandler):
    """Look up the key label when the book is parsed.

    An unknown keybinding fails the build immediately instead of when the
    page is rendered.
    """

    def __init__(self, resource_handler: ResourceHandler) -> None:
        self.resource_handler = resource_handler

    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:  # noqa: ARG002
        keybinding_id = element_text(element)
        key = self.resource_handler.get_keybinding(keybinding_id)
        return KeybindingAppendix(self.resource_handler, keybinding_id, key)


__all__ = ["KeybindingAppendix", "KeybindingAppendixHandler"]
