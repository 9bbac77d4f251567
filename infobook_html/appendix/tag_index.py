"""Generated appendix linking every tagged item or fluid to its page."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from infobook_html.infobook.models import Fluid, Item
from infobook_html.templating import get_template

from .base import InfoAppendix

if typ.TYPE_CHECKING:
    from markupsafe import Markup

    from infobook_html.resources import ResourceHandler
    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext


@dc.dataclass(slots=True, frozen=True)
class TagLink:
    url: str
    name: str
    icon: Markup


class InfoBookAppendixTagIndex(InfoAppendix):
    """List the tags collected during the index pass, sorted by name.

    A tag is shown as an item when an item translation key exists for it;
    otherwise the part after the namespace is treated as a fluid name.
    """

    def __init__(self, resource_handler: ResourceHandler) -> None:
        self.resource_handler = resource_handler
        self.template = get_template("appendix/tag_index.jinja")

    def to_html(
        self,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        links = [
            self._link(tag, url, context, file_writer, serializer)
            for tag, url in context.section_index.tags.items()
        ]
        links.sort(key=lambda link: link.name.casefold())
        return self.template.render(links=links)

    def _link(
        self,
        tag: str,
        url: str,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> TagLink:
        item = Item(item=tag)
        translation_key = self.resource_handler.get_item_translation_key(item)
        if translation_key is not None:
            icon = serializer.create_item_display(context, file_writer, item, False)
        else:
            fluid = Fluid(fluid=tag.partition(":")[2] or tag)
            icon = serializer.create_fluid_display(context, file_writer, fluid, False)
            translation_key = self.resource_handler.get_fluid_translation_key(fluid)
        name = self.resource_handler.get_translation(str(translation_key), context.language)
        return TagLink(url=url, name=name, icon=icon)


__all__ = ["InfoBookAppendixTagIndex", "TagLink"]
