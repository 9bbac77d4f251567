"""Image appendices copied from a mod's resource pack."""

from __future__ import annotations

import typing as typ

from infobook_html.errors import ParseError

from .base import AppendixHandler, InfoAppendix, element_text

if typ.TYPE_CHECKING:
    from pathlib import Path

    from lxml import etree

    from infobook_html.resources import ResourceHandler
    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext

# Images are drawn at twice their texture size.
IMAGE_SCALE = 2
BACKGROUND_SIZE = "512px 512px"


class ImageAppendix(InfoAppendix):
    """A region of a texture sheet shown as a scaled canvas background."""

    def __init__(self, source: Path, width: int, height: int) -> None:
        self.source = source
        self.width = width
        self.height = height

    def to_html(
        self,
        context: SerializeContext,  # noqa: ARG002
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,  # noqa: ARG002
    ) -> str:
        url = file_writer.write(self.source.name, self.source)
        style = (
            f"background: url('{url}'); "
            f"width: {self.width * IMAGE_SCALE}px; height: {self.height * IMAGE_SCALE}px; "
            f"background-size: {BACKGROUND_SIZE};"
        )
        return f'<canvas class="appendix-image" style="{style}"></canvas>'


class ImageAppendixHandler(AppendixHandler):
    """Resolve ``<appendix type="image">ns:path</appendix>`` elements."""

    def __init__(self, resource_handler: ResourceHandler) -> None:
        self.resource_handler = resource_handler

    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:  # noqa: ARG002
        source = self.resource_handler.expand_resource_path(element_text(element))
        try:
            width = int(element.get("width", ""))
            height = int(element.get("height", ""))
        except ValueError as exc:
            msg = f"Image appendix {element_text(element)} needs integer width and height"
            raise ParseError(msg) from exc
        return ImageAppendix(source, width, height)


__all__ = ["ImageAppendix", "ImageAppendixHandler"]
