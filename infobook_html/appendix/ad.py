"""Advertisement block prepended to leaf pages when ads are configured."""

from __future__ import annotations

import typing as typ

from infobook_html.templating import get_template

from .base import InfoAppendix

if typ.TYPE_CHECKING:
    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext


class InfoBookAppendixAd(InfoAppendix):
    """Render the configured ad unit without the titled appendix box."""

    skip_wrapper = True

    def __init__(self) -> None:
        self.template = get_template("appendix/ad.jinja")

    def to_html(
        self,
        context: SerializeContext,
        file_writer: FileWriter,  # noqa: ARG002
        serializer: HtmlInfoBookSerializer,  # noqa: ARG002
    ) -> str:
        if context.google_adsense is None:
            return ""
        return self.template.render(
            client=context.google_adsense.client,
            slot=context.google_adsense.slot,
        )


__all__ = ["InfoBookAppendixAd"]
