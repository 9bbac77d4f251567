"""Serialize an infobook into a static, multi-language HTML site.

Every language is written in two passes over the section tree:

1. the *index pass* records each leaf page URL in document order together
   with the tags the page declares;
2. the *render pass* writes one ``index.html`` per navigation section and one
   ``<name>.html`` per leaf, resolving previous/next links and tag links from
   the completed index.

The default language is written at the output root; every other language is
mirrored under a directory named by its language code. Icons and images are
copied on demand into the shared ``assets`` directory by a
:class:`~infobook_html.serializer.file_writer.FileWriter`.

Example
-------
>>> from pathlib import Path
>>> serializer = HtmlInfoBookSerializer()
>>> context = SerializeContext(
...     path=Path("public"), base_url="/", mod_id="mymod", resource_handler=handler
... )  # doctest: +SKIP
>>> serializer.serialize(book, context)  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
import typing as typ
from pathlib import Path
from urllib.parse import quote

from markupsafe import Markup

from infobook_html._constants import (
    AIR_ITEM,
    ASSETS_DIRNAME,
    DEFAULT_LANGUAGE,
    ICONS_DIRNAME,
    INDEX_FILENAME,
    MINECRAFT_NAMESPACE,
    WIKI_URL_TEMPLATE,
)
from infobook_html.appendix.ad import InfoBookAppendixAd
from infobook_html.errors import ResourceLookupError
from infobook_html.templating import build_environment

from .context import Breadcrumb, PageRef, SectionIndex, SerializeContext
from .file_writer import FileWriter
from .formatting import format_string

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from infobook_html.appendix.base import InfoAppendix
    from infobook_html.infobook.models import Fluid, InfoBook, Item, Section

logger = logging.getLogger(__name__)

DEFAULT_ASSETS_DIR = Path(__file__).resolve().parents[1] / "assets"


class HtmlInfoBookSerializer:
    """Render sections, appendices and item displays to HTML files."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self.env = build_environment(templates_dir)
        self.template_index = self.env.get_template("index_page.jinja")
        self.template_section = self.env.get_template("section_page.jinja")
        self.template_appendix = self.env.get_template("appendix/appendix_base.jinja")
        self.template_item = self.env.get_template("appendix/item.jinja")

    def serialize(
        self,
        infobook: InfoBook,
        context: SerializeContext,
        assets_paths: cabc.Iterable[Path] = (),
    ) -> list[Path]:
        """Write every language of ``infobook`` below ``context.path``.

        Parameters
        ----------
        infobook : InfoBook
            Book to render.
        context : SerializeContext
            Output location, base URL, resources and theming.
        assets_paths : Iterable[Path], optional
            Extra static directories copied into ``assets`` after rendering.

        Returns
        -------
        list[Path]
            Written HTML files, grouped per language with the default first.
        """
        _ensure_dir(context.path)
        _ensure_dir(context.path / ASSETS_DIRNAME / ICONS_DIRNAME)
        file_writer = FileWriter(context.path, context.base_url)

        written: list[Path] = []
        for language in context.resource_handler.get_languages():
            logger.info("Serializing infobook for language %s", language)
            language_context = dc.replace(
                context, language=language, breadcrumbs=(), section_index=SectionIndex()
            )
            root_file = self.language_path(context.path, language) / INDEX_FILENAME
            self.index_section(infobook.root_section, language_context, root_file)
            self.serialize_section(
                infobook.root_section, language_context, root_file, file_writer, written
            )

        for assets_path in (DEFAULT_ASSETS_DIR, *assets_paths):
            shutil.copytree(assets_path, context.path / ASSETS_DIRNAME, dirs_exist_ok=True)
        return written

    @staticmethod
    def language_path(base_path: Path, language: str) -> Path:
        """Return the output root for ``language``."""
        if language == DEFAULT_LANGUAGE:
            return base_path
        return base_path / language

    @staticmethod
    def child_file(section: Section, child: Section, parent_file: Path) -> Path:
        """Return the output file of ``child`` below its parent's index file.

        Children authored by another mod are nested one directory deeper,
        named by that mod, so equal keys of different mods cannot collide.
        """
        directory = parent_file.parent
        if child.mod_id != section.mod_id:
            directory = directory / child.mod_id
        if child.is_leaf:
            return directory / f"{child.path_segment}.html"
        return directory / child.path_segment / INDEX_FILENAME

    @staticmethod
    def file_url(file_path: Path, context: SerializeContext) -> str:
        """Return the public URL of an output file."""
        relative = file_path.relative_to(context.path)
        if relative.name == INDEX_FILENAME:
            directory = relative.parent.as_posix()
            return context.base_url if directory == "." else f"{context.base_url}{directory}/"
        return f"{context.base_url}{relative.as_posix()}"

    def section_title(self, section: Section, context: SerializeContext) -> Markup:
        return format_string(
            context.resource_handler.get_translation(section.name, context.language)
        )

    def index_section(self, section: Section, context: SerializeContext, file_path: Path) -> None:
        """Register every leaf below ``section`` in the context's section index."""
        if section.is_leaf:
            page = PageRef(
                url=self.file_url(file_path, context),
                name=self.section_title(section, context),
            )
            context.section_index.add_page(page, section.tags)
            return
        for child in section.sub_sections:
            self.index_section(child, context, self.child_file(section, child, file_path))

    def serialize_section(
        self,
        section: Section,
        context: SerializeContext,
        file_path: Path,
        file_writer: FileWriter,
        written: list[Path],
    ) -> PageRef:
        """Render ``section`` and its descendants, appending files to ``written``."""
        title = self.section_title(section, context)
        url = self.file_url(file_path, context)
        _ensure_dir(file_path.parent)

        if section.is_leaf:
            html = self._render_leaf(section, context, title, url, file_writer)
        else:
            sub_context = dc.replace(
                context, breadcrumbs=(*context.breadcrumbs, Breadcrumb(title, url))
            )
            sub_section_datas = [
                self.serialize_section(
                    child,
                    sub_context,
                    self.child_file(section, child, file_path),
                    file_writer,
                    written,
                )
                for child in section.sub_sections
            ]
            html = self.template_index.render(
                **self._page_context(context, title),
                sub_section_datas=sub_section_datas,
            )

        file_path.write_text(_with_trailing_newline(html), encoding="utf-8")
        written.append(file_path)
        return PageRef(url=url, name=title)

    def _render_leaf(
        self,
        section: Section,
        context: SerializeContext,
        title: Markup,
        url: str,
        file_writer: FileWriter,
    ) -> str:
        appendices: list[InfoAppendix] = [
            appendix for appendix in section.appendix if appendix is not None
        ]
        if context.google_adsense is not None:
            appendices.insert(0, InfoBookAppendixAd())
        paragraphs = [
            format_string(context.resource_handler.get_translation(key, context.language))
            for key in section.paragraph_translation_keys
        ]
        previous_page, next_page = context.section_index.neighbours(url)
        return self.template_section.render(
            **self._page_context(context, title),
            section_paragraphs=paragraphs,
            section_appendices=[
                self._render_appendix(appendix, context, file_writer)
                for appendix in appendices
            ],
            previous_page=previous_page,
            next_page=next_page,
        )

    def _render_appendix(
        self, appendix: InfoAppendix, context: SerializeContext, file_writer: FileWriter
    ) -> Markup:
        contents = Markup(appendix.to_html(context, file_writer, self))  # noqa: S704
        if appendix.skip_wrapper:
            return contents
        return Markup(  # noqa: S704
            self.template_appendix.render(
                appendix_contents=contents,
                appendix_name=appendix.get_name(context),
            )
        )

    def _page_context(self, context: SerializeContext, title: Markup) -> dict[str, typ.Any]:
        translate = context.resource_handler.get_translation
        return {
            "base_url": context.base_url,
            "language_url": context.language_url,
            "breadcrumbs": [*context.breadcrumbs, Breadcrumb(title)],
            "colors": context.colors,
            "head_suffix": Markup(context.head_suffix),  # noqa: S704
            "language": context.language,
            "main_title": context.title,
            "section_title": title,
            "labels": {
                "previous": translate("gui.infobook.previous", context.language),
                "next": translate("gui.infobook.next", context.language),
            },
        }

    def create_item_display(
        self,
        context: SerializeContext,
        file_writer: FileWriter,
        item: Item,
        slot: bool,
        annotation: str = "",
    ) -> Markup:
        """Render an item icon with its localized name and optional link.

        Raises
        ------
        ResourceLookupError
            If the item has no icon or no translation key.
        """
        if item.item == AIR_ITEM:
            css = "item item-slot" if slot else "item"
            return Markup(f'<div class="{css}">&nbsp;</div>')  # noqa: S704

        handler = context.resource_handler
        icon = handler.get_item_icon_file(item.item, item.nbt)
        if icon is None:
            msg = f"Could not find an icon for item {item}"
            raise ResourceLookupError(msg)
        translation_key = handler.get_item_translation_key(item)
        if translation_key is None:
            msg = f"Could not find a translation key for item {item}"
            raise ResourceLookupError(msg)

        return Markup(  # noqa: S704
            self.template_item.render(
                annotation=annotation,
                count=item.count,
                icon=file_writer.write(f"{ICONS_DIRNAME}/{icon.name}", icon),
                name=handler.get_translation(translation_key, context.language),
                slot=slot,
                link=self._resource_link(context, item.item, translation_key),
            )
        )

    def create_fluid_display(
        self,
        context: SerializeContext,
        file_writer: FileWriter,
        fluid: Fluid,
        slot: bool,
    ) -> Markup:
        """Render a fluid icon with its localized name and optional link."""
        handler = context.resource_handler
        icon = handler.get_fluid_icon_file(fluid.fluid)
        if icon is None:
            msg = f"Could not find an icon for fluid {fluid}"
            raise ResourceLookupError(msg)
        translation_key = handler.get_fluid_translation_key(fluid)
        if translation_key is None:
            msg = f"Could not find a translation key for fluid {fluid}"
            raise ResourceLookupError(msg)

        return Markup(  # noqa: S704
            self.template_item.render(
                annotation="",
                count=fluid.amount,
                icon=file_writer.write(f"{ICONS_DIRNAME}/{icon.name}", icon),
                name=handler.get_translation(translation_key, context.language),
                slot=slot,
                link=context.section_index.tags.get(fluid.fluid),
            )
        )

    @staticmethod
    def _resource_link(
        context: SerializeContext, resource_id: str, translation_key: str
    ) -> str | None:
        """Link to the in-book page declaring ``resource_id``, else the wiki."""
        in_book = context.section_index.tags.get(resource_id)
        if in_book:
            return in_book
        if resource_id.partition(":")[0] == MINECRAFT_NAMESPACE:
            english = context.resource_handler.get_translation(
                translation_key, DEFAULT_LANGUAGE
            )
            return WIKI_URL_TEMPLATE.format(page=quote(english.replace(" ", "_")))
        return None


def _ensure_dir(path: Path) -> None:
    if path.exists() and not path.is_dir():
        msg = f"Could not serialize to {path}, it must be a directory."
        raise NotADirectoryError(msg)
    path.mkdir(parents=True, exist_ok=True)


def _with_trailing_newline(html: str) -> str:
    return html if html.endswith("\n") else html + "\n"


__all__ = ["DEFAULT_ASSETS_DIR", "HtmlInfoBookSerializer"]
