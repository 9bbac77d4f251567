"""Assemble the complete infobook from its root and injected documents.

A mod's book is one XML document, but other mods may contribute chapters:
each configured injection names a target section and external documents
whose root sections are appended below it. The finished book always ends
with a generated tag index page.

Example
-------
>>> from pathlib import Path
>>> initializer = InfoBookInitializer(
...     mod_id="mymod",
...     base_dir=Path("assets/mymod/info"),
...     sections_file="book.xml",
...     resource_handler=handler,
... )  # doctest: +SKIP
>>> book = initializer.initialize()  # doctest: +SKIP
>>> book.root_section.sub_sections[-1].name  # doctest: +SKIP
'info_book.mymod.tag_index'
"""

from __future__ import annotations

import logging
import typing as typ

from infobook_html._constants import TAG_INDEX_KEY_TEMPLATE
from infobook_html.appendix.tag_index import InfoBookAppendixTagIndex
from infobook_html.config import InfobookConfigError
from infobook_html.errors import InjectionError
from infobook_html.parser import XmlInfoBookParser

from .models import InfoBook, Section

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from infobook_html.appendix.base import AppendixHandler
    from infobook_html.config import InjectionConfig
    from infobook_html.resources import ResourceHandler

logger = logging.getLogger(__name__)

TAG_INDEX_TITLE = "Tag Index"


class InfoBookInitializer:
    """Hold everything needed to construct an infobook, then build it."""

    def __init__(
        self,
        *,
        mod_id: str | None,
        base_dir: Path | None,
        sections_file: str | None,
        resource_handler: ResourceHandler,
        injections: cabc.Mapping[str, cabc.Sequence[InjectionConfig]] | None = None,
    ) -> None:
        for field, value in (
            ("mod_id", mod_id),
            ("base_dir", base_dir),
            ("sections_file", sections_file),
        ):
            if not value:
                msg = f"Missing {field} field for infobook construction"
                raise InfobookConfigError(msg)

        self.mod_id = typ.cast("str", mod_id)
        self.base_dir = typ.cast("Path", base_dir)
        self.sections_file = typ.cast("str", sections_file)
        self.resource_handler = resource_handler
        self.injections = dict(injections or {})
        self.parser = XmlInfoBookParser()

    @property
    def tag_index_key(self) -> str:
        return TAG_INDEX_KEY_TEMPLATE.format(mod_id=self.mod_id)

    def register_appendix_handler(self, appendix_type: str, handler: AppendixHandler) -> None:
        """Register an appendix handler with the underlying parser."""
        self.parser.register_appendix_handler(appendix_type, handler)

    def initialize(self) -> InfoBook:
        """Parse the book, apply injections and append the tag index.

        Returns
        -------
        InfoBook
            The assembled book; its flat index covers injected sections too.

        Raises
        ------
        InjectionError
            If an injection targets a key that is not in the book.
        ParseError
            If any document cannot be converted.
        """
        book = self.parser.parse(self.base_dir / self.sections_file, self.mod_id)
        for target_key, documents in self.injections.items():
            self.inject(book, target_key, documents)
        self.append_tag_index(book)
        return book

    def inject(
        self,
        book: InfoBook,
        target_key: str,
        documents: cabc.Iterable[InjectionConfig],
    ) -> None:
        """Append the root section of every document below ``target_key``."""
        target = book.sections.get(target_key)
        if target is None:
            msg = f"Could not find the section {target_key} to inject sections into."
            raise InjectionError(msg)

        for document in documents:
            logger.debug("Injecting %s (%s) into %s", document.file, document.mod_id, target_key)
            injected = self.parser.parse(self.base_dir / document.file, document.mod_id)
            target.sub_sections.append(injected.root_section)
            for key, section in injected.sections.items():
                if key in book.sections:
                    logger.warning("Injected section %s replaces an existing section", key)
                book.sections[key] = section

    def append_tag_index(self, book: InfoBook) -> Section:
        """Add the generated tag index page as the last child of the root."""
        key = self.tag_index_key
        section = Section(
            name=key,
            mod_id=self.mod_id,
            appendix=[InfoBookAppendixTagIndex(self.resource_handler)],
        )
        book.root_section.sub_sections.append(section)
        book.sections[key] = section
        self.resource_handler.set_default_translation(key, TAG_INDEX_TITLE)
        return section


__all__ = ["InfoBookInitializer"]
