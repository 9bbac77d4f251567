"""State threaded through a serialization run."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from infobook_html._constants import DEFAULT_LANGUAGE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from infobook_html.config import AdConfig
    from infobook_html.resources import ResourceHandler


@dc.dataclass(slots=True, frozen=True)
class Breadcrumb:
    """A link in the trail from the book root to the current page."""

    name: str
    url: str | None = None


@dc.dataclass(slots=True, frozen=True)
class PageRef:
    """A leaf page registered during the index pass."""

    url: str
    name: str


@dc.dataclass(slots=True)
class SectionIndex:
    """Page inventory of one language, built before any page is rendered.

    Attributes
    ----------
    pages : list[PageRef]
        Leaf pages in document order, used for previous/next navigation.
    url_positions : dict[str, int]
        Position of each page URL within ``pages``.
    tags : dict[str, str]
        Maps a tag to the URL of the page that declared it.
    """

    pages: list[PageRef] = dc.field(default_factory=list)
    url_positions: dict[str, int] = dc.field(default_factory=dict)
    tags: dict[str, str] = dc.field(default_factory=dict)

    def add_page(self, page: PageRef, tags: cabc.Iterable[str]) -> None:
        self.url_positions[page.url] = len(self.pages)
        self.pages.append(page)
        for tag in tags:
            self.tags[tag] = page.url

    def neighbours(self, url: str) -> tuple[PageRef | None, PageRef | None]:
        """Return the pages before and after ``url`` in reading order."""
        position = self.url_positions[url]
        previous = self.pages[position - 1] if position > 0 else None
        following = self.pages[position + 1] if position + 1 < len(self.pages) else None
        return previous, following


@dc.dataclass(slots=True)
class SerializeContext:
    """Settings and per-page state passed to templates and appendices.

    The serializer derives per-language and per-section copies with
    :func:`dataclasses.replace`; nothing mutates a context after creation
    except the section index, which only grows during the index pass.
    """

    path: Path
    base_url: str
    mod_id: str
    resource_handler: ResourceHandler
    title: str = ""
    colors: dict[str, str] = dc.field(default_factory=dict)
    head_suffix_getters: list[cabc.Callable[[SerializeContext], str]] = dc.field(
        default_factory=list
    )
    google_adsense: AdConfig | None = None
    language: str = DEFAULT_LANGUAGE
    breadcrumbs: tuple[Breadcrumb, ...] = ()
    section_index: SectionIndex = dc.field(default_factory=SectionIndex)

    @property
    def language_url(self) -> str:
        """Return the URL of the output root of the current language."""
        if self.language == DEFAULT_LANGUAGE:
            return self.base_url
        return f"{self.base_url}{self.language}/"

    @property
    def head_suffix(self) -> str:
        return "".join(getter(self) for getter in self.head_suffix_getters)


__all__ = ["Breadcrumb", "PageRef", "SectionIndex", "SerializeContext"]
