"""Tests for the HTML serializer, its file writer and text formatting.

The end-to-end tests build the ``mod_workspace`` book with
``InfobookBuilder`` and inspect the written site with BeautifulSoup: the
output file layout per language, breadcrumbs, previous/next navigation and
links from item displays to the pages that declare them. Smaller tests pin
down formatting codes, cross-mod nesting and asset deduplication.

Usage
-----
Run ``pytest tests/test_serializer.py -v``.
"""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from infobook_html.builder import InfobookBuilder
from infobook_html.config import load_infobook_config
from infobook_html.errors import ResourceLookupError
from infobook_html.infobook.models import InfoBook, Item, Section
from infobook_html.resources import ResourceHandler
from infobook_html.serializer import (
    FileWriter,
    HtmlInfoBookSerializer,
    SerializeContext,
    format_string,
)

PAGES = (
    "index.html",
    "basics/index.html",
    "basics/intro.html",
    "basics/widgets.html",
    "smelting.html",
    "tag_index.html",
)


@pytest.fixture
def site(config_path: Path, tmp_path: Path) -> dict[str, typ.Any]:
    """Build the workspace book into ``<tmp>/public``."""
    output_dir = tmp_path / "public"
    written = InfobookBuilder(load_infobook_config(config_path)).run(output_dir)
    return {"output_dir": output_dir, "written": written}


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_site_file_layout(site: dict[str, typ.Any]) -> None:
    """Every language gets the same page tree; English sits at the root."""
    output_dir = typ.cast("Path", site["output_dir"])
    expected = {output_dir / page for page in PAGES} | {
        output_dir / "de_de" / page for page in PAGES
    }
    assert set(site["written"]) == expected, "Unexpected set of written pages"
    assert all(path.exists() for path in expected)
    assert (output_dir / "assets" / "infobook.css").exists()
    assert (output_dir / "assets" / "icons" / "mymod__widget.png").exists()


def test_index_page_lists_children(site: dict[str, typ.Any]) -> None:
    soup = _soup(site["output_dir"] / "index.html")
    links = [(a.get_text(), a["href"]) for a in soup.select(".sub-sections a")]
    assert links == [
        ("Basics", "/docs/basics/"),
        ("Smelting", "/docs/smelting.html"),
        ("Tag Index", "/docs/tag_index.html"),
    ]
    assert soup.title is not None and soup.title.get_text() == "My Mod Manual - My Mod"


def test_leaf_page_content(site: dict[str, typ.Any]) -> None:
    soup = _soup(site["output_dir"] / "basics" / "intro.html")
    paragraph = soup.select_one("article p")
    assert paragraph is not None
    assert paragraph.decode_contents() == "Welcome to <strong>My Mod</strong>."
    crumbs = [(li.get_text(), li.a["href"] if li.a else None) for li in soup.select(".breadcrumbs li")]
    assert crumbs == [
        ("My Mod Manual", "/docs/"),
        ("Basics", "/docs/basics/"),
        ("Introduction", None),
    ], f"Unexpected breadcrumbs {crumbs}"


def test_previous_and_next_links_follow_reading_order(site: dict[str, typ.Any]) -> None:
    output_dir = typ.cast("Path", site["output_dir"])

    def navigation(page: str) -> tuple[str | None, str | None]:
        soup = _soup(output_dir / page)
        previous, following = soup.select_one(".nav-previous"), soup.select_one(".nav-next")
        return (
            str(previous["href"]) if previous else None,
            str(following["href"]) if following else None,
        )

    assert navigation("basics/intro.html") == (None, "/docs/basics/widgets.html")
    assert navigation("basics/widgets.html") == ("/docs/basics/intro.html", "/docs/smelting.html")
    assert navigation("tag_index.html") == ("/docs/smelting.html", None)


def test_items_link_to_declaring_page(site: dict[str, typ.Any]) -> None:
    output_dir = typ.cast("Path", site["output_dir"])
    english = _soup(output_dir / "basics" / "widgets.html")
    output = english.select_one(".recipe-output a")
    assert output is not None and output["href"] == "/docs/basics/widgets.html"
    stone = english.select_one(".recipe-grid a")
    assert stone is not None and stone["href"] == "https://minecraft.wiki/w/Stone"

    german = _soup(output_dir / "de_de" / "basics" / "widgets.html")
    output = german.select_one(".recipe-output a")
    assert output is not None and output["href"] == "/docs/de_de/basics/widgets.html", (
        "Tag links should stay within the page's language"
    )


def test_translated_pages_fall_back_to_english(site: dict[str, typ.Any]) -> None:
    soup = _soup(site["output_dir"] / "de_de" / "basics" / "intro.html")
    assert soup.html is not None and soup.html["lang"] == "de-de"
    assert soup.select_one("h1").get_text() == "Einführung"
    assert soup.select_one(".site-title")["href"] == "/docs/de_de/"
    smelting = _soup(site["output_dir"] / "de_de" / "smelting.html")
    assert smelting.select_one("h1").get_text() == "Smelting"


def test_tag_index_page(site: dict[str, typ.Any]) -> None:
    soup = _soup(site["output_dir"] / "tag_index.html")
    entries = [(a.get_text(), a["href"]) for a in soup.select(".tag-index-entry > a")]
    assert entries == [("Widget", "/docs/basics/widgets.html")]


def test_appendices_are_wrapped_with_names(site: dict[str, typ.Any]) -> None:
    soup = _soup(site["output_dir"] / "smelting.html")
    names = [div.get_text() for div in soup.select(".appendix-name")]
    assert names == ["Furnace", "Keybinding"]


def test_ads_are_prepended_to_leaf_pages(config_path: Path, tmp_path: Path) -> None:
    config_path.write_text(
        config_path.read_text(encoding="utf-8")
        + "google_adsense:\n  client: ca-pub-1\n  slot: '2'\n",
        encoding="utf-8",
    )
    output_dir = tmp_path / "public"
    InfobookBuilder(load_infobook_config(config_path)).run(output_dir)
    leaf = _soup(output_dir / "smelting.html")
    first = leaf.select_one("article > div")
    assert first is not None and "appendix-ad" in first["class"]
    assert not _soup(output_dir / "index.html").select("ins.adsbygoogle"), (
        "Index pages carry no ads"
    )


def test_format_string_codes() -> None:
    assert format_string("&lBold&r &nUnder&r &oIt&r &mStrike&r") == (
        "<strong>Bold</strong> <u>Under</u> <em>It</em> <s>Strike</s>"
    )
    assert format_string("§cRed§0") == '<span style="color: #FF5555">Red</span>'


def test_format_string_escapes_and_drops_stray_codes() -> None:
    assert format_string("<b> &lopen") == "&lt;b&gt; open"


def test_format_string_keeps_plain_ampersands() -> None:
    assert format_string("R&D") == "R&amp;D"
    assert format_string("Salt & Pepper") == "Salt &amp; Pepper"
    assert format_string("Rock&Roll &lloud&r") == "Rock&amp;Roll <strong>loud</strong>"


def test_format_string_nested_codes() -> None:
    assert format_string("&c&lBoth&r&0") == (
        '<span style="color: #FF5555"><strong>Both</strong></span>'
    )


def test_file_writer_copies_once(tmp_path: Path, mocker: typ.Any) -> None:
    source = tmp_path / "icon.png"
    source.write_bytes(b"png")
    spy = mocker.spy(shutil, "copyfile")
    writer = FileWriter(tmp_path / "out", "/docs/")
    urls = [writer.write("icons/icon.png", source) for _ in range(3)]
    assert urls == ["/docs/assets/icons/icon.png"] * 3
    assert spy.call_count == 1, "Expected a single copy for repeated writes"
    assert (tmp_path / "out" / "assets" / "icons" / "icon.png").read_bytes() == b"png"
    assert writer.written == frozenset({"icons/icon.png"})


def test_cross_mod_sections_are_nested(tmp_path: Path) -> None:
    handler = ResourceHandler()
    handler.add_translations(
        "en_us", {"book": "Book", "book.a": "A", "addon.root": "Addon", "addon.root.b": "B"}
    )
    addon = Section(
        name="addon.root",
        mod_id="addon",
        sub_sections=[Section(name="addon.root.b", mod_id="addon")],
    )
    root = Section(name="book", mod_id="mymod", sub_sections=[Section("book.a", "mymod"), addon])
    context = SerializeContext(
        path=tmp_path / "out", base_url="/", mod_id="mymod", resource_handler=handler
    )
    written = HtmlInfoBookSerializer().serialize(InfoBook(root, {}), context)
    relative = {path.relative_to(tmp_path / "out").as_posix() for path in written}
    assert relative == {"index.html", "a.html", "addon/root/index.html", "addon/root/b.html"}


def test_item_display_edge_cases(tmp_path: Path) -> None:
    handler = ResourceHandler()
    context = SerializeContext(path=tmp_path, base_url="/", mod_id="m", resource_handler=handler)
    serializer = HtmlInfoBookSerializer()
    writer = FileWriter(tmp_path, "/")
    assert serializer.create_item_display(context, writer, Item("minecraft:air"), True) == (
        '<div class="item item-slot">&nbsp;</div>'
    )
    with pytest.raises(ResourceLookupError, match="icon"):
        serializer.create_item_display(context, writer, Item("mymod:missing"), True)


def test_serialize_rejects_file_output(tmp_path: Path) -> None:
    target = tmp_path / "out"
    target.write_text("", encoding="utf-8")
    context = SerializeContext(
        path=target, base_url="/", mod_id="m", resource_handler=ResourceHandler()
    )
    with pytest.raises(NotADirectoryError):
        HtmlInfoBookSerializer().serialize(InfoBook(Section("root", "m"), {}), context)
