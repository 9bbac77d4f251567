"""Shared fixtures describing a small mod workspace on disk.

The workspace mirrors what the metadata harvester leaves behind for a mod
called ``mymod``: exported icons, registry JSON files, resource packs for the
``minecraft`` and ``mymod`` namespaces, and an infobook XML document. Tests
build resource handlers, initializers and full sites from it.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from infobook_html.resources import ResourceHandler, ResourceLoader

# Smallest valid PNG header; icon contents are copied, never decoded.
PNG_BYTES = b"\x89PNG\r\n\x1a\n"

ICON_NAMES: tuple[str, ...] = (
    "minecraft__stone",
    "minecraft__furnace",
    "minecraft__iron_ore",
    "minecraft__iron_ingot",
    "minecraft__bread",
    "mymod__widget",
    "mymod__widget__charged",
    "mymod__gadget",
    "fluid__water",
)

ITEM_TRANSLATION_KEYS: list[dict[str, str]] = [
    {"item": "minecraft:stone", "translationKey": "block.minecraft.stone"},
    {"item": "minecraft:furnace", "translationKey": "block.minecraft.furnace"},
    {"item": "minecraft:iron_ore", "translationKey": "block.minecraft.iron_ore"},
    {"item": "minecraft:iron_ingot", "translationKey": "item.minecraft.iron_ingot"},
    {"item": "minecraft:bread", "translationKey": "item.minecraft.bread"},
    {"item": "mymod:widget", "translationKey": "item.mymod.widget"},
    {"item": "mymod:gadget", "translationKey": "item.mymod.gadget"},
]

STONE = {"item": "minecraft:stone"}

CRAFTING_RECIPES: dict[str, typ.Any] = {
    "mymod:widget": [
        {
            "input": [STONE, STONE, STONE, None],
            "output": {"item": "mymod:widget", "count": 2},
            "width": 2,
            "height": 2,
            "tags": ["mymod:tools"],
        }
    ],
    "mymod:gadget": [
        {
            "input": [STONE, {"item": "mymod:widget"}],
            "output": {"item": "mymod:gadget"},
            "tags": ["mymod:tools"],
        },
        {
            "input": [[STONE, {"item": "minecraft:iron_ingot"}]],
            "output": {"item": "mymod:gadget"},
        },
    ],
}

SMELTING_RECIPES: dict[str, typ.Any] = {
    "minecraft:iron_ingot": {
        "input": [{"item": "minecraft:iron_ore"}],
        "output": {"item": "minecraft:iron_ingot"},
    },
}

MYMOD_EN_US = """\
# Manual titles
info_book.mymod=My Mod Manual
info_book.mymod.basics=Basics
info_book.mymod.basics.intro=Introduction
info_book.mymod.basics.intro.text1=Welcome to &lMy Mod&r.
info_book.mymod.basics.widgets=Widgets
info_book.mymod.basics.widgets.text1=Widgets are crafted from stone.
info_book.mymod.smelting=Smelting
info_book.mymod.smelting.text1=Smelt ore in a furnace.
item.mymod.widget=Widget
item.mymod.gadget=Gadget
key.mymod.open=Open Manual
advancement.mymod.first_steps=First Steps
advancement.mymod.first_steps.desc=Open the manual
"""

MYMOD_DE_DE = """\
info_book.mymod=Mein Handbuch
info_book.mymod.basics=Grundlagen
info_book.mymod.basics.intro=Einführung
"""

MINECRAFT_EN_US: dict[str, str] = {
    "block.minecraft.stone": "Stone",
    "block.minecraft.iron_ore": "Iron Ore",
    "item.minecraft.iron_ingot": "Iron Ingot",
    "item.minecraft.bread": "Bread",
    "block.minecraft.water": "Water",
}

BOOK_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<section name="info_book.mymod">
  <!-- The manual of mymod -->
  <section name="info_book.mymod.basics">
    <section name="info_book.mymod.basics.intro">
      <paragraph>info_book.mymod.basics.intro.text1</paragraph>
    </section>
    <section name="info_book.mymod.basics.widgets" tag="mymod:widget">
      <paragraph>info_book.mymod.basics.widgets.text1</paragraph>
      <appendix type="crafting_recipe">mymod:widget</appendix>
    </section>
  </section>
  <section name="info_book.mymod.smelting">
    <paragraph>info_book.mymod.smelting.text1</paragraph>
    <appendix type="smelting_recipe">minecraft:iron_ingot</appendix>
    <appendix type="keybinding">key.mymod.open</appendix>
  </section>
</section>
"""


def write_json(path: Path, payload: object) -> Path:
    """Write ``payload`` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def write_text(path: Path, text: str) -> Path:
    """Write ``text``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def mod_workspace(tmp_path: Path) -> Path:
    """Create the harvested inputs and book sources of ``mymod``.

    Parameters
    ----------
    tmp_path : Path
        Pytest-provided temporary directory used as the workspace root.

    Returns
    -------
    Path
        Root directory containing ``icons``, ``registries``, ``resources``
        and ``book``.
    """
    icons = tmp_path / "icons"
    icons.mkdir()
    for name in ICON_NAMES:
        (icons / f"{name}.png").write_bytes(PNG_BYTES)
    (icons / "README.txt").write_text("not an icon", encoding="utf-8")

    registries = tmp_path / "registries"
    write_json(registries / "item_translation_keys.json", {"items": ITEM_TRANSLATION_KEYS})
    write_json(
        registries / "fluid_translation_keys.json",
        {"fluids": [{"fluid": "water", "translationKey": "block.minecraft.water"}]},
    )
    write_json(registries / "minecraft__crafting.json", CRAFTING_RECIPES)
    write_json(registries / "minecraft__smelting.json", SMELTING_RECIPES)
    write_json(registries / "keybindings.json", {"key.mymod.open": "G"})

    resources = tmp_path / "resources"
    write_text(resources / "mymod" / "lang" / "en_us.lang", MYMOD_EN_US)
    write_text(resources / "mymod" / "lang" / "de_de.lang", MYMOD_DE_DE)
    write_json(resources / "minecraft" / "lang" / "en_us.json", MINECRAFT_EN_US)
    write_json(
        resources / "mymod" / "advancements" / "root" / "first_steps.json",
        {
            "display": {
                "icon": {"item": "mymod:widget"},
                "title": {"translate": "advancement.mymod.first_steps"},
                "description": {"translate": "advancement.mymod.first_steps.desc"},
            }
        },
    )
    write_json(resources / "mymod" / "advancements" / "root.json", {"criteria": {}})
    (resources / "mymod" / "textures" / "gui").mkdir(parents=True)
    (resources / "mymod" / "textures" / "gui" / "manual.png").write_bytes(PNG_BYTES)

    write_text(tmp_path / "book" / "book.xml", BOOK_XML)
    return tmp_path


@pytest.fixture
def resource_loader(mod_workspace: Path) -> ResourceLoader:
    """Return a loader filled from every input of the workspace."""
    loader = ResourceLoader()
    loader.load_icons(mod_workspace / "icons")
    loader.load_registries(mod_workspace / "registries")
    loader.load_all(mod_workspace / "resources")
    return loader


@pytest.fixture
def resource_handler(resource_loader: ResourceLoader) -> ResourceHandler:
    """Return the handler of the filled workspace loader."""
    return resource_loader.resource_handler


@pytest.fixture
def config_path(mod_workspace: Path) -> Path:
    """Write an ``infobook.yaml`` using paths relative to the workspace."""
    return write_text(
        mod_workspace / "infobook.yaml",
        dedent(
            """
            mod_id: mymod
            base_dir: book
            sections_file: book.xml
            title: My Mod
            base_url: /docs
            colors:
              accent: "#336699"
            resources:
              - resources
            """
        ).lstrip(),
    )
