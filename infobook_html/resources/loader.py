"""Populate a :class:`ResourceHandler` from harvested game metadata.

The metadata harvester leaves three kinds of input behind:

* an ``icons`` directory with one PNG per item (``<ns>__<path>[__<nbt>].png``)
  or fluid (``fluid__<name>.png``);
* a ``registries`` directory with ``item_translation_keys.json``,
  ``fluid_translation_keys.json`` and optionally ``keybindings.json``;
* resource-pack roots whose child directories are mod namespaces holding
  ``lang/`` files and ``advancements/`` JSON documents.

Example
-------
>>> from pathlib import Path
>>> loader = ResourceLoader()
>>> loader.load_icons(Path("icons"))  # doctest: +SKIP
>>> loader.resource_handler.get_item_icon_file("minecraft:stone")  # doctest: +SKIP
PosixPath('icons/minecraft__stone.png')
"""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path

from infobook_html._constants import FLUID_ICON_PREFIX, ICON_NAME_SEPARATOR

from .handler import Advancement, ResourceHandler

logger = logging.getLogger(__name__)

ITEM_TRANSLATION_KEYS_FILE = "item_translation_keys.json"
FLUID_TRANSLATION_KEYS_FILE = "fluid_translation_keys.json"
KEYBINDINGS_FILE = "keybindings.json"


class ResourceLoader:
    """Load icons, registries and resource packs into a shared handler."""

    def __init__(self, resource_handler: ResourceHandler | None = None) -> None:
        self.resource_handler = resource_handler or ResourceHandler()

    def load_icons(self, icons_path: Path) -> None:
        """Register every PNG in ``icons_path`` as an item or fluid icon."""
        logger.debug("Loading icons from %s", icons_path)
        for icon_file in sorted(icons_path.iterdir()):
            if icon_file.suffix != ".png":
                continue
            stem = icon_file.stem
            if stem.startswith(FLUID_ICON_PREFIX):
                fluid = stem[len(FLUID_ICON_PREFIX) :]
                self.resource_handler.add_fluid_icon(fluid, icon_file)
                continue
            parts = stem.split(ICON_NAME_SEPARATOR)
            if len(parts) < 2:
                logger.debug("Skipping icon with unexpected name %s", icon_file.name)
                continue
            namespace, path, *nbt_parts = parts
            nbt = ":".join(nbt_parts)
            self.resource_handler.add_item_icon(f"{namespace}:{path}", nbt, icon_file)

    def load_item_translation_keys(self, registries_path: Path) -> None:
        registry = _read_json(registries_path / ITEM_TRANSLATION_KEYS_FILE)
        for entry in registry.get("items", []):
            self.resource_handler.add_item_translation_key(
                entry["item"], entry.get("nbt", "") or "", entry["translationKey"]
            )

    def load_fluid_translation_keys(self, registries_path: Path) -> None:
        registry = _read_json(registries_path / FLUID_TRANSLATION_KEYS_FILE)
        for entry in registry.get("fluids", []):
            self.resource_handler.add_fluid_translation_key(
                entry["fluid"], entry["translationKey"]
            )

    def load_keybindings(self, keybindings: typ.Mapping[str, str]) -> None:
        for keybinding_id, key in keybindings.items():
            self.resource_handler.add_keybinding(keybinding_id, key)

    def load_keybindings_file(self, registries_path: Path) -> None:
        """Load ``keybindings.json`` from the registries, when it was harvested."""
        path = registries_path / KEYBINDINGS_FILE
        if path.exists():
            self.load_keybindings(_read_json(path))

    def load_registries(self, registries_path: Path) -> None:
        """Load every translation-key registry and keybindings file."""
        logger.debug("Loading registries from %s", registries_path)
        self.load_item_translation_keys(registries_path)
        fluid_registry = registries_path / FLUID_TRANSLATION_KEYS_FILE
        if fluid_registry.exists():
            self.load_fluid_translation_keys(registries_path)
        self.load_keybindings_file(registries_path)

    def load_all(self, root: Path) -> None:
        """Load every namespace directory inside the resource-pack ``root``."""
        logger.debug("Loading resource packs from %s", root)
        for namespace_dir in sorted(root.iterdir()):
            if namespace_dir.is_dir():
                self.load_assets(namespace_dir.name, namespace_dir)

    def load_assets(self, namespace: str, pack_path: Path) -> None:
        """Load translations and advancements of a single namespace."""
        self.resource_handler.set_resource_pack_base_path(namespace, pack_path)

        lang_dir = pack_path / "lang"
        if lang_dir.is_dir():
            self.load_assets_lang(lang_dir)

        advancements_dir = pack_path / "advancements"
        if advancements_dir.is_dir():
            self.load_assets_advancements(namespace, advancements_dir)

    def load_assets_lang(self, lang_dir: Path) -> None:
        for lang_file in sorted(lang_dir.iterdir()):
            language = lang_file.name.split(".", 1)[0].lower()
            match lang_file.suffix:
                case ".lang":
                    translations = parse_lang_file(lang_file.read_text(encoding="utf-8"))
                case ".json":
                    translations = {
                        str(key): str(value)
                        for key, value in _read_json(lang_file).items()
                    }
                case _:
                    continue
            self.resource_handler.add_translations(language, translations)

    def load_assets_advancements(self, namespace: str, advancements_dir: Path) -> None:
        """Register every advancement JSON file below ``advancements_dir``."""
        for advancement_file in sorted(advancements_dir.rglob("*.json")):
            relative = advancement_file.relative_to(advancements_dir).with_suffix("")
            advancement_id = f"{namespace}:{relative.as_posix()}"
            contents = _read_json(advancement_file)
            display = contents.get("display")
            if not display:
                # Hidden root advancements carry no display block.
                continue
            self.resource_handler.add_advancement(
                advancement_id,
                Advancement(
                    icon=_icon_item(display.get("icon")),
                    title=_translate_key(display.get("title")),
                    description=_translate_key(display.get("description")),
                ),
            )


def parse_lang_file(text: str) -> dict[str, str]:
    """Parse ``key=value`` lines, ignoring blank lines and ``#`` comments."""
    translations: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.rstrip("\r")
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        translations[key] = value
    return translations


def _read_json(path: Path) -> dict[str, typ.Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _icon_item(icon: object) -> str:
    match icon:
        case {"item": str() as item}:
            return item
        case {"id": str() as item}:
            return item
        case str():
            return icon
        case _:
            return ""


def _translate_key(component: object) -> str:
    match component:
        case {"translate": str() as key}:
            return key
        case str():
            return component
        case _:
            return ""


__all__ = ["ResourceLoader", "parse_lang_file"]
