"""In-memory store for translations, icons, advancements and keybindings.

The handler is filled once by :class:`~infobook_html.resources.loader.ResourceLoader`
and then read by the appendix handlers and the serializer. Translations and
icons merge on re-registration, while advancements and keybindings are
write-once and raise :class:`~infobook_html.errors.DuplicateResourceError`.

Example
-------
>>> handler = ResourceHandler()
>>> handler.add_translations("en_us", {"item.stone": "Stone"})
>>> handler.get_translation("item.stone", "de_de")
'Stone'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from infobook_html._constants import DEFAULT_LANGUAGE
from infobook_html.errors import DuplicateResourceError, ResourceLookupError

if typ.TYPE_CHECKING:
    from infobook_html.infobook.models import Fluid, Item

DEFAULT_TRANSLATIONS: dict[str, str] = {
    "gui.advancements": "Advancements",
    "block.minecraft.crafting_table": "Crafting Table",
    "block.minecraft.furnace": "Furnace",
    "gui.infobook.keybinding": "Keybinding",
    "gui.infobook.rewards": "Rewards",
    "gui.infobook.previous": "Previous",
    "gui.infobook.next": "Next",
    "gui.infobook.tag_index": "Tag Index",
}


@dc.dataclass(slots=True, frozen=True)
class Advancement:
    """Display data of an in-game advancement."""

    icon: str
    title: str
    description: str


class ResourceHandler:
    """Keyed lookups for everything the book needs from the game."""

    def __init__(self) -> None:
        self._translations: dict[str, dict[str, str]] = {
            DEFAULT_LANGUAGE: dict(DEFAULT_TRANSLATIONS)
        }
        self._item_icons: dict[str, dict[str, Path]] = {}
        self._item_translation_keys: dict[str, dict[str, str]] = {}
        self._fluid_icons: dict[str, Path] = {}
        self._fluid_translation_keys: dict[str, str] = {}
        self._advancements: dict[str, Advancement] = {}
        self._keybindings: dict[str, str] = {}
        self._pack_paths: dict[str, Path] = {}

    # Translations

    def get_languages(self) -> list[str]:
        """Return the default language followed by every other known language."""
        others = sorted(lang for lang in self._translations if lang != DEFAULT_LANGUAGE)
        return [DEFAULT_LANGUAGE, *others]

    def add_translations(self, language: str, translations: typ.Mapping[str, str]) -> None:
        """Merge ``translations`` into ``language``, overwriting existing keys."""
        self._translations.setdefault(language, {}).update(translations)

    def set_default_translation(self, key: str, value: str) -> None:
        """Register an English value for ``key`` unless one was already loaded."""
        self._translations[DEFAULT_LANGUAGE].setdefault(key, value)

    def get_translation(self, translation_key: str, language: str) -> str:
        """Return the translation of ``translation_key``, falling back to English.

        Raises
        ------
        ResourceLookupError
            If neither ``language`` nor English defines the key.
        """
        value = self._translations.get(language, {}).get(translation_key)
        if not value:
            value = self._translations[DEFAULT_LANGUAGE].get(translation_key)
        if not value:
            msg = f"Could not find translation key {translation_key} in {language}"
            raise ResourceLookupError(msg)
        return value

    # Items and fluids

    def add_item_icon(self, item_id: str, nbt: str, icon_file: Path) -> None:
        self._item_icons.setdefault(item_id, {})[nbt] = icon_file

    def get_item_icon_file(self, item_id: str, nbt: str = "") -> Path | None:
        """Return the icon for ``item_id``, preferring an exact ``nbt`` match."""
        return _first_or_exact(self._item_icons.get(item_id), nbt)

    def add_item_translation_key(self, item_id: str, nbt: str, translation_key: str) -> None:
        self._item_translation_keys.setdefault(item_id, {})[nbt] = translation_key

    def get_item_translation_key(self, item: Item) -> str | None:
        return _first_or_exact(self._item_translation_keys.get(item.item), item.nbt)

    def add_fluid_icon(self, fluid: str, icon_file: Path) -> None:
        self._fluid_icons[fluid] = icon_file

    def get_fluid_icon_file(self, fluid: str) -> Path | None:
        return self._fluid_icons.get(fluid)

    def add_fluid_translation_key(self, fluid: str, translation_key: str) -> None:
        self._fluid_translation_keys[fluid] = translation_key

    def get_fluid_translation_key(self, fluid: Fluid) -> str | None:
        return self._fluid_translation_keys.get(fluid.fluid)

    # Advancements and keybindings

    def add_advancement(self, advancement_id: str, advancement: Advancement) -> None:
        if advancement_id in self._advancements:
            msg = f"Tried to add a duplicate advancement {advancement_id}"
            raise DuplicateResourceError(msg)
        self._advancements[advancement_id] = advancement

    def get_advancement(self, advancement_id: str) -> Advancement:
        try:
            return self._advancements[advancement_id]
        except KeyError as exc:
            msg = f"Could not find the advancement {advancement_id}"
            raise ResourceLookupError(msg) from exc

    def add_keybinding(self, keybinding_id: str, key: str) -> None:
        if keybinding_id in self._keybindings:
            msg = f"Tried to add a duplicate keybinding {keybinding_id}"
            raise DuplicateResourceError(msg)
        self._keybindings[keybinding_id] = key

    def get_keybinding(self, keybinding_id: str) -> str:
        try:
            return self._keybindings[keybinding_id]
        except KeyError as exc:
            msg = f"Could not find the keybinding {keybinding_id}"
            raise ResourceLookupError(msg) from exc

    # Resource packs

    def set_resource_pack_base_path(self, namespace: str, path: Path) -> None:
        self._pack_paths[namespace] = path

    def expand_resource_path(self, resource: str) -> Path:
        """Resolve ``namespace:relative/path`` to a file inside a loaded pack.

        Raises
        ------
        ResourceLookupError
            If the namespace was never loaded.
        """
        namespace, sep, relative = resource.strip().partition(":")
        if not sep:
            msg = f"Resource path '{resource}' must be of the form 'namespace:path'"
            raise ResourceLookupError(msg)
        base = self._pack_paths.get(namespace)
        if base is None:
            msg = f"Could not find a resource pack for namespace '{namespace}'"
            raise ResourceLookupError(msg)
        return base / relative


def _first_or_exact(entries: dict[str, typ.Any] | None, nbt: str) -> typ.Any:
    """Return ``entries[nbt]`` or the first registered entry, or None."""
    if not entries:
        return None
    if nbt in entries:
        return entries[nbt]
    return next(iter(entries.values()))


__all__ = ["DEFAULT_TRANSLATIONS", "Advancement", "ResourceHandler"]
