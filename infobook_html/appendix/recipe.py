"""Recipe appendices backed by harvested recipe registries.

Each recipe type reads ``<registries>/<type>.json`` (``:`` replaced by
``__``), a mapping from output item id to a list of recipe records.
Configured overrides for the type are merged over the loaded mapping.

An appendix element's text selects recipes in one of three ways:

* ``minecraft:chest`` - the recipes registered for that output, narrowed to
  one by the ``index`` attribute (default ``0``);
* ``#forge:chests`` - every recipe whose record lists the tag;
* ``integrateddynamics:*_cable`` - a glob in which only ``*`` is special,
  collecting every recipe of every matching output id.
"""

from __future__ import annotations

import abc
import dataclasses as dc
import json
import logging
import math
import re
import typing as typ

from infobook_html._constants import AIR_ITEM
from infobook_html.errors import ParseError, RecipeNotFoundError
from infobook_html.infobook.models import Item
from infobook_html.templating import get_template

from .base import AppendixHandler, InfoAppendix, element_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from lxml import etree

    from infobook_html.resources import ResourceHandler
    from infobook_html.serializer import FileWriter, HtmlInfoBookSerializer, SerializeContext

logger = logging.getLogger(__name__)

RecipeRecord = dict[str, typ.Any]
RecipeRegistry = dict[str, list[RecipeRecord]]
RecipeOverrides = typ.Mapping[str, typ.Mapping[str, typ.Any]]

GRID_SIZE = 3
TAG_PREFIX = "#"
WILDCARD = "*"

_R = typ.TypeVar("_R")


def load_recipe_registry(path: Path) -> RecipeRegistry:
    """Read a recipe registry, wrapping single records into lists."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return {key: _as_record_list(value) for key, value in raw.items()}


def _as_record_list(value: typ.Any) -> list[RecipeRecord]:
    if isinstance(value, list):
        return list(value)
    return [value]


def wildcard_pattern(recipe_id: str) -> re.Pattern[str]:
    """Compile a glob where ``*`` matches anything and all else is literal."""
    return re.compile(".*".join(re.escape(part) for part in recipe_id.split(WILDCARD)))


class RecipeAppendix(InfoAppendix, typ.Generic[_R]):
    """One or more recipes rendered by the handler that selected them."""

    def __init__(self, handler: AbstractRecipeHandler[_R], recipes: list[_R]) -> None:
        self.handler = handler
        self.recipes = recipes

    def get_name(self, context: SerializeContext) -> str | None:
        return self.handler.resource_handler.get_translation(
            self.handler.name_translation_key, context.language
        )

    def to_html(
        self,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        return "<hr />".join(
            self.handler.serialize_recipe(recipe, context, file_writer, serializer)
            for recipe in self.recipes
        )


class AbstractRecipeHandler(AppendixHandler, typ.Generic[_R]):
    """Select recipes from a registry and render them with a template."""

    recipe_type: typ.ClassVar[str]
    name_translation_key: typ.ClassVar[str]

    def __init__(
        self,
        resource_handler: ResourceHandler,
        registries_path: Path,
        recipe_overrides: RecipeOverrides | None = None,
    ) -> None:
        self.resource_handler = resource_handler
        self.registry = load_recipe_registry(registries_path / self.registry_filename())
        if recipe_overrides and self.recipe_type in recipe_overrides:
            overrides = recipe_overrides[self.recipe_type] or {}
            self.registry = {
                **self.registry,
                **{key: _as_record_list(value) for key, value in overrides.items()},
            }

    @classmethod
    def registry_filename(cls) -> str:
        return f"{cls.recipe_type.replace(':', '__')}.json"

    def create_appendix(self, element: etree._Element, mod_id: str) -> InfoAppendix:  # noqa: ARG002
        recipe_id = element_text(element)
        try:
            index = int(element.get("index", 0))
        except ValueError as exc:
            msg = f"Recipe appendix {recipe_id} needs an integer index"
            raise ParseError(msg) from exc
        records = self.find_recipes(recipe_id, index)
        return RecipeAppendix(self, [self.parse_recipe(record) for record in records])

    def find_recipes(self, recipe_id: str, index: int = 0) -> list[RecipeRecord]:
        """Return the records selected by ``recipe_id``.

        Raises
        ------
        RecipeNotFoundError
            If nothing matches or ``index`` is out of range.
        """
        if WILDCARD in recipe_id:
            pattern = wildcard_pattern(recipe_id)
            records = [
                record
                for key, recipes in self.registry.items()
                if pattern.fullmatch(key)
                for record in recipes
            ]
        elif recipe_id.startswith(TAG_PREFIX):
            tag = recipe_id[len(TAG_PREFIX) :]
            records = [
                record
                for recipes in self.registry.values()
                for record in recipes
                if tag in (record.get("tags") or [])
            ]
        else:
            recipes = self.registry.get(recipe_id) or []
            if recipes and index >= len(recipes):
                msg = (
                    f"Could not find recipe {index} for {recipe_id} "
                    f"that only has {len(recipes)} recipes."
                )
                raise RecipeNotFoundError(msg)
            records = recipes[index : index + 1]

        if not records:
            msg = f"Could not find any {self.recipe_type} recipe for {recipe_id}"
            raise RecipeNotFoundError(msg)
        return records

    @abc.abstractmethod
    def parse_recipe(self, record: RecipeRecord) -> _R:
        """Convert a raw registry record into a typed recipe."""

    @abc.abstractmethod
    def serialize_recipe(
        self,
        recipe: _R,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        """Render a single recipe."""


def _parse_slot(slot: typ.Any) -> list[Item]:
    """Return the alternatives accepted by one input slot."""
    match slot:
        case None:
            return []
        case list():
            return [Item.from_payload(entry) for entry in slot if entry]
        case dict():
            return [Item.from_payload(slot)]
        case str():
            return [Item(item=slot)]
        case _:
            msg = f"Unsupported recipe input slot {slot!r}"
            raise TypeError(msg)


@dc.dataclass(slots=True, frozen=True)
class CraftingRecipe:
    """A shaped or shapeless crafting table recipe."""

    input: list[list[Item]]
    output: Item
    width: int | None = None
    height: int | None = None

    def grid(self) -> list[list[Item]]:
        """Return the nine cells of the 3x3 grid in row-major order.

        Shapeless recipes are laid out as the smallest square that fits the
        inputs; cells outside the recipe's bounds hold air.
        """
        width, height = self.width, self.height
        if not width or not height:
            count = len(self.input)
            width = height = math.isqrt(count - 1) + 1 if count else 0
        cells: list[list[Item]] = []
        for y in range(GRID_SIZE):
            for x in range(GRID_SIZE):
                items: list[Item] = []
                input_index = y * width + x
                if x < width and y < height and input_index < len(self.input):
                    items = self.input[input_index]
                cells.append(items or [Item(item=AIR_ITEM)])
        return cells


class CraftingRecipeHandler(AbstractRecipeHandler[CraftingRecipe]):
    """Render ``minecraft:crafting`` recipes as a 3x3 grid."""

    recipe_type = "minecraft:crafting"
    name_translation_key = "block.minecraft.crafting_table"

    def __init__(
        self,
        resource_handler: ResourceHandler,
        registries_path: Path,
        recipe_overrides: RecipeOverrides | None = None,
    ) -> None:
        super().__init__(resource_handler, registries_path, recipe_overrides)
        self.template = get_template("appendix/crafting_recipe.jinja")

    def parse_recipe(self, record: RecipeRecord) -> CraftingRecipe:
        return CraftingRecipe(
            input=[_parse_slot(slot) for slot in record.get("input", [])],
            output=Item.from_payload(record["output"]),
            width=record.get("width"),
            height=record.get("height"),
        )

    def serialize_recipe(
        self,
        recipe: CraftingRecipe,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        inputs = [
            [serializer.create_item_display(context, file_writer, item, True) for item in cell]
            for cell in recipe.grid()
        ]
        output = serializer.create_item_display(context, file_writer, recipe.output, True)
        return self.template.render(inputs=inputs, output=output)


@dc.dataclass(slots=True, frozen=True)
class SmeltingRecipe:
    """A furnace recipe; any one of ``input`` is smelted into ``output``."""

    input: list[Item]
    output: Item


class SmeltingRecipeHandler(AbstractRecipeHandler[SmeltingRecipe]):
    """Render ``minecraft:smelting`` recipes."""

    recipe_type = "minecraft:smelting"
    name_translation_key = "block.minecraft.furnace"
    furnace = Item(item="minecraft:furnace")

    def __init__(
        self,
        resource_handler: ResourceHandler,
        registries_path: Path,
        recipe_overrides: RecipeOverrides | None = None,
    ) -> None:
        super().__init__(resource_handler, registries_path, recipe_overrides)
        self.template = get_template("appendix/smelting_recipe.jinja")

    def parse_recipe(self, record: RecipeRecord) -> SmeltingRecipe:
        return SmeltingRecipe(
            input=_parse_slot(record.get("input")),
            output=Item.from_payload(record["output"]),
        )

    def serialize_recipe(
        self,
        recipe: SmeltingRecipe,
        context: SerializeContext,
        file_writer: FileWriter,
        serializer: HtmlInfoBookSerializer,
    ) -> str:
        return self.template.render(
            input=[
                serializer.create_item_display(context, file_writer, item, True)
                for item in recipe.input
            ],
            output=serializer.create_item_display(context, file_writer, recipe.output, True),
            appendix_icon=serializer.create_item_display(
                context, file_writer, self.furnace, False
            ),
        )


def recipe_handlers(
    resource_handler: ResourceHandler,
    registries_path: Path,
    recipe_overrides: RecipeOverrides | None = None,
) -> cabc.Iterator[tuple[str, AbstractRecipeHandler[typ.Any]]]:
    """Yield the built-in recipe handlers whose registry was harvested."""
    handler_types: tuple[tuple[str, type[AbstractRecipeHandler[typ.Any]]], ...] = (
        ("crafting_recipe", CraftingRecipeHandler),
        ("smelting_recipe", SmeltingRecipeHandler),
    )
    for appendix_type, handler_type in handler_types:
        if not (registries_path / handler_type.registry_filename()).exists():
            logger.info("No %s registry found, skipping", handler_type.recipe_type)
            continue
        yield appendix_type, handler_type(resource_handler, registries_path, recipe_overrides)


__all__ = [
    "AbstractRecipeHandler",
    "CraftingRecipe",
    "CraftingRecipeHandler",
    "RecipeAppendix",
    "SmeltingRecipe",
    "SmeltingRecipeHandler",
    "load_recipe_registry",
    "recipe_handlers",
    "wildcard_pattern",
]
