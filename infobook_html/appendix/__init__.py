"""Appendix contracts and the built-in appendix types."""

from __future__ import annotations

from .ad import InfoBookAppendixAd
from .advancement_rewards import AdvancementRewardsAppendix, AdvancementRewardsAppendixHandler
from .base import AppendixHandler, InfoAppendix, element_text
from .image import ImageAppendix, ImageAppendixHandler
from .keybinding import KeybindingAppendix, KeybindingAppendixHandler
from .recipe import (
    AbstractRecipeHandler,
    CraftingRecipe,
    CraftingRecipeHandler,
    RecipeAppendix,
    SmeltingRecipe,
    SmeltingRecipeHandler,
    recipe_handlers,
)
from .tag_index import InfoBookAppendixTagIndex
from .textfield import TextfieldAppendix, TextfieldAppendixHandler

__all__ = [
    "AbstractRecipeHandler",
    "AdvancementRewardsAppendix",
    "AdvancementRewardsAppendixHandler",
    "AppendixHandler",
    "CraftingRecipe",
    "CraftingRecipeHandler",
    "ImageAppendix",
    "ImageAppendixHandler",
    "InfoAppendix",
    "InfoBookAppendixAd",
    "InfoBookAppendixTagIndex",
    "KeybindingAppendix",
    "KeybindingAppendixHandler",
    "RecipeAppendix",
    "SmeltingRecipe",
    "SmeltingRecipeHandler",
    "TextfieldAppendix",
    "TextfieldAppendixHandler",
    "element_text",
    "recipe_handlers",
]
