"""Common literal values used across infobook_html.

These constants keep output layout names, default translation keys and item
identifiers centralized so the parser, serializer, handlers and tests can
import the same values without drifting.

Examples
--------
>>> from infobook_html import _constants
>>> _constants.TAG_INDEX_KEY_TEMPLATE.format(mod_id="integrateddynamics")
'info_book.integrateddynamics.tag_index'
>>> _constants.DEFAULT_LANGUAGE
'en_us'
"""

DEFAULT_LANGUAGE = "en_us"
ASSETS_DIRNAME = "assets"
ICONS_DIRNAME = "icons"
INDEX_FILENAME = "index.html"
AIR_ITEM = "minecraft:air"
MINECRAFT_NAMESPACE = "minecraft"
WIKI_URL_TEMPLATE = "https://minecraft.wiki/w/{page}"
TAG_INDEX_KEY_TEMPLATE = "info_book.{mod_id}.tag_index"
FLUID_ICON_PREFIX = "fluid__"
ICON_NAME_SEPARATOR = "__"
