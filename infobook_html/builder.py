"""End-to-end infobook build pipeline.

``InfobookBuilder`` wires the configuration to the resource loader, the book
initializer with its appendix handlers, any configured plugins and finally
the HTML serializer:

>>> from pathlib import Path
>>> from infobook_html.config import load_infobook_config
>>> builder = InfobookBuilder(load_infobook_config(Path("infobook.yaml")))  # doctest: +SKIP
>>> written = builder.run(Path("public"))  # doctest: +SKIP
>>> Path("public/index.html") in written  # doctest: +SKIP
True

Everything is read from and written to the local filesystem. A failure at
any stage aborts the build and leaves already written files in place.
"""

from __future__ import annotations

import logging
import typing as typ

from .appendix import (
    AdvancementRewardsAppendixHandler,
    ImageAppendixHandler,
    KeybindingAppendixHandler,
    TextfieldAppendixHandler,
    recipe_handlers,
)
from .infobook.initializer import InfoBookInitializer
from .plugins import load_plugins
from .resources import ResourceLoader
from .serializer import HtmlInfoBookSerializer, SerializeContext

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import InfobookConfig
    from .infobook.models import InfoBook
    from .plugins import InfobookPlugin
    from .resources import ResourceHandler

logger = logging.getLogger(__name__)


class InfobookBuilder:
    """Build the static HTML site of one mod's infobook."""

    def __init__(self, config: InfobookConfig, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : InfobookConfig
            Parsed build configuration with resolved paths.
        templates_dir : Path, optional
            Directory containing the page templates. Defaults to the
            templates shipped with the package.
        """
        self.config = config
        self.templates_dir = templates_dir
        self.resource_loader = ResourceLoader()
        self.plugins: list[InfobookPlugin] = []

    @property
    def resource_handler(self) -> ResourceHandler:
        return self.resource_loader.resource_handler

    def load_resources(self) -> None:
        """Load icons, registries, keybindings and resource packs.

        Raises
        ------
        FileNotFoundError
            If the icons or registries directory has not been generated.
        """
        config = self.config
        _require_dir(config.icons_dir, "exported item and fluid icons")
        _require_dir(config.registries_dir, "harvested registries")

        self.resource_loader.load_icons(config.icons_dir)
        self.resource_loader.load_registries(config.registries_dir)
        self.resource_loader.load_keybindings(config.keybindings)
        for resources_root in config.resources:
            self.resource_loader.load_all(resources_root)

    def create_initializer(self) -> InfoBookInitializer:
        """Return an initializer with every built-in appendix handler registered."""
        config = self.config
        initializer = InfoBookInitializer(
            mod_id=config.mod_id,
            base_dir=config.base_dir,
            sections_file=config.sections_file,
            resource_handler=self.resource_handler,
            injections=config.injections,
        )
        handler = self.resource_handler
        for appendix_type, recipe_handler in recipe_handlers(
            handler, config.registries_dir, config.recipe_overrides
        ):
            initializer.register_appendix_handler(appendix_type, recipe_handler)
        initializer.register_appendix_handler("image", ImageAppendixHandler(handler))
        initializer.register_appendix_handler("keybinding", KeybindingAppendixHandler(handler))
        initializer.register_appendix_handler("textfield", TextfieldAppendixHandler())
        initializer.register_appendix_handler(
            "advancement_rewards", AdvancementRewardsAppendixHandler(handler)
        )
        return initializer

    def build_book(self) -> InfoBook:
        """Load resources and plugins, then parse and assemble the book."""
        self.load_resources()
        initializer = self.create_initializer()
        self.plugins = load_plugins(self.config.plugins)
        for plugin in self.plugins:
            plugin.load(initializer, self.resource_loader, self.config)
        return initializer.initialize()

    def run(self, output_dir: Path) -> list[Path]:
        """Build the book and write the HTML site into ``output_dir``.

        Returns
        -------
        list[Path]
            Every HTML file written, default language first.
        """
        book = self.build_book()
        config = self.config
        context = SerializeContext(
            path=output_dir,
            base_url=config.base_url,
            mod_id=config.mod_id,
            resource_handler=self.resource_handler,
            title=config.title,
            colors=dict(config.theme.colors),
            head_suffix_getters=[plugin.get_head_suffix for plugin in self.plugins],
            google_adsense=config.google_adsense,
        )
        assets_paths = [
            *config.assets_dirs,
            *(plugin.assets_path for plugin in self.plugins if plugin.assets_path),
        ]
        serializer = HtmlInfoBookSerializer(templates_dir=self.templates_dir)
        written = serializer.serialize(book, context, assets_paths)
        logger.info("Wrote %d pages to %s", len(written), output_dir)
        return written


def _require_dir(path: Path, description: str) -> None:
    if not path.is_dir():
        msg = f"Could not find {description} at '{path}'."
        raise FileNotFoundError(msg)


__all__ = ["InfobookBuilder"]
