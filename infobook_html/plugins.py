"""Extension point for mods that need more than the built-in appendices.

A plugin is referenced from the configuration as ``module:attribute``. The
attribute may be an :class:`InfobookPlugin` subclass, which is instantiated
without arguments, or a ready-made instance.

Example
-------
>>> class Highlights(InfobookPlugin):
...     def load(self, initializer, resource_loader, config):
...         initializer.register_appendix_handler("highlight", HighlightHandler())
>>> plugins = load_plugins(["mymod_infobook.plugin:Highlights"])  # doctest: +SKIP
"""

from __future__ import annotations

import abc
import importlib
import logging
import typing as typ

from infobook_html.config import InfobookConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from infobook_html.config import InfobookConfig
    from infobook_html.infobook.initializer import InfoBookInitializer
    from infobook_html.resources import ResourceLoader
    from infobook_html.serializer import SerializeContext

logger = logging.getLogger(__name__)


class InfobookPlugin(abc.ABC):
    """Hook into resource loading, appendix registration and page heads."""

    assets_path: Path | None = None
    """Directory copied into the output ``assets`` after rendering."""

    @abc.abstractmethod
    def load(
        self,
        initializer: InfoBookInitializer,
        resource_loader: ResourceLoader,
        config: InfobookConfig,
    ) -> None:
        """Register handlers or resources before the book is initialized."""

    def get_head_suffix(self, context: SerializeContext) -> str:  # noqa: ARG002
        """Return HTML appended to every page's ``<head>``."""
        return ""


def load_plugin(path: str) -> InfobookPlugin:
    """Import the plugin named by a ``module:attribute`` path.

    Raises
    ------
    InfobookConfigError
        If the path is malformed or does not name a plugin.
    ModuleNotFoundError
        If the module cannot be imported.
    """
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        msg = f"Plugin path '{path}' must have the form module:attribute"
        raise InfobookConfigError(msg)

    target = getattr(importlib.import_module(module_name), attribute, None)
    if isinstance(target, type) and issubclass(target, InfobookPlugin):
        target = target()
    if not isinstance(target, InfobookPlugin):
        msg = f"Plugin path '{path}' does not refer to an InfobookPlugin"
        raise InfobookConfigError(msg)
    logger.debug("Loaded plugin %s", path)
    return target


def load_plugins(paths: cabc.Iterable[str]) -> list[InfobookPlugin]:
    """Import every plugin in ``paths``, preserving order."""
    return [load_plugin(path) for path in paths]


__all__ = ["InfobookPlugin", "load_plugin", "load_plugins"]
