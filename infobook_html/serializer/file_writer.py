"""Copy auxiliary files into the shared ``assets`` output directory."""

from __future__ import annotations

import shutil
import typing as typ

from infobook_html._constants import ASSETS_DIRNAME

if typ.TYPE_CHECKING:
    from pathlib import Path


class FileWriter:
    """Write files below ``<output>/assets`` at most once per name.

    The set of written names is scoped to one serialization run and shared
    by every language, so an icon used on many pages is copied once.
    """

    def __init__(self, output_path: Path, base_url: str) -> None:
        self.assets_path = output_path / ASSETS_DIRNAME
        self.base_url = base_url
        self._written: set[str] = set()

    def write(self, base_name: str, source: Path) -> str:
        """Copy ``source`` to ``assets/<base_name>`` and return its URL."""
        if base_name not in self._written:
            target = self.assets_path / base_name
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            self._written.add(base_name)
        return f"{self.base_url}{ASSETS_DIRNAME}/{base_name}"

    @property
    def written(self) -> frozenset[str]:
        return frozenset(self._written)


__all__ = ["FileWriter"]
