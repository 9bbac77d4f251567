"""Load and validate infobook build configuration.

The primary entry point is :func:`load_infobook_config`, which reads a YAML
(or JSON) file, checks the required ``mod_id``, ``base_dir`` and
``sections_file`` fields, resolves every path against the file's directory
and returns an :class:`InfobookConfig` ready for
:class:`~infobook_html.builder.InfobookBuilder`.

Examples
--------
>>> from pathlib import Path
>>> from infobook_html.config import load_infobook_config
>>> config = load_infobook_config(Path("infobook.yaml"))  # doctest: +SKIP
>>> config.mod_id  # doctest: +SKIP
'integrateddynamics'
"""

from .loader import build_infobook_config, load_infobook_config
from .models import (
    AdConfig,
    InfobookConfig,
    InfobookConfigError,
    InjectionConfig,
    ThemeConfig,
)

__all__ = [
    "AdConfig",
    "InfobookConfig",
    "InfobookConfigError",
    "InjectionConfig",
    "ThemeConfig",
    "build_infobook_config",
    "load_infobook_config",
]
