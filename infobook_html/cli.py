"""Cyclopts CLI entrypoint for generating infobook HTML sites.

The ``infobook`` console script reads a build configuration, loads the
harvested registries, icons and resource packs it points at, and writes the
static multi-language site into an output directory.

Examples
--------
Generate a book into ``public``:

>>> from infobook_html.cli import app
>>> app(["generate", "infobook.yaml", "public"])  # doctest: +SKIP

Run with debug logging through the console entry point:

>>> from infobook_html.cli import main
>>> main(["generate", "infobook.yaml", "public", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import InfobookBuilder
from .config import InfobookConfigError, load_infobook_config
from .errors import InfobookError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="infobook", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Generate the static HTML site of an infobook.")
def generate(
    config: typ.Annotated[
        Path, Parameter(help="Path to the infobook config", env_var="INPUT_CONFIG")
    ],
    output_dir: typ.Annotated[
        Path, Parameter(help="Directory to write the site to", env_var="INPUT_OUTPUT_DIR")
    ],
    *,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug messages", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate every page of the configured infobook.

    Parameters
    ----------
    config : Path
        YAML or JSON configuration file (overridable via ``INPUT_CONFIG``).
    output_dir : Path
        Output directory; created when missing.
    verbose : bool, optional
        Log at DEBUG instead of INFO level.

    Raises
    ------
    InfobookConfigError
        If the configuration is incomplete.
    InfobookError
        If the book content or resources are invalid.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
    infobook_config = load_infobook_config(config)
    written = InfobookBuilder(infobook_config).run(output_dir)
    for path in written:
        print(f"wrote {_format_path(path)}")


def main(argv: cabc.Sequence[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``infobook`` command.

    Build failures are reported on stderr and end the process with exit
    status 1 instead of a traceback.

    Examples
    --------
    >>> main(["generate", "infobook.yaml", "public"])  # doctest: +SKIP
    """
    try:
        app(argv)
    except (InfobookError, InfobookConfigError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
