r"""Convert Minecraft formatting codes in translated text to HTML.

Codes are written as ``&`` or ``§`` followed by one code character
(``0``-``9``, ``a``-``f``, ``k``-``o``, ``r``); any other ``&`` is plain text. Style codes
(``l``, ``n``, ``o``, ``m``) are closed by the reset code ``r``; colour codes
(``1``-``9``, ``a``-``f``) are closed by ``0``. Codes without a matching
terminator are dropped.

Example
-------
>>> str(format_string("Use &lthis&r or &cthat&0 <b>"))
'Use <strong>this</strong> or <span style="color: #FF5555">that</span> &lt;b&gt;'
"""

from __future__ import annotations

import re

from markupsafe import Markup, escape

STYLE_TAGS: dict[str, str] = {
    "l": "strong",
    "n": "u",
    "o": "em",
    "m": "s",
}
COLORS: dict[str, str] = {
    "1": "#0000AA",
    "2": "#00AA00",
    "3": "#00AAAA",
    "4": "#AA0000",
    "5": "#AA00AA",
    "6": "#FFAA00",
    "7": "#AAAAAA",
    "8": "#555555",
    "9": "#5555FF",
    "a": "#55FF55",
    "b": "#55FFFF",
    "c": "#FF5555",
    "d": "#FF55FF",
    "e": "#FFFF55",
    "f": "#FFFFFF",
}
STYLE_PATTERN = re.compile(r"§([lnom])([^§]*)§r")
COLOR_PATTERN = re.compile(r"§([1-9a-f])([^§]*)§0")
CODE_CHARACTERS = "0-9a-fk-or"
AMPERSAND_CODE_PATTERN = re.compile(rf"&(?=[{CODE_CHARACTERS}])")
STRAY_CODE_PATTERN = re.compile(rf"§[{CODE_CHARACTERS}]")


def format_string(value: str) -> Markup:
    """Return ``value`` HTML-escaped with formatting codes turned into tags."""
    text = str(escape(AMPERSAND_CODE_PATTERN.sub("§", value)))

    def _style(match: re.Match[str]) -> str:
        tag = STYLE_TAGS[match.group(1)]
        return f"<{tag}>{match.group(2)}</{tag}>"

    def _color(match: re.Match[str]) -> str:
        return f'<span style="color: {COLORS[match.group(1)]}">{match.group(2)}</span>'

    # Nested codes resolve innermost first, so repeat until nothing matches.
    previous = None
    while previous != text:
        previous = text
        text = STYLE_PATTERN.sub(_style, text)
        text = COLOR_PATTERN.sub(_color, text)
    return Markup(STRAY_CODE_PATTERN.sub("", text))  # noqa: S704


__all__ = ["COLORS", "STYLE_TAGS", "format_string"]
