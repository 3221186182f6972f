"""
Terminal text decoration for diagnostic output.

Each function renders text with a ``rich`` style and returns a plain string
holding the ANSI sequences, so it can go through ``logging`` like any other
message. Decoration carries no meaning: when colour is disabled the functions
return the text unchanged.
"""

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

_BOLD = Style(bold=True)
_GREEN = Style(color="green")
_GREY = Style(color="bright_black")
_RED = Style(color="bright_red")
_YELLOW = Style(color="yellow")

_color_system = ColorSystem.STANDARD


def set_enabled(enabled: bool) -> None:
    """Globally enable or disable colour decoration."""
    global _color_system
    _color_system = ColorSystem.STANDARD if enabled else None


def is_enabled() -> bool:
    return _color_system is not None


def configure(mode: str, stream) -> None:
    """
    Apply a colour mode.

    Args:
        mode: 'always', 'never' or 'auto' (colour if rich detects a colour
            terminal behind ``stream``)
        stream: Stream the decorated text will be written to
    """
    if mode == "auto":
        console = Console(file=stream)
        set_enabled(console.is_terminal and console.color_system is not None)
    else:
        set_enabled(mode == "always")


def _render(style: Style, text: str) -> str:
    if _color_system is None:
        return text
    return style.render(text, color_system=_color_system)


def red(text: str) -> str:
    return _render(_RED, text)


def grey(text: str) -> str:
    return _render(_GREY, text)


def yellow(text: str) -> str:
    return _render(_YELLOW, text)


def green(text: str) -> str:
    return _render(_GREEN, text)


def bold(text: str) -> str:
    return _render(_BOLD, text)


__all__ = ["red", "grey", "yellow", "green", "bold", "set_enabled", "is_enabled", "configure"]
