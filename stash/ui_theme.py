"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the search and create screens. The plain theme
carries no escape codes and is used when color is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    title: str
    divider: str
    reverse: str
    reset: str
    prompt: str
    match: str
    item_dir: str
    item_file: str
    item_meta: str
    create_row: str
    field_focus: str
    toggle_on: str
    toggle_off: str
    hint: str
    error: str
    success: str


DEFAULT_THEME = UITheme(
    name="default",
    title="\033[1;36m",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    prompt="\033[2m",
    match="\033[36m",
    item_dir="\033[1;34m",
    item_file="\033[38;5;252m",
    item_meta="\033[2m",
    create_row="\033[32m",
    field_focus="\033[1;32m",
    toggle_on="\033[1;32m",
    toggle_off="\033[2m",
    hint="\033[2m",
    error="\033[31m",
    success="\033[32m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    title="\033[1;38;5;45m",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    prompt="\033[2;38;5;110m",
    match="\033[38;5;45m",
    item_dir="\033[1;38;5;45m",
    item_file="\033[38;5;252m",
    item_meta="\033[2;38;5;110m",
    create_row="\033[38;5;84m",
    field_focus="\033[1;38;5;45m",
    toggle_on="\033[1;38;5;84m",
    toggle_off="\033[2;38;5;110m",
    hint="\033[2;38;5;110m",
    error="\033[38;5;203m",
    success="\033[38;5;84m",
)

PLAIN_THEME = UITheme(
    name="plain",
    title="",
    divider="",
    reverse="",
    reset="",
    prompt="",
    match="",
    item_dir="",
    item_file="",
    item_meta="",
    create_row="",
    field_focus="",
    toggle_on="",
    toggle_off="",
    hint="",
    error="",
    success="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
