"""Reference terminal color schemes used by analysis mode."""

from typing import NamedTuple

from .errors import InvalidParameterError

__all__ = ["ColorScheme", "SCHEMES", "get_scheme"]


class ColorScheme(NamedTuple):
    name: str
    background: str
    colors: tuple[str, ...]


SCHEMES: dict[str, ColorScheme] = {
    scheme.name.lower(): scheme
    for scheme in (
        ColorScheme("Nord", "2E3440", ("BF616A", "A3BE8C", "EBCB8B", "81A1C1", "B48EAD", "8FBCBB")),
        ColorScheme("Dracula", "282A36", ("FF5555", "50FA7B", "F1FA8C", "BD93F9", "FF79C6", "8BE9FD")),
        ColorScheme("Catppuccin", "1E1E2E", ("F38BA8", "A6E3A1", "F9E2AF", "89B4FA", "CBA6F7", "94E2D5")),
        ColorScheme("Gruvbox", "1D2021", ("FB4934", "B8BB26", "FABD2F", "83A598", "D3869B", "8EC07C")),
        ColorScheme("Rosepine", "191724", ("EB6F92", "31748F", "F6C177", "C4A7E7", "EBBCBA", "9CCFD8")),
    )
}


def get_scheme(name: str) -> ColorScheme:
    """Look up a scheme by case-insensitive name.

    Raises:
        InvalidParameterError: if no scheme has that name.
    """
    try:
        return SCHEMES[name.strip().lower()]
    except KeyError:
        known = ", ".join(scheme.name for scheme in SCHEMES.values())
        raise InvalidParameterError(f"Unknown scheme '{name}'. Known schemes: {known}") from None
