"""Color parsing, formatting and distance utilities for termhue."""

import re
import warnings

import colour
import numpy as np

from .colorspace import Color
from .errors import InvalidParameterError


def parse_hex_color(color_str: str) -> Color | None:
    """Parse hexadecimal color format RRGGBB or #RRGGBB."""
    try:
        return Color.from_hex(color_str)
    except InvalidParameterError:
        return None


def parse_rgb_color(color_str: str) -> Color | None:
    """Parse RGB color format rgb(R, G, B)."""
    pattern = r"rgb\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)"
    match = re.fullmatch(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    r, g, b = (int(match.group(i)) for i in (1, 2, 3))
    if not all(0 <= val <= 255 for val in (r, g, b)):
        return None

    return Color(r, g, b)


def _parse_cylindrical(color_str: str, prefix: str) -> tuple[float, float, float] | None:
    pattern = (
        prefix + r"\s*\(\s*(\d+(?:\.\d+)?)\s*,\s*"
        r"(\d+(?:\.\d+)?)\s*%\s*,\s*(\d+(?:\.\d+)?)\s*%\s*\)"
    )
    match = re.fullmatch(pattern, color_str.strip(), re.IGNORECASE)
    if not match:
        return None

    h, s, v = (float(match.group(i)) for i in (1, 2, 3))
    if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= v <= 100):
        return None
    return (h / 360, s / 100, v / 100)


def parse_hsl_color(color_str: str) -> Color | None:
    """Parse HSL color format hsl(H, S%, L%)."""
    hsl = _parse_cylindrical(color_str, "hsl")
    if hsl is None:
        return None
    rgb = colour.models.rgb.cylindrical.HSL_to_RGB(np.array(hsl))
    return Color.from_unit(tuple(rgb))


def parse_hsv_color(color_str: str) -> Color | None:
    """Parse HSV color format hsv(H, S%, V%)."""
    hsv = _parse_cylindrical(color_str, "hsv")
    if hsv is None:
        return None
    rgb = colour.models.rgb.cylindrical.HSV_to_RGB(np.array(hsv))
    return Color.from_unit(tuple(rgb))


def parse_color(color_str: str) -> Color:
    """Parse color string in various formats."""
    color_str = color_str.strip()

    parsers = [parse_hex_color, parse_rgb_color, parse_hsl_color, parse_hsv_color]

    for parser in parsers:
        result = parser(color_str)
        if result is not None:
            return result

    raise InvalidParameterError(
        f"Invalid color format: '{color_str}'. "
        "Supported formats: RRGGBB, #RRGGBB, rgb(R,G,B), hsl(H,S%,L%), hsv(H,S%,V%)"
    )


def parse_color_list(value: str) -> list[Color]:
    """Parse a comma or whitespace separated list of hex colors."""
    items = [item for item in re.split(r"[\s,]+", value.strip()) if item]
    if not items:
        raise InvalidParameterError("Empty color list")
    return [Color.from_hex(item) for item in items]


def format_color_output(colors: list[Color], format_type: str = "hex") -> list[str]:
    """Format colors for output."""
    formatted: list[str] = []

    for color in colors:
        if format_type == "hex":
            formatted.append(f"#{color.hex}")
        elif format_type == "rgb":
            formatted.append(f"rgb({color.r}, {color.g}, {color.b})")
        else:  # raw
            r, g, b = color.to_unit()
            formatted.append(f"({r:.4f}, {g:.4f}, {b:.4f})")

    return formatted


def _convert_rgb_to_lab(color: Color) -> np.ndarray:
    """Convert an sRGB color to CIE Lab for Delta E calculations."""
    xyz = colour.sRGB_to_XYZ(np.array(color.to_unit()))
    return colour.XYZ_to_Lab(xyz)


def delta_e_2000(first: Color, second: Color) -> float:
    """CIEDE2000 distance between two sRGB colors."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        lab1 = _convert_rgb_to_lab(first)
        lab2 = _convert_rgb_to_lab(second)
        return float(colour.difference.delta_E_CIE2000(lab1, lab2))
