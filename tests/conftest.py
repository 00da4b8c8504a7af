"""Test configuration and fixtures for termhue tests."""

from typing import List, Tuple

import pytest
from hypothesis import settings

from termhue.colorspace import Color

# Configure hypothesis settings for faster tests
settings.register_profile("fast", max_examples=50, deadline=None)
settings.load_profile("fast")


@pytest.fixture
def sample_colors() -> List[Color]:
    """Provide sample sRGB colors for testing."""
    return [
        Color(0, 0, 0),        # Black
        Color(255, 255, 255),  # White
        Color(255, 0, 0),      # Red
        Color(0, 255, 0),      # Green
        Color(0, 0, 255),      # Blue
        Color(128, 128, 128),  # Gray
        Color(255, 255, 0),    # Yellow
        Color(255, 0, 255),    # Magenta
        Color(0, 255, 255),    # Cyan
    ]


@pytest.fixture
def known_oklab_values() -> List[Tuple[Color, Tuple[float, float, float]]]:
    """Provide sRGB colors with published OKLab coordinates."""
    return [
        (Color(255, 255, 255), (1.0, 0.0, 0.0)),
        (Color(0, 0, 0), (0.0, 0.0, 0.0)),
        (Color(255, 0, 0), (0.627955, 0.224863, 0.125846)),
        (Color(0, 255, 0), (0.866440, -0.233888, 0.179498)),
        (Color(0, 0, 255), (0.452014, -0.032457, -0.311528)),
    ]


@pytest.fixture
def known_luminance_values() -> List[Tuple[Color, float]]:
    """Provide colors with known WCAG relative luminance."""
    return [
        (Color(0, 0, 0), 0.0),
        (Color(255, 255, 255), 1.0),
        (Color(255, 0, 0), 0.2126),
        (Color(0, 255, 0), 0.7152),
        (Color(0, 0, 255), 0.0722),
    ]


@pytest.fixture
def invalid_color_formats() -> List[str]:
    """Provide examples of invalid color format strings."""
    return [
        "invalid",
        "#GG0000",             # Invalid hex characters
        "#FF00",               # Too short hex
        "#FF000000",           # Too long hex
        "rgb(256, 0, 0)",      # RGB value out of range
        "rgb(-1, 0, 0)",       # Negative RGB value
        "rgb(255, 0)",         # Missing RGB component
        "hsl(361, 50%, 50%)",  # HSL hue out of range
        "hsl(180, 101%, 50%)", # HSL saturation out of range
        "hsv(180, 50%, 101%)", # HSV value out of range
        "",                    # Empty string
        "   ",                 # Whitespace only
    ]


class ColorTestHelpers:
    """Helper class with utility methods for color testing."""

    @staticmethod
    def hue_distance(first: float, second: float) -> float:
        """Circular distance between two hues in degrees."""
        delta = abs(first - second) % 360.0
        return min(delta, 360.0 - delta)


@pytest.fixture
def color_helpers() -> ColorTestHelpers:
    """Provide helper methods for color testing."""
    return ColorTestHelpers()
