"""Tests for termhue.color_utils module."""

from unittest.mock import patch

import pytest

from termhue.color_utils import (
    delta_e_2000,
    format_color_output,
    parse_color,
    parse_color_list,
    parse_hex_color,
    parse_hsl_color,
    parse_hsv_color,
    parse_rgb_color,
)
from termhue.colorspace import Color
from termhue.errors import InvalidParameterError


class TestParseHexColor:
    """Test the parse_hex_color function."""

    def test_valid_hex_uppercase(self):
        assert parse_hex_color("#FF0000") == Color(255, 0, 0)

    def test_valid_hex_lowercase(self):
        assert parse_hex_color("#00ff00") == Color(0, 255, 0)

    def test_valid_hex_without_hash(self):
        assert parse_hex_color("0000Ff") == Color(0, 0, 255)

    def test_valid_hex_with_whitespace(self):
        assert parse_hex_color("  #FFFFFF  ") == Color(255, 255, 255)

    def test_invalid_too_short(self):
        assert parse_hex_color("#FF00") is None

    def test_invalid_too_long(self):
        assert parse_hex_color("#FF000000") is None

    def test_invalid_non_hex_chars(self):
        assert parse_hex_color("#GGGGGG") is None


class TestParseRgbColor:
    """Test the parse_rgb_color function."""

    def test_valid_rgb_basic(self):
        assert parse_rgb_color("rgb(255, 0, 0)") == Color(255, 0, 0)

    def test_valid_rgb_with_extra_spaces(self):
        assert parse_rgb_color("rgb( 0 , 255 , 0 )") == Color(0, 255, 0)

    def test_valid_rgb_case_insensitive(self):
        assert parse_rgb_color("RGB(0, 0, 255)") == Color(0, 0, 255)

    def test_invalid_rgb_out_of_range_high(self):
        assert parse_rgb_color("rgb(256, 0, 0)") is None

    def test_invalid_rgb_out_of_range_negative(self):
        assert parse_rgb_color("rgb(-1, 0, 0)") is None

    def test_invalid_rgb_wrong_format(self):
        assert parse_rgb_color("rgb(255, 0)") is None


class TestParseCylindrical:
    """Test the parse_hsl_color and parse_hsv_color functions."""

    def test_hsl_primary(self):
        assert parse_hsl_color("hsl(0, 100%, 50%)") == Color(255, 0, 0)

    def test_hsl_with_decimals(self):
        assert parse_hsl_color("hsl(180.5, 75.5%, 25.5%)") is not None

    def test_hsl_edge_values(self):
        assert parse_hsl_color("hsl(0, 0%, 0%)") == Color(0, 0, 0)
        assert parse_hsl_color("hsl(360, 100%, 100%)") == Color(255, 255, 255)

    def test_hsl_out_of_range(self):
        assert parse_hsl_color("hsl(361, 50%, 50%)") is None
        assert parse_hsl_color("hsl(180, 101%, 50%)") is None
        assert parse_hsl_color("hsl(180, 50, 50)") is None

    def test_hsv_primary(self):
        assert parse_hsv_color("hsv(120, 100%, 100%)") == Color(0, 255, 0)

    def test_hsv_out_of_range(self):
        assert parse_hsv_color("hsv(180, 50%, 101%)") is None
        assert parse_hsv_color("hsv(180, 50)") is None

    @patch("colour.models.rgb.cylindrical.HSL_to_RGB")
    def test_hsl_uses_colour_science(self, mock_hsl_to_rgb):
        mock_hsl_to_rgb.return_value = (1.0, 0.5, 0.0)
        assert parse_hsl_color("hsl(30, 100%, 50%)") == Color(255, 128, 0)
        mock_hsl_to_rgb.assert_called_once()


class TestParseColor:
    """Test the parse_color function."""

    def test_parse_color_formats(self):
        assert parse_color("#FF0000") == Color(255, 0, 0)
        assert parse_color("ff0000") == Color(255, 0, 0)
        assert parse_color("rgb(0, 255, 0)") == Color(0, 255, 0)
        assert parse_color("hsl(240, 100%, 50%)") == Color(0, 0, 255)
        assert parse_color("hsv(120, 100%, 100%)") == Color(0, 255, 0)

    def test_parse_color_invalid(self, invalid_color_formats):
        for value in invalid_color_formats:
            with pytest.raises(ValueError) as exc_info:
                parse_color(value)
            assert isinstance(exc_info.value, InvalidParameterError)
            assert "Supported formats" in str(exc_info.value)

    def test_parse_color_list(self):
        assert parse_color_list("ff0000, 00ff00 #0000ff") == [
            Color(255, 0, 0),
            Color(0, 255, 0),
            Color(0, 0, 255),
        ]

    def test_parse_color_list_rejects_bad_items(self):
        with pytest.raises(InvalidParameterError):
            parse_color_list("ff0000,nothex")
        with pytest.raises(InvalidParameterError):
            parse_color_list(" , ")


class TestFormatColorOutput:
    """Test the format_color_output function."""

    def test_format_hex(self, sample_colors):
        result = format_color_output(sample_colors[2:5], "hex")
        assert result == ["#FF0000", "#00FF00", "#0000FF"]

    def test_format_rgb(self):
        result = format_color_output([Color(255, 0, 0), Color(0, 128, 0)], "rgb")
        assert result == ["rgb(255, 0, 0)", "rgb(0, 128, 0)"]

    def test_format_raw(self):
        result = format_color_output([Color(255, 0, 0), Color(51, 51, 51)], "raw")
        assert result == ["(1.0000, 0.0000, 0.0000)", "(0.2000, 0.2000, 0.2000)"]

    def test_format_default_hex(self):
        assert format_color_output([Color(1, 2, 3)]) == ["#010203"]


class TestDeltaE2000:
    """Test the CIEDE2000 distance helper."""

    def test_identical_colors(self):
        assert delta_e_2000(Color(10, 120, 200), Color(10, 120, 200)) == pytest.approx(0.0, abs=1e-6)

    def test_symmetry(self):
        first, second = Color(50, 70, 90), Color(150, 170, 190)
        assert delta_e_2000(first, second) == pytest.approx(delta_e_2000(second, first))

    def test_black_white_is_large(self):
        assert delta_e_2000(Color(0, 0, 0), Color(255, 255, 255)) > 90
