"""Tests for termhue.cli module."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from termhue.cli import SAMPLE_TEXT, build_policy, main
from termhue.contrast import CONSERVATIVE_POLICY, DEFAULT_POLICY
from termhue.generator import ValidCombination
from termhue.schemes import SCHEMES


@pytest.fixture
def runner():
    return CliRunner()


class TestBuildPolicy:
    """Test command-line policy overrides."""

    def test_no_overrides(self):
        assert build_policy(DEFAULT_POLICY, None, None, None) == DEFAULT_POLICY

    def test_overrides_applied(self):
        policy = build_policy(CONSERVATIVE_POLICY, 3.0, None, 0.1)
        assert policy.min_wcag == 3.0
        assert policy.min_apca == CONSERVATIVE_POLICY.min_apca
        assert policy.max_perturbation == 0.1


class TestMainCLI:
    """Test the main CLI function."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "evenly spaced OKHSL hues" in result.output
        assert "--background" in result.output
        assert "--analyze" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "termhue, version" in result.output

    def test_default_run(self, runner):
        """With no arguments six colors are scored on black."""
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert result.output.count("WCAG:") == 6
        assert "Bold:" in result.output
        assert "Normal:" in result.output
        assert SAMPLE_TEXT.split()[0] in result.output

    def test_no_sample(self, runner):
        result = runner.invoke(main, ["-c", "3", "--no-sample"])
        assert result.exit_code == 0
        assert result.output.count("WCAG:") == 3
        assert "Bold:" not in result.output

    def test_json_output(self, runner):
        result = runner.invoke(main, ["-b", "1e1e2e", "-s", "70", "-l", "75", "-c", "8", "-F", "json"])
        assert result.exit_code == 0

        data = json.loads(result.output)
        assert data["background"] == "#1E1E2E"
        assert len(data["colors"]) == 8
        assert data["policy"]["min_wcag"] == DEFAULT_POLICY.min_wcag
        first = data["colors"][0]
        assert first["hex"].startswith("#")
        assert first["hue"] == 0.0
        assert {"wcag", "apca", "threshold_met", "okhsl"} <= set(first)

    def test_threshold_overrides(self, runner):
        result = runner.invoke(
            main, ["-b", "fdf6e3", "-l", "40", "--min-wcag", "4.5", "--min-apca", "60", "-F", "json"]
        )
        assert result.exit_code == 0
        policy = json.loads(result.output)["policy"]
        assert policy["min_wcag"] == 4.5
        assert policy["min_apca"] == 60.0

    def test_rgb_color_format(self, runner):
        result = runner.invoke(main, ["-c", "2", "--format", "rgb", "--no-sample"])
        assert result.exit_code == 0
        assert result.output.count("rgb(") == 2
        assert "#" not in result.output.split("|")[0]

    def test_color_format_in_json(self, runner):
        result = runner.invoke(main, ["-c", "2", "-f", "raw", "-F", "json"])
        assert result.exit_code == 0
        for entry in json.loads(result.output)["colors"]:
            assert entry["color"].startswith("(")
            assert entry["hex"].startswith("#")

    def test_background_formats(self, runner):
        result = runner.invoke(main, ["-b", "rgb(0, 0, 0)", "-c", "2", "-F", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["background"] == "#000000"

    def test_unmet_thresholds_hint(self, runner):
        result = runner.invoke(main, ["-b", "777777", "--min-wcag", "21", "--no-sample"])
        assert result.exit_code == 0
        assert "❌" in result.output
        assert "Change lightness and/or saturation for better contrast." in result.output

    def test_random_is_reproducible(self, runner):
        args = ["-r", "--seed", "42", "-F", "json"]
        first = runner.invoke(main, args)
        second = runner.invoke(main, args)
        assert first.exit_code == 0
        assert first.output == second.output
        assert json.loads(first.output)["policy"]["min_wcag"] == CONSERVATIVE_POLICY.min_wcag

    def test_invalid_background(self, runner):
        result = runner.invoke(main, ["-b", "invalid"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Invalid color format" in result.output

    def test_saturation_out_of_range(self, runner):
        result = runner.invoke(main, ["-s", "101"])
        assert result.exit_code == 2

    def test_zero_count_rejected(self, runner):
        result = runner.invoke(main, ["-c", "0"])
        assert result.exit_code == 2


class TestPickMode:
    """Test --pick."""

    @patch("termhue.cli.search_valid_combinations")
    def test_pick_uses_found_combination(self, mock_search, runner):
        mock_search.return_value = [ValidCombination(lightness=70, saturation=80, offset=30)]
        result = runner.invoke(main, ["--pick", "--seed", "1", "--no-sample"])

        assert result.exit_code == 0
        assert "Random mode: l=70 s=80 o=30" in result.output
        assert result.output.count("WCAG:") == 6
        mock_search.assert_called_once()

    @patch("termhue.cli.search_valid_combinations")
    def test_pick_json_skips_banner(self, mock_search, runner):
        mock_search.return_value = [ValidCombination(lightness=70, saturation=80, offset=30)]
        result = runner.invoke(main, ["--pick", "-c", "3", "-F", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["colors"][0]["hue"] == 30.0

    @patch("termhue.cli.search_valid_combinations")
    def test_pick_searches_with_overridden_policy(self, mock_search, runner):
        mock_search.return_value = [ValidCombination(lightness=70, saturation=80, offset=30)]
        result = runner.invoke(main, ["--pick", "--min-wcag", "15", "-c", "2", "-F", "json"])

        assert result.exit_code == 0
        _, kwargs = mock_search.call_args
        assert kwargs["count"] == 2
        assert kwargs["policy"].min_wcag == 15.0
        assert kwargs["policy"].min_apca == CONSERVATIVE_POLICY.min_apca
        assert json.loads(result.output)["policy"]["min_wcag"] == 15.0

    @patch("termhue.cli.search_valid_combinations")
    def test_pick_without_combinations(self, mock_search, runner):
        mock_search.return_value = []
        result = runner.invoke(main, ["--pick"])
        assert result.exit_code == 1
        assert "No valid combinations found for this background!" in result.output


class TestAnalyzeMode:
    """Test --analyze."""

    def test_all_schemes_json(self, runner):
        result = runner.invoke(main, ["-a", "-F", "json"])
        assert result.exit_code == 0
        reports = json.loads(result.output)
        assert [r["name"] for r in reports] == [s.name for s in SCHEMES.values()]
        for report in reports:
            assert report["wcag"]["min"] <= report["wcag"]["max"]
            assert report["wcag_failures"] >= 0

    def test_single_scheme(self, runner):
        result = runner.invoke(main, ["-a", "--scheme", "nord"])
        assert result.exit_code == 0
        assert "Nord Analysis:" in result.output
        assert "Dracula" not in result.output
        assert "Hue spacing variance" in result.output

    def test_unknown_scheme(self, runner):
        result = runner.invoke(main, ["-a", "--scheme", "solarized"])
        assert result.exit_code == 2

    def test_literal_colors(self, runner):
        result = runner.invoke(
            main, ["-a", "-b", "282a36", "--colors", "ff5555,50fa7b,f1fa8c", "-F", "json"]
        )
        assert result.exit_code == 0
        (report,) = json.loads(result.output)
        assert report["name"] == "Custom"
        assert report["background"] == "#282A36"
        assert [c["hex"] for c in report["colors"]] == ["#FF5555", "#50FA7B", "#F1FA8C"]

    def test_literal_colors_rgb_format(self, runner):
        result = runner.invoke(
            main, ["-a", "-b", "282a36", "--colors", "ff5555", "--format", "rgb"]
        )
        assert result.exit_code == 0
        assert "rgb(255, 85, 85)" in result.output

    def test_literal_colors_rejects_bad_hex(self, runner):
        result = runner.invoke(main, ["-a", "--colors", "ff5555,zzzzzz"])
        assert result.exit_code == 1
        assert "Error:" in result.output
