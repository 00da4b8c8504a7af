"""Command-line interface for termhue."""

import dataclasses
import json
import sys
import warnings

import click

from . import __version__
from .analyzer import AnalysisReport, analyze_palette, analyze_scheme
from .color_utils import format_color_output, parse_color, parse_color_list
from .colorspace import ChromaCache, Color
from .contrast import CONSERVATIVE_POLICY, DEFAULT_POLICY, ContrastPolicy
from .generator import (
    GenerationParams,
    Palette,
    generate_palette,
    pick_combination,
    search_valid_combinations,
)
from .schemes import SCHEMES

SAMPLE_TEXT = (
    "Lorem ipsum dolor sit amet consectetur adipiscing elit. Quisque faucibus ex "
    "sapien vitae pellentesque sem placerat. In id cursus mi pretium tellus duis "
    "convallis. Tempus leo eu aenean sed diam urna tempor. Pulvinar vivamus fringilla "
    "lacus nec metus bibendum egestas. Iaculis massa nisl malesuada lacinia integer "
    "nunc posuere. Ut hendrerit semper vel class aptent taciti sociosqu. Ad litora "
    "torquent per conubia nostra inceptos himenaeos."
)

PASS_MARK = "✅"
FAIL_MARK = "❌"


def _mark(passed: bool) -> str:
    return PASS_MARK if passed else FAIL_MARK


def _label(color: Color, color_format: str) -> str:
    return format_color_output([color], color_format)[0]


def _swatch(text: str, color: Color, background: Color, bold: bool = True) -> str:
    return click.style(text, fg=tuple(color), bg=tuple(background), bold=bold)


def build_policy(
    base: ContrastPolicy,
    min_wcag: float | None,
    min_apca: float | None,
    max_perturbation: float | None,
) -> ContrastPolicy:
    """Apply command-line overrides to a stock policy."""
    overrides = {}
    if min_wcag is not None:
        overrides["min_wcag"] = min_wcag
    if min_apca is not None:
        overrides["min_apca"] = min_apca
    if max_perturbation is not None:
        overrides["max_perturbation"] = max_perturbation
    return dataclasses.replace(base, **overrides)


def print_sample_text(colors: list[Color], background: Color) -> None:
    """Print the sample paragraph cycling through the palette, bold then normal."""
    words = SAMPLE_TEXT.split()
    for label, bold in (("Bold", True), ("Normal", False)):
        click.echo()
        click.echo(f"{label}:")
        styled = [
            _swatch(word, colors[i % len(colors)], background, bold=bold)
            for i, word in enumerate(words)
        ]
        click.echo(" ".join(styled))


def _palette_to_json(palette: Palette, color_format: str = "hex") -> dict:
    return {
        "background": f"#{palette.background.hex}",
        "policy": dataclasses.asdict(palette.policy),
        "colors": [
            {
                "hex": f"#{entry.hex}",
                "color": _label(entry.color, color_format),
                "hue": round(entry.hue, 4),
                "okhsl": {
                    "h": round(entry.okhsl.h, 4),
                    "s": round(entry.okhsl.s, 4),
                    "l": round(entry.okhsl.l, 4),
                },
                "wcag": round(entry.score.wcag, 4),
                "apca": round(entry.score.apca, 4),
                "threshold_met": entry.threshold_met,
            }
            for entry in palette
        ],
    }


def _report_to_json(report: AnalysisReport, color_format: str = "hex") -> dict:
    return {
        "name": report.name,
        "background": f"#{report.background.hex}",
        "colors": [
            {
                "hex": f"#{entry.hex}",
                "color": _label(entry.color, color_format),
                "okhsl": {
                    "h": round(entry.okhsl.h, 4),
                    "s": round(entry.okhsl.s, 4),
                    "l": round(entry.okhsl.l, 4),
                },
                "wcag": round(entry.score.wcag, 4),
                "apca": round(entry.score.apca, 4),
                "wcag_pass": entry.wcag_pass,
                "apca_pass": entry.apca_pass,
            }
            for entry in report.colors
        ],
        "wcag": {"min": report.wcag_min, "median": report.wcag_median, "max": report.wcag_max},
        "apca": {"min": report.apca_min, "median": report.apca_median, "max": report.apca_max},
        "wcag_failures": report.wcag_failures,
        "apca_failures": report.apca_failures,
        "min_hue_delta": report.min_hue_delta,
        "hue_spacing_variance": report.hue_spacing_variance,
        "saturation_variance": report.saturation_variance,
        "lightness_variance": report.lightness_variance,
        "min_delta_e": report.min_delta_e,
    }


def print_palette(palette: Palette, sample: bool = True, color_format: str = "hex") -> None:
    for entry in palette:
        swatch = _swatch(_label(entry.color, color_format), entry.color, palette.background)
        wcag_mark = _mark(palette.policy.passes_wcag(entry.score))
        apca_mark = _mark(palette.policy.passes_apca(entry.score))
        click.echo(
            f"{swatch} | WCAG: {entry.score.wcag:.2f} {wcag_mark} "
            f"| APCA: {entry.score.apca:.0f} {apca_mark}"
        )

    if sample:
        print_sample_text([entry.color for entry in palette], palette.background)

    if not palette.all_met:
        click.echo("\nChange lightness and/or saturation for better contrast.")


def print_report(report: AnalysisReport, color_format: str = "hex") -> None:
    click.echo(f"\n{report.name or 'Palette'} Analysis:")
    click.echo(f"Background: #{report.background.hex}")
    click.echo("─" * 65)
    for entry in report.colors:
        swatch = _swatch(_label(entry.color, color_format), entry.color, report.background)
        click.echo(
            f"{swatch} | WCAG: {entry.score.wcag:5.2f} {_mark(entry.wcag_pass)} "
            f"| APCA: {entry.score.apca:4.0f} {_mark(entry.apca_pass)} "
            f"| H:{entry.okhsl.h:6.1f}° S:{entry.okhsl.s * 100:4.1f}% "
            f"L:{entry.okhsl.l * 100:4.1f}%"
        )
    click.echo(
        f"WCAG min/median/max: {report.wcag_min:.2f} / {report.wcag_median:.2f} / "
        f"{report.wcag_max:.2f} ({report.wcag_failures} failing)"
    )
    click.echo(
        f"APCA min/median/max: {report.apca_min:.0f} / {report.apca_median:.0f} / "
        f"{report.apca_max:.0f} ({report.apca_failures} failing)"
    )
    min_hue = "n/a" if report.min_hue_delta is None else f"{report.min_hue_delta:.1f}°"
    min_de = "n/a" if report.min_delta_e is None else f"{report.min_delta_e:.1f}"
    click.echo(
        f"Hue spacing variance: {report.hue_spacing_variance:.1f} "
        f"(min hue delta {min_hue}, min ΔE2000 {min_de})"
    )
    click.echo(
        f"Saturation variance: {report.saturation_variance:.4f} | "
        f"Lightness variance: {report.lightness_variance:.4f}"
    )


@click.command()
@click.version_option(version=__version__, prog_name="termhue")
@click.option(
    "-b",
    "--background",
    default="000000",
    show_default=True,
    help="Background color: RRGGBB, #RRGGBB, rgb(R,G,B), hsl(H,S%,L%) or hsv(H,S%,V%)",
)
@click.option(
    "-s",
    "--saturation",
    type=click.IntRange(0, 100),
    default=100,
    show_default=True,
    help="OKHSL saturation in percent",
)
@click.option(
    "-l",
    "--lightness",
    type=click.IntRange(0, 100),
    default=60,
    show_default=True,
    help="OKHSL lightness in percent",
)
@click.option(
    "-o",
    "--offset",
    type=click.IntRange(0, 359),
    default=0,
    show_default=True,
    help="Hue of the first color in degrees",
)
@click.option(
    "-c",
    "--count",
    type=click.IntRange(min=1),
    default=6,
    show_default=True,
    help="Number of colors to generate",
)
@click.option(
    "-r",
    "--random",
    "randomize",
    is_flag=True,
    help="Perturb saturation, lightness and hue per color around the targets",
)
@click.option("--seed", type=int, default=None, help="Seed for --random and --pick")
@click.option(
    "--pick",
    is_flag=True,
    help=(
        "Pick lightness, saturation and offset at random among combinations "
        "whose colors all pass the conservative thresholds"
    ),
)
@click.option(
    "-a",
    "--analyze",
    is_flag=True,
    help="Analyze reference schemes (or --colors) instead of generating",
)
@click.option(
    "--scheme",
    "schemes",
    multiple=True,
    type=click.Choice([scheme.name for scheme in SCHEMES.values()], case_sensitive=False),
    help="Scheme to analyze (repeatable; default: all)",
)
@click.option(
    "--colors",
    "literal_colors",
    default=None,
    help="Comma-separated hex colors to analyze against --background",
)
@click.option(
    "--min-wcag",
    type=click.FloatRange(1.0, 21.0),
    default=None,
    help="Minimum WCAG contrast ratio (default: 7.0, or 4.5 with --random/--pick)",
)
@click.option(
    "--min-apca",
    type=click.FloatRange(0.0, 108.0),
    default=None,
    help="Minimum APCA |Lc| (default: 50, or 32 with --random/--pick)",
)
@click.option(
    "--max-perturbation",
    type=click.FloatRange(0.0, 0.5),
    default=None,
    help="Largest per-color saturation/lightness offset for --random (default: 0.05)",
)
@click.option(
    "-f",
    "--format",
    "color_format",
    type=click.Choice(["hex", "rgb", "raw"], case_sensitive=False),
    default="hex",
    help="Notation for each color (default: hex)",
)
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["grid", "json"], case_sensitive=False),
    default="grid",
    help="Output format (default: grid)",
)
@click.option(
    "--sample/--no-sample",
    default=True,
    help="Print sample text in the generated colors (grid format only)",
)
def main(
    background: str,
    saturation: int,
    lightness: int,
    offset: int,
    count: int,
    randomize: bool,
    seed: int | None,
    pick: bool,
    analyze: bool,
    schemes: tuple[str, ...],
    literal_colors: str | None,
    min_wcag: float | None,
    min_apca: float | None,
    max_perturbation: float | None,
    color_format: str,
    output_format: str,
    sample: bool,
) -> None:
    """Generate terminal palettes with evenly spaced OKHSL hues.

    Every color is checked against the background with both WCAG 2 and APCA
    contrast. Use --analyze to score well-known schemes the same way.

    Examples:

        termhue

        termhue -b 1e1e2e -s 70 -l 75 -c 8

        termhue -b "#fdf6e3" -l 40 --min-wcag 4.5 --min-apca 60

        termhue -r --seed 7 --format rgb

        termhue --pick

        termhue -a --scheme nord --scheme dracula

        termhue -a -b 282a36 --colors ff5555,50fa7b,f1fa8c -F json
    """
    output_format = output_format.lower()
    color_format = color_format.lower()
    try:
        base = CONSERVATIVE_POLICY if (randomize or pick) else DEFAULT_POLICY
        policy = build_policy(base, min_wcag, min_apca, max_perturbation)
        cache = ChromaCache()

        if analyze:
            if literal_colors is not None:
                reports = [
                    analyze_palette(
                        parse_color_list(literal_colors),
                        parse_color(background),
                        policy=policy,
                        name="Custom",
                        cache=cache,
                    )
                ]
            else:
                names = schemes or tuple(scheme.name for scheme in SCHEMES.values())
                reports = [analyze_scheme(name, policy=policy, cache=cache) for name in names]

            if output_format == "json":
                click.echo(
                    json.dumps([_report_to_json(r, color_format) for r in reports], indent=2)
                )
            else:
                for report in reports:
                    print_report(report, color_format)
            return

        bg = parse_color(background)

        if pick:
            combinations = search_valid_combinations(bg, count=count, policy=policy, cache=cache)
            combo = pick_combination(combinations, seed)
            if combo is None:
                click.echo("No valid combinations found for this background!", err=True)
                sys.exit(1)
            lightness, saturation, offset = combo.lightness, combo.saturation, combo.offset
            if output_format != "json":
                click.echo(f"Random mode: l={lightness} s={saturation} o={offset}\n")

        params = GenerationParams(
            background=bg,
            saturation=saturation,
            lightness=lightness,
            offset=offset,
            count=count,
            randomize=randomize,
            seed=seed,
        )
        # Unmet thresholds are shown inline
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            palette = generate_palette(params, policy=policy, cache=cache)

        if output_format == "json":
            click.echo(json.dumps(_palette_to_json(palette, color_format), indent=2))
        else:
            print_palette(palette, sample=sample, color_format=color_format)

    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
