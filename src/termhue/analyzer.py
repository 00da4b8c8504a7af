"""Scoring of existing palettes.

``analyze_palette`` takes a fixed list of colors and a background and reports,
without changing any color:

* per color: OKHSL coordinates and WCAG / APCA scores against the background
* contrast spread: min / median / max WCAG ratio and APCA |Lc|, and how many
  colors fail each threshold of the policy
* coherence: circular hue gaps, the smallest hue delta, the variance of the
  gaps around the ideal ``360 / n`` spacing (0 for a perfectly even set) and
  the variance of saturation and lightness. Greys carry no hue and are left
  out of the hue figures.
* distinctness: the smallest pairwise CIEDE2000 distance
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .color_utils import delta_e_2000
from .colorspace import ChromaCache, Color, Okhsl, srgb_to_okhsl
from .contrast import DEFAULT_POLICY, ContrastPolicy, ContrastScore, evaluate_contrast
from .errors import InvalidParameterError
from .schemes import get_scheme

__all__ = ["ColorAnalysis", "AnalysisReport", "analyze_palette", "analyze_scheme", "hue_gaps"]

# OKHSL saturation below which a color counts as grey and is left out of the
# hue statistics.
ACHROMATIC_SATURATION = 1e-3


class ColorAnalysis(NamedTuple):
    color: Color
    okhsl: Okhsl
    score: ContrastScore
    wcag_pass: bool
    apca_pass: bool

    @property
    def hex(self) -> str:
        return self.color.hex

    @property
    def passes(self) -> bool:
        return self.wcag_pass and self.apca_pass


@dataclass(frozen=True)
class AnalysisReport:
    """Aggregate scores of one palette against one background."""

    name: str | None
    background: Color
    policy: ContrastPolicy
    colors: tuple[ColorAnalysis, ...]
    wcag_min: float
    wcag_median: float
    wcag_max: float
    apca_min: float
    apca_median: float
    apca_max: float
    wcag_failures: int
    apca_failures: int
    hue_gaps: tuple[float, ...]
    min_hue_delta: float | None
    hue_spacing_variance: float
    saturation_variance: float
    lightness_variance: float
    min_delta_e: float | None

    @property
    def failures(self) -> int:
        """Number of colors failing at least one threshold."""
        return sum(1 for entry in self.colors if not entry.passes)


def _as_color(value: Color | str) -> Color:
    return value if isinstance(value, Color) else Color.from_hex(value)


def hue_gaps(hues: list[float]) -> list[float]:
    """Angular gaps between neighbouring hues around the circle, smallest first.

    The gaps always sum to 360; a single hue has one gap of 360.
    """
    if not hues:
        return []
    ordered = sorted(h % 360.0 for h in hues)
    gaps = [b - a for a, b in zip(ordered, ordered[1:])]
    gaps.append(ordered[0] + 360.0 - ordered[-1])
    return sorted(gaps)


def analyze_palette(
    colors: list[Color | str],
    background: Color | str,
    policy: ContrastPolicy = DEFAULT_POLICY,
    name: str | None = None,
    cache: ChromaCache | None = None,
) -> AnalysisReport:
    """Score a fixed palette against a background.

    Args:
        colors: Colors as ``Color`` values or hex strings.
        background: Background as a ``Color`` or hex string.
        policy: Thresholds the failure counts are taken against.
        name: Optional label carried into the report.
        cache: Optional ``ChromaCache`` for the OKHSL conversions.

    Raises:
        InvalidParameterError: for an empty list or a malformed hex string.
    """
    if not colors:
        raise InvalidParameterError("Cannot analyze an empty palette")
    palette = [_as_color(value) for value in colors]
    bg = _as_color(background)

    entries = []
    for color in palette:
        score = evaluate_contrast(color, bg)
        entries.append(
            ColorAnalysis(
                color,
                srgb_to_okhsl(color, cache=cache),
                score,
                policy.passes_wcag(score),
                policy.passes_apca(score),
            )
        )

    wcag = np.array([entry.score.wcag for entry in entries])
    apca = np.abs(np.array([entry.score.apca for entry in entries]))
    saturation = np.array([entry.okhsl.s for entry in entries])
    lightness = np.array([entry.okhsl.l for entry in entries])

    # Hue is undefined for greys
    chromatic = [entry.okhsl.h for entry in entries if entry.okhsl.s >= ACHROMATIC_SATURATION]
    gaps = hue_gaps(chromatic)
    spacing_variance = 0.0
    if gaps:
        ideal = 360.0 / len(gaps)
        spacing_variance = float(np.mean((np.array(gaps) - ideal) ** 2))

    min_delta_e = None
    if len(palette) > 1:
        min_delta_e = min(
            delta_e_2000(palette[i], palette[j])
            for i in range(len(palette))
            for j in range(i + 1, len(palette))
        )

    return AnalysisReport(
        name=name,
        background=bg,
        policy=policy,
        colors=tuple(entries),
        wcag_min=float(wcag.min()),
        wcag_median=float(np.median(wcag)),
        wcag_max=float(wcag.max()),
        apca_min=float(apca.min()),
        apca_median=float(np.median(apca)),
        apca_max=float(apca.max()),
        wcag_failures=sum(1 for entry in entries if not entry.wcag_pass),
        apca_failures=sum(1 for entry in entries if not entry.apca_pass),
        hue_gaps=tuple(gaps),
        min_hue_delta=min(gaps) if len(gaps) > 1 else None,
        hue_spacing_variance=spacing_variance,
        saturation_variance=float(np.var(saturation)),
        lightness_variance=float(np.var(lightness)),
        min_delta_e=min_delta_e,
    )


def analyze_scheme(
    name: str, policy: ContrastPolicy = DEFAULT_POLICY, cache: ChromaCache | None = None
) -> AnalysisReport:
    """Analyze one of the reference schemes in ``termhue.schemes``."""
    scheme = get_scheme(name)
    return analyze_palette(
        list(scheme.colors), scheme.background, policy=policy, name=scheme.name, cache=cache
    )
