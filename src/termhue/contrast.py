"""WCAG and APCA contrast evaluation.

Two independent metrics are computed for every text/background pair:

* WCAG 2 contrast ratio, from relative luminance. Symmetric, range [1, 21].
* APCA lightness contrast (Lc), pinned at revision 0.0.98G-4g. Signed:
  positive for dark text on a light background, negative for light text on a
  dark background. APCA scores are only comparable between implementations
  that use the same revision, so the constants below must not be tuned.

Thresholds are not hardcoded in the algorithms. They live in
``ContrastPolicy`` records; ``DEFAULT_POLICY`` and ``CONSERVATIVE_POLICY`` are
the two stock configurations.
"""

from dataclasses import dataclass
from typing import NamedTuple

from .colorspace import Color, srgb_to_linear

__all__ = [
    "APCA_VERSION",
    "ContrastScore",
    "ContrastPolicy",
    "DEFAULT_POLICY",
    "CONSERVATIVE_POLICY",
    "relative_luminance",
    "wcag_contrast",
    "apca_luminance",
    "apca_contrast",
    "evaluate_contrast",
]

APCA_VERSION = "0.0.98G-4g"

_WCAG_WEIGHTS = (0.2126, 0.7152, 0.0722)

_APCA_TRC = 2.4
_APCA_COEFFICIENTS = (0.2126729, 0.7151522, 0.0721750)
_APCA_BLACK_THRESHOLD = 0.022
_APCA_BLACK_CLAMP = 1.414
_APCA_DELTA_Y_MIN = 0.0005
_APCA_NORMAL_BACKGROUND = 0.56
_APCA_NORMAL_TEXT = 0.57
_APCA_REVERSE_BACKGROUND = 0.65
_APCA_REVERSE_TEXT = 0.62
_APCA_SCALE = 1.14
_APCA_LOW_CLIP = 0.1
_APCA_OFFSET = 0.027


class ContrastScore(NamedTuple):
    """WCAG ratio and signed APCA Lc for one text/background pair."""

    wcag: float
    apca: float


@dataclass(frozen=True)
class ContrastPolicy:
    """Minimum contrast requirements and randomize-mode bounds.

    Attributes:
        min_wcag: Minimum WCAG contrast ratio against the background.
        min_apca: Minimum APCA |Lc| against the background.
        max_perturbation: Largest per-color saturation/lightness offset, as a
            fraction, applied in randomize mode.
        max_hue_jitter: Largest hue offset in degrees applied in randomize
            mode while searching for a passing color.
        min_delta_e: CIEDE2000 distance below which two palette colors are
            reported as a collision.
    """

    min_wcag: float = 7.0
    min_apca: float = 50.0
    max_perturbation: float = 0.05
    max_hue_jitter: float = 5.0
    min_delta_e: float = 10.0

    def passes_wcag(self, score: ContrastScore) -> bool:
        return score.wcag >= self.min_wcag

    def passes_apca(self, score: ContrastScore) -> bool:
        return abs(score.apca) >= self.min_apca

    def passes(self, score: ContrastScore) -> bool:
        return self.passes_wcag(score) and self.passes_apca(score)

    def margin(self, score: ContrastScore) -> float:
        """How far a score is from the policy; >= 1.0 means it passes.

        The smaller of the two metric ratios is returned so that improving the
        weaker metric always improves the margin.
        """
        ratios = [score.wcag / self.min_wcag if self.min_wcag > 0 else float("inf")]
        if self.min_apca > 0:
            ratios.append(abs(score.apca) / self.min_apca)
        return min(ratios)


# Thresholds the reference output is marked against.
DEFAULT_POLICY = ContrastPolicy(min_wcag=7.0, min_apca=50.0)

# Fixed thresholds of the random / exhaustive search mode.
CONSERVATIVE_POLICY = ContrastPolicy(min_wcag=4.5, min_apca=32.0, max_perturbation=0.05)


def relative_luminance(color: Color) -> float:
    """Compute WCAG relative luminance of an sRGB color.

    Uses the same inverse transfer function as ``srgb_to_linear``, weighted
    0.2126 R + 0.7152 G + 0.0722 B.

    Examples:
        >>> relative_luminance(Color(255, 255, 255))
        1.0
        >>> relative_luminance(Color(0, 0, 0))
        0.0
    """
    linear = srgb_to_linear(color)
    return sum(w * c for w, c in zip(_WCAG_WEIGHTS, linear))


def wcag_contrast(first: Color, second: Color) -> float:
    """WCAG 2 contrast ratio. Order-independent, in [1, 21]."""
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    light = max(l1, l2)
    dark = min(l1, l2)
    return (light + 0.05) / (dark + 0.05)


def apca_luminance(color: Color) -> float:
    """APCA screen luminance Y, using a plain 2.4 power curve per channel."""
    return sum(
        k * (c / 255.0) ** _APCA_TRC for k, c in zip(_APCA_COEFFICIENTS, color)
    )


def _soft_clamp_black(y: float) -> float:
    if y >= _APCA_BLACK_THRESHOLD:
        return y
    return y + (_APCA_BLACK_THRESHOLD - y) ** _APCA_BLACK_CLAMP


def apca_contrast(text: Color, background: Color) -> float:
    """Compute the APCA Lc of ``text`` drawn on ``background``.

    Returns a value around [-108, 106]. Pairs whose luminance difference is
    below APCA's delta-Y minimum, or whose raw contrast is inside the low
    clip, score exactly 0.

    Examples:
        >>> round(apca_contrast(Color(0, 0, 0), Color(255, 255, 255)), 1)
        106.0
        >>> round(apca_contrast(Color(255, 255, 255), Color(0, 0, 0)), 1)
        -107.9
    """
    y_text = _soft_clamp_black(apca_luminance(text))
    y_background = _soft_clamp_black(apca_luminance(background))

    if abs(y_background - y_text) < _APCA_DELTA_Y_MIN:
        return 0.0

    if y_text < y_background:
        # Dark text on a light background
        raw = (
            y_background**_APCA_NORMAL_BACKGROUND - y_text**_APCA_NORMAL_TEXT
        ) * _APCA_SCALE
    else:
        raw = (
            y_background**_APCA_REVERSE_BACKGROUND - y_text**_APCA_REVERSE_TEXT
        ) * _APCA_SCALE

    if abs(raw) < _APCA_LOW_CLIP:
        return 0.0
    if raw > 0:
        return (raw - _APCA_OFFSET) * 100.0
    return (raw + _APCA_OFFSET) * 100.0


def evaluate_contrast(text: Color, background: Color) -> ContrastScore:
    return ContrastScore(wcag_contrast(text, background), apca_contrast(text, background))
