"""Palette generation over OKHSL with contrast validation.

A palette is built from four numbers: saturation and lightness targets
(percentages), a hue offset in degrees and a color count. Hues are spread
evenly around the circle starting at the offset, every hue is rendered at the
same OKHSL saturation and lightness, and each resulting sRGB color is scored
against the background with both WCAG and APCA.

Colors that miss the ``ContrastPolicy`` are nudged along OKHSL lightness, in
the direction that increases contrast first and then the other, for a bounded
number of steps. A color that still fails is emitted anyway with
``threshold_met=False``; generation never aborts on contrast.

Randomize mode perturbs saturation and lightness per color within
``policy.max_perturbation`` (zero-mean across the palette, so the aggregate
stays on target) and jitters the hue while adjusting. It draws from a seeded
``numpy.random.Generator`` and is reproducible for a fixed seed.

The module also provides the exhaustive search used by the CLI's ``--pick``
option: scan a grid of (lightness, saturation, offset) triples and keep those
whose evenly spaced colors all pass the policy.
"""

import dataclasses
import numbers
import warnings
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .color_utils import delta_e_2000, parse_color
from .colorspace import ChromaCache, Color, Okhsl, normalize_hue, okhsl_to_srgb
from .contrast import (
    CONSERVATIVE_POLICY,
    DEFAULT_POLICY,
    ContrastPolicy,
    ContrastScore,
    evaluate_contrast,
    relative_luminance,
)
from .errors import ContrastUnmetWarning, InvalidParameterError

__all__ = [
    "GenerationParams",
    "GeneratedColor",
    "Palette",
    "ValidCombination",
    "even_hues",
    "generate_palette",
    "search_valid_combinations",
    "pick_combination",
]

DEFAULT_LIGHTNESS_STEP = 0.02
DEFAULT_MAX_RETRIES = 50
# OKHSL lightness band a failing color may fall back to; chroma vanishes
# toward l = 0 and l = 1 and every hue renders the same.
FALLBACK_LIGHTNESS = (0.1, 0.9)


def _coerce_background(background: Color | str) -> Color:
    if isinstance(background, Color):
        return background
    if isinstance(background, str):
        return parse_color(background)
    raise InvalidParameterError(f"Invalid background color: {background!r}")


def _check_number(name: str, value: object, low: float, high: float, inclusive: bool = True) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not np.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    upper_ok = value <= high if inclusive else value < high
    if not (low <= value and upper_ok):
        bracket = "]" if inclusive else ")"
        raise InvalidParameterError(f"{name} must be in [{low}, {high}{bracket}, got {value}")


@dataclass(frozen=True)
class GenerationParams:
    """Inputs of a palette generation run.

    Attributes:
        background: Background color, as a ``Color`` or any string accepted by
            ``parse_color``.
        saturation: OKHSL saturation target in percent, [0, 100].
        lightness: OKHSL lightness target in percent, [0, 100].
        offset: Hue of the first color in degrees, [0, 360).
        count: Number of colors, at least 1.
        randomize: Perturb saturation, lightness and hue per color.
        seed: Seed for randomize mode; ``None`` draws fresh entropy.
    """

    background: Color | str = "000000"
    saturation: float = 100
    lightness: float = 60
    offset: float = 0
    count: int = 6
    randomize: bool = False
    seed: int | None = None

    def validate(self) -> "GenerationParams":
        """Check every field and return a copy with the background parsed.

        Raises:
            InvalidParameterError: on any out-of-domain or malformed field.
        """
        _check_number("saturation", self.saturation, 0, 100)
        _check_number("lightness", self.lightness, 0, 100)
        _check_number("offset", self.offset, 0, 360, inclusive=False)
        if isinstance(self.count, bool) or not isinstance(self.count, numbers.Integral):
            raise InvalidParameterError(f"count must be an integer, got {self.count!r}")
        if self.count < 1:
            raise InvalidParameterError(f"count must be at least 1, got {self.count}")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral)
        ):
            raise InvalidParameterError(f"seed must be an integer, got {self.seed!r}")
        return dataclasses.replace(self, background=_coerce_background(self.background))


class GeneratedColor(NamedTuple):
    """One palette entry.

    ``hue`` is the evenly spaced target hue; ``okhsl`` holds the coordinates
    the color was actually rendered from after perturbation and adjustment.
    """

    color: Color
    hue: float
    okhsl: Okhsl
    score: ContrastScore
    threshold_met: bool

    @property
    def hex(self) -> str:
        return self.color.hex


@dataclass(frozen=True)
class Palette:
    background: Color
    colors: tuple[GeneratedColor, ...]
    policy: ContrastPolicy

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self):
        return iter(self.colors)

    @property
    def hex_codes(self) -> list[str]:
        return [entry.hex for entry in self.colors]

    @property
    def unmet(self) -> list[GeneratedColor]:
        return [entry for entry in self.colors if not entry.threshold_met]

    @property
    def all_met(self) -> bool:
        return not self.unmet

    def collisions(self) -> list[tuple[int, int, float]]:
        """Index pairs closer than ``policy.min_delta_e`` (CIEDE2000)."""
        found = []
        for i in range(len(self.colors)):
            for j in range(i + 1, len(self.colors)):
                distance = delta_e_2000(self.colors[i].color, self.colors[j].color)
                if distance < self.policy.min_delta_e:
                    found.append((i, j, distance))
        return found


class _Candidate(NamedTuple):
    okhsl: Okhsl
    color: Color
    score: ContrastScore


def even_hues(count: int, offset: float = 0.0) -> list[float]:
    """Hues ``offset + k * 360 / count`` (mod 360) for k in [0, count)."""
    return [normalize_hue(offset + k * 360.0 / count) for k in range(count)]


def _render(
    hue: float, saturation: float, lightness: float, background: Color, cache: ChromaCache | None
) -> _Candidate:
    okhsl = Okhsl(normalize_hue(hue), saturation, lightness)
    color = okhsl_to_srgb(okhsl, cache=cache)
    return _Candidate(okhsl, color, evaluate_contrast(color, background))


def _fit_color(
    hue: float,
    saturation: float,
    lightness: float,
    background: Color,
    policy: ContrastPolicy,
    rng: np.random.Generator | None,
    cache: ChromaCache | None,
    lightness_step: float,
    max_retries: int,
) -> tuple[_Candidate, bool]:
    """Render a color and walk its lightness until it passes the policy.

    Returns the first passing candidate, or the best one by policy margin
    together with ``False`` once both directions are exhausted. Only
    candidates inside ``FALLBACK_LIGHTNESS`` (or the requested color itself)
    can be that fallback, so failing hues keep their chroma instead of all
    collapsing to black or white.
    """
    first = _render(hue, saturation, lightness, background, cache)
    if policy.passes(first.score):
        return first, True

    best = first
    lighter = relative_luminance(first.color) >= relative_luminance(background)
    preferred = 1.0 if lighter else -1.0
    floor, ceiling = FALLBACK_LIGHTNESS

    for direction in (preferred, -preferred):
        for step in range(1, max_retries + 1):
            target = min(max(lightness + direction * step * lightness_step, 0.0), 1.0)
            jittered = hue
            if rng is not None and policy.max_hue_jitter > 0:
                jittered = hue + rng.uniform(-policy.max_hue_jitter, policy.max_hue_jitter)
            candidate = _render(jittered, saturation, target, background, cache)
            if policy.passes(candidate.score):
                return candidate, True
            if floor <= target <= ceiling and policy.margin(candidate.score) > policy.margin(
                best.score
            ):
                best = candidate
            if target in (0.0, 1.0):
                break

    return best, False


def _perturbations(rng: np.random.Generator, count: int, bound: float) -> np.ndarray:
    if bound <= 0:
        return np.zeros(count)
    offsets = rng.uniform(-bound, bound, count)
    if count > 1:
        offsets -= offsets.mean()
    return np.clip(offsets, -bound, bound)


def generate_palette(
    params: GenerationParams,
    policy: ContrastPolicy | None = None,
    cache: ChromaCache | None = None,
    lightness_step: float = DEFAULT_LIGHTNESS_STEP,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> Palette:
    """Generate ``params.count`` evenly spaced, contrast-checked colors.

    Args:
        params: Generation inputs; validated before any work is done.
        policy: Contrast thresholds. Defaults to ``CONSERVATIVE_POLICY`` in
            randomize mode and ``DEFAULT_POLICY`` otherwise.
        cache: Optional ``ChromaCache`` shared with other calls.
        lightness_step: OKHSL lightness increment of the adjustment walk.
        max_retries: Steps per direction of the adjustment walk.

    Returns:
        Palette: exactly ``params.count`` colors, in hue order.

    Raises:
        InvalidParameterError: if ``params`` fails validation.

    Warns:
        ContrastUnmetWarning: if any color still fails after adjustment.

    Examples:
        >>> palette = generate_palette(GenerationParams("000000", 70, 60, 0, 3))
        >>> len(palette)
        3
    """
    params = params.validate()
    if policy is None:
        policy = CONSERVATIVE_POLICY if params.randomize else DEFAULT_POLICY
    background = params.background

    saturation = params.saturation / 100.0
    lightness = params.lightness / 100.0
    hues = even_hues(params.count, params.offset)

    rng = None
    saturation_offsets = np.zeros(params.count)
    lightness_offsets = np.zeros(params.count)
    if params.randomize:
        rng = np.random.default_rng(params.seed)
        saturation_offsets = _perturbations(rng, params.count, policy.max_perturbation)
        lightness_offsets = _perturbations(rng, params.count, policy.max_perturbation)

    entries = []
    for hue, ds, dl in zip(hues, saturation_offsets, lightness_offsets):
        candidate, met = _fit_color(
            hue,
            min(max(saturation + float(ds), 0.0), 1.0),
            min(max(lightness + float(dl), 0.0), 1.0),
            background,
            policy,
            rng,
            cache,
            lightness_step,
            max_retries,
        )
        entries.append(GeneratedColor(candidate.color, hue, candidate.okhsl, candidate.score, met))

    palette = Palette(background, tuple(entries), policy)
    if not palette.all_met:
        warnings.warn(
            f"{len(palette.unmet)} of {len(palette)} colors do not meet "
            f"WCAG {policy.min_wcag} / APCA {policy.min_apca} against #{background.hex}",
            ContrastUnmetWarning,
            stacklevel=2,
        )
    return palette


@dataclass(frozen=True)
class ValidCombination:
    lightness: int  # 0-100
    saturation: int  # 0-100
    offset: int  # 0-359


def search_valid_combinations(
    background: Color | str,
    count: int = 6,
    policy: ContrastPolicy = CONSERVATIVE_POLICY,
    lightness_step: int = 5,
    saturation_step: int = 5,
    offset_step: int = 10,
    cache: ChromaCache | None = None,
) -> list[ValidCombination]:
    """Find every (lightness, saturation, offset) whose palette fully passes.

    Scans integer percentages and degrees on the given grid. A combination is
    kept when all ``count`` evenly spaced colors meet ``policy`` without any
    lightness adjustment.

    Raises:
        InvalidParameterError: for a malformed background, ``count < 1`` or a
            non-positive step.
    """
    bg = _coerce_background(background)
    if count < 1:
        raise InvalidParameterError(f"count must be at least 1, got {count}")
    if min(lightness_step, saturation_step, offset_step) < 1:
        raise InvalidParameterError("search steps must be positive integers")
    if cache is None:
        cache = ChromaCache()

    passed: dict[tuple[float, int, int], bool] = {}
    valid = []
    for lightness in range(0, 101, lightness_step):
        for saturation in range(0, 101, saturation_step):
            for offset in range(0, 360, offset_step):
                all_pass = True
                for hue in even_hues(count, offset):
                    key = (hue, saturation, lightness)
                    if key not in passed:
                        candidate = _render(hue, saturation / 100.0, lightness / 100.0, bg, cache)
                        passed[key] = policy.passes(candidate.score)
                    if not passed[key]:
                        all_pass = False
                        break
                if all_pass:
                    valid.append(ValidCombination(lightness, saturation, offset))
    return valid


def pick_combination(
    combinations: list[ValidCombination], seed: int | None = None
) -> ValidCombination | None:
    """Choose one combination at random; ``None`` when there are none."""
    if not combinations:
        return None
    rng = np.random.default_rng(seed)
    return combinations[int(rng.integers(len(combinations)))]
