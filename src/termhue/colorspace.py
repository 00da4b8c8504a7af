"""Color space conversions for termhue.

This module converts colors between the spaces the palette engine works in:

    sRGB bytes (hex) <-> linear RGB <-> OKLab <-> OKLCH <-> OKHSL

OKLab is defined over linear light, so every path from a byte triplet goes
through the sRGB transfer function first. OKHSL is the parametrization the
generator uses: its saturation is expressed as a fraction of the largest
chroma that still fits inside the sRGB gamut at a given hue and lightness,
which is found with a bounded bisection (see ``max_chroma``).

Key Features:
    - Published OKLab matrices (Ottosson, linear sRGB variant), bit-exact
    - sRGB transfer functions from colour-science
    - Deterministic gamut-boundary chroma search (polynomial bracketing, bounded
      bisection)
    - Optional caller-owned ``ChromaCache`` for repeated (hue, lightness) pairs

Domain Handling:
    Hues wrap modulo 360 and fractional coordinates clamp into [0, 1]. None of
    the numeric conversions raise; only ``Color.from_hex`` rejects malformed
    input.

Example:
    >>> from termhue.colorspace import Color, srgb_to_okhsl
    >>> hsl = srgb_to_okhsl(Color.from_hex("FF0000"))
    >>> round(hsl.h, 1), round(hsl.l, 3)
    (29.2, 0.568)
"""

import math
import re
import warnings
from typing import NamedTuple

import colour
import numpy as np

from .errors import ChromaSearchWarning, InvalidParameterError

__all__ = [
    "Color",
    "LinearColor",
    "Oklab",
    "Oklch",
    "Okhsl",
    "ChromaCache",
    "srgb_to_linear",
    "linear_to_srgb",
    "linear_to_oklab",
    "oklab_to_linear",
    "oklab_to_oklch",
    "oklch_to_oklab",
    "oklch_to_okhsl",
    "okhsl_to_oklch",
    "srgb_to_oklab",
    "oklab_to_srgb",
    "srgb_to_okhsl",
    "okhsl_to_srgb",
    "max_chroma",
    "toe",
    "toe_inv",
    "normalize_hue",
]

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{6})")

# Linear sRGB -> LMS
_M1 = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ]
)

# LMS' (cube root) -> OKLab
_M2 = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)

# OKLab -> LMS'
_M2_INV = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)

# LMS -> linear sRGB
_M1_INV = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)

# OKHSL toe constants
_K1 = 0.206
_K2 = 0.03
_K3 = (1.0 + _K1) / (1.0 + _K2)

# No sRGB color has OKLab chroma above ~0.33, so this always brackets the edge.
CHROMA_CEILING = 0.5
GAMUT_EPSILON = 1e-6
_ROOT_IMAG_TOLERANCE = 1e-7
DEFAULT_CHROMA_TOLERANCE = 1e-4
DEFAULT_CHROMA_ITERATIONS = 20


class Color(NamedTuple):
    """An sRGB color as three 8-bit channels."""

    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``RRGGBB`` or ``#RRGGBB``."""
        match = _HEX_PATTERN.fullmatch(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidParameterError(
                f"Invalid hex color: {value!r}. Expected RRGGBB or #RRGGBB"
            )
        digits = match.group(1)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @classmethod
    def from_unit(cls, rgb: tuple[float, float, float]) -> "Color":
        """Build a color from channels in the [0, 1] range."""
        values = np.round(np.clip(np.asarray(rgb, dtype=float), 0.0, 1.0) * 255.0)
        r, g, b = (int(v) for v in values)
        return cls(r, g, b)

    @property
    def hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_unit(self) -> tuple[float, float, float]:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)


class LinearColor(NamedTuple):
    r: float
    g: float
    b: float


class Oklab(NamedTuple):
    L: float
    a: float
    b: float


class Oklch(NamedTuple):
    L: float
    C: float
    h: float


class Okhsl(NamedTuple):
    h: float
    s: float
    l: float  # noqa: E741


class ChromaCache:
    """Explicit memo for ``max_chroma`` results.

    The cache is owned by the caller and passed down through the conversion
    functions. Nothing is cached unless one is supplied.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[float, float, float, int], float] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: tuple[float, float, float, int]) -> float | None:
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: tuple[float, float, float, int], value: float) -> None:
        self._entries[key] = value

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


def _clamp01(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


def normalize_hue(hue: float) -> float:
    """Wrap a hue in degrees into [0, 360)."""
    wrapped = float(hue) % 360.0
    # -1e-17 % 360.0 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def srgb_to_linear(color: Color) -> LinearColor:
    """Apply the inverse sRGB transfer function to each channel.

    Channels at or below 0.04045 are scaled linearly (``c / 12.92``), the rest
    follow ``((c + 0.055) / 1.055) ** 2.4``.
    """
    encoded = np.asarray(color, dtype=float) / 255.0
    linear = colour.models.eotf_sRGB(encoded)
    r, g, b = (float(v) for v in linear)
    return LinearColor(r, g, b)


def linear_to_srgb(linear: LinearColor) -> Color:
    """Encode linear light as sRGB bytes, clamping out-of-gamut channels."""
    values = np.clip(np.asarray(linear, dtype=float), 0.0, 1.0)
    encoded = colour.models.eotf_inverse_sRGB(values)
    return Color.from_unit(encoded)


def linear_to_oklab(linear: LinearColor) -> Oklab:
    lms = _M1 @ np.asarray(linear, dtype=float)
    lab = _M2 @ np.cbrt(lms)
    L, a, b = (float(v) for v in lab)
    return Oklab(L, a, b)


def oklab_to_linear(lab: Oklab) -> LinearColor:
    lms = (_M2_INV @ np.asarray(lab, dtype=float)) ** 3
    r, g, b = (float(v) for v in _M1_INV @ lms)
    return LinearColor(r, g, b)


def oklab_to_oklch(lab: Oklab) -> Oklch:
    chroma = math.hypot(lab.a, lab.b)
    hue = normalize_hue(math.degrees(math.atan2(lab.b, lab.a)))
    return Oklch(lab.L, chroma, hue)


def oklch_to_oklab(lch: Oklch) -> Oklab:
    radians = math.radians(lch.h)
    return Oklab(lch.L, lch.C * math.cos(radians), lch.C * math.sin(radians))


def toe(x: float) -> float:
    """OKHSL lightness remap from OKLab L (the published toe function)."""
    k3x = _K3 * x
    return 0.5 * (k3x - _K1 + math.sqrt((k3x - _K1) ** 2 + 4.0 * _K2 * k3x))


def toe_inv(x: float) -> float:
    return (x * x + _K1 * x) / (_K3 * (x + _K2))


def _in_gamut(lightness: float, chroma: float, hue: float) -> bool:
    linear = oklab_to_linear(oklch_to_oklab(Oklch(lightness, chroma, hue)))
    return all(-GAMUT_EPSILON <= c <= 1.0 + GAMUT_EPSILON for c in linear)


def _channel_polynomials(lightness: float, hue: float) -> np.ndarray:
    """Linear R, G and B along the chroma ray as cubics in C (highest power first)."""
    radians = math.radians(hue)
    k = _M2_INV[:, 1] * math.cos(radians) + _M2_INV[:, 2] * math.sin(radians)
    # Each LMS channel is (L + C * k) ** 3
    lms_terms = np.stack(
        [k**3, 3.0 * lightness * k**2, 3.0 * lightness**2 * k, np.full(3, lightness**3)],
        axis=1,
    )
    return _M1_INV @ lms_terms


def _gamut_crossings(lightness: float, hue: float) -> list[float]:
    """Chromas in (0, CHROMA_CEILING) where some channel reaches 0 or 1."""
    crossings = []
    for poly in _channel_polynomials(lightness, hue):
        for target in (0.0, 1.0):
            shifted = poly.copy()
            shifted[-1] -= target
            for root in np.roots(shifted):
                if abs(root.imag) < _ROOT_IMAG_TOLERANCE and 0.0 < root.real < CHROMA_CEILING:
                    crossings.append(float(root.real))
    return sorted(crossings)


def _outer_bracket(lightness: float, hue: float) -> tuple[float, float]:
    """Bracket the largest in-gamut chroma on the ray.

    The sRGB gamut is not convex along an OKLCH chroma ray (near blue the ray
    leaves the cube and touches it again at a corner), so membership is
    sampled at every channel crossing and between neighbouring crossings.
    Membership is constant between crossings, so the largest in-gamut sample
    and the sample after it bracket the edge.
    """
    edges = [0.0, *_gamut_crossings(lightness, hue), CHROMA_CEILING]
    samples = [0.0]
    for low, high in zip(edges, edges[1:]):
        samples.extend((0.5 * (low + high), high))

    last = 0
    for index, chroma in enumerate(samples):
        if _in_gamut(lightness, chroma, hue):
            last = index
    return samples[last], samples[min(last + 1, len(samples) - 1)]


def max_chroma(
    hue: float,
    lightness: float,
    tolerance: float = DEFAULT_CHROMA_TOLERANCE,
    max_iterations: int = DEFAULT_CHROMA_ITERATIONS,
    cache: ChromaCache | None = None,
) -> float:
    """Find the largest in-gamut OKLCH chroma at a hue and OKLab lightness.

    Linear sRGB is a cubic in chroma along a fixed (hue, lightness) ray, so
    the points where a channel leaves [0, 1] are found as polynomial roots
    and used to bracket the outermost in-gamut chroma (see
    ``_outer_bracket``). The bracket is then bisected, testing each midpoint
    by projecting it to linear sRGB and checking that no channel would need
    clamping. The search stops once the bracket is narrower than
    ``tolerance`` or after ``max_iterations`` halvings, whichever comes
    first, and returns the in-gamut side of the bracket.

    Args:
        hue: Hue in degrees; wrapped into [0, 360).
        lightness: OKLab L; clamped into [0, 1].
        tolerance: Width of the final chroma bracket.
        max_iterations: Hard cap on bisection steps.
        cache: Optional memo shared between calls by the caller.

    Returns:
        float: The maximum chroma found. Black and white have zero chroma.

    Warns:
        ChromaSearchWarning: if the iteration cap is hit before the bracket
            narrows to ``tolerance``. The best estimate is still returned.
    """
    hue = normalize_hue(hue)
    lightness = _clamp01(lightness)
    key = (hue, lightness, float(tolerance), int(max_iterations))
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    if lightness <= 0.0 or lightness >= 1.0:
        result = 0.0
    elif _in_gamut(lightness, CHROMA_CEILING, hue):
        result = CHROMA_CEILING
    else:
        low, high = _outer_bracket(lightness, hue)
        iterations = 0
        while high - low > tolerance and iterations < max_iterations:
            mid = 0.5 * (low + high)
            if _in_gamut(lightness, mid, hue):
                low = mid
            else:
                high = mid
            iterations += 1
        if high - low > tolerance:
            warnings.warn(
                f"Chroma search at h={hue:.2f} L={lightness:.4f} stopped after "
                f"{iterations} iterations (bracket {high - low:.2e})",
                ChromaSearchWarning,
                stacklevel=2,
            )
        result = low

    if cache is not None:
        cache.put(key, result)
    return result


def oklch_to_okhsl(lch: Oklch, cache: ChromaCache | None = None) -> Okhsl:
    lightness = _clamp01(lch.L)
    hue = normalize_hue(lch.h)
    limit = max_chroma(hue, lightness, cache=cache)
    saturation = min(max(lch.C, 0.0) / limit, 1.0) if limit > 0.0 else 0.0
    return Okhsl(hue, saturation, _clamp01(toe(lightness)))


def okhsl_to_oklch(hsl: Okhsl, cache: ChromaCache | None = None) -> Oklch:
    hue = normalize_hue(hsl.h)
    lightness = _clamp01(toe_inv(_clamp01(hsl.l)))
    chroma = _clamp01(hsl.s) * max_chroma(hue, lightness, cache=cache)
    return Oklch(lightness, chroma, hue)


def srgb_to_oklab(color: Color) -> Oklab:
    return linear_to_oklab(srgb_to_linear(color))


def oklab_to_srgb(lab: Oklab) -> Color:
    return linear_to_srgb(oklab_to_linear(lab))


def srgb_to_okhsl(color: Color, cache: ChromaCache | None = None) -> Okhsl:
    """Convert an sRGB color to OKHSL (hue in degrees, s and l in [0, 1])."""
    return oklch_to_okhsl(oklab_to_oklch(srgb_to_oklab(color)), cache=cache)


def okhsl_to_srgb(hsl: Okhsl, cache: ChromaCache | None = None) -> Color:
    """Convert OKHSL to sRGB bytes; the result is always a valid color."""
    return oklab_to_srgb(oklch_to_oklab(okhsl_to_oklch(hsl, cache=cache)))
