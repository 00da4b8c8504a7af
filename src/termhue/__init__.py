"""termhue - Terminal palettes from OKHSL hues with WCAG and APCA contrast checks"""

__version__ = "0.1.0"

from .analyzer import AnalysisReport, analyze_palette, analyze_scheme
from .color_utils import format_color_output, parse_color
from .colorspace import ChromaCache, Color, Okhsl, Oklab, Oklch, okhsl_to_srgb, srgb_to_okhsl
from .contrast import (
    CONSERVATIVE_POLICY,
    DEFAULT_POLICY,
    ContrastPolicy,
    ContrastScore,
    apca_contrast,
    evaluate_contrast,
    wcag_contrast,
)
from .errors import ChromaSearchWarning, ContrastUnmetWarning, InvalidParameterError
from .generator import GenerationParams, Palette, generate_palette

__all__ = [
    "generate_palette",
    "GenerationParams",
    "Palette",
    "analyze_palette",
    "analyze_scheme",
    "AnalysisReport",
    "Color",
    "Oklab",
    "Oklch",
    "Okhsl",
    "ChromaCache",
    "okhsl_to_srgb",
    "srgb_to_okhsl",
    "ContrastPolicy",
    "ContrastScore",
    "DEFAULT_POLICY",
    "CONSERVATIVE_POLICY",
    "wcag_contrast",
    "apca_contrast",
    "evaluate_contrast",
    "parse_color",
    "format_color_output",
    "InvalidParameterError",
    "ContrastUnmetWarning",
    "ChromaSearchWarning",
]
