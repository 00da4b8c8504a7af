"""Exception and warning classes for termhue."""

__all__ = [
    "InvalidParameterError",
    "ContrastUnmetWarning",
    "ChromaSearchWarning",
]


class InvalidParameterError(ValueError):
    """Raised for malformed colors or out-of-domain generation parameters."""


class ContrastUnmetWarning(UserWarning):
    """Issued when generated colors still fail the contrast policy."""


class ChromaSearchWarning(RuntimeWarning):
    """Issued when the gamut-boundary search stops before its tolerance."""
