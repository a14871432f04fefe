"""trackcheck — raster race-track validation."""

from trackcheck.engine.config import ConcurrencyPolicy, MaskEncoding, ValidatorConfig
from trackcheck.engine.errors import SourceLoadFailure, TrackCheckError, UnsupportedSourceKind
from trackcheck.engine.report import Finding, Suggestion, ValidationReport
from trackcheck.engine.sources import ImageReference, ImageSource, PixelBuffer
from trackcheck.engine.validator import TrackValidator
from trackcheck.models.options import AreaSpec, ValidationOptions

__version__ = "0.1.0"

__all__ = [
    "AreaSpec",
    "ConcurrencyPolicy",
    "Finding",
    "ImageReference",
    "ImageSource",
    "MaskEncoding",
    "PixelBuffer",
    "SourceLoadFailure",
    "Suggestion",
    "TrackCheckError",
    "TrackValidator",
    "UnsupportedSourceKind",
    "ValidationOptions",
    "ValidationReport",
    "ValidatorConfig",
]
