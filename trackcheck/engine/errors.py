"""Hard failures — raised when a source cannot be turned into pixels.

Everything else (narrow sections, missing start areas, ...) is a soft
finding reported inside the ValidationReport, never an exception.
"""

from __future__ import annotations


class TrackCheckError(Exception):
    """Base class for errors that abort a validation."""


class UnsupportedSourceKind(TrackCheckError):
    """The source object is not one of the supported source variants."""


class SourceLoadFailure(TrackCheckError):
    """A source reference could not be read, fetched or decoded."""
