"""API request models."""

from __future__ import annotations

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, Field

from trackcheck.engine.errors import SourceLoadFailure, UnsupportedSourceKind
from trackcheck.engine.sources import ImageReference, ImageSource, PixelBuffer, TrackSource
from trackcheck.models.options import ValidationOptions

SOURCE_KINDS = ("pixels", "image", "url")


class SourcePayload(BaseModel):
    kind: str = Field(..., description="One of: pixels, image, url")
    data: str | None = Field(
        default=None,
        description="Base64 pixel bytes (pixels) or base64 encoded image file (image)",
    )
    width: int | None = Field(default=None, gt=0, description="Buffer width (pixels)")
    height: int | None = Field(default=None, gt=0, description="Buffer height (pixels)")
    channels: int = Field(default=4, description="Bytes per pixel: 1, 3 or 4 (pixels)")
    url: str | None = Field(default=None, description="http(s) or data: URL (url)")

    def to_source(self) -> TrackSource:
        """Resolve the payload into one of the engine's source variants."""
        if self.kind == "pixels":
            if self.width is None or self.height is None:
                raise SourceLoadFailure("Pixel sources need width and height")
            return PixelBuffer(
                data=_b64(self.data),
                width=self.width,
                height=self.height,
                channels=self.channels,
            )
        if self.kind == "image":
            try:
                image = Image.open(io.BytesIO(_b64(self.data)))
                image.load()
            except (UnidentifiedImageError, OSError) as e:
                raise SourceLoadFailure(f"Could not decode image: {e}") from e
            return ImageSource(image=image)
        if self.kind == "url":
            if not self.url or not self.url.startswith(("http://", "https://", "data:")):
                raise SourceLoadFailure("Only http(s) and data: URLs are accepted")
            return ImageReference(location=self.url)
        raise UnsupportedSourceKind(
            f"Unsupported source kind {self.kind!r} (expected one of {', '.join(SOURCE_KINDS)})"
        )


def _b64(data: str | None) -> bytes:
    if not data:
        raise SourceLoadFailure("Source data is empty")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SourceLoadFailure(f"Source data is not valid base64: {e}") from e


class ValidateRequest(BaseModel):
    source: SourcePayload = Field(..., description="Track raster to validate")
    options: ValidationOptions = Field(
        default_factory=ValidationOptions,
        description="Preset, area hints and cache control",
    )
