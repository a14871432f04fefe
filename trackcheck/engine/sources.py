"""Raster sources and their decoding into the canonical RGBA grid.

Three closed variants are supported, each with its own decode function:

    PixelBuffer     raw pixel bytes/array with explicit width and height
    ImageSource     a PIL image already in memory
    ImageReference  a data: URL, http(s) URL or filesystem path

Every source is resampled (nearest neighbour) to the canonical canvas size,
so all grid algorithms see exactly one resolution. Anything else raises
UnsupportedSourceKind; unreadable or undecodable input raises
SourceLoadFailure.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
import requests
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from trackcheck.engine.errors import SourceLoadFailure, UnsupportedSourceKind

logger = logging.getLogger(__name__)

# Pixels sampled from the RGBA buffer for the content fingerprint
FINGERPRINT_SAMPLES = 1000

# Socket timeout for http(s) references, in seconds
FETCH_TIMEOUT = 10.0


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    data: bytes | bytearray | NDArray[np.uint8]
    width: int
    height: int
    channels: int = 4


@dataclass(frozen=True, eq=False)
class ImageSource:
    image: Image.Image


@dataclass(frozen=True, eq=False)
class ImageReference:
    location: str


TrackSource = Union[PixelBuffer, ImageSource, ImageReference]


def _to_rgba(pixels: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Expand a (H, W, C) array with 1, 3 or 4 channels to RGBA."""
    h, w, channels = pixels.shape
    if channels == 4:
        return pixels
    opaque = np.full((h, w, 1), 255, dtype=np.uint8)
    if channels == 3:
        return np.concatenate([pixels, opaque], axis=2)
    if channels == 1:
        return np.concatenate([pixels, pixels, pixels, opaque], axis=2)
    raise SourceLoadFailure(f"Unsupported channel count: {channels}")


def _resample(rgba: NDArray[np.uint8], width: int, height: int) -> NDArray[np.uint8]:
    if rgba.shape[1] == width and rgba.shape[0] == height:
        return np.ascontiguousarray(rgba)
    image = Image.fromarray(np.ascontiguousarray(rgba))
    return np.array(image.resize((width, height), Image.Resampling.NEAREST))


def _flat_pixels(source: PixelBuffer) -> NDArray[np.uint8]:
    if isinstance(source.data, (bytes, bytearray)):
        return np.frombuffer(source.data, dtype=np.uint8)
    return np.asarray(source.data, dtype=np.uint8).reshape(-1)


def decode_pixel_buffer(source: PixelBuffer, width: int, height: int) -> NDArray[np.uint8]:
    if source.width <= 0 or source.height <= 0:
        raise SourceLoadFailure(f"Invalid buffer size {source.width}x{source.height}")
    flat = _flat_pixels(source)
    expected = source.width * source.height * source.channels
    if flat.size != expected:
        raise SourceLoadFailure(
            f"Pixel buffer has {flat.size} bytes, expected {expected} "
            f"({source.width}x{source.height}x{source.channels})"
        )
    pixels = flat.reshape(source.height, source.width, source.channels)
    return _resample(_to_rgba(pixels), width, height)


def decode_image(image: Image.Image, width: int, height: int) -> NDArray[np.uint8]:
    try:
        rgba = np.array(image.convert("RGBA"))
    except (OSError, ValueError) as e:
        raise SourceLoadFailure(f"Could not decode image: {e}") from e
    return _resample(rgba, width, height)


def decode_image_bytes(data: bytes, width: int, height: int) -> NDArray[np.uint8]:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise SourceLoadFailure(f"Could not decode image: {e}") from e
    return decode_image(image, width, height)


def _data_url_bytes(location: str) -> bytes:
    header, _, payload = location.partition(",")
    if not header.endswith(";base64"):
        raise SourceLoadFailure("Only base64 data: URLs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise SourceLoadFailure(f"Malformed data: URL: {e}") from e


def _get(location: str) -> bytes:
    response = requests.get(location, timeout=FETCH_TIMEOUT)
    response.raise_for_status()
    return response.content


async def _fetch(location: str) -> bytes:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, _get, location)
    except requests.exceptions.RequestException as e:
        raise SourceLoadFailure(f"Could not fetch {location}: {e}") from e


async def _read_path(location: str) -> bytes:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, Path(location).read_bytes)
    except OSError as e:
        raise SourceLoadFailure(f"Could not read {location}: {e}") from e


async def load_reference(source: ImageReference, width: int, height: int) -> NDArray[np.uint8]:
    location = source.location
    if location.startswith("data:"):
        data = _data_url_bytes(location)
    elif location.startswith(("http://", "https://")):
        data = await _fetch(location)
    else:
        data = await _read_path(location)
    logger.debug("Loaded %d bytes from %s", len(data), location[:80])
    return decode_image_bytes(data, width, height)


async def decode_source(
    source: TrackSource,
    width: int,
    height: int,
    timeout: float | None = None,
) -> NDArray[np.uint8]:
    """Decode any supported source to a (height, width, 4) uint8 RGBA array.

    Only ImageReference decoding suspends; ``timeout`` bounds that step.
    """
    if isinstance(source, PixelBuffer):
        return decode_pixel_buffer(source, width, height)
    if isinstance(source, ImageSource):
        return decode_image(source.image, width, height)
    if isinstance(source, ImageReference):
        try:
            return await asyncio.wait_for(load_reference(source, width, height), timeout)
        except asyncio.TimeoutError as e:
            raise SourceLoadFailure(
                f"Decoding {source.location[:80]} timed out after {timeout}s"
            ) from e
    raise UnsupportedSourceKind(f"Unsupported source type: {type(source).__name__}")


def content_fingerprint(rgba: NDArray[np.uint8], samples: int = FINGERPRINT_SAMPLES) -> str:
    """Hash of an evenly strided sample of whole pixels plus the buffer shape.

    Sampling takes every channel of each chosen pixel, so buffers differing
    only in alpha hash differently. Not a full content hash: edits that miss
    every sampled pixel collide.
    """
    pixels = rgba.reshape(-1, rgba.shape[-1])
    step = max(1, len(pixels) // samples)
    h = hashlib.sha256(str(rgba.shape).encode())
    h.update(np.ascontiguousarray(pixels[::step]).tobytes())
    return h.hexdigest()[:12]


def source_identity(source: TrackSource) -> str:
    """Key identifying a source before it is decoded, for sharing in-flight work."""
    if isinstance(source, ImageReference):
        return "ref:" + hashlib.sha256(source.location.encode()).hexdigest()[:12]
    if isinstance(source, PixelBuffer):
        h = hashlib.sha256(f"{source.width}x{source.height}x{source.channels}".encode())
        h.update(np.ascontiguousarray(_flat_pixels(source)).tobytes())
        return "px:" + h.hexdigest()[:12]
    if isinstance(source, ImageSource):
        return f"img:{id(source.image):x}"
    raise UnsupportedSourceKind(f"Unsupported source type: {type(source).__name__}")
