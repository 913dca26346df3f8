"""1-bit raster image encoding (GS v 0).

Each row is packed 8 pixels per byte, leftmost pixel in the most significant
bit. A set bit is a printed dot. Widths that are not a multiple of 8 are padded
on the right with blank pixels.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, Union

from escpos.constants import GS
from PIL import Image

import config
from exceptions import EncoderError, InvalidDimensionError

logger = logging.getLogger(__name__)

RASTER_IMAGE = GS + b"v0\x00"  # GS v 0, normal density

PixelSampler = Callable[[int, int], Union[int, Sequence[int]]]
ImageSource = Union[Image.Image, PixelSampler]


def _sampler(source: ImageSource, width: int, height: int) -> PixelSampler:
    """Return an (x, y) -> RGBA lookup for a PIL image or a sampling callable."""
    if isinstance(source, Image.Image):
        img = source.convert("RGBA")
        if img.size != (width, height):
            logger.debug("Resizing image from %s to %s", img.size, (width, height))
            img = img.resize((width, height), Image.Resampling.LANCZOS)
        pixels = img.load()
        return lambda x, y: pixels[x, y]
    if callable(source):
        return source
    raise TypeError(f"Expected PIL image or pixel callable, got {type(source).__name__}")


def is_ink(pixel: Union[int, Sequence[int]], threshold: int) -> bool:
    """Opaque (alpha >= 128) and darker than ``threshold`` counts as ink.

    ``pixel`` may be a bare grey level, or a tuple in L, LA, RGB or RGBA form.
    """
    if isinstance(pixel, int):
        pixel = (pixel,)
    if len(pixel) in (2, 4) and pixel[-1] < 128:
        return False
    if len(pixel) < 3:
        luminance = pixel[0]
    else:
        r, g, b = pixel[0], pixel[1], pixel[2]
        luminance = (299 * r + 587 * g + 114 * b) / 1000
    return luminance < threshold


def pack(
    sample: PixelSampler,
    width: int,
    height: int,
    threshold: int,
    invert: bool = False,
) -> bytes:
    """Pack sampled pixels into row-major raster bytes."""
    byte_width = (width + 7) // 8
    out = bytearray()
    for y in range(height):
        for column in range(byte_width):
            value = 0
            for bit in range(8):
                x = column * 8 + bit
                if x < width and is_ink(sample(x, y), threshold):
                    value |= 0x80 >> bit
            out.append(value ^ 0xFF if invert else value)
    return bytes(out)


def raster(
    source: ImageSource,
    width: int,
    height: int,
    threshold: int | None = None,
    invert: bool = False,
) -> bytes:
    """Encode an image as a single GS v 0 raster command.

    Args:
        source: PIL image (resized to ``width`` x ``height`` if needed) or a
            callable returning a grey level or an L, LA, RGB or RGBA
            tuple for pixel (x, y).
        width: Width in pixels; padded up to the next multiple of 8.
        height: Height in pixels (rows).
        threshold: Luminance below which an opaque pixel is ink
            (default ``config.IMAGE_THRESHOLD``).
        invert: Flip every bit, so ink clears the bit instead of setting it.

    Raises:
        InvalidDimensionError: Width or height below 1, or above what the
            two-byte header fields can carry.
        EncoderError: Threshold outside 0-256.
    """
    if width < 1 or height < 1:
        raise InvalidDimensionError(f"Image size must be positive, got {width}x{height}")
    byte_width = (width + 7) // 8
    if byte_width > 0xFFFF or height > 0xFFFF:
        raise InvalidDimensionError(f"Image too large for raster mode: {width}x{height}")
    if threshold is None:
        threshold = config.IMAGE_THRESHOLD
    if not 0 <= threshold <= 256:
        raise EncoderError(f"Threshold must be 0-256, got {threshold}")

    if width % 8:
        logger.debug("Padding image width %d to %d", width, byte_width * 8)

    data = pack(_sampler(source, width, height), width, height, threshold, invert)
    return (
        RASTER_IMAGE
        + byte_width.to_bytes(2, "little")
        + height.to_bytes(2, "little")
        + data
    )
