"""Tests for raster image packing."""

from unittest.mock import patch

import pytest
from PIL import Image

from exceptions import EncoderError, InvalidDimensionError
from raster import is_ink, raster

HEADER_8X8 = [29, 118, 48, 0, 1, 0, 8, 0]
INK = (0, 0, 0, 255)
BLANK = (0, 0, 0, 0)


@pytest.fixture(autouse=True)
def mock_config():
    with patch("raster.config") as mock_cfg:
        mock_cfg.IMAGE_THRESHOLD = 128
        yield mock_cfg


@pytest.fixture
def dot_image():
    """8x8 transparent image with one black pixel at the top-left."""
    img = Image.new("RGBA", (8, 8), BLANK)
    img.putpixel((0, 0), INK)
    return img


def test_single_dot_sets_msb(dot_image):
    assert raster(dot_image, 8, 8) == bytes(HEADER_8X8 + [0x80] + [0x00] * 7)


def test_single_dot_inverted(dot_image):
    assert raster(dot_image, 8, 8, invert=True) == bytes(HEADER_8X8 + [0x7F] + [0xFF] * 7)


def test_rows_are_row_major():
    img = Image.new("RGB", (16, 2), (255, 255, 255))
    img.putpixel((15, 0), (0, 0, 0))
    img.putpixel((8, 1), (0, 0, 0))
    result = raster(img, 16, 2)
    assert result[:8] == bytes([29, 118, 48, 0, 2, 0, 2, 0])
    assert result[8:] == bytes([0x00, 0x01, 0x00, 0x80])


def test_width_is_padded_to_multiple_of_eight():
    img = Image.new("L", (10, 1), 0)  # all black
    result = raster(img, 10, 1)
    assert result[:8] == bytes([29, 118, 48, 0, 2, 0, 1, 0])
    # Two real pixels in the second byte, the six padding pixels stay blank
    assert result[8:] == bytes([0xFF, 0xC0])


def test_callable_source():
    def checker(x, y):
        return INK if (x + y) % 2 == 0 else BLANK

    result = raster(checker, 8, 2)
    assert result[8:] == bytes([0b10101010, 0b01010101])


def test_callable_rgb_tuple_is_opaque():
    result = raster(lambda x, y: (0, 0, 0), 8, 1)
    assert result[8:] == b"\xff"


def test_callable_grey_and_la_pixels():
    def grey(x, y):
        return 0 if x < 4 else 255

    assert raster(grey, 8, 1)[8:] == b"\xf0"
    assert raster(lambda x, y: (0, 255 if x % 2 else 0), 8, 1)[8:] == b"\x55"


def test_image_is_resized_to_requested_size():
    img = Image.new("RGB", (32, 32), (0, 0, 0))
    result = raster(img, 8, 4)
    assert result[:8] == bytes([29, 118, 48, 0, 1, 0, 4, 0])
    assert result[8:] == b"\xff" * 4


def test_threshold(mock_config):
    grey = Image.new("RGB", (8, 1), (100, 100, 100))
    assert raster(grey, 8, 1)[8:] == b"\xff"
    assert raster(grey, 8, 1, threshold=50)[8:] == b"\x00"
    mock_config.IMAGE_THRESHOLD = 90
    assert raster(grey, 8, 1)[8:] == b"\x00"


@pytest.mark.parametrize(
    "pixel, expected",
    [
        ((0, 0, 0, 255), True),
        ((0, 0, 0, 0), False),
        ((0, 0, 0, 127), False),
        ((255, 255, 255, 255), False),
        ((127, 127, 127), True),
        ((128, 128, 128), False),
        (0, True),
        (255, False),
        ((0,), True),
        ((200,), False),
        ((0, 255), True),
        ((0, 0), False),
    ],
)
def test_is_ink(pixel, expected):
    assert is_ink(pixel, 128) is expected


@pytest.mark.parametrize("width, height", [(0, 8), (8, 0), (-8, 8), (8, 0x10000)])
def test_invalid_dimensions(width, height):
    with pytest.raises(InvalidDimensionError):
        raster(lambda x, y: BLANK, width, height)


def test_invalid_threshold():
    with pytest.raises(EncoderError):
        raster(lambda x, y: BLANK, 8, 1, threshold=300)


def test_unsupported_source():
    with pytest.raises(TypeError):
        raster(b"not an image", 8, 8)  # type: ignore[arg-type]
