"""Barcode (GS k) and QR code (GS ( k) command builders.

Both return plain ``bytes``; :class:`encoder.EscPosEncoder` queues them.
Data is passed through as-is: check digits and symbology-specific character
sets are the caller's business.
"""

from __future__ import annotations

import logging

from escpos.constants import GS, NUL

import config
from exceptions import (
    EncoderError,
    InvalidDimensionError,
    InvalidQrOptionError,
    UnsupportedSymbologyError,
)

logger = logging.getLogger(__name__)

BARCODE_HEIGHT = GS + b"h"
BARCODE_WIDTH = GS + b"w"
BARCODE_PRINT = GS + b"k"

# Function A: data terminated by NUL
SYMBOLOGIES_A: dict[str, int] = {
    "upca": 0,
    "upce": 1,
    "ean13": 2,
    "ean8": 3,
    "code39": 4,
    "itf": 5,
    "codabar": 6,
}

# Function B: one length byte in front of the data
SYMBOLOGIES_B: dict[str, int] = {
    "code93": 72,
    "code128": 73,
}

QR_PREFIX = GS + b"(k"
_QR_CN = 0x31
_QR_SELECT_MODEL = 0x41
_QR_MODULE_SIZE = 0x43
_QR_ERROR_LEVEL = 0x45
_QR_STORE = 0x50
_QR_PRINT = 0x51

QR_MODELS: dict[int, int] = {1: 0x31, 2: 0x32}
QR_ERROR_LEVELS: dict[str, int] = {"l": 0x30, "m": 0x31, "q": 0x32, "h": 0x33}
QR_SIZES = range(1, 9)


def barcode(
    data: str,
    symbology: str,
    height: int | None = None,
    width: int | None = None,
) -> bytes:
    """Build height, width, symbology and data commands for one barcode.

    Args:
        data: Barcode content; must be ASCII. EAN/UPC content is sent as the
            literal digits, check digit included if the caller supplies one.
        symbology: One of ``SYMBOLOGIES_A`` or ``SYMBOLOGIES_B`` (case-insensitive).
        height: Bar height in dots, 1-255 (default ``config.BARCODE_HEIGHT``).
        width: Module width, 1-6 (default 2 for code39, otherwise 3).

    Raises:
        UnsupportedSymbologyError: Unknown symbology name.
        InvalidDimensionError: Height or width out of range.
        EncoderError: Non-ASCII data, or data too long for a function B symbology.
    """
    key = symbology.strip().lower()
    if key not in SYMBOLOGIES_A and key not in SYMBOLOGIES_B:
        raise UnsupportedSymbologyError(f"Symbology not supported by printer: {symbology}")

    if height is None:
        height = config.BARCODE_HEIGHT
    if width is None:
        width = 2 if key == "code39" else 3
    if not 1 <= height <= 255:
        raise InvalidDimensionError(f"Barcode height must be 1-255, got {height}")
    if not 1 <= width <= 6:
        raise InvalidDimensionError(f"Barcode width must be 1-6, got {width}")

    try:
        payload = data.encode("ascii")
    except UnicodeEncodeError as e:
        raise EncoderError(
            f"Barcode data must be ASCII, got {e.object[e.start:e.end]!r}"
        ) from e

    header = (
        BARCODE_HEIGHT
        + bytes((height,))
        + BARCODE_WIDTH
        + bytes((width,))
        + BARCODE_PRINT
    )
    if key in SYMBOLOGIES_A:
        body = bytes((SYMBOLOGIES_A[key],)) + payload + NUL
    else:
        if len(payload) > 255:
            raise EncoderError(f"{key} data is limited to 255 bytes, got {len(payload)}")
        body = bytes((SYMBOLOGIES_B[key], len(payload))) + payload

    logger.debug("Barcode %s: %d data byte(s), height=%d width=%d", key, len(payload), height, width)
    return header + body


def _qr_command(function: int, payload: bytes) -> bytes:
    """Frame one GS ( k sub-command: pL pH cn fn payload."""
    length = len(payload) + 2  # cn + fn
    if length > 0xFFFF:
        raise EncoderError(f"QR data too long: {len(payload)} bytes")
    return QR_PREFIX + length.to_bytes(2, "little") + bytes((_QR_CN, function)) + payload


def qrcode(
    data: str,
    model: int | None = None,
    size: int | None = None,
    errorlevel: str | None = None,
) -> bytes:
    """Build the five-step QR sequence: model, size, error level, store, print.

    The store step carries ``data`` as UTF-8; its length field is
    ``len(payload) + 3``.

    Raises:
        InvalidQrOptionError: model not 1/2, size not 1-8, or level not l/m/q/h.
        EncoderError: empty data, or data too long for one store command.
    """
    model = config.QR_MODEL if model is None else model
    size = config.QR_SIZE if size is None else size
    errorlevel = config.QR_ERROR_LEVEL if errorlevel is None else errorlevel

    if model not in QR_MODELS:
        raise InvalidQrOptionError(f"QR model must be 1 or 2, got {model}")
    if size not in QR_SIZES:
        raise InvalidQrOptionError(f"QR module size must be 1-8, got {size}")
    level = errorlevel.strip().lower()
    if level not in QR_ERROR_LEVELS:
        raise InvalidQrOptionError(f"QR error level must be one of l, m, q, h, got {errorlevel!r}")

    payload = data.encode("utf-8")
    if not payload:
        raise EncoderError("QR data must not be empty")

    logger.debug("QR code: %d data byte(s), model=%d size=%d level=%s", len(payload), model, size, level)
    return b"".join(
        (
            _qr_command(_QR_SELECT_MODEL, bytes((QR_MODELS[model], 0x00))),
            _qr_command(_QR_MODULE_SIZE, bytes((size,))),
            _qr_command(_QR_ERROR_LEVEL, bytes((QR_ERROR_LEVELS[level],))),
            _qr_command(_QR_STORE, b"\x30" + payload),
            _qr_command(_QR_PRINT, b"\x30"),
        )
    )
