"""Configuration module - loads settings from an optional .env file."""

import logging
import os

from dotenv import load_dotenv

# Must load .env before reading any variables; a missing file just means defaults
load_dotenv()

logger = logging.getLogger(__name__)


def _parse_bool(value: str | None) -> bool:
    """Parse string to bool; default False for missing/invalid."""
    if not value:
        return False
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_int(key: str, default: int) -> int:
    """Read an int env var; log a warning and keep the default if it is malformed."""
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer value for %s: %r", key, raw)
        return default


# Encoder defaults
CODEPAGE: str = os.getenv("CODEPAGE", "").strip().lower() or "ascii"
IMAGE_THRESHOLD: int = _parse_int("IMAGE_THRESHOLD", 128)
BARCODE_HEIGHT: int = _parse_int("BARCODE_HEIGHT", 60)
QR_MODEL: int = _parse_int("QR_MODEL", 2)
QR_SIZE: int = _parse_int("QR_SIZE", 6)
QR_ERROR_LEVEL: str = os.getenv("QR_ERROR_LEVEL", "m").strip().lower()

# Transport
MOCK_PRINTER: bool = _parse_bool(os.getenv("MOCK_PRINTER", "false"))
SERIAL_PORT: str = os.getenv("SERIAL_PORT", "/dev/serial0").strip()
BAUDRATE: int = _parse_int("BAUDRATE", 9600)
# python-escpos capability profile name, e.g. "TM-T88III"; None uses the library default
PRINTER_PROFILE: str | None = os.getenv("PRINTER_PROFILE") or None

# Serial line settings for python-escpos Serial printer (optional)
SERIAL_BYTESIZE: int = _parse_int("SERIAL_BYTESIZE", 8)
SERIAL_PARITY: str = os.getenv("SERIAL_PARITY", "N").strip().upper()
SERIAL_STOPBITS: int = _parse_int("SERIAL_STOPBITS", 1)
SERIAL_TIMEOUT: float = float(os.getenv("SERIAL_TIMEOUT", "1.0").strip())
SERIAL_DSRDTR: bool = _parse_bool(os.getenv("SERIAL_DSRDTR", "true"))
