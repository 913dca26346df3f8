"""Errors raised by the ESC/POS encoder.

All of them are ``ValueError`` subclasses: they describe a bad argument at the
call that raised them, and leave the encoder buffer untouched.
"""


class EncoderError(ValueError):
    """Base class for encoder argument errors."""


class UnknownCodepageError(EncoderError):
    """Codepage name is not in the registry."""


class UnsupportedCodepageError(EncoderError):
    """Codepage is a real encoding but cannot be selected on a single-byte printer."""


class UnsupportedSymbologyError(EncoderError):
    """Barcode symbology is not one the printer understands."""


class InvalidDimensionError(EncoderError):
    """Image or barcode dimensions are out of range."""


class InvalidQrOptionError(EncoderError):
    """QR model, module size or error-correction level is out of range."""
