"""Chainable ESC/POS encoder.

Every method appends command bytes and returns the encoder, so a receipt reads
as one expression::

    data = (
        EscPosEncoder()
        .codepage("cp437")
        .bold()
        .line("Café")
        .bold()
        .qrcode("https://example.com")
        .cut()
        .encode()
    )

``encode()`` only reads the buffer; the encoder can keep growing afterwards.
Style commands are sent every time they are called, even if the printer is
already in that state, since the printer state cannot be queried.
"""

from __future__ import annotations

import logging

from escpos.constants import CODEPAGE_CHANGE, CTL_CR, CTL_LF, ESC, GS

import barcodes
import codepages
import config
import raster
from exceptions import EncoderError
from raster import ImageSource

logger = logging.getLogger(__name__)

HW_INIT = ESC + b"@"
BOLD = ESC + b"E"
UNDERLINE = ESC + b"-"
ALIGN = ESC + b"a"
CUT = GS + b"V"
NEWLINE = CTL_LF + CTL_CR

ALIGNMENTS: dict[str, int] = {"left": 0, "center": 1, "right": 2}


class EscPosEncoder:
    """Stateful ESC/POS byte stream builder."""

    def __init__(self, codepage: str | None = None) -> None:
        self._chunks: list[bytes] = []
        self._default_codepage = codepages.resolve(codepage or config.CODEPAGE)
        self._codepage = self._default_codepage
        self._bold = False
        self._underline = False

    # --- buffer ---

    def _queue(self, *chunks: bytes) -> EscPosEncoder:
        self._chunks.extend(chunks)
        return self

    def encode(self) -> bytes:
        """Return everything queued so far. Does not clear the buffer."""
        return b"".join(self._chunks)

    def __len__(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)

    # --- state ---

    @property
    def active_codepage(self) -> str:
        return self._codepage.name

    @property
    def is_bold(self) -> bool:
        return self._bold

    @property
    def is_underline(self) -> bool:
        return self._underline

    # --- text ---

    def codepage(self, name: str) -> EscPosEncoder:
        """Switch codepage and send ESC t n. Re-sent even if unchanged."""
        entry = codepages.resolve(name)
        self._codepage = entry
        logger.debug("Codepage -> %s (ESC t %d)", entry.name, entry.code)
        return self._queue(CODEPAGE_CHANGE + bytes((entry.code,)))

    def text(self, value: str) -> EscPosEncoder:
        return self._queue(codepages.transcode(self._codepage, value))

    def newline(self) -> EscPosEncoder:
        return self._queue(NEWLINE)

    def line(self, value: str) -> EscPosEncoder:
        return self.text(value).newline()

    def bold(self, value: bool | None = None) -> EscPosEncoder:
        """Turn emphasis on/off; with no argument, flip the current state."""
        if value is None:
            value = not self._bold
        self._bold = bool(value)
        return self._queue(BOLD + bytes((int(self._bold),)))

    def underline(self, value: bool | None = None) -> EscPosEncoder:
        """Turn single underline on/off; with no argument, flip the current state."""
        if value is None:
            value = not self._underline
        self._underline = bool(value)
        return self._queue(UNDERLINE + bytes((int(self._underline),)))

    def align(self, value: str) -> EscPosEncoder:
        key = value.strip().lower()
        if key not in ALIGNMENTS:
            raise EncoderError(f"Alignment must be left, center or right, got {value!r}")
        return self._queue(ALIGN + bytes((ALIGNMENTS[key],)))

    # --- printer control ---

    def initialize(self) -> EscPosEncoder:
        """Send ESC @ and reset tracked state the way the printer resets its own."""
        self._bold = False
        self._underline = False
        self._codepage = self._default_codepage
        return self._queue(HW_INIT)

    def cut(self, partial: bool = False) -> EscPosEncoder:
        return self._queue(CUT + (b"\x01" if partial else b"\x00"))

    def raw(self, data: bytes) -> EscPosEncoder:
        """Append bytes verbatim."""
        return self._queue(bytes(data))

    # --- structured payloads ---

    def barcode(
        self,
        data: str,
        symbology: str,
        height: int | None = None,
        width: int | None = None,
    ) -> EscPosEncoder:
        return self._queue(barcodes.barcode(data, symbology, height=height, width=width))

    def qrcode(
        self,
        data: str,
        model: int | None = None,
        size: int | None = None,
        errorlevel: str | None = None,
    ) -> EscPosEncoder:
        return self._queue(
            barcodes.qrcode(data, model=model, size=size, errorlevel=errorlevel)
        )

    def image(
        self,
        source: ImageSource,
        width: int,
        height: int,
        threshold: int | None = None,
        invert: bool = False,
    ) -> EscPosEncoder:
        """Append ``source`` as a GS v 0 raster image (see :func:`raster.raster`)."""
        return self._queue(
            raster.raster(source, width, height, threshold=threshold, invert=invert)
        )
