"""Async transport for encoded ESC/POS streams, backed by python-escpos."""

import asyncio
import logging
from typing import Any

import config
from encoder import EscPosEncoder

logger = logging.getLogger(__name__)


class MockPrinter:
    """Stub printer for testing without hardware; keeps what it was sent."""

    def __init__(self) -> None:
        self.output = bytearray()

    def _raw(self, data: bytes) -> None:
        self.output.extend(data)


class AsyncPrinter:
    """Async wrapper that writes raw encoder output to a python-escpos printer."""

    def __init__(self) -> None:
        self.printer: Any
        if config.MOCK_PRINTER:
            self.printer = MockPrinter()
        else:
            # Import lazily so dev/tests can run without a serial device
            from escpos.printer import Serial  # type: ignore

            self.printer = Serial(
                devfile=config.SERIAL_PORT,
                baudrate=config.BAUDRATE,
                bytesize=config.SERIAL_BYTESIZE,
                parity=config.SERIAL_PARITY,
                stopbits=config.SERIAL_STOPBITS,
                timeout=config.SERIAL_TIMEOUT,
                dsrdtr=config.SERIAL_DSRDTR,
                profile=config.PRINTER_PROFILE,
            )
        self._mock = config.MOCK_PRINTER

    async def send(self, data: bytes) -> None:
        """Write ``data`` to the printer, retrying up to three times."""
        for attempt in range(3):
            try:
                await asyncio.get_running_loop().run_in_executor(
                    None,
                    self.printer._raw,
                    data,
                )
                logger.info("Sent %d byte(s)%s", len(data), " (mock)" if self._mock else "")
                return
            except Exception as e:
                logger.error("Send attempt %d failed: %s", attempt + 1, e)
                if attempt == 2:
                    raise
                await asyncio.sleep(0.5)

    async def print_encoder(self, encoder: EscPosEncoder) -> None:
        """Send everything ``encoder`` has queued so far."""
        await self.send(encoder.encode())

