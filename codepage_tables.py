#!/usr/bin/env python3
"""Print ESC/POS code page tables on the thermal printer.

Usage examples (from project root, with venv activated):

  python codepage_tables.py
      → prints the "cp437" table.

  python codepage_tables.py cp866 win1252
      → prints one table per named code page.

The serial connection parameters and device are taken from config.py / .env.
"""

from __future__ import annotations

import asyncio
import sys

import codepages
from encoder import EscPosEncoder
from printer import AsyncPrinter


def build_sheet(encoder: EscPosEncoder, name: str) -> EscPosEncoder:
    """Queue an 8x16 grid of the upper half (0x80-0xFF) of ``name``."""
    encoder.codepage(name).bold(True).line(name).bold(False)

    # Table header (top row)
    encoder.line("  " + "".join(f"{col:x}" for col in range(16)))

    for row in range(8, 16):
        encoder.text(f"{row:x} ")
        cells = bytes(range(row * 16, row * 16 + 16))
        # Raw bytes: the glyphs are the printer's, not ours
        encoder.raw(cells).newline()
    return encoder.newline()


def main(argv: list[str] | None = None) -> None:
    """Encode the requested tables and send them to the printer."""
    argv = argv if argv is not None else sys.argv[1:]
    names = argv or ["cp437"]

    for name in names:
        # Fail before printing anything if a name is wrong
        codepages.resolve(name)

    encoder = EscPosEncoder().initialize().align("center").line("Code page tables").align("left")
    for name in names:
        build_sheet(encoder, name)
    encoder.cut(partial=True)

    asyncio.run(AsyncPrinter().print_encoder(encoder))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
