"""Tests for the codepage sheet script."""

from unittest.mock import AsyncMock, patch

import pytest

import codepage_tables
from encoder import EscPosEncoder
from exceptions import UnknownCodepageError


@pytest.fixture
def mock_printer():
    with patch("codepage_tables.AsyncPrinter") as printer_cls:
        printer_cls.return_value.print_encoder = AsyncMock()
        yield printer_cls


def _sent(mock_printer) -> bytes:
    encoder = mock_printer.return_value.print_encoder.await_args.args[0]
    return encoder.encode()


def test_build_sheet_selects_codepage_and_lists_upper_half():
    data = codepage_tables.build_sheet(EscPosEncoder(codepage="ascii"), "cp866").encode()
    assert data.startswith(bytes([27, 116, 0x11, 27, 69, 1]) + b"cp866\n\r" + bytes([27, 69, 0]))
    assert b"8 " + bytes(range(0x80, 0x90)) + b"\n\r" in data
    assert b"f " + bytes(range(0xF0, 0x100)) + b"\n\r" in data


def test_main_defaults_to_cp437(mock_printer):
    codepage_tables.main([])
    data = _sent(mock_printer)
    assert data.startswith(bytes([27, 64]))
    assert bytes([27, 116, 0]) in data
    assert data.endswith(bytes([29, 86, 1]))


def test_main_prints_each_requested_table(mock_printer):
    codepage_tables.main(["cp866", "win1252"])
    data = _sent(mock_printer)
    assert data.index(bytes([27, 116, 0x11])) < data.index(bytes([27, 116, 0x47]))


def test_main_rejects_unknown_name_before_printing(mock_printer):
    with pytest.raises(UnknownCodepageError):
        codepage_tables.main(["cp437", "bogus"])
    mock_printer.assert_not_called()
