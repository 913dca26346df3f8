"""Tests for environment parsing in config."""

import importlib

import pytest

import config


@pytest.mark.parametrize(
    "value, expected",
    [("true", True), (" YES ", True), ("1", True), ("on", True), ("false", False), ("", False), (None, False)],
)
def test_parse_bool(value, expected):
    assert config._parse_bool(value) is expected


def test_parse_int_default(monkeypatch):
    monkeypatch.delenv("QR_SIZE", raising=False)
    assert config._parse_int("QR_SIZE", 6) == 6


def test_parse_int_malformed_logs_and_keeps_default(monkeypatch, caplog):
    monkeypatch.setenv("QR_SIZE", "big")
    assert config._parse_int("QR_SIZE", 6) == 6
    assert "Ignoring non-integer value for QR_SIZE" in caplog.text


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CODEPAGE", " CP437 ")
    monkeypatch.setenv("QR_ERROR_LEVEL", "H")
    monkeypatch.setenv("MOCK_PRINTER", "true")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.CODEPAGE == "cp437"
        assert reloaded.QR_ERROR_LEVEL == "h"
        assert reloaded.MOCK_PRINTER is True
    finally:
        monkeypatch.undo()
        importlib.reload(config)


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_codepage_uses_ascii(monkeypatch, value):
    monkeypatch.setenv("CODEPAGE", value)
    try:
        assert importlib.reload(config).CODEPAGE == "ascii"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
