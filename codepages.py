"""Codepage registry: printer select codes and Unicode -> byte tables.

Every entry pairs the byte sent with ``ESC t n`` with a table for the upper
half (0x80-0xFF) of the character set. The tables are derived from Python's
own single-byte codecs when this module is imported, then validated, so a
lookup at print time can only fail with a typed "not found" error.

Code points below 0x80 always pass through unchanged. Anything the active
table has no byte for is replaced with ``?`` (0x3F): a receipt with one odd
glyph is better than no receipt at all.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from exceptions import UnknownCodepageError, UnsupportedCodepageError

logger = logging.getLogger(__name__)

FALLBACK = 0x3F  # "?"

# name -> (ESC t select code, Python codec or None for plain ASCII)
_CODEPAGES: dict[str, tuple[int, str | None]] = {
    "ascii": (0x00, None),
    "cp437": (0x00, "cp437"),
    "cp737": (0x40, "cp737"),
    "cp775": (0x5F, "cp775"),
    "cp850": (0x02, "cp850"),
    "cp852": (0x12, "cp852"),
    "cp855": (0x3C, "cp855"),
    "cp857": (0x3D, "cp857"),
    "cp858": (0x13, "cp858"),
    "cp860": (0x03, "cp860"),
    "cp861": (0x38, "cp861"),
    "cp862": (0x3E, "cp862"),
    "cp863": (0x04, "cp863"),
    "cp864": (0x1C, "cp864"),
    "cp865": (0x05, "cp865"),
    "cp866": (0x11, "cp866"),
    "cp869": (0x42, "cp869"),
    "cp1252": (0x10, "cp1252"),
    "iso88596": (0x16, "iso8859_6"),
    "win874": (0x1E, "cp874"),
    "win1250": (0x48, "cp1250"),
    "win1251": (0x49, "cp1251"),
    "win1252": (0x47, "cp1252"),
    "win1253": (0x5A, "cp1253"),
    "win1254": (0x5B, "cp1254"),
    "win1255": (0x20, "cp1255"),
    "win1256": (0x5C, "cp1256"),
    "win1257": (0x19, "cp1257"),
    "win1258": (0x5E, "cp1258"),
}

# Real encodings, but multi-byte: no ESC t table can represent them.
_UNSUPPORTED = frozenset(
    {
        "utf8",
        "utf-8",
        "utf16",
        "utf-16",
        "utf16le",
        "utf16be",
        "utf32",
        "utf-32",
        "cp932",
        "cp936",
        "cp949",
        "cp950",
        "shiftjis",
        "shift_jis",
        "eucjp",
        "euckr",
        "gb2312",
        "gb18030",
        "big5",
    }
)


@dataclass(frozen=True)
class CodepageEntry:
    """One selectable printer codepage."""

    name: str
    code: int
    table: Mapping[str, int]


def _build_table(codec: str | None) -> Mapping[str, int]:
    """Map each character of the codec's upper half to its byte."""
    table: dict[str, int] = {}
    if codec is not None:
        for byte in range(0x80, 0x100):
            try:
                char = bytes((byte,)).decode(codec)
            except UnicodeDecodeError:
                # Undefined slot (e.g. 0x81 in cp1252)
                continue
            if len(char) == 1 and ord(char) >= 0x80:
                table.setdefault(char, byte)
    return MappingProxyType(table)


def _validate(entry: CodepageEntry) -> None:
    if not 0 <= entry.code <= 0xFF:
        raise ValueError(f"Codepage {entry.name}: select code {entry.code} out of range")
    for char, byte in entry.table.items():
        if ord(char) < 0x80 or not 0x80 <= byte <= 0xFF:
            raise ValueError(f"Codepage {entry.name}: bad mapping {char!r} -> {byte}")


def _build_registry() -> Mapping[str, CodepageEntry]:
    registry: dict[str, CodepageEntry] = {}
    for name, (code, codec) in _CODEPAGES.items():
        entry = CodepageEntry(name=name, code=code, table=_build_table(codec))
        _validate(entry)
        registry[name] = entry
    return MappingProxyType(registry)


REGISTRY: Mapping[str, CodepageEntry] = _build_registry()


def names() -> list[str]:
    """Return the registered codepage names, sorted."""
    return sorted(REGISTRY)


def resolve(name: str) -> CodepageEntry:
    """Look up a codepage by name (case-insensitive).

    Raises:
        UnsupportedCodepageError: ``name`` is a multi-byte encoding such as utf8.
        UnknownCodepageError: ``name`` is not registered at all.
    """
    key = name.strip().lower()
    entry = REGISTRY.get(key)
    if entry is not None:
        return entry
    if key in _UNSUPPORTED:
        raise UnsupportedCodepageError(f"Codepage not supported by printer: {name}")
    raise UnknownCodepageError(f"Unknown codepage: {name}")


def _lookup(entry: CodepageEntry, char: str) -> int | None:
    point = ord(char)
    if point < 0x80:
        return point
    return entry.table.get(char)


def _clusters(text: str):
    """Yield each base character together with the combining marks after it."""
    cluster = ""
    for char in text:
        if cluster and unicodedata.combining(char):
            cluster += char
            continue
        if cluster:
            yield cluster
        cluster = char
    if cluster:
        yield cluster


def transcode(entry: CodepageEntry, text: str) -> bytes:
    """Encode ``text`` for ``entry``, substituting ``?`` for unmapped characters.

    Each code point is mapped on its own. Only when a base letter plus its
    combining marks cannot be mapped that way, and the table has the
    precomposed character instead (e.g. "e" + U+0301 -> "é" in cp437), is the
    composed byte used.
    """
    out = bytearray()
    missing = 0
    for cluster in _clusters(text):
        codes = [_lookup(entry, char) for char in cluster]
        if None in codes and len(cluster) > 1:
            composed = unicodedata.normalize("NFC", cluster)
            if len(composed) == 1 and _lookup(entry, composed) is not None:
                codes = [_lookup(entry, composed)]
        for code in codes:
            if code is None:
                missing += 1
                code = FALLBACK
            out.append(code)
    if missing:
        logger.debug("%d character(s) not in %s, replaced with '?'", missing, entry.name)
    return bytes(out)
