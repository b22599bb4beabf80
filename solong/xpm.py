"""Reader for XPM images: the header, the colour table and the pixel rows."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Iterator

from solong.colors import find_color

TRANSPARENT = 0xFF000000
"""Pixel value given to pixels whose colour is "None"."""

_NAME_BUFFER = 63
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image; rows hold 0xRRGGBB values or TRANSPARENT."""

    width: int
    height: int
    rows: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour value at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.rows[y][x]

    def to_argb_bytes(self) -> bytes:
        """Return the pixels as ARGB bytes, row by row.

        Opaque pixels get alpha 0xFF; transparent pixels are all zero bytes.
        """
        out = bytearray()
        for row in self.rows:
            for value in row:
                if value == TRANSPARENT:
                    out += b"\x00\x00\x00\x00"
                else:
                    out += (0xFF000000 | (value & 0xFFFFFF)).to_bytes(4, "big")
        return bytes(out)


def split_words(text: str) -> list[str]:
    """Split text on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for index, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C and C++ style comments outside strings with spaces.

    The result has the same length as the input. A line comment is
    blanked together with the newline that ends it.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _parse_hex(text: str) -> int:
    match = _HEX_PREFIX.match(text)
    if match is None or not match.group(2):
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def color_value(name: str, suffix: str | None) -> int:
    """Return the colour given by an XPM colour word and the word after it.

    "#RRGGBB" is read as hexadecimal. Otherwise the two words joined by a
    space are looked up by name; "None" gives -1 and unknown names give 0.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if suffix is not None:
        name = f"{name} {suffix}"[:_NAME_BUFFER]
    found = find_color(name)
    return 0 if found is None else found


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what}") from None


def _read_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"XPM header needs four values, got {line!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header {line!r}")
    return width, height, ncolors, cpp


def _read_colors(lines: Iterator[str], ncolors: int, cpp: int) -> dict[str, int]:
    table: dict[str, int] = {}
    direct = cpp <= 2
    for _ in range(ncolors):
        line = _next_line(lines, "colour table")
        if len(line) < cpp:
            raise XpmError(f"colour line {line!r} shorter than its key")
        words = split_words(line[cpp:])
        try:
            position = words.index("c")
        except ValueError:
            raise XpmError(f"colour line {line!r} has no 'c' entry") from None
        if position + 1 >= len(words):
            raise XpmError(f"colour line {line!r} has no colour after 'c'")
        suffix = words[position + 2] if position + 2 < len(words) else None
        value = color_value(words[position + 1], suffix)
        key = line[:cpp]
        if direct:
            table[key] = value
        else:
            table.setdefault(key, value)
    return table


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its strings: header, colours, then rows."""
    source = iter(lines)
    width, height, ncolors, cpp = _read_header(_next_line(source, "header"))
    table = _read_colors(source, ncolors, cpp)
    rows = []
    for _ in range(height):
        line = _next_line(source, "pixel rows")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {line!r} shorter than {width} pixels")
        row = []
        for start in range(0, width * cpp, cpp):
            value = table.get(line[start:start + cpp], 0)
            row.append(TRANSPARENT if value == -1 else value)
        rows.append(tuple(row))
    return XpmImage(width, height, tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an XPM image from the text of an XPM file."""
    strings = (match.group(1) for match in _QUOTED.finditer(strip_comments(text)))
    return parse_xpm(strings)


def load_xpm(path: str | PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, "rb") as handle:
            text = handle.read().decode("latin-1")
    except OSError as error:
        raise XpmError(f"cannot read {path}: {error}") from error
    return parse_xpm_text(text)