"""Loading of XPM pixmaps into in-memory images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike

from solong.colors import text_to_rgb

__all__ = [
    "XpmError",
    "Image",
    "find",
    "find_unquoted",
    "split_words",
    "strip_comments",
    "rgb_shifts",
    "convert_color",
    "xpm_to_image",
    "xpm_file_to_image",
]

# Pixel value written for the transparent colour "None".
_TRANSPARENT = 0xFF000000

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_WORD_SEPARATORS = re.compile(r"[ \t]+")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass
class Image:
    """A packed pixel buffer: rows of ``size_line`` bytes, one pixel per ``bits_per_pixel``."""

    width: int
    height: int
    bits_per_pixel: int = 32
    endian: int = 0
    size_line: int = field(init=False)
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid image size {self.width}x{self.height}")
        if self.bits_per_pixel <= 0 or self.bits_per_pixel % 8:
            raise ValueError(f"unsupported pixel size: {self.bits_per_pixel} bits")
        row_bits = self.width * self.bits_per_pixel
        # Rows are padded to a 32-bit boundary.
        self.size_line = (row_bits + 31) // 32 * 4
        self.data = bytearray(self.size_line * self.height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def _byteorder(self) -> str:
        return "big" if self.endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), keeping its low-order bytes."""
        start = self._offset(x, y)
        size = self.bytes_per_pixel
        value = color & ((1 << (8 * size)) - 1)
        self.data[start:start + size] = value.to_bytes(size, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the unsigned pixel value stored at (x, y)."""
        start = self._offset(x, y)
        return int.from_bytes(self.data[start:start + self.bytes_per_pixel], self._byteorder)


def find(text: str, needle: str) -> int:
    """Return the index of the first ``needle`` in ``text``, or -1."""
    return text.find(needle)


def find_unquoted(text: str, needle: str) -> int:
    """Return the index of the first ``needle`` lying outside double quotes, or -1."""
    in_quotes = False
    for pos in range(len(text) - len(needle) + 1):
        if text[pos] == '"':
            in_quotes = not in_quotes
        if not in_quotes and text.startswith(needle, pos):
            return pos
    return -1


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank(text: str, start: int, length: int) -> str:
    end = min(len(text), start + length)
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces."""
    while (begin := find_unquoted(text, "/*")) != -1:
        end = find(text[begin + 2:], "*/")
        text = _blank(text, begin, end + 4)
    while (begin := find_unquoted(text, "//")) != -1:
        end = find(text[begin + 2:], "\n")
        text = _blank(text, begin, end + 3)
    return text


def _trailing_ones(value: int) -> int:
    return ((value ^ (value + 1)) >> 1).bit_length()


def rgb_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, int, int, int, int, int]:
    """Return (shift, width) of the red, green and blue channels of a visual's masks."""
    shifts: list[int] = []
    for name, mask in (("red", red_mask), ("green", green_mask), ("blue", blue_mask)):
        if mask <= 0:
            raise ValueError(f"{name} mask must be a positive bit mask")
        shift = (mask & -mask).bit_length() - 1
        shifts.extend((shift, _trailing_ones(mask >> shift)))
    return tuple(shifts)  # type: ignore[return-value]


def convert_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Convert 0xRRGGBB to a pixel value for a visual of ``depth`` bits.

    Depths of 24 and above take the colour unchanged; lower depths pack each
    channel according to ``shifts`` as returned by :func:`rgb_shifts`.
    """
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _color_key(chars: str, cpp: int) -> int:
    key = 0
    for char in chars[:cpp].ljust(cpp, "\0"):
        key = (key << 8) + ord(char)
    return key


def _next_line(lines: Iterator[str]) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError("unexpected end of XPM data")
    return line


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"invalid XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value == 0 for value in values):
        raise XpmError(f"invalid XPM header: {line!r}")
    width, height, ncolors, cpp = values
    if width < 0 or height < 0 or ncolors < 0 or cpp < 0:
        raise XpmError(f"invalid XPM header: {line!r}")
    return width, height, ncolors, cpp


def _parse_color(line: str, cpp: int) -> int:
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"no colour in XPM colour line: {line!r}") from None
    if index >= len(words):
        raise XpmError(f"no colour in XPM colour line: {line!r}")
    suffix = words[index + 1] if index + 1 < len(words) else None
    return text_to_rgb(words[index], suffix)


def _parse_xpm(lines: Iterator[str]) -> Image:
    width, height, ncolors, cpp = _parse_header(_next_line(lines))
    palette: dict[int, int] = {}
    for _ in range(ncolors):
        line = _next_line(lines)
        rgb = _parse_color(line, cpp)
        key = _color_key(line, cpp)
        if cpp <= 2:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)

    image = Image(width, height)
    for y in range(height):
        line = _next_line(lines)
        for x in range(width):
            key = _color_key(line[cpp * x:cpp * x + cpp], cpp)
            color = palette.get(key, 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_to_image(lines: Iterable[str]) -> Image:
    """Build an image from XPM data given as its sequence of strings."""
    return _parse_xpm(iter(lines))


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def xpm_file_to_image(path: str | PathLike[str]) -> Image:
    """Read an XPM file and build an image from it."""
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read XPM file {path!s}: {exc.strerror or exc}") from exc
    text = strip_comments(raw.decode("latin-1"))
    return _parse_xpm(_quoted_strings(text))