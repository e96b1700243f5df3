"""Parsing of the textual render arguments: ``WIDTHxHEIGHT`` and ``RE,IM`` pairs."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from .errors import InputParseError

T = TypeVar("T")


def _convert(text: str, convert: Callable[[str], T]) -> Optional[T]:
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return convert(text)
    except ValueError:
        return None


def parse_pair(text: str, separator: str, convert: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Split ``text`` at the first ``separator`` and convert both halves.

    Returns ``None`` when the separator is missing or either half does not
    convert, e.g. ``parse_pair("10,20", ",", int) == (10, 20)`` while
    ``"10,"``, ``",10"`` and ``"10,20xy"`` all give ``None``.
    """

    index = text.find(separator)
    if index < 0:
        return None
    left = _convert(text[:index], convert)
    right = _convert(text[index + 1:], convert)
    if left is None or right is None:
        return None
    return left, right


def parse_complex(text: str) -> Optional[complex]:
    """Parse ``"RE,IM"`` into a complex number, or ``None``."""

    pair = parse_pair(text, ",", float)
    if pair is None:
        return None
    return complex(*pair)


def parse_bounds(text: str) -> tuple[int, int]:
    """Parse ``"WIDTHxHEIGHT"`` into a pair of positive integers."""

    pair = parse_pair(text, "x", int)
    if pair is None:
        raise InputParseError(f"invalid image dimensions {text!r}, expected WIDTHxHEIGHT")
    width, height = pair
    if width <= 0 or height <= 0:
        raise InputParseError(f"image dimensions must be positive, got {width}x{height}")
    return width, height


def _parse_corner(text: str, name: str) -> complex:
    point = parse_complex(text)
    if point is None:
        raise InputParseError(f"invalid {name} corner point {text!r}, expected REAL,IMAGINARY")
    return point


def parse_render_arguments(bounds: str, upper_left: str, lower_right: str) -> tuple[tuple[int, int], complex, complex]:
    """Validate the three render arguments before any rendering starts.

    Raises :class:`InputParseError` naming the offending argument. The
    upper-left corner must not lie right of or below the lower-right corner.
    """

    parsed_bounds = parse_bounds(bounds)
    parsed_upper_left = _parse_corner(upper_left, "upper left")
    parsed_lower_right = _parse_corner(lower_right, "lower right")

    if parsed_upper_left.real > parsed_lower_right.real:
        raise InputParseError(
            f"upper left real part {parsed_upper_left.real} exceeds lower right real part {parsed_lower_right.real}"
        )
    if parsed_upper_left.imag < parsed_lower_right.imag:
        raise InputParseError(
            f"upper left imaginary part {parsed_upper_left.imag} is below lower right imaginary part {parsed_lower_right.imag}"
        )
    return parsed_bounds, parsed_upper_left, parsed_lower_right
