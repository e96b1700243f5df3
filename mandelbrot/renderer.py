"""Escape-time evaluation and grayscale rendering of Mandelbrot bands."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import RenderPreconditionError
from .plane import point_grid

HORIZON = 4.0
DEFAULT_LIMIT = 255
IN_SET = -1


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Return the iteration at which ``c`` escapes, or ``None`` if it stays bounded.

    Iterates ``z = z * z + c`` from zero at most ``limit`` times. The squared
    magnitude of ``z`` is tested against :data:`HORIZON` before each update,
    so the returned count is the number of completed updates.
    """

    cr, ci = c.real, c.imag
    zr = zi = 0.0
    for i in range(limit):
        if zr * zr + zi * zi > HORIZON:
            return i
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
    return None


def escape_times(points: np.ndarray, limit: int) -> np.ndarray:
    """Vectorised :func:`escape_time` over an array of complex points.

    Returns an int64 array shaped like ``points`` holding the escape iteration
    of each point, or :data:`IN_SET` for points that never escaped.
    """

    points = np.asarray(points, dtype=np.complex128)
    cr = points.real.copy()
    ci = points.imag.copy()
    zr = np.zeros_like(cr)
    zi = np.zeros_like(ci)
    counts = np.full(points.shape, IN_SET, dtype=np.int64)
    active = np.ones(points.shape, dtype=bool)

    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(limit):
            escaped = active & (zr * zr + zi * zi > HORIZON)
            counts[escaped] = i
            active &= ~escaped
            if not active.any():
                break
            zr_next = zr * zr - zi * zi + cr
            zi_next = 2.0 * zr * zi + ci
            zr = np.where(active, zr_next, zr)
            zi = np.where(active, zi_next, zi)
    return counts


def shade(count: Optional[int]) -> int:
    """Grayscale intensity of a pixel: black inside the set, brighter for fast escapes."""

    if count is None:
        return 0
    return 255 - min(count, 255)


def shade_counts(counts: np.ndarray) -> np.ndarray:
    inside = counts == IN_SET
    shades = 255 - np.minimum(counts, 255)
    shades[inside] = 0
    return shades.astype(np.uint8)


def render_band(
    pixels: np.ndarray,
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    *,
    limit: int = DEFAULT_LIMIT,
    rows: Optional[range] = None,
) -> None:
    """Render the rectangle ``upper_left``..``lower_right`` into ``pixels`` in place.

    ``pixels`` holds one grayscale byte per pixel, row-major. Without
    ``rows`` it covers the whole of ``bounds``; with ``rows`` it covers only
    those rows of the image described by ``bounds`` and the rectangle, and
    each pixel is sampled exactly where the full image would sample it.
    """

    width, height = bounds
    if rows is None:
        rows = range(height)
    if rows.step != 1 or rows.start < 0 or rows.stop > height:
        raise RenderPreconditionError(f"rows {rows.start}-{rows.stop} do not lie within {width}x{height}")
    expected = width * len(rows)
    if len(pixels) != expected:
        raise RenderPreconditionError(
            f"band buffer holds {len(pixels)} bytes but {width}x{len(rows)} pixels need {expected}"
        )
    if not len(pixels):
        return

    counts = escape_times(point_grid(bounds, upper_left, lower_right, rows), limit)
    pixels[:] = shade_counts(counts).ravel()
