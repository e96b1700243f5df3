"""Mapping between pixel coordinates and points on the complex plane."""

from __future__ import annotations

from typing import Optional

import numpy as np


def pixel_to_point(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point on the complex plane that corresponds to ``pixel``.

    ``bounds`` is the ``(width, height)`` of the image and ``pixel`` a
    ``(column, row)`` pair. Pixels outside the image extrapolate linearly, so
    ``(width, height)`` maps onto ``lower_right``.
    """

    plane_width = lower_right.real - upper_left.real
    plane_height = upper_left.imag - lower_right.imag
    column, row = pixel
    return complex(
        upper_left.real + column * plane_width / bounds[0],
        # rows grow downwards while the imaginary axis grows upwards
        upper_left.imag - row * plane_height / bounds[1],
    )


def point_grid(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    rows: Optional[range] = None,
) -> np.ndarray:
    """Map every pixel of ``bounds`` at once, or only the image ``rows`` given.

    Returns a ``(len(rows), width)`` complex128 array whose entries are
    bit-identical to :func:`pixel_to_point` for the same pixel of the full
    image, whichever rows are selected.
    """

    width, height = bounds
    if rows is None:
        rows = range(height)
    plane_width = np.float64(lower_right.real - upper_left.real)
    plane_height = np.float64(upper_left.imag - lower_right.imag)

    columns = np.arange(width, dtype=np.float64)
    rows = np.arange(rows.start, rows.stop, dtype=np.float64)
    re = np.float64(upper_left.real) + columns * plane_width / np.float64(width)
    im = np.float64(upper_left.imag) - rows * plane_height / np.float64(height)

    points = np.empty((len(rows), width), dtype=np.complex128)
    points.real = re[np.newaxis, :]
    points.imag = im[:, np.newaxis]
    return points
