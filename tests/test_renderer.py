import numpy as np
import pytest

from mandelbrot import RenderPreconditionError, escape_time, escape_times, pixel_to_point, point_grid, render_band, shade
from mandelbrot.renderer import IN_SET, shade_counts


@pytest.mark.parametrize("limit", [1, 2, 10, 255, 1000])
def test_origin_never_escapes(limit):
    assert escape_time(0j, limit) is None


@pytest.mark.parametrize(
    "c, expected",
    [
        # |z|^2 == 4 after the first update is not yet outside the horizon
        (complex(2.0, 0.0), 2),
        (complex(0.0, 2.0), 2),
        (complex(3.0, 0.0), 1),
        (complex(-3.0, 0.0), 1),
        (complex(10.0, 10.0), 1),
        (complex(0.5, 0.5), 5),
    ],
)
def test_escape_time_reference_values(c, expected):
    assert escape_time(c, 255) == expected


@pytest.mark.parametrize("c", [complex(-2.0, 0.0), complex(0.0, 1.0), complex(-1.0, 0.0), complex(0.25, 0.0)])
def test_points_in_the_set(c):
    assert escape_time(c, 255) is None


def test_limit_caps_iterations():
    assert escape_time(complex(3.0, 0.0), 1) is None
    assert escape_time(complex(3.0, 0.0), 2) == 1


def test_escape_times_matches_scalar():
    points = point_grid((40, 30), complex(-2.2, 1.3), complex(0.8, -1.3))
    counts = escape_times(points, 64)

    assert counts.shape == points.shape
    for index, c in np.ndenumerate(points):
        expected = escape_time(complex(c), 64)
        assert counts[index] == (IN_SET if expected is None else expected)


def test_escape_times_survives_huge_points():
    counts = escape_times(np.array([1e200 + 1e200j, 0j]), 10)

    assert counts.tolist() == [1, IN_SET]


def test_shade():
    assert shade(None) == 0
    assert shade(0) == 255
    assert shade(254) == 1
    assert shade(255) == 0
    assert shade(1000) == 0


def test_shade_counts():
    counts = np.array([IN_SET, 0, 1, 254, 300], dtype=np.int64)

    shades = shade_counts(counts)

    assert shades.dtype == np.uint8
    assert shades.tolist() == [0, 255, 254, 1, 0]


def test_render_band_matches_per_pixel_evaluation():
    bounds = (9, 6)
    upper_left = complex(-2.0, 1.0)
    lower_right = complex(1.0, -1.0)
    pixels = np.zeros(bounds[0] * bounds[1], dtype=np.uint8)

    render_band(pixels, bounds, upper_left, lower_right)

    expected = [
        shade(escape_time(pixel_to_point(bounds, (column, row), upper_left, lower_right), 255))
        for row in range(bounds[1])
        for column in range(bounds[0])
    ]
    assert pixels.tolist() == expected


def test_render_band_only_touches_its_slice():
    buffer = np.full(20, 7, dtype=np.uint8)

    render_band(buffer[5:11], (3, 2), complex(-2.0, 1.0), complex(1.0, -1.0))

    assert buffer[:5].tolist() == [7] * 5
    assert buffer[11:].tolist() == [7] * 9


def test_render_band_honours_limit():
    pixels = np.zeros(1, dtype=np.uint8)

    render_band(pixels, (1, 1), complex(0.5, 0.5), complex(0.6, 0.4), limit=3)

    assert pixels.tolist() == [0]


@pytest.mark.parametrize("length", [0, 5, 10])
def test_render_band_rejects_mismatched_buffer(length):
    pixels = np.zeros(length, dtype=np.uint8)

    with pytest.raises(RenderPreconditionError):
        render_band(pixels, (3, 3), complex(-1.0, 1.0), complex(1.0, -1.0))


def test_render_band_rows_select_part_of_the_image():
    bounds = (9, 6)
    upper_left = complex(-2.5, 1.2)
    lower_right = complex(1.0, -1.2)
    pixels = np.zeros(bounds[0] * 2, dtype=np.uint8)

    render_band(pixels, bounds, upper_left, lower_right, rows=range(3, 5))

    expected = [
        shade(escape_time(pixel_to_point(bounds, (column, row), upper_left, lower_right), 255))
        for row in (3, 4)
        for column in range(bounds[0])
    ]
    assert pixels.tolist() == expected


@pytest.mark.parametrize("rows", [range(5, 8), range(-1, 1)])
def test_render_band_rejects_rows_outside_image(rows):
    pixels = np.zeros(9 * len(rows), dtype=np.uint8)

    with pytest.raises(RenderPreconditionError):
        render_band(pixels, (9, 6), complex(-1.0, 1.0), complex(1.0, -1.0), rows=rows)
