"""Public API for Mandelbrot rendering utilities."""

from .errors import (
    ImageWriteError,
    InputParseError,
    MandelbrotError,
    RenderError,
    RenderPreconditionError,
)
from .output import to_image, write_image
from .parallel import Band, plan_bands, render_parallel, rows_per_band
from .parsing import parse_bounds, parse_complex, parse_pair, parse_render_arguments
from .plane import pixel_to_point, point_grid
from .renderer import escape_time, escape_times, render_band, shade

__all__ = [
    "Band",
    "ImageWriteError",
    "InputParseError",
    "MandelbrotError",
    "RenderError",
    "RenderPreconditionError",
    "escape_time",
    "escape_times",
    "parse_bounds",
    "parse_complex",
    "parse_pair",
    "parse_render_arguments",
    "pixel_to_point",
    "plan_bands",
    "point_grid",
    "render_band",
    "render_parallel",
    "rows_per_band",
    "shade",
    "to_image",
    "write_image",
]
