"""Fork-join rendering of the full image across horizontal bands."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .errors import RenderError
from .plane import pixel_to_point
from .renderer import DEFAULT_LIMIT, render_band

DEFAULT_WORKERS = 8


@dataclass(frozen=True)
class Band:
    """A contiguous run of image rows rendered by a single worker."""

    index: int
    top: int
    height: int
    width: int
    upper_left: complex
    lower_right: complex

    @property
    def bounds(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def start(self) -> int:
        return self.top * self.width

    @property
    def stop(self) -> int:
        return (self.top + self.height) * self.width

    @property
    def rows(self) -> range:
        return range(self.top, self.top + self.height)


def rows_per_band(height: int, workers: int) -> int:
    """Rows handed to each worker: ``height / workers`` rounded up."""

    if workers < 1:
        raise ValueError(f"worker count must be at least 1, got {workers}")
    return max(1, -(-height // workers))


def plan_bands(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    workers: int,
) -> list[Band]:
    """Partition the image into ordered, non-overlapping bands covering every row.

    Each band carries the sub-rectangle of the plane it covers, obtained by
    mapping its top-left and bottom-right corners through the full image.
    Rendering samples band pixels through the full image as well, so the
    number of bands never changes the result. Fewer than ``workers`` bands are produced when the rows run out first.
    """

    width, height = bounds
    if width <= 0 or height <= 0:
        raise ValueError(f"bounds must be positive, got {width}x{height}")

    step = rows_per_band(height, workers)
    bands = []
    for index, top in enumerate(range(0, height, step)):
        band_height = min(step, height - top)
        bands.append(
            Band(
                index=index,
                top=top,
                height=band_height,
                width=width,
                upper_left=pixel_to_point(bounds, (0, top), upper_left, lower_right),
                lower_right=pixel_to_point(bounds, (width, top + band_height), upper_left, lower_right),
            )
        )
    return bands


def render_parallel(
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    workers: int = DEFAULT_WORKERS,
    *,
    limit: int = DEFAULT_LIMIT,
    on_band_done: Optional[Callable[[Band], None]] = None,
) -> np.ndarray:
    """Render the whole image with one concurrent task per band.

    Returns a flat uint8 buffer of ``width * height`` grayscale pixels. Every
    task is joined before returning; if any band fails, the error of the
    lowest-indexed failing band is raised and no buffer is returned.
    ``on_band_done`` is called from the calling thread as bands complete.
    """

    width, height = bounds
    bands = plan_bands(bounds, upper_left, lower_right, workers)
    pixels = np.zeros(width * height, dtype=np.uint8)

    failures: dict[int, BaseException] = {}
    with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="band") as pool:
        futures: dict[Future, Band] = {
            pool.submit(
                render_band,
                pixels[band.start:band.stop],
                bounds,
                upper_left,
                lower_right,
                limit=limit,
                rows=band.rows,
            ): band
            for band in bands
        }
        for future in as_completed(futures):
            band = futures[future]
            error = future.exception()
            if error is not None:
                failures[band.index] = error
            elif on_band_done is not None:
                on_band_done(band)

    if failures:
        index = min(failures)
        error = failures[index]
        if isinstance(error, RenderError):
            raise error
        raise RenderError(f"band {index} of {len(bands)} failed: {error}") from error
    return pixels
