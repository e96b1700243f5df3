"""Encoding finished pixel buffers as grayscale image files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
import PIL.Image

from .errors import ImageWriteError


def pil_format_name(ext: str) -> str:
    upper = ext.upper().lstrip(".")
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def image_format_for(path: Union[str, Path], image_format: Optional[str] = None) -> str:
    """Pillow format name for writing ``path``.

    An explicit ``image_format`` wins. Otherwise the extension decides when
    Pillow knows how to write it, and PNG is used for anything else.
    """

    if image_format:
        return pil_format_name(image_format)
    suffix = Path(path).suffix.lower()
    registered = PIL.Image.registered_extensions().get(suffix)
    if registered is not None and registered in PIL.Image.SAVE:
        return registered
    return "PNG"


def to_image(pixels: np.ndarray, bounds: tuple[int, int]) -> PIL.Image.Image:
    """Wrap a flat row-major grayscale buffer as an 8-bit ``L`` mode image."""

    width, height = bounds
    if len(pixels) != width * height:
        raise ValueError(f"buffer holds {len(pixels)} bytes, expected {width * height} for {width}x{height}")
    frame = np.asarray(pixels, dtype=np.uint8).reshape(height, width)
    return PIL.Image.fromarray(frame)


def write_image(
    path: Union[str, Path],
    pixels: np.ndarray,
    bounds: tuple[int, int],
    image_format: Optional[str] = None,
) -> None:
    """Write ``pixels`` to ``path`` as a single-channel image.

    The format defaults to the one Pillow registers for the file extension,
    or PNG when the extension is missing or unknown. Failures are raised as
    :class:`ImageWriteError` chained to the underlying cause.
    """

    output_path = Path(path)
    pil_format = image_format_for(output_path, image_format)
    image = to_image(pixels, bounds)
    try:
        image.save(str(output_path), format=pil_format)
    except (OSError, KeyError, ValueError) as exc:
        raise ImageWriteError(f"could not write {output_path}: {exc}") from exc
