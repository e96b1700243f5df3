"""Exception types raised by the Mandelbrot rendering pipeline."""

from __future__ import annotations


class MandelbrotError(Exception):
    """Base class for every error raised by this package."""


class InputParseError(MandelbrotError, ValueError):
    """A bounds or complex-point argument could not be parsed."""


class RenderError(MandelbrotError):
    """A render was aborted; no pixel buffer is produced."""


class RenderPreconditionError(RenderError):
    """A band buffer does not match the bounds it was rendered with."""


class ImageWriteError(MandelbrotError, OSError):
    """The finished image could not be written to disk."""
