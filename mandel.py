import re
import sys
import time
from dataclasses import dataclass
from pathlib import Path

import PIL.Image

from mandelbrot import (
    Band,
    ImageWriteError,
    InputParseError,
    RenderError,
    parse_render_arguments,
    plan_bands,
    render_parallel,
    write_image,
)
from mandelbrot.output import image_format_for
from mandelbrot.parallel import DEFAULT_WORKERS
from mandelbrot.renderer import DEFAULT_LIMIT

from argparse import ArgumentParser

VERBOSE = False

_COORDINATE = re.compile(r'^-\.?\d')


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


@dataclass(frozen=True)
class RenderParameters:
    bounds: tuple[int, int]
    upper_left: complex
    lower_right: complex
    workers: int = DEFAULT_WORKERS
    iteration_limit: int = DEFAULT_LIMIT


@dataclass
class OutputConfig:
    path: Path
    image_format: str


class CoordinateArgumentParser(ArgumentParser):
    """Reads arguments such as -1.20,0.35 as coordinates rather than options."""

    def _parse_optional(self, arg_string):
        if _COORDINATE.match(arg_string):
            return None
        return super()._parse_optional(arg_string)


def build_parser():
    parser = CoordinateArgumentParser(
        description='Render a grayscale image of the Mandelbrot set.',
        epilog='Example: %(prog)s mandel.png 1000x750 -1.20,0.35 -1,0.20 '
               '(arguments after -- are always read as positionals)',
    )

    parser.add_argument('output', metavar='FILE',
                        help='image file to write')

    parser.add_argument('bounds', metavar='PIXELS',
                        help='image size in pixels, as WIDTHxHEIGHT')

    parser.add_argument('upper_left', metavar='UPPERLEFT',
                        help='complex point at the upper left corner, as REAL,IMAGINARY')

    parser.add_argument('lower_right', metavar='LOWERRIGHT',
                        help='complex point at the lower right corner, as REAL,IMAGINARY')

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of bands rendered concurrently',
                        metavar='WORKERS', default=DEFAULT_WORKERS)

    parser.add_argument('--iterations', type=int,
                        dest='iterations', help='iteration limit before a point is considered inside the set',
                        metavar='ITERATIONS', default=DEFAULT_LIMIT)

    parser.add_argument('--format', type=str,
                        dest='format', help='image file format. Can be any format Pillow can write. '
                                            'Default: taken from the FILE extension, else "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Report the band layout and render timing.')

    return parser


def resolve_render_parameters(opt, parser: ArgumentParser) -> RenderParameters:
    try:
        bounds, upper_left, lower_right = parse_render_arguments(opt.bounds, opt.upper_left, opt.lower_right)
    except InputParseError as exc:
        parser.error(str(exc))

    if opt.workers < 1:
        parser.error(f"--workers must be at least 1, got {opt.workers}.")
    if opt.iterations < 1:
        parser.error(f"--iterations must be at least 1, got {opt.iterations}.")

    return RenderParameters(
        bounds=bounds,
        upper_left=upper_left,
        lower_right=lower_right,
        workers=opt.workers,
        iteration_limit=opt.iterations,
    )


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    output_path = Path(opt.output).expanduser()
    if str(opt.output).endswith("/") or (output_path.exists() and output_path.is_dir()):
        parser.error("FILE must be a file path, not a directory.")

    image_format = image_format_for(output_path, opt.format)

    PIL.Image.init()
    if image_format not in PIL.Image.SAVE:
        parser.error(f"Pillow cannot write images in the '{opt.format}' format.")

    return OutputConfig(path=output_path, image_format=image_format)


def _describe_band(band: Band) -> str:
    return "band {0}: rows {1}-{2}, {3} to {4}".format(
        band.index, band.top, band.top + band.height - 1, band.upper_left, band.lower_right)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    params = resolve_render_parameters(opt, parser)
    output_config = resolve_output_config(opt, parser)

    width, height = params.bounds
    bands = plan_bands(params.bounds, params.upper_left, params.lower_right, params.workers)
    log("Rendering {0}x{1} pixels in {2} bands".format(width, height, len(bands)))
    for band in bands:
        log(_describe_band(band))

    def report(band):
        log("band {0} out of {1} done".format(band.index, len(bands)))

    start = time.perf_counter()
    try:
        pixels = render_parallel(
            params.bounds,
            params.upper_left,
            params.lower_right,
            params.workers,
            limit=params.iteration_limit,
            on_band_done=report,
        )
    except RenderError as exc:
        print(f"error rendering image: {exc}", file=sys.stderr)
        return 1
    log("Rendered in {0:.3f}s".format(time.perf_counter() - start))

    try:
        write_image(output_config.path, pixels, params.bounds, output_config.image_format)
    except ImageWriteError as exc:
        print(f"error writing image: {exc.__cause__ or exc}", file=sys.stderr)
        return 1
    log("Wrote {0}".format(output_config.path))
    return 0


if __name__ == '__main__':
    sys.exit(main())
