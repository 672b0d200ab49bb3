from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

from ..bitmap import codec
from ..bitmap.types import PixelBuffer
from ..errors import BitmapError, ContentPolicyError
from ..rendering.renderer import print_buffer
from ..workflow import MarkJob, MarkSettings
from .diagnostics import configure_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bmpmark",
        description="Draw an X mark onto a black/white 24/32-bit BMP image.",
    )
    parser.add_argument("input", help="Image to mark (.bmp, or .png/.jpg/.gif via Pillow)")
    parser.add_argument("output", nargs="?", help="Where to write the marked 24-bit BMP")
    parser.add_argument("--origin", nargs=2, type=int, metavar=("X", "Y"), help="Top-left corner of the mark (default: centered)")
    parser.add_argument("--size", type=int, default=MarkSettings.mark_size, help="Mark size in pixels (default: %(default)s)")
    parser.add_argument("--allow-colors", action="store_true", help="Accept pixels other than pure black or white")
    parser.add_argument("--no-preview", action="store_true", help="Do not print the glyph grid")
    parser.add_argument("--preview-image", metavar="PATH", help="Also export the marked image via Pillow (e.g. .png)")
    parser.add_argument("--info", action="store_true", help="Print the bitmap headers and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.epilog = "Without arguments the tool prompts for input and output file names."
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> MarkSettings:
    settings = MarkSettings(mark_size=args.size)
    if args.origin is not None:
        settings.origin = (args.origin[0], args.origin[1])
    settings.strict_colors = not args.allow_colors
    settings.preview = not args.no_preview
    settings.preview_image = args.preview_image
    return settings


def _prompt(message: str) -> str:
    try:
        return input(message).strip()
    except EOFError:
        return ""


def process(job: MarkJob, input_path: str, output_path: Callable[[], Optional[str]]) -> int:
    try:
        buffer = job.load(input_path)
    except (BitmapError, OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        print("Failed to load image.", file=sys.stderr)
        return EXIT_FAILURE
    try:
        job.check(buffer)
    except ContentPolicyError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FAILURE
    _preview(job, buffer)
    job.apply(buffer)
    if job.settings.preview:
        print()
        print("After drawing X:")
    _preview(job, buffer)
    path = output_path()
    if path is None and not job.settings.preview_image:
        return EXIT_OK
    try:
        job.save(path, buffer)
    except (OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        print("Failed to save image.", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def _preview(job: MarkJob, buffer: PixelBuffer) -> None:
    if job.settings.preview:
        print_buffer(buffer)


def print_info(path: str) -> int:
    try:
        info = codec.read_info(path)
    except (BitmapError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FAILURE
    header = info.info_header
    print(f"size: {header.width}x{header.height}")
    print(f"bits per pixel: {header.bit_count}")
    print(f"stride: {info.stride}")
    print(f"pixel data offset: {info.file_header.pixel_data_offset}")
    print(f"file size: {info.file_header.file_size}")
    print(f"image size: {header.image_size}")
    return EXIT_OK


def run_interactive() -> int:
    input_path = _prompt("Enter input BMP file name: ")
    return process(MarkJob(), input_path, lambda: _prompt("Enter output BMP file name: "))


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        configure_logging()
        return run_interactive()
    args = parse_args(argv)
    configure_logging(args.verbose)
    if args.info:
        return print_info(args.input)
    if args.size < 0:
        print("Mark size must not be negative. Use --help for usage.", file=sys.stderr)
        return EXIT_USAGE
    return process(MarkJob(_settings_from_args(args)), args.input, lambda: args.output)


if __name__ == "__main__":
    raise SystemExit(main())
