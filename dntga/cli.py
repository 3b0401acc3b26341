# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for DNTga

Commands:
  info     Print TGA header metadata
  convert  Decode a TGA file and write it back as uncompressed TGA
  create   Write a blank TGA image

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dntga import __version__
from dntga.exceptions import DNTgaError
from dntga.image import TGAImage
from dntga.pixel_format import PixelFormat
from dntga.tga_parser import TGAParser

logger = logging.getLogger(__name__)


def format_output(metadata: dict, format_type: str = "text") -> str:
    """
    Format metadata output based on format type.

    Args:
        metadata: Dictionary of metadata
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False)
    lines = []
    for tag, value in metadata.items():
        lines.append(f"{tag}: {value}")
    return "\n".join(lines)


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _apply_options(image: TGAImage, args: argparse.Namespace) -> None:
    image.set_option('OverwriteExisting', not args.no_clobber)
    image.set_option('RemovePartialOutput', not args.keep_partial)


def cmd_info(args: argparse.Namespace) -> int:
    format_type = "json" if args.json else "text"
    results = {}
    status = 0
    for file_path in args.files:
        try:
            results[str(file_path)] = TGAParser(file_path=file_path).parse()
        except DNTgaError as e:
            print(f"Error: {file_path}: {e}", file=sys.stderr)
            status = 1

    if format_type == "json":
        print(format_output(results if len(args.files) > 1 else next(iter(results.values()), {}), "json"))
    else:
        for file_path, metadata in results.items():
            if len(args.files) > 1:
                print(f"======== {file_path}")
            print(format_output(metadata))
    return status


def cmd_convert(args: argparse.Namespace) -> int:
    image = TGAImage.open(args.source)
    if image.error is not None:
        print(f"Error: {args.source}: {image.error}", file=sys.stderr)
        return 1

    if args.flip_h:
        image.flip_h()
    if args.flip_v:
        image.flip_v()

    _apply_options(image, args)
    if not image.save(args.destination):
        print(f"Error: {args.destination}: {image.error}", file=sys.stderr)
        return 1
    logger.info("Wrote %s (%dx%d %s)", args.destination, image.width, image.height, image.pixel_format.name)
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    image = TGAImage(args.width, args.height, PixelFormat[args.format])
    if image.error is None:
        _apply_options(image, args)
        image.save(args.destination)
    if image.error is not None:
        print(f"Error: {args.destination}: {image.error}", file=sys.stderr)
        return 1
    logger.info("Wrote %s (%dx%d %s)", args.destination, args.width, args.height, args.format)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dntga",
        description="DNTga - Read and write TGA images (100% Pure Python)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show header metadata
  dntga info image.tga

  # Decompress and normalize to a top-left origin
  dntga convert input.tga output.tga

  # Mirror an image
  dntga convert --flip-h input.tga mirrored.tga

  # Blank 64x64 RGBA image
  dntga create 64 64 ARGB32 blank.tga
        """
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Log progress (-vv for debug output)')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log errors')

    subparsers = parser.add_subparsers(dest='command', required=True)

    info = subparsers.add_parser('info', help='Print TGA header metadata')
    info.add_argument('files', nargs='+', type=Path, help='TGA file(s) to inspect')
    info.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    info.set_defaults(func=cmd_info)

    write_options = argparse.ArgumentParser(add_help=False)
    write_options.add_argument('-n', '--no-clobber', action='store_true', help='Fail instead of overwriting the destination')
    write_options.add_argument('--keep-partial', action='store_true', help='Keep the destination file if writing fails')

    convert = subparsers.add_parser('convert', parents=[write_options], help='Re-encode a TGA file uncompressed')
    convert.add_argument('source', type=Path, help='Input TGA file')
    convert.add_argument('destination', type=Path, help='Output TGA file')
    convert.add_argument('--flip-h', action='store_true', help='Mirror left to right before writing')
    convert.add_argument('--flip-v', action='store_true', help='Mirror top to bottom before writing')
    convert.set_defaults(func=cmd_convert)

    create = subparsers.add_parser('create', parents=[write_options], help='Write a blank TGA image')
    create.add_argument('width', type=int, help='Width in pixels (1-65535)')
    create.add_argument('height', type=int, help='Height in pixels (1-65535)')
    create.add_argument('format', choices=[f.name for f in PixelFormat], help='Pixel format')
    create.add_argument('destination', type=Path, help='Output TGA file')
    create.set_defaults(func=cmd_create)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
