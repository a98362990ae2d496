"""
Command line client for the quadtree codec.

Usage:
    qtree compress INPUT OUTPUT       compress a raw image to a .rit file
    qtree uncompress INPUT OUTPUT     uncompress a .rit file to a raw image
    qtree view INPUT                  print the tree of a .rit file
"""
import sys
import logging
import argparse
from typing import List, Optional

from qtree import config
from qtree.core.errors import QTException
from qtree.core.qtree import QTree
from qtree.utils.file_handling import (
    raster_to_png,
    read_compressed_file,
    read_raw_file,
    write_compressed_file,
    write_raw_file
)
from qtree.utils.metrics import PerformanceTimer

# Set up logging
logger = logging.getLogger(__name__)


def cmd_compress(args: argparse.Namespace) -> int:
    raw_values = read_raw_file(args.input)

    with PerformanceTimer() as timer:
        tree = QTree().compress(raw_values)
    compressed_size = write_compressed_file(tree, args.output)
    logger.debug(f"Compression took {timer.execution_time:.4f}s")

    if args.verbose:
        print(tree)
    print(f"Raw image size: {tree.raw_size}")
    print(f"Compressed image size: {compressed_size}")
    print(f"Compression %: {100 * compressed_size / tree.raw_size:.2f}")
    return 0


def cmd_uncompress(args: argparse.Namespace) -> int:
    count, values = read_compressed_file(args.input)
    strict = config.STRICT_DECODE and not args.lenient

    tree = QTree().uncompress(count, values, strict=strict)
    if args.png:
        with open(args.output, "wb") as f:
            f.write(raster_to_png(tree.image))
    else:
        write_raw_file(tree.image, args.output)

    print(f"Uncompressing: {args.input}")
    print(tree)
    print(f"Output file: {args.output}")
    return 0


def cmd_view(args: argparse.Namespace) -> int:
    count, values = read_compressed_file(args.input)
    tree = QTree().uncompress(count, values, strict=config.STRICT_DECODE and not args.lenient)
    print(tree)
    print(f"Dimension: {tree.dim}x{tree.dim}, compressed size: {tree.compressed_size}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qtree", description="Quadtree compression of grayscale images")
    parser.add_argument('-v', '--verbose', action='store_true', help="Print the tree and debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="Compress a raw image file")
    p.add_argument("input", help="Raw image file (one value 0-255 per line)")
    p.add_argument("output", help="Compressed .rit file to write")
    p.set_defaults(func=cmd_compress)

    p = sub.add_parser("uncompress", help="Uncompress a .rit file")
    p.add_argument("input", help="Compressed .rit file")
    p.add_argument("output", help="Raw image file (or PNG with --png) to write")
    p.add_argument("--png", action="store_true", help="Write a PNG instead of raw text")
    p.add_argument("--lenient", action="store_true", help="Ignore values after the end of the tree")
    p.set_defaults(func=cmd_uncompress)

    p = sub.add_parser("view", help="Print the tree of a .rit file")
    p.add_argument("input", help="Compressed .rit file")
    p.add_argument("--lenient", action="store_true", help="Ignore values after the end of the tree")
    p.set_defaults(func=cmd_view)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.LOG_LEVEL, logging.INFO),
        format=config.LOG_FORMAT,
        stream=sys.stderr
    )

    try:
        return args.func(args)
    except OSError as e:
        logger.debug("I/O error", exc_info=True)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except QTException as e:
        logger.debug("Codec error", exc_info=True)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
