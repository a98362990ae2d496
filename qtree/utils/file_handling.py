"""
Utilities for reading and writing image files and managing temporary files.

Raw images are ASCII text: grayscale values (0-255) separated by whitespace,
usually one per line. Compressed (.rit) files hold the linear form of the
tree, one value per line, the first line being the raw pixel count.
"""
import os
import io
import asyncio
import logging
import uuid
import numpy as np
from PIL import Image
from typing import List, Optional, Sequence, Tuple

from qtree import TEMP_DIR
from qtree.core.errors import FormatError, ConfigError
from qtree.core.qtree import QTree
from qtree.core.linear import format_linear
from qtree.core.raster import flatten

# Set up logging
logger = logging.getLogger(__name__)

COMPRESSED_SUFFIX = ".rit"


def parse_int_text(text: str) -> List[int]:
    """
    Parse whitespace separated integers.

    Args:
        text: The file contents

    Returns:
        The integers in order of appearance

    Raises:
        FormatError: If a token is not an integer
    """
    values = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        for token in line.split():
            try:
                values.append(int(token))
            except ValueError:
                raise FormatError(f"Invalid integer {token!r} on line {line_no}")
    return values


def split_header(values: Sequence[int]) -> Tuple[int, List[int]]:
    """
    Separate the raw size header from the node values of a compressed file.

    Raises:
        FormatError: If there is no header
    """
    if not values:
        raise FormatError("Error uncompressing. Compressed file is empty.")
    return values[0], list(values[1:])


def format_raw(raster: np.ndarray) -> str:
    """Raw image file contents: one value per line, row-major"""
    return "".join(f"{v}\n" for v in flatten(raster))


def read_raw_file(path: str) -> List[int]:
    """Read the pixel values of a raw image file"""
    with open(path, "r") as f:
        values = parse_int_text(f.read())
    logger.debug(f"Read {len(values)} raw values from {path}")
    return values


def read_compressed_file(path: str) -> Tuple[int, List[int]]:
    """
    Read a compressed file.

    Returns:
        Tuple of (raw pixel count, node values)
    """
    with open(path, "r") as f:
        values = parse_int_text(f.read())
    logger.debug(f"Read {len(values)} compressed values from {path}")
    return split_header(values)


def write_compressed_file(tree: QTree, path: str) -> int:
    """
    Write the compressed form of a tree to a file.

    Returns:
        The compressed size (number of lines written)
    """
    with open(path, "w") as f:
        return tree.write(f)


def write_raw_file(raster: np.ndarray, path: str) -> int:
    """
    Write a raster as a raw image file.

    Returns:
        The number of values written
    """
    with open(path, "w") as f:
        f.write(format_raw(raster))
    return int(np.asarray(raster).size)


def image_to_raw(data: bytes) -> List[int]:
    """
    Convert an image file (PNG, BMP, ...) to raw grayscale values.

    Args:
        data: Encoded image bytes

    Returns:
        Row-major grayscale values

    Raises:
        FormatError: If the bytes are not a readable image
        ConfigError: If the image is not a power-of-two square
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError) as e:
        raise FormatError(f"Could not read image: {e}")

    if image.width != image.height:
        raise ConfigError(f"Image must be square, got {image.width}x{image.height}")

    if image.mode != 'L':
        image = image.convert('L')
    return flatten(np.array(image))


def raster_to_png(raster: np.ndarray) -> bytes:
    """Encode a raster as a grayscale PNG"""
    image = Image.fromarray(np.asarray(raster).astype(np.uint8))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def get_temp_filepath(file_id: Optional[str] = None, suffix: str = "") -> str:
    """
    Generate a path for a temporary file.

    Args:
        file_id: Optional file ID to use (generates a new UUID if not provided)
        suffix: Optional file suffix/extension

    Returns:
        Absolute path to a temporary file
    """
    if file_id is None:
        file_id = str(uuid.uuid4())

    return os.path.join(TEMP_DIR, f"{file_id}{suffix}")


async def cleanup_file_later(file_path: str, delay: int = 60) -> None:
    """
    Delete a file after a delay.

    Args:
        file_path: Path to the file to delete
        delay: Delay in seconds before deletion (default: 60)
    """
    logger.debug(f"Scheduling cleanup of {file_path} in {delay} seconds")
    await asyncio.sleep(delay)
    try:
        if os.path.exists(file_path):
            os.remove(file_path)
            logger.debug(f"Cleaned up temporary file: {file_path}")
    except OSError as e:
        logger.error(f"Failed to clean up temporary file {file_path}: {e}")


def schedule_cleanup(file_path: str, delay: int = 60) -> None:
    """
    Schedule a file for deletion after a delay (non-blocking).

    Must be called from a running event loop.
    """
    asyncio.create_task(cleanup_file_later(file_path, delay))

