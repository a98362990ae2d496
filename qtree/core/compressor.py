"""
Raster to quadtree compression.

The compressor works over a square region of the raster. If every pixel in
the region has the same value (always true for a single pixel) the region
becomes a Leaf. Otherwise it is divided into four equally sized quadrants
that are compressed recursively and joined under a Split.
"""
import logging
import numpy as np

from qtree.core.errors import ConfigError
from qtree.core.node import Coordinate, Leaf, Node, Split, quadrants
from qtree.core.raster import is_power_of_two

# Set up logging
logger = logging.getLogger(__name__)


def is_uniform(raster: np.ndarray, start: Coordinate, size: int) -> bool:
    """
    Check whether a region of the raster contains a single value.

    Args:
        raster: The raw image
        start: Upper-left corner of the region
        size: Side length of the region

    Returns:
        Whether every pixel in the region equals the region's first pixel
    """
    block = raster[start.row:start.row + size, start.col:start.col + size]
    return bool((block == block[0, 0]).all())


def compress_region(raster: np.ndarray, start: Coordinate, size: int) -> Node:
    """
    Compress one square region of the raster into a node.

    Args:
        raster: The raw image
        start: Upper-left corner of the region
        size: Side length of the region, a power of two

    Returns:
        A Leaf for a uniform region, otherwise a Split of the four quadrants
    """
    if is_uniform(raster, start, size):
        return Leaf(int(raster[start.row, start.col]))

    half = size // 2
    ul, ur, ll, lr = quadrants(start, size)
    return Split(
        compress_region(raster, ul, half),
        compress_region(raster, ur, half),
        compress_region(raster, ll, half),
        compress_region(raster, lr, half),
    )


def compress_raster(raster: np.ndarray) -> Node:
    """
    Compress a whole raster into a quadtree.

    Raises:
        ConfigError: If the raster is not a power-of-two square
    """
    if raster.ndim != 2 or raster.shape[0] != raster.shape[1]:
        raise ConfigError(f"Image must be square, got shape {raster.shape}")
    dim = raster.shape[0]
    if not is_power_of_two(dim):
        raise ConfigError(f"Image dimension {dim} is not a power of two")

    root = compress_region(raster, Coordinate(0, 0), dim)
    logger.debug(f"Compressed {dim}x{dim} raster")
    return root
