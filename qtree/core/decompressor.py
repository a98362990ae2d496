"""
Quadtree to raster decompression.

The root represents the entire 2^n x 2^n image. A Leaf writes its value
into every cell of its region; a Split hands each of its children one
quadrant of half the side length. The quadrants partition the region, so
every cell of the raster is written exactly once.
"""
import logging
import numpy as np

from qtree.core.errors import ConfigError
from qtree.core.node import Coordinate, Leaf, Node, quadrants
from qtree.core.raster import new_raster

# Set up logging
logger = logging.getLogger(__name__)


def uncompress_region(node: Node, raster: np.ndarray, start: Coordinate, size: int) -> None:
    """
    Paint the region represented by a node into the raster.

    Args:
        node: The node to uncompress
        raster: The image being rebuilt, modified in place
        start: Upper-left corner of the region this node represents
        size: Side length of the region

    Raises:
        ConfigError: If a Split covers a region that cannot be halved
    """
    if isinstance(node, Leaf):
        raster[start.row:start.row + size, start.col:start.col + size] = node.value
        return

    if size < 2 or size % 2:
        raise ConfigError(
            f"Cannot split region of size {size} at ({start.row}, {start.col})"
        )

    half = size // 2
    for child, corner in zip(node.children(), quadrants(start, size)):
        uncompress_region(child, raster, corner, half)


def uncompress(root: Node, dim: int) -> np.ndarray:
    """
    Rebuild a DIM x DIM raster from a quadtree.

    Args:
        root: Root of the tree, representing the whole image
        dim: Side length of the image

    Returns:
        The raw image as a (dim, dim) integer array
    """
    raster = new_raster(dim)
    uncompress_region(root, raster, Coordinate(0, 0), dim)
    logger.debug(f"Uncompressed tree into {dim}x{dim} raster")
    return raster
