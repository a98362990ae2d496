"""
Shared raster helpers: dimension checks and conversion between flat
row-major pixel sequences and 2-D numpy rasters.
"""
import math
import logging
import numpy as np
from typing import List, Optional, Sequence

from qtree.core.errors import ConfigError
from qtree.core.node import MIN_PIXEL, MAX_PIXEL

# Set up logging
logger = logging.getLogger(__name__)

# Pixel type of in-memory rasters
RASTER_DTYPE = np.int32


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def side_for_count(count: int, max_pixels: Optional[int] = None) -> int:
    """
    Get the square dimension of an image from its pixel count.

    Args:
        count: Total number of pixels in the image
        max_pixels: Largest accepted pixel count, no limit if None

    Returns:
        The side length DIM such that DIM * DIM == count

    Raises:
        ConfigError: If count is not a perfect square, DIM is not a power of two,
            or count exceeds max_pixels
    """
    if count <= 0:
        raise ConfigError(f"Pixel count must be positive, got {count}")
    if max_pixels is not None and count > max_pixels:
        raise ConfigError(f"Image has {count} pixels, the limit is {max_pixels}")

    dim = math.isqrt(count)
    if dim * dim != count:
        raise ConfigError(f"Pixel count {count} is not a perfect square")
    if not is_power_of_two(dim):
        raise ConfigError(f"Image dimension {dim} is not a power of two")
    return dim


def to_raster(values: Sequence[int], max_pixels: Optional[int] = None) -> np.ndarray:
    """
    Build a square raster from row-major pixel values.

    Args:
        values: Flat sequence of grayscale values (0-255)
        max_pixels: Largest accepted image, no limit if None

    Returns:
        A (DIM, DIM) integer array

    Raises:
        ConfigError: If the values do not form a power-of-two square image,
            or a value is outside 0-255
    """
    dim = side_for_count(len(values), max_pixels=max_pixels)

    # Range is checked on the ints themselves, before numpy can overflow or wrap them
    bad = next((v for v in values if not MIN_PIXEL <= v <= MAX_PIXEL), None)
    if bad is not None:
        raise ConfigError(f"Pixel value {bad} is outside {MIN_PIXEL}-{MAX_PIXEL}")

    raster = np.asarray(values, dtype=RASTER_DTYPE).reshape(dim, dim)

    logger.debug(f"Built {dim}x{dim} raster from {len(values)} values")
    return raster


def new_raster(dim: int) -> np.ndarray:
    """Allocate an empty (zero filled) DIM x DIM raster"""
    return np.zeros((dim, dim), dtype=RASTER_DTYPE)


def flatten(raster: np.ndarray) -> List[int]:
    """Row-major pixel values of a raster as plain ints"""
    return [int(v) for v in np.asarray(raster).ravel()]


def as_rows(raster: np.ndarray) -> List[List[int]]:
    return np.asarray(raster).tolist()

