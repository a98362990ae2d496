"""
Utilities for measuring compression performance.
"""
import time
import logging
import numpy as np
import psutil
from typing import Dict

# Set up logging
logger = logging.getLogger(__name__)


def get_cpu_mem() -> Dict[str, float]:
    """
    Get current CPU and memory usage.

    Returns:
        Dictionary with CPU and memory usage percentages
    """
    return {
        "cpu_usage": psutil.cpu_percent(interval=None),
        "memory_usage": psutil.virtual_memory().percent
    }


def verify_lossless(original: np.ndarray, decoded: np.ndarray) -> bool:
    """
    Check that a decoded image matches the original pixel for pixel.

    Args:
        original: The raw image that was compressed
        decoded: The image rebuilt from the compressed form

    Returns:
        Whether the two images are identical
    """
    original = np.asarray(original)
    decoded = np.asarray(decoded)

    if original.shape != decoded.shape:
        logger.warning(f"Image shapes don't match: original {original.shape} vs decoded {decoded.shape}")
        return False

    mismatches = int(np.count_nonzero(original != decoded))
    if mismatches:
        logger.warning(f"{mismatches} pixels differ between original and decoded image")
    return mismatches == 0


def measure_compression_performance(
    raw_size: int,
    compressed_size: int,
    compression_time: float
) -> Dict[str, float]:
    """
    Calculate compression performance metrics.

    Sizes are counted in values (lines), as in the compressed file format.

    Args:
        raw_size: Number of pixels in the raw image
        compressed_size: Number of values in the compressed form, header included
        compression_time: Time taken for compression in seconds

    Returns:
        Dictionary with compression ratio, space savings percentage and
        throughput in pixels per second
    """
    compression_ratio = raw_size / compressed_size if compressed_size > 0 else 0
    space_savings = (1 - (compressed_size / raw_size)) * 100 if raw_size > 0 else 0
    pixels_per_second = raw_size / compression_time if compression_time > 0 else 0

    return {
        "compression_ratio": round(compression_ratio, 2),
        "space_savings_percent": round(space_savings, 2),
        "pixels_per_second": round(pixels_per_second, 2)
    }


class PerformanceTimer:
    """
    Context manager for measuring execution time.

    Example:
        with PerformanceTimer() as timer:
            # Code to measure
        execution_time = timer.execution_time
    """

    def __init__(self):
        self.start_time = None
        self.execution_time = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.execution_time = time.perf_counter() - self.start_time
        return False  # Don't suppress exceptions
