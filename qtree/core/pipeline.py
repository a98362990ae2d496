"""
File level compression and decompression with metrics.

These wrap the QTree session for the API: they time the operation, write
the results to disk and collect the statistics reported back to clients.
"""
import os
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from qtree.core.qtree import QTree
from qtree.utils.metrics import (
    get_cpu_mem,
    measure_compression_performance,
    verify_lossless,
    PerformanceTimer
)
from qtree.utils.file_handling import (
    raster_to_png,
    write_compressed_file,
    write_raw_file
)

# Set up logging
logger = logging.getLogger(__name__)


def compress_to_file(
    raw_values: Sequence[int],
    output_path: str,
    file_id: Optional[str] = None
) -> Tuple[QTree, Dict[str, Any]]:
    """
    Compress a raw image and write the compressed file.

    Args:
        raw_values: Grayscale values in row-major order
        output_path: Path to save the compressed output
        file_id: ID reported back to the client (derived from output_path if not given)

    Returns:
        Tuple of (the compressed tree, dictionary with compression metrics)
    """
    if file_id is None:
        file_id = os.path.basename(output_path).split('_')[0]

    with PerformanceTimer() as timer:
        tree = QTree().compress(raw_values)
    compression_time = timer.execution_time

    compressed_size = write_compressed_file(tree, output_path)
    verified = round_trip_check(tree)
    performance = measure_compression_performance(tree.raw_size, compressed_size, compression_time)
    cpu_mem = get_cpu_mem()

    logger.info(
        f"Compressed {tree.dim}x{tree.dim} image: {tree.raw_size} -> {compressed_size} values "
        f"(ratio: {performance['compression_ratio']})"
    )

    return tree, {
        "file_id": file_id,
        "dim": tree.dim,
        "raw_size": tree.raw_size,
        "compressed_size": compressed_size,
        "compression_ratio": performance["compression_ratio"],
        "space_savings_percent": performance["space_savings_percent"],
        "compression_time": round(compression_time, 4),
        "verified": verified,
        "cpu_usage": cpu_mem["cpu_usage"],
        "memory_usage": cpu_mem["memory_usage"]
    }


def decompress_to_files(
    count: int,
    linear_values: Sequence[int],
    raw_path: str,
    png_path: str,
    strict: bool = True,
    file_id: Optional[str] = None
) -> Tuple[QTree, Dict[str, Any]]:
    """
    Decompress a linear form and write the raw and PNG renditions.

    Args:
        count: Raw pixel count from the header
        linear_values: The node values following the header
        raw_path: Path to save the raw text image
        png_path: Path to save the PNG image
        strict: Reject values left over after the tree
        file_id: ID reported back to the client (derived from raw_path if not given)

    Returns:
        Tuple of (the decoded tree, dictionary with decompression metrics)
    """
    if file_id is None:
        file_id = os.path.basename(raw_path).split('_')[0]

    with PerformanceTimer() as timer:
        tree = QTree().uncompress(count, linear_values, strict=strict)
    decompression_time = timer.execution_time

    write_raw_file(tree.image, raw_path)
    with open(png_path, "wb") as f:
        f.write(raster_to_png(tree.image))

    cpu_mem = get_cpu_mem()
    logger.info(f"Decompressed {tree.compressed_size} values into {tree.dim}x{tree.dim} image")

    return tree, {
        "file_id": file_id,
        "dim": tree.dim,
        "raw_size": tree.raw_size,
        "compressed_size": tree.compressed_size,
        "decompression_time": round(decompression_time, 4),
        "cpu_usage": cpu_mem["cpu_usage"],
        "memory_usage": cpu_mem["memory_usage"]
    }


def round_trip_check(tree: QTree) -> bool:
    """
    Decode the exported form of a tree and compare it to the tree's image.

    Returns:
        Whether decompressing the compressed form reproduces the image exactly
    """
    count, values = tree.to_linear()
    decoded = QTree().uncompress(count, values)
    return decoded.root == tree.root and verify_lossless(tree.image, decoded.image)
