"""
Utility functions for the quadtree compression application.
"""
from qtree.utils.metrics import (
    get_cpu_mem,
    verify_lossless,
    measure_compression_performance,
    PerformanceTimer
)

from qtree.utils.file_handling import (
    COMPRESSED_SUFFIX,
    parse_int_text,
    split_header,
    format_linear,
    format_raw,
    read_raw_file,
    read_compressed_file,
    write_compressed_file,
    write_raw_file,
    image_to_raw,
    raster_to_png,
    get_temp_filepath,
    cleanup_file_later,
    schedule_cleanup
)

__all__ = [
    # Metrics utilities
    'get_cpu_mem',
    'verify_lossless',
    'measure_compression_performance',
    'PerformanceTimer',

    # File handling utilities
    'COMPRESSED_SUFFIX',
    'parse_int_text',
    'split_header',
    'format_linear',
    'format_raw',
    'read_raw_file',
    'read_compressed_file',
    'write_compressed_file',
    'write_raw_file',
    'image_to_raw',
    'raster_to_png',
    'get_temp_filepath',
    'cleanup_file_later',
    'schedule_cleanup'
]
