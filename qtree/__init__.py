"""
Quadtree Image Compression

This package implements lossless compression of square grayscale images
with quadtrees: uniform regions collapse into a single leaf, other regions
split into four equal quadrants.

Features include:
- The core codec (compress, decode, export, render)
- Text and PNG conversion of raw images
- A FastAPI service (qtree.api) and a command line client (qtree.cli)
"""
import tempfile

# Create a temporary directory for file storage
TEMP_DIR = tempfile.mkdtemp(prefix="qtree_")

from qtree.core import (
    QTree,
    QTException,
    FormatError,
    ConfigError,
    StateError,
    compress,
    decode,
    to_raster,
    to_linear,
    render
)

__version__ = "1.0.0"

__all__ = [
    'TEMP_DIR',
    'QTree',
    'QTException',
    'FormatError',
    'ConfigError',
    'StateError',
    'compress',
    'decode',
    'to_raster',
    'to_linear',
    'render'
]
