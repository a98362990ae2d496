"""
Core quadtree codec for square grayscale images.

This package contains:
- node: Leaf/Split quadtree nodes and region coordinates
- compressor: raw image to quadtree
- decompressor: quadtree to raw image
- linear: the preorder linear form used for compressed files
- qtree: the QTree session tying them together
"""
from qtree.core.errors import (
    QTException,
    FormatError,
    ConfigError,
    StateError
)

from qtree.core.node import (
    QUAD_SPLIT,
    Coordinate,
    Leaf,
    Split,
    Node,
    count_nodes
)

from qtree.core.linear import (
    decode_tree,
    encode_tree,
    format_linear,
    render_tree,
    to_linear_form
)

from qtree.core.qtree import (
    QTree,
    compress,
    decode,
    to_raster,
    to_linear,
    render
)

__all__ = [
    # Errors
    'QTException',
    'FormatError',
    'ConfigError',
    'StateError',

    # Nodes
    'QUAD_SPLIT',
    'Coordinate',
    'Leaf',
    'Split',
    'Node',
    'count_nodes',

    # Linear form
    'decode_tree',
    'encode_tree',
    'format_linear',
    'render_tree',
    'to_linear_form',

    # Session
    'QTree',
    'compress',
    'decode',
    'to_raster',
    'to_linear',
    'render'
]
