"""
The QTree session: the public entry point of the codec.

A QTree starts empty and is populated exactly once, either by compressing
a raw image or by uncompressing the linear form of a tree. Afterwards it
can be exported, rendered and queried. Build a new QTree for every image;
the module level helpers (compress, decode, ...) do this for you.
"""
import logging
import numpy as np
from typing import List, Optional, Sequence, TextIO, Tuple

from qtree import config
from qtree.core.errors import StateError
from qtree.core.node import Node, count_nodes, tree_depth
from qtree.core.raster import side_for_count, to_raster as build_raster
from qtree.core.compressor import compress_raster
from qtree.core.decompressor import uncompress as uncompress_tree
from qtree.core.linear import decode_tree, encode_tree, format_linear, render_tree

# Set up logging
logger = logging.getLogger(__name__)


class QTree:
    """
    A quadtree compressed grayscale image.

    Attributes:
        dim: Square dimension of the image
        raw_size: Number of pixels in the raw image (dim * dim)
        compressed_size: Number of values in the linear form, header included.
            Set once the tree has been decoded or exported.
    """

    def __init__(self):
        self.root: Optional[Node] = None
        self.dim = 0
        self.raw_size = 0
        self.compressed_size = 0
        self._image: Optional[np.ndarray] = None

    @property
    def is_built(self) -> bool:
        return self.root is not None

    def _check_empty(self):
        if self.is_built:
            raise StateError("QTException: Tree has already been built. Create a new QTree.")

    def _check_built(self, action: str):
        if not self.is_built:
            raise StateError(f"QTException: Error {action}. File has not been compressed or decoded yet.")

    def compress(self, raw_values: Sequence[int]) -> "QTree":
        """
        Compress a raw image.

        Args:
            raw_values: Grayscale values (0-255) in row-major order, 2^n x 2^n of them

        Returns:
            This tree, for chaining

        Raises:
            ConfigError: If the value count is not a power-of-two square
                or exceeds the configured pixel limit, or a value is outside 0-255
            StateError: If this tree was already built
        """
        self._check_empty()

        image = build_raster(raw_values, max_pixels=config.MAX_PIXELS)
        self.root = compress_raster(image)
        self._image = image
        self.dim = image.shape[0]
        self.raw_size = self.dim * self.dim

        logger.debug(
            f"Compressed {self.raw_size} pixels into {count_nodes(self.root)} nodes "
            f"(depth {tree_depth(self.root)})"
        )
        return self

    def uncompress(self, count: int, linear_values: Sequence[int], strict: bool = True) -> "QTree":
        """
        Rebuild the tree and raw image from the linear form.

        Args:
            count: The header value, the raw pixel count
            linear_values: The preorder node values following the header
            strict: Reject values left over after a complete tree

        Returns:
            This tree, for chaining

        Raises:
            ConfigError: If count is not a power-of-two square or exceeds the
                configured pixel limit, or the tree splits a region that cannot be halved
            FormatError: If the node values are truncated or malformed
            StateError: If this tree was already built
        """
        self._check_empty()

        dim = side_for_count(count, max_pixels=config.MAX_PIXELS)
        root = decode_tree(linear_values, strict=strict)
        image = uncompress_tree(root, dim)

        self.root = root
        self._image = image
        self.dim = dim
        self.raw_size = count
        self.compressed_size = 1 + count_nodes(root)

        logger.debug(f"Uncompressed {self.compressed_size} values into {dim}x{dim} image")
        return self

    @property
    def image(self) -> np.ndarray:
        """The raw image as a (dim, dim) array"""
        self._check_built("reading image")
        return self._image

    def to_linear(self) -> Tuple[int, List[int]]:
        """
        Export the tree.

        Returns:
            Tuple of (header count, preorder node values)
        """
        self._check_built("writing compressed file")
        values = encode_tree(self.root)
        self.compressed_size = 1 + len(values)
        return self.dim * self.dim, values

    def write(self, stream: TextIO) -> int:
        """
        Write the compressed image, one value per line.

        Args:
            stream: Text stream to write to

        Returns:
            The number of lines written (the compressed size)
        """
        count, values = self.to_linear()
        stream.write(format_linear(count, values))
        return self.compressed_size

    def render(self) -> str:
        """Space separated preorder dump of the tree"""
        self._check_built("rendering tree")
        return render_tree(self.root)

    def __str__(self) -> str:
        return "QTree: " + self.render()

    def __repr__(self) -> str:
        if not self.is_built:
            return "QTree(empty)"
        return f"QTree(dim={self.dim}, raw_size={self.raw_size}, compressed_size={self.compressed_size})"


def compress(raw_values: Sequence[int]) -> QTree:
    """Compress a raw image into a new QTree"""
    return QTree().compress(raw_values)


def decode(count: int, linear_values: Sequence[int], strict: bool = True) -> QTree:
    """Rebuild a new QTree from its linear form"""
    return QTree().uncompress(count, linear_values, strict=strict)


def to_raster(tree: QTree) -> np.ndarray:
    return tree.image


def to_linear(tree: QTree) -> Tuple[int, List[int]]:
    return tree.to_linear()


def render(tree: QTree) -> str:
    return tree.render()
