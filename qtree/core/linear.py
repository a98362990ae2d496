"""
Linear (preorder) form of a quadtree.

The compressed format is a flat sequence of integers. The first value is
the raw pixel count (DIM * DIM); the rest is a preorder walk of the tree
where each Split is written as QUAD_SPLIT followed by its four children
(upper-left, upper-right, lower-left, lower-right) and each Leaf as its
grayscale value. Because a split marker is always followed by exactly four
complete subtrees, no per-node lengths are needed.

Example (a 2x2 image [[1, 2], [3, 4]]):
    4, -1, 1, 2, 3, 4
"""
import logging
from typing import List, Sequence, Tuple

from qtree.core.errors import FormatError
from qtree.core.node import QUAD_SPLIT, MIN_PIXEL, MAX_PIXEL, Leaf, Node, Split

# Set up logging
logger = logging.getLogger(__name__)


def read_tree(values: Sequence[int], pos: int = 0) -> Tuple[Node, int]:
    """
    Parse one complete tree starting at a position in the sequence.

    The sequence itself is never modified; a cursor is advanced instead.
    Splits waiting for their children are kept on an explicit stack, so
    arbitrarily nested input cannot exhaust the interpreter's recursion limit.

    Args:
        values: The values following the header line
        pos: Index of the first value of the tree

    Returns:
        Tuple of (root node, index just past the last consumed value)

    Raises:
        FormatError: If the values run out before the tree is complete, or
            a value is neither QUAD_SPLIT nor a grayscale value
    """
    pending: List[List[Node]] = []

    while True:
        if pos >= len(values):
            raise FormatError("Error uncompressing. Not enough data.")

        value = values[pos]
        pos += 1

        if value == QUAD_SPLIT:
            pending.append([])
            continue

        if not MIN_PIXEL <= value <= MAX_PIXEL:
            raise FormatError(f"Invalid value {value} at position {pos}")
        node: Node = Leaf(int(value))

        # Close every split that just received its fourth child
        while pending:
            pending[-1].append(node)
            if len(pending[-1]) < 4:
                break
            node = Split(*pending.pop())

        if not pending:
            return node, pos


def decode_tree(values: Sequence[int], strict: bool = True) -> Node:
    """
    Parse the values following the header into a tree.

    Args:
        values: The preorder node values
        strict: Reject values left over after a complete tree

    Returns:
        The root node

    Raises:
        FormatError: If the data is truncated or malformed, or (in strict
            mode) has trailing values
    """
    root, end = read_tree(values)

    leftover = len(values) - end
    if leftover:
        if strict:
            raise FormatError(f"Error uncompressing. {leftover} unexpected values after end of tree.")
        logger.warning(f"Ignoring {leftover} trailing values after end of tree")

    return root


def encode_tree(root: Node) -> List[int]:
    """
    Write a tree out in preorder.

    Args:
        root: The root node

    Returns:
        One value per node: QUAD_SPLIT for splits, the grayscale value for leaves
    """
    out: List[int] = []
    stack = [root]
    while stack:
        node = stack.pop()
        out.append(node.val)
        # Reversed so the upper-left child is visited first
        stack.extend(reversed(node.children()))
    return out


def to_linear_form(root: Node, dim: int) -> List[int]:
    """Header (DIM * DIM) followed by the preorder node values"""
    return [dim * dim] + encode_tree(root)


def format_linear(count: int, values: Sequence[int]) -> str:
    """Compressed file contents: header then one value per line"""
    return "".join(f"{v}\n" for v in [count, *values])


def render_tree(root: Node) -> str:
    """Space separated preorder dump of the tree, for diagnostics"""
    return " ".join(str(v) for v in encode_tree(root))
