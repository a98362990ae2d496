"""
Quadtree nodes and region coordinates.

A node is either a Leaf holding a grayscale value (0-255) or a Split whose
four children divide its region into equally sized quadrants, always in
the order upper-left, upper-right, lower-left, lower-right.
"""
from dataclasses import dataclass
from typing import Tuple, Union

from qtree.core.errors import FormatError

# The value of a node that indicates it is split into 4 sub-regions
QUAD_SPLIT = -1

MIN_PIXEL = 0
MAX_PIXEL = 255


@dataclass(frozen=True)
class Coordinate:
    """Starting (row, col) of a square region in the raster"""
    row: int
    col: int

    def offset(self, rows: int, cols: int) -> "Coordinate":
        return Coordinate(self.row + rows, self.col + cols)


@dataclass(frozen=True)
class Leaf:
    """A uniform region of a single grayscale value"""
    value: int

    def __post_init__(self):
        if not MIN_PIXEL <= self.value <= MAX_PIXEL:
            raise FormatError(
                f"Invalid pixel value {self.value}, expected {MIN_PIXEL}-{MAX_PIXEL}"
            )

    @property
    def val(self) -> int:
        return self.value

    @property
    def is_leaf(self) -> bool:
        return True

    def children(self) -> Tuple["Node", ...]:
        return ()


@dataclass(frozen=True)
class Split:
    """A region divided into four equal quadrants"""
    upper_left: "Node"
    upper_right: "Node"
    lower_left: "Node"
    lower_right: "Node"

    @property
    def val(self) -> int:
        return QUAD_SPLIT

    @property
    def is_leaf(self) -> bool:
        return False

    def children(self) -> Tuple["Node", ...]:
        return (self.upper_left, self.upper_right, self.lower_left, self.lower_right)


Node = Union[Leaf, Split]


def quadrants(start: Coordinate, size: int) -> Tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
    """
    Starting coordinates of the four quadrants of a region.

    Args:
        start: Upper-left corner of the region
        size: Side length of the region (must be even)

    Returns:
        Coordinates of the upper-left, upper-right, lower-left and
        lower-right quadrants, each of side size // 2
    """
    half = size // 2
    return (
        start,
        start.offset(0, half),
        start.offset(half, 0),
        start.offset(half, half),
    )


def count_nodes(node: Node) -> int:
    """Total number of nodes (leaves and splits) in a tree"""
    total = 0
    stack = [node]
    while stack:
        current = stack.pop()
        total += 1
        stack.extend(current.children())
    return total


def tree_depth(node: Node) -> int:
    """Number of split levels below the node (0 for a leaf)"""
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(child) for child in node.children())
