"""
Tests for raster to quadtree compression.
"""

import numpy as np
import pytest

from qtree.core.compressor import compress_raster, compress_region, is_uniform
from qtree.core.errors import ConfigError
from qtree.core.node import Coordinate, Leaf, Split
from qtree.core.raster import to_raster


class TestIsUniform:
    def test_single_pixel(self):
        raster = to_raster([1, 2, 3, 4])
        assert is_uniform(raster, Coordinate(1, 1), 1)

    def test_uniform_block(self):
        raster = np.full((4, 4), 9)
        assert is_uniform(raster, Coordinate(0, 0), 4)

    def test_mismatch_in_last_pixel(self):
        raster = np.full((4, 4), 9)
        raster[3, 3] = 8
        assert not is_uniform(raster, Coordinate(0, 0), 4)
        assert is_uniform(raster, Coordinate(0, 0), 2)

    def test_region_only(self):
        raster = np.zeros((4, 4))
        raster[0, 0] = 1
        assert is_uniform(raster, Coordinate(2, 2), 2)


class TestCompressRegion:
    def test_uniform_image_is_one_leaf(self):
        raster = np.full((4, 4), 7)
        assert compress_raster(raster) == Leaf(7)

    def test_fully_heterogeneous_2x2(self):
        raster = np.array([[1, 2], [3, 4]])
        assert compress_raster(raster) == Split(Leaf(1), Leaf(2), Leaf(3), Leaf(4))

    def test_partial_split(self):
        raster = np.array([
            [0, 0, 5, 5],
            [0, 0, 5, 5],
            [1, 2, 9, 9],
            [3, 4, 9, 9],
        ])
        expected = Split(
            Leaf(0),
            Leaf(5),
            Split(Leaf(1), Leaf(2), Leaf(3), Leaf(4)),
            Leaf(9),
        )
        assert compress_raster(raster) == expected

    def test_sub_region(self):
        raster = np.array([
            [0, 0, 1, 2],
            [0, 0, 3, 4],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        node = compress_region(raster, Coordinate(0, 2), 2)
        assert node == Split(Leaf(1), Leaf(2), Leaf(3), Leaf(4))

    def test_leaf_values_are_plain_ints(self):
        node = compress_raster(np.full((2, 2), 3, dtype=np.int32))
        assert type(node.value) is int


class TestCompressErrors:
    def test_not_square(self):
        with pytest.raises(ConfigError):
            compress_raster(np.zeros((2, 4)))

    def test_not_power_of_two(self):
        with pytest.raises(ConfigError):
            compress_raster(np.zeros((3, 3)))
