"""
Tests for raster helpers.
"""

import pytest

from qtree.core.errors import ConfigError
from qtree.core.raster import (
    as_rows,
    flatten,
    is_power_of_two,
    side_for_count,
    to_raster,
)


class TestSideForCount:
    @pytest.mark.parametrize("count,dim", [(1, 1), (4, 2), (16, 4), (1024, 32), (1048576, 1024)])
    def test_valid(self, count, dim):
        assert side_for_count(count) == dim

    @pytest.mark.parametrize("count", [2, 10, 15, 17])
    def test_not_a_square(self, count):
        with pytest.raises(ConfigError, match="not a perfect square"):
            side_for_count(count)

    @pytest.mark.parametrize("count", [9, 36, 100])
    def test_side_not_power_of_two(self, count):
        with pytest.raises(ConfigError, match="not a power of two"):
            side_for_count(count)

    @pytest.mark.parametrize("count", [0, -4])
    def test_not_positive(self, count):
        with pytest.raises(ConfigError):
            side_for_count(count)

    def test_pixel_limit(self):
        assert side_for_count(16, max_pixels=16) == 4
        with pytest.raises(ConfigError, match="16 pixels, the limit is 4"):
            side_for_count(16, max_pixels=4)


def test_is_power_of_two():
    assert [n for n in range(20) if is_power_of_two(n)] == [1, 2, 4, 8, 16]


class TestToRaster:
    def test_row_major(self):
        raster = to_raster([1, 2, 3, 4])
        assert raster.shape == (2, 2)
        assert as_rows(raster) == [[1, 2], [3, 4]]

    def test_flatten_inverse(self):
        values = list(range(16))
        assert flatten(to_raster(values)) == values

    def test_flatten_gives_plain_ints(self):
        assert all(type(v) is int for v in flatten(to_raster([0, 1, 2, 3])))

    def test_wrong_count(self):
        with pytest.raises(ConfigError):
            to_raster(list(range(10)))

    def test_empty(self):
        with pytest.raises(ConfigError):
            to_raster([])

    @pytest.mark.parametrize("bad", [-1, 256])
    def test_pixel_out_of_range(self, bad):
        with pytest.raises(ConfigError, match=str(bad)):
            to_raster([0, 0, bad, 0])


    @pytest.mark.parametrize("bad", [2 ** 40, 2 ** 32 + 7, -(2 ** 63)])
    def test_pixel_beyond_machine_int(self, bad):
        with pytest.raises(ConfigError, match=str(bad)):
            to_raster([bad, 0, 0, 0])

    def test_pixel_limit(self):
        with pytest.raises(ConfigError, match="limit is 4"):
            to_raster([0] * 16, max_pixels=4)
        assert to_raster([0] * 4, max_pixels=4).shape == (2, 2)
