"""
Tests for the QTree session and the functional codec API.
"""

import io

import numpy as np
import pytest

from qtree import (
    ConfigError,
    config,
    FormatError,
    QTree,
    StateError,
    compress,
    decode,
    render,
    to_linear,
    to_raster,
)
from qtree.core.linear import format_linear
from qtree.core.node import Leaf, Split


def random_image(dim, levels, seed):
    """Blocky random image so that both leaves and splits appear at many levels."""
    rng = np.random.default_rng(seed)
    block = max(dim // 4, 1)
    coarse = rng.integers(0, levels, size=(dim // block, dim // block))
    image = np.kron(coarse, np.ones((block, block), dtype=int))
    image[rng.integers(0, dim), rng.integers(0, dim)] = 255
    return image


class TestKnownImages:
    def test_uniform_4x4(self):
        tree = compress([7] * 16)
        assert tree.root == Leaf(7)
        count, values = to_linear(tree)
        assert [count, *values] == [16, 7]

    def test_heterogeneous_2x2(self):
        tree = compress([1, 2, 3, 4])
        assert tree.root == Split(Leaf(1), Leaf(2), Leaf(3), Leaf(4))
        count, values = to_linear(tree)
        assert [count, *values] == [4, -1, 1, 2, 3, 4]

    def test_single_pixel(self):
        tree = compress([42])
        assert tree.dim == 1
        assert tree.root == Leaf(42)
        assert to_raster(tree).tolist() == [[42]]

    def test_render(self):
        tree = compress([1, 2, 3, 4])
        assert render(tree) == "-1 1 2 3 4"
        assert str(tree) == "QTree: -1 1 2 3 4"


class TestRoundTrip:
    @pytest.mark.parametrize("dim", [1, 2, 4, 8, 16, 32])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_raster_roundtrip(self, dim, seed):
        image = random_image(dim, 3, seed)
        tree = compress(image.ravel().tolist())
        assert np.array_equal(to_raster(tree), image)

    @pytest.mark.parametrize("seed", [3, 4])
    def test_decode_of_export_matches_tree(self, seed):
        image = random_image(16, 2, seed)
        tree = compress(image.ravel().tolist())
        count, values = to_linear(tree)
        decoded = decode(count, values)
        assert decoded.root == tree.root
        assert np.array_equal(to_raster(decoded), image)

    def test_reencode_is_idempotent(self):
        tree = compress(random_image(8, 4, 5).ravel().tolist())
        first = to_linear(tree)
        second = to_linear(decode(*first))
        assert first == second

    def test_checkerboard_splits_to_pixels(self):
        image = (np.indices((4, 4)).sum(axis=0) % 2) * 255
        tree = compress(image.ravel().tolist())
        count, values = to_linear(tree)
        # 5 splits and 16 leaves
        assert len(values) == 21
        assert np.array_equal(to_raster(decode(count, values)), image)


class TestSizes:
    def test_compressed_size_after_export(self):
        tree = compress([1, 2, 3, 4])
        assert tree.raw_size == 4
        to_linear(tree)
        assert tree.compressed_size == 6

    def test_compressed_size_after_decode(self):
        tree = decode(16, [-1, 1, 2, 3, 4])
        assert tree.dim == 4
        assert tree.raw_size == 16
        assert tree.compressed_size == 6

    def test_write_stream(self):
        tree = compress([5, 5, 5, 6])
        out = io.StringIO()
        assert tree.write(out) == 6
        assert out.getvalue() == "4\n-1\n5\n5\n5\n6\n"

    def test_write_matches_format_linear(self):
        tree = decode(16, [-1, 0, 9, -1, 1, 2, 3, 4, 5])
        out = io.StringIO()
        tree.write(out)
        assert out.getvalue() == format_linear(*tree.to_linear())

    def test_repr(self):
        assert repr(QTree()) == "QTree(empty)"
        assert "dim=2" in repr(compress([1, 1, 1, 1]))


class TestErrors:
    def test_non_square_count(self):
        with pytest.raises(ConfigError):
            compress(list(range(10)))

    def test_side_not_power_of_two(self):
        with pytest.raises(ConfigError):
            compress([0] * 9)

    def test_truncated_input(self):
        with pytest.raises(FormatError):
            decode(4, [-1, 1, 2])

    def test_bad_header(self):
        with pytest.raises(ConfigError):
            decode(10, [1])

    def test_trailing_garbage(self):
        with pytest.raises(FormatError):
            decode(4, [-1, 1, 2, 3, 4, 9])
        assert decode(4, [-1, 1, 2, 3, 4, 9], strict=False).image.tolist() == [[1, 2], [3, 4]]

    def test_split_deeper_than_image(self):
        with pytest.raises(ConfigError):
            decode(1, [-1, 1, 2, 3, 4])

    def test_pixel_too_large_for_machine_int(self):
        with pytest.raises(ConfigError, match=str(2 ** 40)):
            compress([2 ** 40, 0, 0, 0])

    def test_header_over_pixel_limit(self):
        with pytest.raises(ConfigError, match="limit"):
            decode(4 ** 30, [5])

    def test_pixel_limit_follows_config(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_PIXELS", 4)
        with pytest.raises(ConfigError, match="limit is 4"):
            compress([0] * 16)
        with pytest.raises(ConfigError, match="limit is 4"):
            decode(16, [0])
        assert decode(4, [0]).dim == 2

    @pytest.mark.parametrize("action", [
        lambda t: t.to_linear(),
        lambda t: t.render(),
        lambda t: str(t),
        lambda t: t.image,
        lambda t: t.write(io.StringIO()),
    ])
    def test_use_before_build(self, action):
        with pytest.raises(StateError):
            action(QTree())

    def test_cannot_populate_twice(self):
        tree = compress([1, 2, 3, 4])
        with pytest.raises(StateError):
            tree.compress([1, 1, 1, 1])
        with pytest.raises(StateError):
            tree.uncompress(4, [0])

    def test_failed_build_leaves_tree_empty(self):
        tree = QTree()
        with pytest.raises(FormatError):
            tree.uncompress(4, [-1, 1])
        assert not tree.is_built
        tree.uncompress(4, [3])
        assert tree.root == Leaf(3)
