"""Unit tests for the rectangle packer."""

import numpy as np
import pytest
from types import SimpleNamespace

from potpack.packing.packer import Packer, PackingResult, pack, pack_sizes
from potpack.packing.rectangle import Rectangle
from potpack.utils.metrics import MetricsCalculator


def _rects(sizes):
    return [Rectangle(width=w, height=h, rect_id=i) for i, (w, h) in enumerate(sizes)]


def _positions_by_id(rectangles):
    return {rect.rect_id: (rect.x, rect.y) for rect in rectangles}


class TestPackerScenarios:
    """Hand-traced layouts."""

    def test_empty_input(self):
        """Empty input packs to (0, 0)."""
        packer = Packer()
        assert packer.pack([]) == (0, 0)
        assert packer.fill == 0.0
        assert packer.last_result.num_rectangles == 0

    def test_single_rectangle(self):
        """A single rectangle sits at the origin and defines the bound."""
        rects = _rects([(7, 3)])
        assert pack(rects) == (7, 3)
        assert (rects[0].x, rects[0].y) == (0, 0)

    def test_two_large_squares(self):
        """Start width 1451 only holds one 1000px square per row."""
        rects = _rects([(1000, 1000), (1000, 1000)])
        packer = Packer()

        assert packer.pack(rects) == (1000, 2000)
        assert packer.last_result.start_width == 1451
        assert _positions_by_id(rects) == {0: (0, 0), 1: (0, 1000)}

    def test_split_then_height_match(self, mixed_rectangles):
        """The tall box splits the space; the last box takes a height-matched remainder."""
        packer = Packer()

        assert packer.pack(mixed_rectangles) == (4, 4)
        assert _positions_by_id(mixed_rectangles) == {0: (0, 0), 1: (2, 0), 2: (2, 2)}

        result = packer.last_result
        assert result.start_width == 5
        assert result.num_spaces == 3
        assert result.fill == 1.0

    def test_exact_fit_removes_space(self):
        """A box that exactly fills a space removes it."""
        rects = _rects([(2, 2), (1, 2), (1, 2)])
        packer = Packer()

        assert packer.pack(rects) == (3, 4)
        assert _positions_by_id(rects) == {0: (0, 0), 1: (2, 0), 2: (0, 2)}
        assert packer.last_result.num_spaces == 2
        assert packer.fill == pytest.approx(8 / 12)

    def test_exact_fit_swaps_last_space_into_slot(self):
        """Exact-fitting a middle space moves the last space into its slot."""
        rects = _rects([(2, 2), (4, 2), (3, 2), (1, 2)])
        packer = Packer()

        # Third box fills the space right of the first; the space right of
        # the second box is swapped in and then filled by the fourth box
        assert packer.pack(rects) == (5, 4)
        assert packer.last_result.start_width == 5
        assert _positions_by_id(rects) == {0: (0, 0), 1: (0, 2), 2: (2, 0), 3: (4, 2)}
        assert packer.last_result.num_spaces == 1
        assert packer.fill == 1.0

    def test_width_match_keeps_single_space(self):
        """A box as wide as the space shrinks it from the top."""
        rects = _rects([(10, 1)])
        packer = Packer()

        assert packer.pack(rects) == (10, 1)
        assert packer.last_result.start_width == 10
        assert packer.last_result.num_spaces == 1


class TestPackerBehaviour:
    """Test sorting, configuration and error handling."""

    def test_sorts_in_place_by_descending_height(self, random_rectangles):
        """The caller's list ends up tallest first."""
        pack(random_rectangles)
        heights = [rect.height for rect in random_rectangles]
        assert heights == sorted(heights, reverse=True)

    def test_equal_heights_keep_input_order(self):
        """Sorting is stable for equal heights."""
        rects = _rects([(3, 5), (4, 5), (1, 9), (2, 5)])
        pack(rects)
        assert [rect.rect_id for rect in rects] == [2, 0, 1, 3]

    def test_packer_attributes_track_last_call(self, mixed_rectangles):
        """width/height/fill and last_result describe the latest call."""
        packer = Packer()
        packer.pack(mixed_rectangles)
        assert isinstance(packer.last_result, PackingResult)
        assert packer.last_result.dimensions == (packer.width, packer.height) == (4, 4)

        packer.pack([])
        assert (packer.width, packer.height) == (0, 0)

    def test_start_width(self):
        """Lower fill factors start wider; the widest box is a floor."""
        assert Packer().start_width(100, 1) == 11
        assert Packer(fill_factor=0.5).start_width(100, 1) == 15
        assert Packer().start_width(100, 40) == 40

    @pytest.mark.parametrize("fill_factor", [0, -0.5, 1.5])
    def test_invalid_fill_factor(self, fill_factor):
        """fill_factor must be in (0, 1]."""
        with pytest.raises(ValueError):
            Packer(fill_factor=fill_factor)

    @pytest.mark.parametrize("width,height", [(0, 3), (3, -1), (2.5, 3), (True, 3)])
    def test_invalid_rectangle_rejected_before_packing(self, width, height):
        """Bad dimensions fail upfront without touching valid rectangles."""
        good = Rectangle(width=5, height=1)
        bad = SimpleNamespace(width=width, height=height, x=None, y=None)
        rects = [good, bad]

        with pytest.raises(ValueError, match="index 1"):
            pack(rects)

        assert rects[0] is good and rects[1] is bad
        assert good.x is None and good.y is None

    def test_duck_typed_rectangles(self):
        """Any object with width/height and writable x/y can be packed."""
        rects = [SimpleNamespace(width=4, height=2, x=None, y=None)]
        assert pack(rects) == (4, 2)
        assert (rects[0].x, rects[0].y) == (0, 0)

    def test_numpy_integer_sides(self):
        """numpy integer sides pack like plain ints."""
        rects = [Rectangle(width=np.int32(10), height=np.int32(5))]
        assert pack(rects) == (10, 5)
        assert type(rects[0].x) is int and type(rects[0].y) is int

    def test_large_numpy_integer_sides(self):
        """Areas beyond int32 range do not wrap."""
        rects = [
            SimpleNamespace(width=np.int32(50000), height=np.int32(50000), x=None, y=None),
            SimpleNamespace(width=np.int16(7), height=np.int16(3), x=None, y=None),
        ]
        packer = Packer()

        assert packer.pack(rects) == (50007, 50000)
        assert (rects[1].x, rects[1].y) == (50000, 0)
        assert packer.last_result.start_width == 51299

    def test_missing_space_raises(self, monkeypatch):
        """A start width narrower than a box is an internal error."""
        monkeypatch.setattr(Packer, "start_width", lambda self, area, max_width: 1)
        with pytest.raises(RuntimeError, match="No free space"):
            pack(_rects([(2, 2)]))


class TestPackerProperties:
    """Layout properties that hold for any valid input."""

    def test_layout_is_valid(self, random_rectangles):
        """No overlaps, everything inside the bound, bound covers the area."""
        width, height = pack(random_rectangles)

        assert MetricsCalculator.find_overlaps(random_rectangles) == []
        assert MetricsCalculator.check_containment(random_rectangles, width, height)
        assert width * height >= MetricsCalculator.calculate_total_area(random_rectangles)

    def test_every_rectangle_placed(self, random_rectangles):
        pack(random_rectangles)
        assert all(rect.placed for rect in random_rectangles)

    def test_roughly_square(self, random_rectangles):
        """The result stays near square for assorted sizes."""
        width, height = pack(random_rectangles)
        assert MetricsCalculator.calculate_aspect_ratio(width, height) < 2.0

    def test_order_independent_for_distinct_heights(self, rng):
        """Shuffling input with distinct heights gives the same bound."""
        widths = rng.integers(1, 50, size=30)
        sizes = [(int(w), h) for w, h in zip(widths, range(1, 31))]

        expected = pack(_rects(sizes))
        for _ in range(5):
            shuffled = [sizes[i] for i in rng.permutation(len(sizes))]
            assert pack(_rects(shuffled)) == expected

    def test_width_never_below_widest(self):
        """The widest rectangle always fits on a row."""
        rects = _rects([(100, 1), (1, 1), (1, 1)])
        width, _ = pack(rects)
        assert width == 100


class TestPackSizes:
    """Test the order-preserving variant."""

    def test_positions_in_input_order(self):
        sizes = [(10, 10), (10, 20)]
        assert pack_sizes(sizes) == (10, 30, [(0, 20), (0, 0)])
        assert sizes == [(10, 10), (10, 20)]

    def test_matches_in_place_pack(self, mixed_rectangles):
        """Same layout as packing Rectangle objects directly."""
        sizes = [(rect.width, rect.height) for rect in mixed_rectangles]
        width, height, positions = pack_sizes(sizes)

        assert (width, height) == pack(mixed_rectangles)
        assert positions == [(rect.x, rect.y) for rect in sorted(mixed_rectangles, key=lambda r: r.rect_id)]

    def test_accepts_generator(self):
        width, height, positions = pack_sizes((s, s) for s in (3, 2, 1))
        assert len(positions) == 3
        assert width * height >= 14

    def test_numpy_array_input(self):
        sizes = np.array([[10, 5], [3, 3]], dtype=np.int32)
        assert pack_sizes(sizes) == (10, 8, [(0, 0), (0, 5)])

    def test_empty(self):
        assert pack_sizes([]) == (0, 0, [])

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            pack_sizes([(3, 0)])

    def test_fill_factor_passed_through(self):
        """A lower fill factor starts wider, so all boxes fit on one row."""
        sizes = [(1, 1)] * 4
        width, height, _ = pack_sizes(sizes, fill_factor=0.25)
        assert (width, height) == (4, 1)
