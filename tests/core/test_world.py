"""Tests for the World class."""

import itertools
from unittest.mock import patch

import numpy as np
import pytest
from lifegrid.core.world import ALIVE, DEAD, World, make_random_source, next_generation


def fill(world, value=True):
    for r in range(world.rows):
        for c in range(world.cols):
            world.set_cell(r, c, value)


class TestWorldConstruction:
    """Test cases for creating worlds."""

    @pytest.mark.parametrize("rows,cols", [(0, 0), (0, 5), (5, 0), (1, 1), (3, 3), (7, 11)])
    def test_fresh_world_is_dead(self, rows, cols):
        """Test that every cell of a new world is dead."""
        world = World(rows, cols)
        assert world.shape == (rows, cols)
        assert world.present.shape == (rows, cols)
        assert world.population == 0
        assert not world.present.any()

    def test_negative_dimensions_rejected(self):
        """Test that negative dimensions raise ValueError."""
        with pytest.raises(ValueError):
            World(-1, 3)

        with pytest.raises(ValueError):
            World(3, -1)

    def test_present_is_read_only(self):
        """Test that the present view cannot be written through."""
        world = World(3, 3)
        with pytest.raises(ValueError):
            world.present[0, 0] = ALIVE

    def test_empty_world_operations(self):
        """Test that a degenerate world behaves as empty."""
        world = World(0, 4)
        world.randomize_seed()
        world.step()
        assert world.population == 0
        assert world.render() == "\n"
        assert world.neighbor_counts().shape == (0, 4)


class TestCellAccess:
    """Test cases for cell get/set."""

    def test_cell_operations(self):
        """Test basic cell get/set operations."""
        world = World(4, 6)

        assert world.get_cell(0, 0) is False

        world.set_cell(1, 5, True)
        world.set_cell(3, 2, True)
        assert world.get_cell(1, 5) is True
        assert world.get_cell(3, 2) is True
        assert world.population == 2

        world.set_cell(1, 5, False)
        assert world.get_cell(1, 5) is False
        assert world.population == 1

    def test_out_of_bounds(self):
        """Test that coordinates past the edge raise IndexError."""
        world = World(3, 4)

        with pytest.raises(IndexError):
            world.set_cell(-1, 0, True)

        with pytest.raises(IndexError):
            world.set_cell(3, 0, True)

        with pytest.raises(IndexError):
            world.get_cell(0, 4)

        with pytest.raises(IndexError):
            world.get_cell(0, -1)

    def test_clear(self):
        """Test world clearing."""
        world = World(5, 5)
        fill(world)
        assert world.population == 25

        world.clear()
        assert world.population == 0


class TestRandomizeSeed:
    """Test cases for random seeding."""

    def test_deterministic_source_row_major(self):
        """Test that draws are applied in row-major order."""
        draws = iter([True, False, False, True, True, False])
        world = World(2, 3, random_source=lambda: next(draws))

        world.randomize_seed()

        assert world.to_list() == [[1, 0, 0], [1, 1, 0]]

    def test_overwrites_previous_state(self):
        """Test that seeding replaces every cell."""
        world = World(3, 3, random_source=lambda: False)
        fill(world)

        world.randomize_seed()
        assert world.population == 0

    def test_future_untouched(self):
        """Test that seeding only writes the current generation."""
        world = World(4, 4, random_source=lambda: True)
        world.randomize_seed()

        assert world.population == 16
        assert not world._future.any()

    def test_only_valid_states(self):
        """Test that seeded cells are always alive or dead."""
        world = World(20, 30)
        world.randomize_seed()
        assert set(np.unique(world.present)) <= {DEAD, ALIVE}

    def test_proportion_near_half(self):
        """Test that the default source is roughly unbiased."""
        world = World(100, 100)
        world.randomize_seed()
        assert 4000 <= world.population <= 6000

    def test_seeded_source_reproducible(self):
        """Test that equal seeds give equal worlds."""
        world1 = World(10, 10, random_source=make_random_source(42))
        world2 = World(10, 10, random_source=make_random_source(42))
        world1.randomize_seed()
        world2.randomize_seed()
        assert world1 == world2


class TestNeighborCounting:
    """Test cases for neighbor counting."""

    def test_all_dead(self):
        """Test that an empty world has no neighbors anywhere."""
        world = World(4, 5)
        for r, c in itertools.product(range(4), range(5)):
            assert world.count_alive_neighbors(r, c) == 0

    def test_all_alive_3x3(self):
        """Test counts on a full 3x3 world."""
        world = World(3, 3)
        fill(world)

        assert world.count_alive_neighbors(1, 1) == 8
        for corner in [(0, 0), (0, 2), (2, 0), (2, 2)]:
            assert world.count_alive_neighbors(*corner) == 3
        for edge in [(0, 1), (1, 0), (1, 2), (2, 1)]:
            assert world.count_alive_neighbors(*edge) == 5

    def test_all_alive_larger(self):
        """Test that interior cells of a full world see 8 neighbors."""
        world = World(6, 6)
        fill(world)

        for r, c in itertools.product(range(1, 5), range(1, 5)):
            assert world.count_alive_neighbors(r, c) == 8

    def test_diagonal(self):
        """Test counts along a filled diagonal."""
        world = World(3, 3)
        for i in range(3):
            world.set_cell(i, i, True)

        assert world.count_alive_neighbors(1, 1) == 2
        assert world.count_alive_neighbors(0, 0) == 1

    def test_edges_do_not_wrap(self):
        """Test that opposite corners are not neighbors."""
        world = World(3, 3)
        world.set_cell(0, 0, True)
        world.set_cell(2, 2, True)

        assert world.count_alive_neighbors(0, 0) == 0
        assert world.count_alive_neighbors(2, 2) == 0
        assert world.count_alive_neighbors(0, 2) == 0

    def test_out_of_range_cell_rejected(self):
        """Test that counting around a cell outside the world raises IndexError."""
        world = World(3, 3)
        world.set_cell(0, 0, True)

        with pytest.raises(IndexError):
            world.count_alive_neighbors(-1, -1)

        with pytest.raises(IndexError):
            world.count_alive_neighbors(3, 0)

        with pytest.raises(IndexError):
            world.count_alive_neighbors(0, 3)

    def test_neighbor_counts_leaves_torch_threads(self):
        """Test that whole-grid counting does not reconfigure torch."""
        world = World(4, 4, random_source=make_random_source(8))
        world.randomize_seed()

        with patch("lifegrid.core.world.torch.set_num_threads") as mock_threads:
            world.neighbor_counts()
            next_generation(np.array(world.to_list(), dtype=np.int8))

        mock_threads.assert_not_called()

    def test_neighbor_counts_matches_scan(self):
        """Test that the convolution map agrees with the per-cell scan."""
        world = World(9, 13, random_source=make_random_source(3))
        world.randomize_seed()

        counts = world.neighbor_counts()
        for r, c in itertools.product(range(9), range(13)):
            assert counts[r, c] == world.count_alive_neighbors(r, c)


class TestStep:
    """Test cases for the generation step."""

    def test_blinker_3x3(self):
        """Test that a horizontal bar turns vertical."""
        world = World(3, 3)
        for c in range(3):
            world.set_cell(1, c, True)

        world.step()

        for r in range(3):
            assert world.get_cell(r, 0) is False
            assert world.get_cell(r, 1) is True
            assert world.get_cell(r, 2) is False

    def test_glider_4x4(self):
        """Test one glider step on a 4x4 world."""
        world = World(4, 4)
        for r, c in [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)]:
            world.set_cell(r, c, True)

        world.step()

        assert world.to_list() == [
            [0, 0, 0, 0],
            [1, 0, 1, 0],
            [0, 1, 1, 0],
            [0, 1, 0, 0],
        ]

    def test_empty_is_fixed_point(self):
        """Test that an empty world stays empty."""
        world = World(5, 7)
        for _ in range(3):
            world.step()
            assert world.population == 0

    def test_block_is_still_life(self):
        """Test that a 2x2 block survives unchanged."""
        world = World(4, 4)
        for r, c in [(1, 1), (1, 2), (2, 1), (2, 2)]:
            world.set_cell(r, c, True)
        before = world.to_list()

        world.step()
        assert world.to_list() == before

    def test_lonely_cell_dies(self):
        """Test underpopulation."""
        world = World(3, 3)
        world.set_cell(1, 1, True)
        world.step()
        assert world.population == 0

    def test_overcrowded_center_dies(self):
        """Test overpopulation on a full 3x3 world."""
        world = World(3, 3)
        fill(world)

        world.step()

        assert world.to_list() == [[1, 0, 1], [0, 0, 0], [1, 0, 1]]

    def test_buffers_swap(self):
        """Test that step exchanges the two buffers instead of reallocating."""
        world = World(3, 3)
        present, future = world._present, world._future

        world.step()

        assert world._present is future
        assert world._future is present

    def test_matches_independent_recompute(self):
        """Test repeated steps against a pure recomputation from generation 0."""
        world = World(12, 15, random_source=make_random_source(11))
        world.randomize_seed()
        expected = np.array(world.to_list(), dtype=np.int8)

        for _ in range(10):
            world.step()
            expected = next_generation(expected)
            assert np.array_equal(world.present, expected)


class TestRendering:
    """Test cases for reading and rendering."""

    def test_render_default(self):
        """Test default render format with generation separator."""
        world = World(2, 3)
        world.set_cell(0, 1, True)
        world.set_cell(1, 2, True)

        assert world.render() == "010\n001\n\n"

    def test_render_custom_chars(self):
        """Test render with custom characters."""
        world = World(2, 2)
        world.set_cell(1, 0, True)

        assert world.render("#", ".") == "..\n#.\n\n"

    def test_render_is_pure(self):
        """Test that rendering does not change state."""
        world = World(3, 3, random_source=make_random_source(1))
        world.randomize_seed()
        before = world.to_list()

        world.render()
        assert world.to_list() == before

    def test_iter_rows(self):
        """Test row-major iteration."""
        world = World(2, 2)
        world.set_cell(0, 1, True)
        assert list(world.iter_rows()) == [(0, 1), (0, 0)]

    def test_string_representation(self):
        """Test string representation."""
        world = World(3, 3)
        for i in range(3):
            world.set_cell(i, i, True)

        assert str(world) == "100\n010\n001"


class TestSerialization:
    """Test cases for list conversion, bounding box and equality."""

    def test_to_list_and_from_list(self):
        """Test conversion to and from nested lists."""
        world = World(2, 3)
        world.from_list([[1, 0, 1], [0, 1, 0]])

        assert world.population == 3
        assert world.get_cell(0, 2) is True
        assert world.to_list() == [[1, 0, 1], [0, 1, 0]]

        with pytest.raises(ValueError):
            world.from_list([[1, 0], [0, 1]])

        with pytest.raises(ValueError):
            world.from_list([[2, 0, 0], [0, 0, 0]])

        with pytest.raises(ValueError):
            World(1, 1).from_list([[257]])

        with pytest.raises(ValueError):
            World(1, 2).from_list([[0.6, 1.9]])

    def test_from_list_rejects_non_integer_states(self):
        """Test that float data is rejected rather than truncated."""
        world = World(2, 2)
        world.set_cell(0, 0, True)

        with pytest.raises(ValueError):
            world.from_list([[1.0, 0.0], [0.0, 1.0]])

        assert world.to_list() == [[1, 0], [0, 0]]

    def test_from_list_accepts_bools_and_empty(self):
        """Test boolean data and degenerate worlds."""
        world = World(1, 2)
        world.from_list([[True, False]])
        assert world.to_list() == [[1, 0]]

        empty = World(0, 0)
        empty.from_list([])
        assert empty.population == 0

    def test_get_bounding_box(self):
        """Test bounding box calculation."""
        world = World(10, 10)
        assert world.get_bounding_box() is None

        world.set_cell(3, 5, True)
        assert world.get_bounding_box() == (3, 5, 3, 5)

        world.set_cell(1, 2, True)
        world.set_cell(8, 7, True)
        assert world.get_bounding_box() == (1, 2, 8, 7)

    def test_equality(self):
        """Test world equality comparison."""
        world1 = World(3, 3)
        world2 = World(3, 3)
        assert world1 == world2

        world1.set_cell(1, 1, True)
        assert world1 != world2

        world2.set_cell(1, 1, True)
        assert world1 == world2

        assert world1 != World(3, 4)
        assert world1 != "not a world"


class TestNextGeneration:
    """Test cases for the standalone next_generation function."""

    def test_blinker(self):
        """Test that the oracle flips a blinker."""
        cells = np.zeros((5, 5), dtype=np.int8)
        cells[2, 1:4] = 1

        result = next_generation(cells)

        expected = np.zeros((5, 5), dtype=np.int8)
        expected[1:4, 2] = 1
        assert np.array_equal(result, expected)

    def test_does_not_mutate_input(self):
        """Test that the input array is left as is."""
        cells = np.ones((3, 3), dtype=np.int8)
        next_generation(cells)
        assert cells.all()
