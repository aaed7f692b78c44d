"""
Unit tests for track redistribution.
"""

import pytest
from panegrid.errors import InvalidSizeError, LengthMismatchError, OutOfRangeError
from panegrid.model import PriorityAnchor, Redistribution
from panegrid.tracks import (
    MIN_TRACK_SIZE,
    distribute_evenly,
    redistribute,
    resolve_priorities,
)


@pytest.mark.unit
class TestEvenRedistribution:
    """Test the even strategy."""

    def test_exact_split(self):
        assert redistribute([500, 500], 1000) == [500, 500]

    def test_last_track_absorbs_remainder(self):
        """Remainder always goes to the last track."""
        assert distribute_evenly(3, 100) == [33, 33, 34]
        assert redistribute([1, 1, 1], 10, Redistribution.EVEN) == [3, 3, 4]
        assert redistribute([10, 20, 30, 40], 1003) == [250, 250, 250, 253]

    def test_ignores_previous_sizes(self):
        assert redistribute([900, 100], 600) == [300, 300]

    def test_conservation(self):
        """Sum always equals the requested total."""
        for count in range(1, 8):
            for total in range(count, count + 60):
                sizes = redistribute([1] * count, total, Redistribution.EVEN)
                assert len(sizes) == count
                assert sum(sizes) == total
                assert min(sizes) >= 1

    def test_empty_list_rejected(self):
        with pytest.raises(LengthMismatchError):
            redistribute([], 100)

    def test_total_smaller_than_track_count_rejected(self):
        with pytest.raises(InvalidSizeError):
            redistribute([10, 10, 10], 2)


@pytest.mark.unit
class TestPriorityRedistribution:
    """Test the priority strategy."""

    def test_growth_goes_to_first(self):
        result = redistribute(
            [300, 300, 300], 1000, Redistribution.PRIORITY, PriorityAnchor.FIRST
        )
        assert result == [400, 300, 300]

    def test_shrink_taken_from_first(self):
        result = redistribute(
            [300, 300, 300], 800, Redistribution.PRIORITY, PriorityAnchor.FIRST
        )
        assert result == [200, 300, 300]

    def test_defaults_to_last_track(self):
        result = redistribute([300, 300, 300], 1000, Redistribution.PRIORITY)
        assert result == [300, 300, 400]

    def test_split_between_designated_tracks(self):
        """Delta split evenly, last designated track takes the remainder."""
        result = redistribute([300, 300, 300], 1001, Redistribution.PRIORITY, (0, 2))
        assert result == [350, 300, 351]

    def test_negative_delta_split_keeps_sum(self):
        result = redistribute([100, 100, 100], 293, Redistribution.PRIORITY, (1, 0))
        assert result == [96, 97, 100]
        assert sum(result) == 293

    def test_falls_back_to_even_below_minimum(self):
        """A designated track pushed under the minimum triggers an even split."""
        result = redistribute(
            [60, 300, 300], 630, Redistribution.PRIORITY, PriorityAnchor.FIRST
        )
        assert result == [210, 210, 210]

    def test_minimum_itself_is_allowed(self):
        result = redistribute(
            [60, 300, 300], 640, Redistribution.PRIORITY, PriorityAnchor.FIRST
        )
        assert result == [MIN_TRACK_SIZE, 300, 300]

    def test_custom_minimum(self):
        result = redistribute(
            [60, 300, 300],
            640,
            Redistribution.PRIORITY,
            PriorityAnchor.FIRST,
            min_size=50,
        )
        assert result == [213, 213, 214]

    def test_out_of_range_priority_rejected(self):
        with pytest.raises(OutOfRangeError):
            redistribute([300, 300], 700, Redistribution.PRIORITY, (2,))

    def test_length_preserved(self):
        sizes = [120, 80, 200, 100]
        result = redistribute(sizes, 400, Redistribution.PRIORITY, (1, 3))
        assert len(result) == len(sizes)
        assert sum(result) == 400


@pytest.mark.unit
class TestResolvePriorities:
    """Test priority designation parsing."""

    def test_anchors(self):
        assert resolve_priorities(PriorityAnchor.FIRST, 4) == [0]
        assert resolve_priorities(PriorityAnchor.LAST, 4) == [3]

    def test_none_and_empty_mean_last(self):
        assert resolve_priorities(None, 3) == [2]
        assert resolve_priorities((), 3) == [2]

    def test_indices_sorted_and_unique(self):
        assert resolve_priorities((2, 0, 2), 3) == [0, 2]

    def test_negative_index_rejected(self):
        with pytest.raises(OutOfRangeError):
            resolve_priorities((-1,), 3)

    @pytest.mark.parametrize("priorities", ["first", 3, (0, "1"), (True,)])
    def test_malformed_priorities_rejected(self, priorities):
        with pytest.raises(OutOfRangeError):
            resolve_priorities(priorities, 3)
