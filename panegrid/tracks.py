"""
Track Allocator

Redistributes pixel sizes across a fixed number of grid tracks when the
total space for an axis changes.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from .errors import InvalidSizeError, LengthMismatchError, OutOfRangeError
from .model import PriorityAnchor, Priorities, Redistribution

logger = logging.getLogger(__name__)

# Smallest size a designated track may shrink to before falling back to an
# even split
MIN_TRACK_SIZE = 40


def distribute_evenly(count: int, total: int) -> List[int]:
    """
    Split ``total`` into ``count`` integer tracks.

    Every track gets ``total // count``; the last track absorbs the remainder
    so the result always sums to exactly ``total``.
    """
    if count <= 0:
        raise LengthMismatchError("cannot distribute space across zero tracks")
    if total < count:
        raise InvalidSizeError(
            f"total {total}px is too small for {count} tracks of at least 1px"
        )

    base = total // count
    sizes = [base] * count
    sizes[-1] += total - base * count
    return sizes


def resolve_priorities(priorities: Optional[Priorities], count: int) -> List[int]:
    """
    Turn a priority designation into sorted, unique 0-based track indices.

    ``None`` or an empty sequence designates the last track.
    """
    if count <= 0:
        raise LengthMismatchError("cannot designate tracks in an empty list")

    if priorities is None or priorities == PriorityAnchor.LAST:
        return [count - 1]
    if priorities == PriorityAnchor.FIRST:
        return [0]
    if isinstance(priorities, PriorityAnchor):
        raise OutOfRangeError(f"unsupported priority anchor: {priorities}")
    if not isinstance(priorities, (list, tuple)) or not all(
        isinstance(index, int) and not isinstance(index, bool) for index in priorities
    ):
        raise OutOfRangeError(
            f"priorities must be 'first', 'last' or track indices, got {priorities!r}"
        )

    indices = sorted(set(priorities))
    if not indices:
        return [count - 1]
    for index in indices:
        if index < 0 or index >= count:
            raise OutOfRangeError(
                f"priority index {index} outside track range [0, {count})"
            )
    return indices


def redistribute(
    sizes: Sequence[int],
    new_total: int,
    strategy: Redistribution = Redistribution.EVEN,
    priorities: Optional[Priorities] = None,
    min_size: int = MIN_TRACK_SIZE,
) -> List[int]:
    """
    Resize a list of tracks so it sums to ``new_total``.

    Args:
        sizes: Current track sizes in pixels
        new_total: Space the tracks must fill afterwards
        strategy: EVEN splits the total equally; PRIORITY applies the whole
            difference to the designated tracks and leaves the others alone
        priorities: Designated tracks for PRIORITY (anchor or 0-based indices)
        min_size: Floor for designated tracks under PRIORITY

    Returns:
        New sizes, same length as ``sizes``, summing to ``new_total``
    """
    count = len(sizes)

    if strategy == Redistribution.EVEN:
        return distribute_evenly(count, new_total)

    if strategy != Redistribution.PRIORITY:
        raise OutOfRangeError(f"unsupported redistribution strategy: {strategy}")

    designated = resolve_priorities(priorities, count)
    delta = new_total - sum(sizes)
    share, remainder = divmod(delta, len(designated))

    result = list(sizes)
    for index in designated:
        result[index] += share
    result[designated[-1]] += remainder

    if any(result[index] < min_size for index in designated):
        # Designated tracks cannot absorb the change; split everything evenly
        logger.debug(
            "Priority redistribution of %d tracks to %dpx would undercut %dpx, "
            "falling back to even",
            count,
            new_total,
            min_size,
        )
        return distribute_evenly(count, new_total)

    return result
