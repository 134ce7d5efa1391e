"""Range arithmetic over inclusive (low, high) counter ranges.

The overlap vector describes the target range relative to the current one in
terms of how many steps outward (positive) or inward (negative) each of its
edges sits::

    ++45678
    234----   overlap_vector((4, 8), (2, 4)) == Overlap(low=2, high=-4)

    45678
    -56--     overlap_vector((4, 8), (5, 6)) == Overlap(low=-1, high=-2)

    456++
    --678     overlap_vector((4, 6), (6, 8)) == Overlap(low=-2, high=2)

    +++456++
    12345678  overlap_vector((4, 6), (1, 8)) == Overlap(low=3, high=2)
"""

from __future__ import annotations

from dataclasses import dataclass

Bounds = tuple[float, float]


@dataclass(frozen=True)
class Overlap:
    """Edge displacements from a current range to a target range."""

    low: int
    high: int


def overlaps(range_: Bounds, other: Bounds) -> bool:
    """Return True if the ranges overlap, touch, or contain one another."""
    span = max(range_[1], other[1]) - min(range_[0], other[0])
    return (range_[1] - range_[0]) + (other[1] - other[0]) >= span


def overlap_vector(current: Bounds, target: Bounds) -> Overlap | None:
    """Describe how ``target`` sits relative to ``current``.

    Returns:
        None when the ranges are disjoint, otherwise an ``Overlap`` whose
        ``low`` is positive when the target extends below the current low
        edge and negative when it starts above it. ``high`` follows the same
        convention at the high edge.
    """
    if not overlaps(current, target):
        return None
    return Overlap(
        low=int(current[0] - target[0]),
        high=int(target[1] - current[1]),
    )


def clamp(range_: Bounds, bounds: Bounds) -> Bounds:
    """Apply ``bounds`` as a minimum and maximum to ``range_``.

    clamp((1, 9), (2, 8)) == (2, 8)
    clamp((4, 9), (2, 8)) == (4, 8)
    """
    return (max(range_[0], bounds[0]), min(range_[1], bounds[1]))
