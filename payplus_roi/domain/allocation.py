"""Proportional redistribution of percentage sliders that must sum to 100"""

from typing import List, Sequence

from payplus_roi.config import settings


def close_residual(values: Sequence[float], tolerance: float | None = None) -> List[float]:
    """
    Force a percentage vector to sum to exactly 100.

    Any residual beyond the tolerance is added to the last slot, whichever slot
    was edited. Displayed percentages depend on this tie-break, so it must not move.
    """
    tolerance = settings.distribution_tolerance if tolerance is None else tolerance
    closed = list(values)
    total = sum(closed)
    if abs(total - 100) > tolerance:
        closed[-1] += 100 - total
    return closed


def redistribute(values: Sequence[float], changed_index: int, new_value: float) -> List[float]:
    """
    Set one slider and re-normalize the others.

    The remaining `100 - new_value` is shared by the untouched slots in
    proportion to their current weights, or evenly when they are all zero.
    The caller clamps `new_value` to [0, 100]; nothing is validated here.

    Example:
        [40, 35, 25], slot 0 -> 60
        remaining 40 split 35:25 -> [60, 23.33, 16.67]
    """
    others = [i for i in range(len(values)) if i != changed_index]
    remaining = 100 - new_value
    others_total = sum(values[i] for i in others)

    result = list(values)
    result[changed_index] = new_value
    for i in others:
        if others_total > 0:
            result[i] = values[i] / others_total * remaining
        else:
            result[i] = remaining / len(others)

    return close_residual(result)
