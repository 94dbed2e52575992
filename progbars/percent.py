"""Percentage and width helpers."""

import math


def percentage(total: int, current: int, width: int) -> float:
    """Return ``current`` as a share of ``total`` scaled to ``width``."""
    if total == 0:
        return 0.0
    if current >= total:
        return float(width)
    return float(width * current) / float(total)


def percentage_round(total: int, current: int, width: int) -> float:
    """Same as :func:`percentage`, rounded half away from zero."""
    if total < 0 or current < 0:
        return 0.0
    return float(math.floor(percentage(total, current, width) + 0.5))


def check_requested_width(requested: int, available: int) -> int:
    """Return the requested width unless it is unset or too large."""
    if requested < 1 or requested > available:
        return available
    return requested