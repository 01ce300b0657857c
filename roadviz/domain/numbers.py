from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's round() rounds halves to even, which would make 2.5 m
    and 3.5 m both end up as even lengths.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
