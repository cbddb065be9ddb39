"""
Serving ratio → pick count.

A pick is one whole physical unit, so fractional ratios always round up.
A tier with no ratio resolves to 0 picks; that is a normal outcome, not an
error.
"""

from __future__ import annotations

import math
from collections.abc import Mapping


def resolve_picks(servings_ratio: Mapping[int, float], tier: int) -> int:
    """Return the number of picks needed for ``tier`` servings.

    Args:
        servings_ratio: Serving tier → fractional units (``Sku.servings_ratio``).
        tier: Serving tier to resolve, one of ``SERVING_TIERS``.

    Returns:
        ``ceil(ratio)`` for the tier, or ``0`` when the tier is absent.

    Example::

        >>> resolve_picks({2: 1.5, 4: 3.0}, 2)
        2
        >>> resolve_picks({2: 1.5, 4: 3.0}, 3)
        0
    """
    ratio = servings_ratio.get(tier, 0.0)
    return max(math.ceil(ratio), 0)
