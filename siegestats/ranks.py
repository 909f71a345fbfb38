"""
Ranked ladder lookup.

r6data reports ranks as 1-based numeric ids into the current ladder:
five divisions (V..I) for each of seven tiers, then Champion on top.
"""
import math
from typing import Any, List

UNRANKED = "Unranked"

RANK_TIERS = ["Copper", "Bronze", "Silver", "Gold", "Platinum", "Emerald", "Diamond"]
RANK_DIVISIONS = ["V", "IV", "III", "II", "I"]
APEX_RANK = "Champion"

RANK_LADDER: List[str] = [
    f"{tier} {division}" for tier in RANK_TIERS for division in RANK_DIVISIONS
] + [APEX_RANK]


def rank_name_from_id(rank_id: Any) -> str:
    """
    Map a ladder id to its display name.

    0, negatives, None and non-numeric values are "Unranked"; ids past the
    end of the ladder (or non-integral ones) render as "#<id>".
    """
    if rank_id is None or isinstance(rank_id, bool):
        return UNRANKED
    try:
        n = float(rank_id)
    except (TypeError, ValueError):
        return UNRANKED
    if not math.isfinite(n) or n <= 0:
        return UNRANKED
    if n.is_integer():
        n = int(n)
        if n <= len(RANK_LADDER):
            return RANK_LADDER[n - 1]
    return f"#{n}"
