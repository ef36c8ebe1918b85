"""Location classification - picking vs. reserve by location code."""

from typing import Iterable

from .models import LocationRole, normalize


def get_level(location_code) -> str:
    """
    Get the level segment of a location code (last non-empty part split on "-").

    Example: "P1-A-1-5" -> "5"
    Example: "P2-B-3-20-" -> "20"
    """
    parts = [p for p in normalize(location_code).split("-") if p.strip()]
    if not parts:
        return ""
    return parts[-1].strip()


def classify_location(
    location_code,
    picking_levels: Iterable[str],
    reserve_levels: Iterable[str],
    reserve_prefixes: Iterable[str] = ()
) -> LocationRole:
    """
    Determine the replenishment role of a location.

    Picking is checked first, so a level configured as both picking and
    reserve resolves to picking. Locations matching nothing get
    LocationRole.IGNORED: their stock is usable but plays no part in
    picking or reserve totals.

    Args:
        location_code: Location code from the inventory file
        picking_levels: Level segments that mark picking locations
        reserve_levels: Level segments that mark reserve locations
        reserve_prefixes: Location prefixes that are always reserve

    Returns:
        LocationRole for the location
    """
    level = get_level(location_code)
    if level and level in {normalize(p) for p in picking_levels}:
        return LocationRole.PICKING

    if level and level in {normalize(r) for r in reserve_levels}:
        return LocationRole.RESERVE

    location_upper = normalize(location_code)
    for prefix in reserve_prefixes:
        prefix_upper = normalize(prefix)
        if prefix_upper and location_upper.startswith(prefix_upper):
            return LocationRole.RESERVE

    return LocationRole.IGNORED
