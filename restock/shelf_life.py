"""Shelf-life check - flags stock carrying more days to expiry than the master allows."""

from typing import Iterable, Union

from .models import (
    InventoryRecord,
    ShelfLifeLimit,
    ShelfLifeResult,
    get_quantity_value,
    normalize,
)


def build_master_map(master: Iterable[ShelfLifeLimit]) -> dict[str, float]:
    """Map normalized SKU to its configured limit. Later rows win."""
    return {normalize(limit.sku): get_quantity_value(limit.min_days) for limit in master}


def check_shelf_life(
    inventory_records: Iterable[InventoryRecord],
    master: Union[Iterable[ShelfLifeLimit], dict[str, float]]
) -> list[ShelfLifeResult]:
    """
    Check every inventory record against the shelf-life master.

    A record complies when its days to expiry do not exceed the master limit.
    SKUs missing from the master use a limit of 0; records without days to
    expiry count as 0.

    Args:
        inventory_records: Inventory positions (all of them, regardless of status)
        master: ShelfLifeLimit rows, or a dict of SKU -> days

    Returns:
        Results with non-compliant records first, then by days to expiry descending
    """
    if isinstance(master, dict):
        master_map = {normalize(sku): get_quantity_value(days) for sku, days in master.items()}
    else:
        master_map = build_master_map(master)

    results = []
    for record in inventory_records:
        limit = master_map.get(normalize(record.sku), 0)
        days = get_quantity_value(record.days_to_expiry)
        results.append(ShelfLifeResult(
            sku=record.sku,
            description=record.description,
            location=record.location,
            days_to_expiry=days,
            master_limit_days=limit,
            compliant=days <= limit,
            lpn=record.license_plate,
            lot=record.lot,
            expiration_date=record.expiration_date,
        ))

    results.sort(key=lambda r: (r.compliant, -r.days_to_expiry))
    return results
