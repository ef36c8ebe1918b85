"""Inventory aggregation - usable stock per SKU, split into picking and reserve."""

import logging
from collections import defaultdict
from typing import Iterable

from .config import KEY_SEPARATOR
from .locations import classify_location
from .models import (
    AnalysisConfig,
    InventoryRecord,
    LocationRole,
    LocationStock,
    SkuAggregate,
    get_optional_number,
    get_quantity_value,
    normalize,
)

logger = logging.getLogger(__name__)


def is_usable_stock(record: InventoryRecord, config: AnalysisConfig) -> bool:
    """Whether a record has an allowed status and is not in an ignored location."""
    status = normalize(record.status)
    if not status or status not in config.status_allow_set:
        return False
    return normalize(record.location) not in config.location_deny_set


def filter_usable_stock(
    records: Iterable[InventoryRecord],
    config: AnalysisConfig
) -> list[InventoryRecord]:
    """Keep only records that count as usable stock."""
    return [r for r in records if is_usable_stock(r, config)]


def location_key(sku, location) -> str:
    """Composite key used to look up stock at an exact SKU + location."""
    return f"{normalize(sku)}{KEY_SEPARATOR}{normalize(location)}"


def _location_stock(record: InventoryRecord) -> LocationStock:
    return LocationStock(
        location=str(record.location),
        available=get_quantity_value(record.available_qty),
        lpn=record.license_plate,
        expiration_date=record.expiration_date,
        days_to_expiry=get_optional_number(record.days_to_expiry),
    )


def aggregate_inventory(
    records: Iterable[InventoryRecord],
    config: AnalysisConfig
) -> dict[str, SkuAggregate]:
    """
    Aggregate usable stock by normalized SKU.

    Args:
        records: Inventory records (never mutated)
        config: Status/location rules and level sets

    Returns:
        Dict mapping normalized SKU to SkuAggregate. Every usable record is
        counted exactly once: in total_picking, total_reserve, or
        total_unassigned (locations with no replenishment role).
    """
    picking_levels = config.picking_level_set
    reserve_levels = config.reserve_level_set
    reserve_prefixes = config.reserve_prefixes

    inventory: dict[str, SkuAggregate] = {}

    for record in filter_usable_stock(records, config):
        sku = normalize(record.sku)
        aggregate = inventory.get(sku)
        if aggregate is None:
            aggregate = SkuAggregate(description=record.description or "")
            inventory[sku] = aggregate
        elif not aggregate.description and record.description:
            aggregate.description = record.description

        stock = _location_stock(record)
        role = classify_location(record.location, picking_levels, reserve_levels, reserve_prefixes)

        if role == LocationRole.PICKING:
            aggregate.total_picking += stock.available
            aggregate.picking_locations.append(stock)
        elif role == LocationRole.RESERVE:
            aggregate.total_reserve += stock.available
            aggregate.reserve_locations.append(stock)
        else:
            aggregate.total_unassigned += stock.available

    logger.debug("Aggregated usable stock for %d SKUs", len(inventory))
    return inventory


def aggregate_by_location(
    records: Iterable[InventoryRecord],
    config: AnalysisConfig
) -> dict[str, float]:
    """
    Sum usable stock per SKU + location (key "SKU__LOCATION", normalized).

    Used in levels mode to read the current stock at a min/max rule's slot.
    """
    totals: dict[str, float] = defaultdict(int)
    for record in filter_usable_stock(records, config):
        totals[location_key(record.sku, record.location)] += get_quantity_value(record.available_qty)
    return dict(totals)
