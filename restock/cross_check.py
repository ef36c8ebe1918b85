"""Inventory cross-check - compares a system-of-record feed with the warehouse feed."""

import logging
from typing import Iterable

from .config import KEY_SEPARATOR, UNIFIED_LOT
from .models import CrossCheckResult, CrossCheckRow, get_quantity_value, normalize

logger = logging.getLogger(__name__)


def _aggregate_feed(rows: Iterable[CrossCheckRow], group_by_lot: bool) -> dict[str, dict]:
    """
    Sum quantity per SKU (+ lot) for one feed.

    Returns:
        Dict mapping "SKU__LOT" to {"sku", "lot", "description", "quantity"}
    """
    aggregated: dict[str, dict] = {}
    for row in rows:
        sku = normalize(row.sku)
        lot = normalize(row.lot) if group_by_lot else UNIFIED_LOT
        key = f"{sku}{KEY_SEPARATOR}{lot}"
        if key not in aggregated:
            aggregated[key] = {"sku": sku, "lot": lot, "description": row.description or "", "quantity": 0}
        aggregated[key]["quantity"] += get_quantity_value(row.quantity)
    return aggregated


def cross_check(
    system_rows: Iterable[CrossCheckRow],
    warehouse_rows: Iterable[CrossCheckRow],
    group_by_lot: bool = True
) -> list[CrossCheckResult]:
    """
    Compare quantities of two inventory feeds.

    Args:
        system_rows: System-of-record feed (e.g. the client's ERP)
        warehouse_rows: Warehouse (WMS) feed
        group_by_lot: Compare per SKU + lot; otherwise all lots of a SKU are merged

    Returns:
        One CrossCheckResult per key present in either feed, largest absolute
        difference first, ties by SKU ascending
    """
    system = _aggregate_feed(system_rows, group_by_lot)
    warehouse = _aggregate_feed(warehouse_rows, group_by_lot)

    results = []
    for key in list(system) + [k for k in warehouse if k not in system]:
        sys_entry = system.get(key)
        wms_entry = warehouse.get(key)
        base = sys_entry or wms_entry

        description = (sys_entry or {}).get("description") or (wms_entry or {}).get("description") or ""

        results.append(CrossCheckResult(
            sku=base["sku"],
            lot=base["lot"],
            description=description,
            qty_system=sys_entry["quantity"] if sys_entry else 0,
            qty_warehouse=wms_entry["quantity"] if wms_entry else 0,
        ))

    results.sort(key=lambda r: (-abs(r.difference), r.sku))

    logger.info(
        "Cross-check: %d keys, %d with differences",
        len(results), sum(1 for r in results if r.difference != 0)
    )
    return results
