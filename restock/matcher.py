"""Demand matching - classifies sales lines and min/max rules against aggregated stock."""

import logging
from typing import Iterable

from .aggregator import location_key
from .config import UNKNOWN_DESCRIPTION
from .models import (
    MatchResult,
    MinMaxRule,
    MissingProduct,
    RestockCandidate,
    RestockSuggestion,
    SalesLine,
    SkuAggregate,
    SuggestedLocation,
    get_quantity_value,
    normalize,
)

logger = logging.getLogger(__name__)


def aggregate_sales(sales_lines: Iterable[SalesLine]) -> dict[str, dict]:
    """
    Sum confirmed quantity per normalized SKU.

    Returns:
        Dict mapping SKU to {"description": str, "quantity": number},
        in first-seen order
    """
    sales_by_sku: dict[str, dict] = {}
    for line in sales_lines:
        sku = normalize(line.sku)
        entry = sales_by_sku.setdefault(sku, {"description": line.description or "", "quantity": 0})
        if not entry["description"] and line.description:
            entry["description"] = line.description
        entry["quantity"] += get_quantity_value(line.confirmed_qty)
    return sales_by_sku


def match_by_sales(
    sales_lines: Iterable[SalesLine],
    inventory: dict[str, SkuAggregate]
) -> MatchResult:
    """
    Match aggregated sales against picking stock.

    Per SKU:
    - no usable inventory at all -> missing product
    - picking short and reserve available -> restock candidate
    - picking covers the sales -> OK item listing the picking locations
    - picking short and no reserve -> not reported (logged as a warning)

    Args:
        sales_lines: Invoiced sales lines (summed per SKU)
        inventory: Output of aggregate_inventory

    Returns:
        MatchResult with candidates, ok_items and missing
    """
    result = MatchResult()
    dropped: list[str] = []

    for sku, sale in aggregate_sales(sales_lines).items():
        quantity_sold = sale["quantity"]
        aggregate = inventory.get(sku)

        if aggregate is None:
            result.missing.append(MissingProduct(
                sku=sku,
                description=sale["description"],
                quantity_sold=quantity_sold,
            ))
            continue

        description = aggregate.description or sale["description"]

        if aggregate.total_picking < quantity_sold and aggregate.total_reserve > 0:
            result.candidates.append(RestockCandidate(
                sku=sku,
                description=description,
                amount_needed=quantity_sold,
                picking_stock=aggregate.total_picking,
                reserve_locations=[loc for loc in aggregate.reserve_locations if loc.available > 0],
                quantity_sold=quantity_sold,
            ))
        elif aggregate.total_picking >= quantity_sold:
            result.ok_items.append(RestockSuggestion(
                sku=sku,
                description=description,
                quantity_sold=quantity_sold,
                quantity_available=aggregate.total_picking,
                quantity_to_restock=0,
                suggested_locations=[
                    SuggestedLocation.from_stock(loc) for loc in aggregate.picking_locations
                ],
            ))
        else:
            # Picking short and reserve empty: neither missing, restock nor OK
            dropped.append(sku)

    if dropped:
        logger.warning(
            "%d sold SKUs have short picking stock and no reserve; not reported: %s",
            len(dropped), ", ".join(dropped)
        )

    return result


def match_by_levels(
    rules: Iterable[MinMaxRule],
    inventory: dict[str, SkuAggregate],
    location_totals: dict[str, float]
) -> MatchResult:
    """
    Evaluate each min/max rule against the stock at its own slot.

    Rules are not merged: two rules for the same SKU and location are
    evaluated independently. A rule becomes a candidate when its slot is
    below min_qty and the SKU has reserve stock; it is then refilled up to
    max_qty. Everything else is reported OK against the rule's slot.

    Args:
        rules: Min/max rules
        inventory: Output of aggregate_inventory
        location_totals: Output of aggregate_by_location

    Returns:
        MatchResult with candidates and ok_items (missing is always empty)
    """
    result = MatchResult()

    for rule in rules:
        sku = normalize(rule.sku)
        current_stock = location_totals.get(location_key(rule.sku, rule.location), 0)
        min_qty = get_quantity_value(rule.min_qty)
        max_qty = get_quantity_value(rule.max_qty)
        aggregate = inventory.get(sku)

        if aggregate is not None and current_stock < min_qty and aggregate.total_reserve > 0:
            result.candidates.append(RestockCandidate(
                sku=sku,
                description=aggregate.description,
                amount_needed=max_qty - current_stock,
                picking_stock=current_stock,
                reserve_locations=[loc for loc in aggregate.reserve_locations if loc.available > 0],
                destination_lpn=rule.lpn,
                destination_location=rule.location,
            ))
        else:
            result.ok_items.append(RestockSuggestion(
                sku=sku,
                description=aggregate.description if aggregate is not None else UNKNOWN_DESCRIPTION,
                quantity_sold=0,
                quantity_available=current_stock,
                quantity_to_restock=0,
                suggested_locations=[
                    SuggestedLocation(location=rule.location, quantity=current_stock, lpn=rule.lpn)
                ],
                destination_lpn=rule.lpn,
                destination_location=rule.location,
            ))

    return result
