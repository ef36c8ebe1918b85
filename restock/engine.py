"""Restock analysis engine - one flow for sales-driven and level-driven replenishment."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Union

from .aggregator import aggregate_by_location, aggregate_inventory
from .allocator import allocate_exact, allocate_full_pallets
from .matcher import match_by_levels, match_by_sales
from .models import (
    Allocation,
    AnalysisConfig,
    AnalysisResult,
    InventoryRecord,
    MatchResult,
    MinMaxRule,
    RestockCandidate,
    RestockSuggestion,
    SalesLine,
    SkuAggregate,
)

logger = logging.getLogger(__name__)


class AnalysisMode(str, Enum):
    """Demand signal driving the analysis."""
    SALES = "sales"
    LEVELS = "levels"


@dataclass(frozen=True)
class AnalysisStrategy:
    """How one mode matches demand and allocates reserve stock."""
    match_demand: Callable[[list, dict[str, SkuAggregate], dict[str, float]], MatchResult]
    allocate: Callable[[RestockCandidate], Allocation]
    needs_location_totals: bool = False


def _match_sales(demand, inventory, location_totals) -> MatchResult:
    return match_by_sales(demand, inventory)


SALES_STRATEGY = AnalysisStrategy(
    match_demand=_match_sales,
    allocate=allocate_full_pallets,
)

LEVELS_STRATEGY = AnalysisStrategy(
    match_demand=match_by_levels,
    allocate=allocate_exact,
    needs_location_totals=True,
)

STRATEGIES = {
    AnalysisMode.SALES: SALES_STRATEGY,
    AnalysisMode.LEVELS: LEVELS_STRATEGY,
}


def build_suggestion(candidate: RestockCandidate, allocation: Allocation) -> RestockSuggestion:
    """Turn an allocated candidate into a restock suggestion."""
    return RestockSuggestion(
        sku=candidate.sku,
        description=candidate.description,
        quantity_sold=candidate.quantity_sold,
        quantity_available=candidate.picking_stock,
        quantity_to_restock=allocation.quantity_to_restock,
        suggested_locations=allocation.suggested_locations,
        destination_lpn=candidate.destination_lpn,
        destination_location=candidate.destination_location,
        quantity_needed=candidate.amount_needed,
    )


def rank_suggestions(suggestions: Iterable[RestockSuggestion]) -> list[RestockSuggestion]:
    """
    Order suggestions for display.

    Items to restock come first, then OK items (quantity_to_restock == 0);
    within each group by SKU ascending. Sorting is stable, so ranking an
    already ranked list leaves it unchanged.
    """
    return sorted(suggestions, key=lambda s: (not s.needs_restock, s.sku))


class RestockAnalyzer:
    """
    Reconciles inventory positions with demand and suggests reserve-to-picking moves.

    Modes:
    - sales: demand is invoiced quantity per SKU; reserve stock is pulled
      in whole-location increments (FEFO) until the sales are covered
    - levels: demand is each min/max rule's slot; reserve stock is pulled
      exactly up to the rule's max quantity (FEFO, partial pulls allowed)

    Every call builds its own aggregates; the analyzer keeps no state
    between runs and never mutates its config or the input records.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config if config is not None else AnalysisConfig()

    def analyze(
        self,
        mode: Union[AnalysisMode, str],
        inventory_records: Iterable[InventoryRecord],
        demand: Iterable[Union[SalesLine, MinMaxRule]]
    ) -> AnalysisResult:
        """
        Run one analysis.

        Args:
            mode: AnalysisMode or its value ("sales" / "levels")
            inventory_records: Inventory positions
            demand: SalesLine items (sales) or MinMaxRule items (levels)

        Returns:
            AnalysisResult with ranked suggestions and missing products
        """
        mode = AnalysisMode(mode)
        strategy = STRATEGIES[mode]
        records = list(inventory_records)
        demand = list(demand)

        inventory = aggregate_inventory(records, self.config)
        location_totals = (
            aggregate_by_location(records, self.config) if strategy.needs_location_totals else {}
        )

        matched = strategy.match_demand(demand, inventory, location_totals)
        logger.debug(
            "%s: %d candidates, %d OK, %d missing",
            mode.value, len(matched.candidates), len(matched.ok_items), len(matched.missing)
        )

        suggestions = [
            build_suggestion(candidate, strategy.allocate(candidate))
            for candidate in matched.candidates
        ]

        result = AnalysisResult(
            suggestions=rank_suggestions(suggestions + matched.ok_items),
            missing_products=matched.missing,
        )
        logger.info(
            "%s analysis: %d suggestions (%d to restock), %d missing products",
            mode.value, len(result.suggestions), len(result.restock_items), len(result.missing_products)
        )
        return result

    def analyze_sales(
        self,
        inventory_records: Iterable[InventoryRecord],
        sales_lines: Iterable[SalesLine]
    ) -> AnalysisResult:
        """Sales-driven analysis."""
        return self.analyze(AnalysisMode.SALES, inventory_records, sales_lines)

    def analyze_levels(
        self,
        inventory_records: Iterable[InventoryRecord],
        rules: Iterable[MinMaxRule]
    ) -> AnalysisResult:
        """Min/max-driven analysis."""
        return self.analyze(AnalysisMode.LEVELS, inventory_records, rules)
