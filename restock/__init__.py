"""Core module for restock analysis logic."""

from .models import (
    AnalysisConfig,
    AnalysisResult,
    CrossCheckResult,
    CrossCheckRow,
    InventoryRecord,
    LocationRole,
    LocationStock,
    MinMaxRule,
    MissingProduct,
    RestockCandidate,
    RestockSuggestion,
    SalesLine,
    ShelfLifeLimit,
    ShelfLifeResult,
    SkuAggregate,
    SuggestedLocation,
    get_quantity_value,
    normalize,
)
from .locations import classify_location
from .aggregator import (
    aggregate_inventory,
    aggregate_by_location,
    filter_usable_stock,
)
from .matcher import match_by_sales, match_by_levels
from .allocator import allocate_full_pallets, allocate_exact, sort_fefo
from .engine import AnalysisMode, RestockAnalyzer, rank_suggestions
from .cross_check import cross_check
from .shelf_life import check_shelf_life
from .inbound import build_inbound_rows
from .file_loader import (
    MissingColumnsError,
    RecordValidationError,
    read_table,
    validate_required_columns,
    load_inventory_records,
    load_sales_lines,
    load_min_max_rules,
    load_cross_check_rows,
    load_shelf_life_limits,
)

__all__ = [
    # Models
    "AnalysisConfig",
    "AnalysisResult",
    "CrossCheckResult",
    "CrossCheckRow",
    "InventoryRecord",
    "LocationRole",
    "LocationStock",
    "MinMaxRule",
    "MissingProduct",
    "RestockCandidate",
    "RestockSuggestion",
    "SalesLine",
    "ShelfLifeLimit",
    "ShelfLifeResult",
    "SkuAggregate",
    "SuggestedLocation",
    "get_quantity_value",
    "normalize",
    # Engine
    "classify_location",
    "aggregate_inventory",
    "aggregate_by_location",
    "filter_usable_stock",
    "match_by_sales",
    "match_by_levels",
    "allocate_full_pallets",
    "allocate_exact",
    "sort_fefo",
    "AnalysisMode",
    "RestockAnalyzer",
    "rank_suggestions",
    # Other analyses
    "cross_check",
    "check_shelf_life",
    "build_inbound_rows",
    # File loader
    "MissingColumnsError",
    "RecordValidationError",
    "read_table",
    "validate_required_columns",
    "load_inventory_records",
    "load_sales_lines",
    "load_min_max_rules",
    "load_cross_check_rows",
    "load_shelf_life_limits",
]
