"""Data models for restock analysis."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union
import pandas as pd

from .config import (
    DEFAULT_VALID_STATUSES,
    DEFAULT_IGNORED_LOCATIONS,
    DEFAULT_PICKING_LEVELS,
    DEFAULT_RESERVE_LEVELS,
    DEFAULT_ADDITIONAL_RESERVE_LOCATIONS,
)

DateValue = Union[str, date, None]


def normalize(value) -> str:
    """
    Normalize a grouping key: stringify, trim, uppercase.

    None and NaN become "". Whole floats lose their ".0" so that numeric
    SKUs read from Excel (46600.0) match their text form ("46600").
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            value = int(value)
    return str(value).strip().upper()


def _number_text(text: str) -> str:
    """Normalize decimal-comma text ("1.234,56") to the form float() accepts."""
    text = text.strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    return text


def get_quantity_value(val) -> float:
    """Convert a cell value to a number, treating NaN/empty/non-numeric as 0.

    Text in decimal-comma format ("1.234,56") is accepted as well.
    Whole numbers are returned as int.
    """
    number = get_optional_number(val)
    return 0 if number is None else number


def get_optional_number(val) -> Optional[float]:
    """Like get_quantity_value, but missing values stay None."""
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        text = _number_text(val)
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        try:
            number = float(val)
        except (ValueError, TypeError):
            return None
    if pd.isna(number) or number in (float("inf"), float("-inf")):
        return None
    return int(number) if number.is_integer() else number


class LocationRole(Enum):
    """Role a location plays in replenishment."""
    PICKING = "picking"
    RESERVE = "reserve"
    IGNORED = "ignored"  # usable stock, but neither picking nor reserve


@dataclass(frozen=True)
class InventoryRecord:
    """One stock position from the warehouse inventory."""
    sku: str
    location: str
    available_qty: float
    status: str
    description: str = ""
    license_plate: Optional[str] = None
    lot: Optional[str] = None
    expiration_date: DateValue = None
    days_to_expiry: Optional[int] = None


@dataclass(frozen=True)
class SalesLine:
    """One invoiced sales line."""
    sku: str
    confirmed_qty: float
    description: str = ""


@dataclass(frozen=True)
class MinMaxRule:
    """Replenishment thresholds for one SKU at one picking slot."""
    sku: str
    location: str
    min_qty: float
    max_qty: float
    lpn: Optional[str] = None


@dataclass(frozen=True)
class CrossCheckRow:
    """One row of an inventory feed used by the cross-check."""
    sku: str
    quantity: float
    lot: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class ShelfLifeLimit:
    """Master data: days of shelf life a SKU may carry in stock."""
    sku: str
    min_days: int


@dataclass
class LocationStock:
    """Available quantity of a SKU at one location."""
    location: str
    available: float
    lpn: Optional[str] = None
    expiration_date: DateValue = None
    days_to_expiry: Optional[float] = None


@dataclass
class SkuAggregate:
    """Usable stock of one SKU, split by location role."""
    description: str = ""
    total_picking: float = 0
    total_reserve: float = 0
    total_unassigned: float = 0
    picking_locations: list[LocationStock] = field(default_factory=list)
    reserve_locations: list[LocationStock] = field(default_factory=list)

    @property
    def total_usable(self) -> float:
        """All usable stock, including locations with no replenishment role."""
        return self.total_picking + self.total_reserve + self.total_unassigned


@dataclass
class RestockCandidate:
    """Demand unit whose picking stock is short while reserve stock exists."""
    sku: str
    description: str
    amount_needed: float
    picking_stock: float
    reserve_locations: list[LocationStock] = field(default_factory=list)
    quantity_sold: float = 0
    destination_lpn: Optional[str] = None
    destination_location: Optional[str] = None


@dataclass
class SuggestedLocation:
    """A location in a suggestion: a reserve source, or a picking slot for OK items."""
    location: str
    quantity: float
    lpn: Optional[str] = None
    days_to_expiry: Optional[float] = None
    expiration_date: DateValue = None
    full_pallet: Optional[bool] = None

    @classmethod
    def from_stock(
        cls,
        stock: LocationStock,
        quantity: Optional[float] = None,
        full_pallet: Optional[bool] = None
    ) -> "SuggestedLocation":
        """Build from a LocationStock, defaulting to its whole available quantity."""
        return cls(
            location=stock.location,
            quantity=stock.available if quantity is None else quantity,
            lpn=stock.lpn,
            days_to_expiry=stock.days_to_expiry,
            expiration_date=stock.expiration_date,
            full_pallet=full_pallet,
        )


@dataclass
class Allocation:
    """Outcome of walking reserve locations for one candidate."""
    quantity_to_restock: float = 0
    suggested_locations: list[SuggestedLocation] = field(default_factory=list)

    @property
    def total_allocated(self) -> float:
        return sum(loc.quantity for loc in self.suggested_locations)


@dataclass
class RestockSuggestion:
    """One evaluated demand unit. quantity_to_restock == 0 means no action needed."""
    sku: str
    description: str
    quantity_sold: float
    quantity_available: float
    quantity_to_restock: float
    suggested_locations: list[SuggestedLocation] = field(default_factory=list)
    destination_lpn: Optional[str] = None
    destination_location: Optional[str] = None
    quantity_needed: float = 0

    @property
    def needs_restock(self) -> bool:
        return self.quantity_to_restock > 0

    @property
    def has_source(self) -> bool:
        """Whether any location was suggested.

        A restock item without locations means no reserve source was available.
        """
        return len(self.suggested_locations) > 0

    @property
    def quantity_short(self) -> float:
        """Demand that reserve stock could not cover."""
        return max(0, self.quantity_needed - self.quantity_to_restock)


@dataclass
class MissingProduct:
    """Sold SKU with no usable inventory at all."""
    sku: str
    description: str
    quantity_sold: float
    shortage_type: str = "NO_INVENTORY"


@dataclass
class MatchResult:
    """Demand units classified by the matcher."""
    candidates: list[RestockCandidate] = field(default_factory=list)
    ok_items: list[RestockSuggestion] = field(default_factory=list)
    missing: list[MissingProduct] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Result of one restock analysis run."""
    suggestions: list[RestockSuggestion] = field(default_factory=list)
    missing_products: list[MissingProduct] = field(default_factory=list)

    @property
    def restock_items(self) -> list[RestockSuggestion]:
        return [s for s in self.suggestions if s.needs_restock]

    @property
    def ok_items(self) -> list[RestockSuggestion]:
        return [s for s in self.suggestions if not s.needs_restock]

    @property
    def total_to_restock(self) -> float:
        return sum(s.quantity_to_restock for s in self.suggestions)


@dataclass
class CrossCheckResult:
    """Quantity comparison for one SKU (or SKU + lot) between two feeds."""
    sku: str
    lot: str
    description: str
    qty_system: float
    qty_warehouse: float

    @property
    def difference(self) -> float:
        return self.qty_system - self.qty_warehouse


@dataclass
class ShelfLifeResult:
    """Shelf-life compliance of one inventory record."""
    sku: str
    description: str
    location: str
    days_to_expiry: float
    master_limit_days: float
    compliant: bool
    lpn: Optional[str] = None
    lot: Optional[str] = None
    expiration_date: DateValue = None

    @property
    def status(self) -> str:
        return "OK" if self.compliant else "ALERT"


@dataclass
class AnalysisConfig:
    """Tunable rules for one analysis run (one client/warehouse)."""
    valid_statuses: list[str] = field(default_factory=lambda: list(DEFAULT_VALID_STATUSES))
    ignored_locations: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_LOCATIONS))
    picking_levels: list[str] = field(default_factory=lambda: list(DEFAULT_PICKING_LEVELS))
    reserve_levels: list[str] = field(default_factory=lambda: list(DEFAULT_RESERVE_LEVELS))
    additional_reserve_locations: list[str] = field(
        default_factory=lambda: list(DEFAULT_ADDITIONAL_RESERVE_LOCATIONS)
    )

    @property
    def status_allow_set(self) -> set[str]:
        return {normalize(s) for s in self.valid_statuses}

    @property
    def location_deny_set(self) -> set[str]:
        return {normalize(loc) for loc in self.ignored_locations}

    @property
    def picking_level_set(self) -> set[str]:
        return {normalize(level) for level in self.picking_levels}

    @property
    def reserve_level_set(self) -> set[str]:
        return {normalize(level) for level in self.reserve_levels}

    @property
    def reserve_prefixes(self) -> tuple[str, ...]:
        return tuple(p for p in (normalize(x) for x in self.additional_reserve_locations) if p)

    def to_dict(self) -> dict:
        """Convert config to dictionary for JSON export."""
        return {
            "valid_statuses": list(self.valid_statuses),
            "ignored_locations": list(self.ignored_locations),
            "picking_levels": list(self.picking_levels),
            "reserve_levels": list(self.reserve_levels),
            "additional_reserve_locations": list(self.additional_reserve_locations),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisConfig":
        """Create config from dictionary (JSON import). Missing keys use defaults."""
        return cls(
            valid_statuses=list(data.get("valid_statuses", DEFAULT_VALID_STATUSES)),
            ignored_locations=list(data.get("ignored_locations", DEFAULT_IGNORED_LOCATIONS)),
            picking_levels=list(data.get("picking_levels", DEFAULT_PICKING_LEVELS)),
            reserve_levels=list(data.get("reserve_levels", DEFAULT_RESERVE_LEVELS)),
            additional_reserve_locations=list(
                data.get("additional_reserve_locations", DEFAULT_ADDITIONAL_RESERVE_LOCATIONS)
            ),
        )
