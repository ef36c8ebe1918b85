"""Spreadsheet loading utilities.

This module reads uploaded Excel/CSV files, resolves client-specific column
names and converts rows into the typed records the engine works with.
It is UI-agnostic and can be used by both Streamlit and CLI applications.
"""

import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

import pandas as pd

from .config import (
    INVENTORY_COLUMN_MAPPING,
    MIN_MAX_COLUMN_MAPPING,
    OPTIONAL_FIELDS,
    SALES_COLUMN_MAPPING,
    SHELF_LIFE_MASTER_MAPPING,
    SYSTEM_INVENTORY_MAPPING,
)
from .inbound import format_excel_date
from .models import (
    CrossCheckRow,
    InventoryRecord,
    MinMaxRule,
    SalesLine,
    ShelfLifeLimit,
    get_optional_number,
    get_quantity_value,
)

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".csv", ".txt", ".tsv"}


class RecordValidationError(ValueError):
    """A required field of an input row is missing or malformed."""

    def __init__(self, field_path: str, message: str):
        self.field_path = field_path
        self.message = message
        super().__init__(f"{field_path}: {message}")


class MissingColumnsError(ValueError):
    """Required columns could not be found under any of their accepted names."""

    def __init__(self, missing: dict[str, list[str]]):
        self.missing = missing
        details = "; ".join(
            f'"{field}" (expected one of: {", ".join(aliases)})' for field, aliases in missing.items()
        )
        super().__init__(f"Required columns not found: {details}")


def read_table(file: Union[str, Path, BinaryIO], filename: Optional[str] = None) -> pd.DataFrame:
    """Read an Excel workbook (first sheet) or a CSV/TSV text file.

    Text files use a tab delimiter when the header line contains one,
    otherwise a comma. Text cells are read as strings so SKUs keep leading zeros.

    Args:
        file: Path or file-like object (uploaded file)
        filename: Name used to detect the format when file is file-like

    Returns:
        DataFrame with the file's header row as columns
    """
    name = filename or (str(file) if isinstance(file, (str, Path)) else getattr(file, "name", ""))
    suffix = Path(name).suffix.lower()

    if suffix not in TEXT_SUFFIXES:
        return pd.read_excel(file, engine="openpyxl")

    if isinstance(file, (str, Path)):
        content = Path(file).read_bytes()
    else:
        content = file.read()
        file.seek(0)
    text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
    text = text.replace("\r", "")

    header_line = text.split("\n", 1)[0]
    delimiter = "\t" if "\t" in header_line else ","
    return pd.read_csv(io.StringIO(text), sep=delimiter, dtype=str, keep_default_na=False)


def resolve_columns(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]]
) -> tuple[dict[str, str], dict[str, list[str]]]:
    """Find the DataFrame column for each internal field.

    Header names are compared trimmed and case-insensitive; the first
    accepted name present wins.

    Returns:
        Tuple of (field -> column name, missing required field -> accepted names)
    """
    headers = {str(col).strip().lower(): col for col in df.columns}
    resolved: dict[str, str] = {}
    missing: dict[str, list[str]] = {}

    for field, aliases in column_mapping.items():
        for alias in aliases:
            column = headers.get(alias.strip().lower())
            if column is not None:
                resolved[field] = column
                break
        else:
            if field not in OPTIONAL_FIELDS:
                missing[field] = aliases

    return resolved, missing


def validate_required_columns(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]]
) -> tuple[bool, list[str]]:
    """Validate that DataFrame has a column for every required field.

    Returns:
        Tuple of (is_valid, list_of_missing_fields)
    """
    _, missing = resolve_columns(df, column_mapping)
    return len(missing) == 0, list(missing)


def format_cell_text(val) -> str:
    """Format a cell as text. Whole floats lose ".0" (46600.0 -> "46600")."""
    if val is None:
        return ""
    if isinstance(val, float):
        if pd.isna(val):
            return ""
        if val.is_integer():
            return str(int(val))
    return str(val).strip()


def format_cell_date(val) -> Optional[str]:
    """Format a date cell as ISO "YYYY-MM-DD"; Excel serials are converted."""
    if val is None or (isinstance(val, float) and pd.isna(val)) or val is pd.NaT:
        return None
    if isinstance(val, (datetime, date, pd.Timestamp, int, float)) and not isinstance(val, bool):
        return format_excel_date(val)
    text = str(val).strip()
    return text or None


def _is_empty_row(values: dict) -> bool:
    for value in values.values():
        if value is None or value == "" or value == 0:
            continue
        if isinstance(value, float) and pd.isna(value):
            continue
        return False
    return True


def _load_records(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]],
    kind: str,
    build: Callable[[dict, str], object],
    strict: bool
) -> list:
    """Resolve columns, then build one record per non-empty row.

    Rows failing validation are skipped with a warning, or raise when strict.
    """
    columns, missing = resolve_columns(df, column_mapping)
    if missing:
        raise MissingColumnsError(missing)

    records = []
    skipped = 0
    for position, row in enumerate(df.to_dict("records")):
        values = {field: row.get(column) for field, column in columns.items()}
        if _is_empty_row(values):
            continue
        try:
            records.append(build(values, f"{kind}[{position}]"))
        except RecordValidationError as e:
            if strict:
                raise
            skipped += 1
            logger.warning("Skipping row: %s", e)

    if skipped:
        logger.warning("%s: %d rows skipped, %d loaded", kind, skipped, len(records))
    return records


def _require_sku(values: dict, path: str) -> str:
    sku = format_cell_text(values.get("sku"))
    if not sku:
        raise RecordValidationError(f"{path}.sku", "SKU is required")
    return sku


def _optional_text(val) -> Optional[str]:
    text = format_cell_text(val)
    return text or None


def _build_inventory_record(values: dict, path: str) -> InventoryRecord:
    days = get_optional_number(values.get("days_to_expiry"))
    return InventoryRecord(
        sku=_require_sku(values, path),
        location=format_cell_text(values.get("location")),
        available_qty=get_quantity_value(values.get("available_qty")),
        status=format_cell_text(values.get("status")),
        description=format_cell_text(values.get("description")),
        license_plate=_optional_text(values.get("license_plate")),
        lot=_optional_text(values.get("lot")),
        expiration_date=format_cell_date(values.get("expiration_date")),
        days_to_expiry=days,
    )


def _build_sales_line(values: dict, path: str) -> SalesLine:
    return SalesLine(
        sku=_require_sku(values, path),
        confirmed_qty=get_quantity_value(values.get("confirmed_qty")),
        description=format_cell_text(values.get("description")),
    )


def _build_min_max_rule(values: dict, path: str) -> MinMaxRule:
    location = format_cell_text(values.get("location"))
    if not location:
        raise RecordValidationError(f"{path}.location", "location is required")
    return MinMaxRule(
        sku=_require_sku(values, path),
        location=location,
        min_qty=get_quantity_value(values.get("min_qty")),
        max_qty=get_quantity_value(values.get("max_qty")),
        lpn=_optional_text(values.get("lpn")),
    )


def _build_cross_check_row(values: dict, path: str) -> CrossCheckRow:
    return CrossCheckRow(
        sku=_require_sku(values, path),
        quantity=get_quantity_value(values.get("quantity")),
        lot=_optional_text(values.get("lot")),
        description=format_cell_text(values.get("description")),
    )


def _build_shelf_life_limit(values: dict, path: str) -> ShelfLifeLimit:
    return ShelfLifeLimit(
        sku=_require_sku(values, path),
        min_days=get_quantity_value(values.get("min_days")),
    )


def load_inventory_records(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]] = INVENTORY_COLUMN_MAPPING,
    strict: bool = False
) -> list[InventoryRecord]:
    """Convert a warehouse inventory sheet into InventoryRecord items."""
    return _load_records(df, column_mapping, "inventory", _build_inventory_record, strict)


def load_sales_lines(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]] = SALES_COLUMN_MAPPING,
    strict: bool = False
) -> list[SalesLine]:
    """Convert an invoicing sheet into SalesLine items."""
    return _load_records(df, column_mapping, "sales", _build_sales_line, strict)


def load_min_max_rules(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]] = MIN_MAX_COLUMN_MAPPING,
    strict: bool = False
) -> list[MinMaxRule]:
    """Convert a min/max sheet into MinMaxRule items."""
    return _load_records(df, column_mapping, "min_max", _build_min_max_rule, strict)


def load_cross_check_rows(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]] = SYSTEM_INVENTORY_MAPPING,
    strict: bool = False
) -> list[CrossCheckRow]:
    """Convert one cross-check feed (system or warehouse mapping) into CrossCheckRow items."""
    return _load_records(df, column_mapping, "cross_check", _build_cross_check_row, strict)


def load_shelf_life_limits(
    df: pd.DataFrame,
    column_mapping: dict[str, list[str]] = SHELF_LIFE_MASTER_MAPPING,
    strict: bool = False
) -> list[ShelfLifeLimit]:
    """Convert a shelf-life master sheet into ShelfLifeLimit items."""
    return _load_records(df, column_mapping, "shelf_life_master", _build_shelf_life_limit, strict)
