"""Inbound receipt builder - maps arbitrary source rows onto the WMS inbound schema."""

from typing import Optional

import pandas as pd

from .config import INBOUND_DATE_FIELDS, INBOUND_FIELDS, INBOUND_NUMERIC_FIELDS
from .models import get_quantity_value

EXCEL_EPOCH = pd.Timestamp("1899-12-30")


def format_excel_date(value) -> str:
    """
    Convert an Excel serial date (e.g. 46600) to "YYYY-MM-DD".

    Datetimes are formatted the same way; anything else is returned as text.
    """
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if pd.isna(value):
            return ""
        return (EXCEL_EPOCH + pd.to_timedelta(value, unit="D")).strftime("%Y-%m-%d")
    if isinstance(value, pd.Timestamp) or hasattr(value, "strftime"):
        return value.strftime("%Y-%m-%d")
    return str(value)


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    return isinstance(value, str) and value == ""


def _get_value(row: dict, key: str, mapping: dict[str, str], fixed_values: dict[str, str]):
    """Fixed value if set, else the mapped column of the row."""
    fixed = fixed_values.get(key)
    if not _is_blank(fixed):
        return fixed
    column = mapping.get(key)
    if column:
        return row.get(column)
    return None


def build_inbound_row(
    row: dict,
    mapping: dict[str, str],
    fixed_values: Optional[dict[str, str]] = None
) -> dict:
    """
    Build one inbound record.

    Args:
        row: Source row (column name -> value)
        mapping: Inbound field -> source column name
        fixed_values: Inbound field -> constant applied to every row

    Returns:
        Dict with every field of INBOUND_FIELDS; numeric fields as numbers
        (0 when missing), all others as strings
    """
    fixed_values = fixed_values or {}
    entry = {}

    for key in INBOUND_FIELDS:
        value = _get_value(row, key, mapping, fixed_values)

        if key in INBOUND_NUMERIC_FIELDS:
            entry[key] = get_quantity_value(value)
        elif key in INBOUND_DATE_FIELDS:
            entry[key] = "" if _is_blank(value) else format_excel_date(value)
        elif _is_blank(value):
            entry[key] = ""
        elif isinstance(value, float) and value.is_integer():
            entry[key] = str(int(value))
        else:
            entry[key] = str(value)

    return entry


def build_inbound_rows(
    rows: list[dict],
    mapping: dict[str, str],
    fixed_values: Optional[dict[str, str]] = None
) -> list[dict]:
    """Build inbound records for every source row."""
    return [build_inbound_row(row, mapping, fixed_values) for row in rows]


def inbound_to_dataframe(entries: list[dict]) -> pd.DataFrame:
    """Inbound records as a DataFrame with the fixed column order."""
    return pd.DataFrame(entries, columns=INBOUND_FIELDS)
