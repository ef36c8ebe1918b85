"""Export writers - reshape analysis results into flat rows and Excel workbooks."""

import io
from typing import Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.dataframe import dataframe_to_rows

from .config import (
    FULL_PALLET_THRESHOLD,
    LEVELS_TASK_COLUMNS,
    RESTOCK_TYPE_FULL_PALLET,
    RESTOCK_TYPE_OK,
    RESTOCK_TYPE_UNITS,
    SALES_TASK_COLUMNS,
)
from .engine import AnalysisMode
from .models import (
    CrossCheckResult,
    MissingProduct,
    RestockSuggestion,
    ShelfLifeResult,
    SuggestedLocation,
)

RESTOCK_TYPE_COLUMN = "Restock Type"

RESTOCK_TYPE_FILLS = {
    RESTOCK_TYPE_FULL_PALLET: PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),
    RESTOCK_TYPE_UNITS: PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),
}


def get_restock_type(quantity: float) -> str:
    """Label a restock quantity: full pallet (> threshold), units, or OK."""
    if quantity > FULL_PALLET_THRESHOLD:
        return RESTOCK_TYPE_FULL_PALLET
    if quantity > 0:
        return RESTOCK_TYPE_UNITS
    return RESTOCK_TYPE_OK


def format_source_location(location: SuggestedLocation) -> str:
    """Example: "P2-B-3-20 (LPN: LP001) (Qty: 80)" """
    lpn = f" (LPN: {location.lpn})" if location.lpn else ""
    return f"{location.location}{lpn} (Qty: {location.quantity})"


def suggestions_to_dataframe(
    suggestions: list[RestockSuggestion],
    mode: Union[AnalysisMode, str]
) -> pd.DataFrame:
    """
    Full report: one row per suggested location.

    Suggestions are ordered by quantity to restock (descending). In sales
    mode the sold/picking quantities appear only on a suggestion's first
    row so that column sums stay meaningful.
    """
    mode = AnalysisMode(mode)
    rows = []

    for s in sorted(suggestions, key=lambda x: x.quantity_to_restock, reverse=True):
        base = {"SKU": s.sku, "Description": s.description}
        if mode == AnalysisMode.LEVELS:
            base["Destination"] = s.destination_location or ""
            base["Destination LPN"] = s.destination_lpn or ""

        if not s.has_source:
            row = dict(base)
            if mode == AnalysisMode.SALES:
                row["Qty Sold"] = s.quantity_sold
            row["Qty in Picking"] = s.quantity_available
            row["Qty to Restock"] = s.quantity_to_restock
            row["Action / Source Locations"] = "No source" if s.needs_restock else "OK"
            row[RESTOCK_TYPE_COLUMN] = get_restock_type(s.quantity_to_restock)
            rows.append(row)
            continue

        for index, location in enumerate(s.suggested_locations):
            quantity = location.quantity if s.needs_restock else 0
            row = dict(base)
            if mode == AnalysisMode.SALES:
                row["Qty Sold"] = s.quantity_sold if index == 0 else 0
                row["Qty in Picking"] = s.quantity_available if index == 0 else 0
            else:
                row["Qty in Picking"] = s.quantity_available
            row["Qty to Restock"] = quantity
            row["Action / Source Locations"] = format_source_location(location)
            row[RESTOCK_TYPE_COLUMN] = get_restock_type(quantity)
            rows.append(row)

    return pd.DataFrame(rows)


def wms_task_dataframe(
    suggestions: list[RestockSuggestion],
    mode: Union[AnalysisMode, str]
) -> pd.DataFrame:
    """
    WMS task file for items that need restocking.

    Sales mode lists the source pallets to move (LRLD); levels mode lists
    source -> destination moves with quantities (LTLD).

    Raises:
        ValueError: If there is nothing to restock
    """
    mode = AnalysisMode(mode)
    tasks = [s for s in suggestions if s.needs_restock]
    rows = []

    for task in tasks:
        for location in task.suggested_locations:
            if mode == AnalysisMode.SALES:
                rows.append({
                    "LRLD_LPN_CODE": location.lpn or "",
                    "LRLD_LOCATION": location.location,
                })
            else:
                rows.append({
                    "LTLD_LPN_SRC": location.lpn or "",
                    "LTLD_SKU": task.sku,
                    "LTLD_LOT": "",  # lot is not tracked on reserve locations
                    "LTLD_QTY": location.quantity,
                    "LTLD_LPN_DST": task.destination_lpn or "",
                    "LTLD_LOCATION_DST": task.destination_location or "",
                })

    if not rows:
        raise ValueError("No restock tasks to export")

    columns = SALES_TASK_COLUMNS if mode == AnalysisMode.SALES else LEVELS_TASK_COLUMNS
    return pd.DataFrame(rows, columns=columns)


def missing_products_to_dataframe(missing: list[MissingProduct]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "SKU": m.sku,
                "Description": m.description,
                "Qty Sold": m.quantity_sold,
                "Shortage Type": m.shortage_type,
            }
            for m in missing
        ],
        columns=["SKU", "Description", "Qty Sold", "Shortage Type"],
    )


def cross_check_to_dataframe(results: list[CrossCheckResult]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "SKU": r.sku,
                "Lot": r.lot,
                "Description": r.description,
                "Qty System": r.qty_system,
                "Qty Warehouse": r.qty_warehouse,
                "Difference": r.difference,
            }
            for r in results
        ],
        columns=["SKU", "Lot", "Description", "Qty System", "Qty Warehouse", "Difference"],
    )


def shelf_life_to_dataframe(results: list[ShelfLifeResult]) -> pd.DataFrame:
    columns = [
        "SKU", "Description", "LPN", "Location", "Lot", "Expiration Date",
        "Days to Expiry", "Master Limit (days)", "Status",
    ]
    return pd.DataFrame(
        [
            {
                "SKU": r.sku,
                "Description": r.description,
                "LPN": r.lpn or "",
                "Location": r.location,
                "Lot": r.lot or "",
                "Expiration Date": r.expiration_date or "",
                "Days to Expiry": r.days_to_expiry,
                "Master Limit (days)": r.master_limit_days,
                "Status": r.status,
            }
            for r in results
        ],
        columns=columns,
    )


def build_report_workbook(sheets: dict[str, pd.DataFrame]) -> bytes:
    """
    Write DataFrames to an Excel workbook, one sheet each.

    Header rows are bold; restock-type cells are filled green (full pallet)
    or yellow (units). Empty DataFrames are skipped.

    Args:
        sheets: Sheet name -> DataFrame (insertion order is kept)

    Returns:
        Excel file bytes

    Raises:
        ValueError: If every DataFrame is empty
    """
    wb = Workbook()
    wb.remove(wb.active)

    for sheet_name, df in sheets.items():
        if df is None or df.empty:
            continue

        ws = wb.create_sheet(title=sheet_name[:31])
        for row in dataframe_to_rows(df, index=False, header=True):
            ws.append(row)

        for cell in ws[1]:
            cell.font = Font(bold=True)

        if RESTOCK_TYPE_COLUMN in df.columns:
            col_idx = list(df.columns).index(RESTOCK_TYPE_COLUMN) + 1
            for row_idx in range(2, ws.max_row + 1):
                cell = ws.cell(row=row_idx, column=col_idx)
                fill = RESTOCK_TYPE_FILLS.get(cell.value)
                if fill:
                    cell.fill = fill

    if not wb.sheetnames:
        raise ValueError("No data to export")

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
