"""Results rendering UI components.

This module provides Streamlit components for report and task file downloads.
"""

import streamlit as st
import io
import zipfile
from datetime import datetime

import pandas as pd

from restock.engine import AnalysisMode
from restock.export import (
    build_report_workbook,
    missing_products_to_dataframe,
    suggestions_to_dataframe,
    wms_task_dataframe,
)
from restock.models import AnalysisResult

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def dataframe_to_excel(df: pd.DataFrame, sheet_name: str = "Sheet1") -> bytes:
    """Write a single DataFrame to Excel bytes."""
    excel_buffer = io.BytesIO()
    df.to_excel(excel_buffer, index=False, sheet_name=sheet_name)
    return excel_buffer.getvalue()


def build_analysis_files(result: AnalysisResult, mode: AnalysisMode) -> dict[str, bytes]:
    """Build the downloadable files for one analysis run.

    Returns:
        Dict of filename -> Excel bytes. The WMS task file is omitted when
        there is nothing to restock.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    files = {}

    if result.suggestions or result.missing_products:
        files[f"restock_report_{mode.value}_{timestamp}.xlsx"] = build_report_workbook({
            "Restock": suggestions_to_dataframe(result.suggestions, mode),
            "Missing Products": missing_products_to_dataframe(result.missing_products),
        })

    if result.restock_items:
        tasks = wms_task_dataframe(result.restock_items, mode)
        files[f"wms_tasks_{mode.value}_{timestamp}.xlsx"] = dataframe_to_excel(tasks, "Tasks")

    return files


def render_results(result: AnalysisResult, mode: AnalysisMode, prefix: str = "default"):
    """Render the download section with ZIP and individual file downloads.

    Args:
        result: Analysis result to export
        mode: Mode the analysis ran in
        prefix: Unique prefix for widget keys
    """
    files = build_analysis_files(result, mode)
    if not files:
        st.info("No files to download.")
        return

    # ZIP download
    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
        for filename, data in files.items():
            zip_file.writestr(filename, data)

    st.download_button(
        label="Download All as ZIP",
        data=zip_buffer.getvalue(),
        file_name=f"restock_{mode.value}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.zip",
        mime="application/zip",
        type="primary",
        key=f"{prefix}_download_zip",
    )

    st.divider()
    st.subheader("Individual Files")

    for idx, (filename, data) in enumerate(files.items()):
        col1, col2 = st.columns([4, 1])
        col1.markdown(f"**{filename}**")
        col2.download_button(
            label="Download",
            data=data,
            file_name=filename,
            mime=XLSX_MIME,
            key=f"{prefix}_download_{idx}",
        )


def render_table_download(df: pd.DataFrame, name: str, prefix: str):
    """Single Excel download for a report table."""
    if df.empty:
        return
    st.download_button(
        label=f"Download {name}",
        data=build_report_workbook({name: df}),
        file_name=f"{name.lower().replace(' ', '_')}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx",
        mime=XLSX_MIME,
        type="primary",
        key=f"{prefix}_download_table",
    )
