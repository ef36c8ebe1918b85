"""Preview rendering UI components.

This module provides Streamlit components for rendering analysis results on screen.
"""

import streamlit as st

from restock.engine import AnalysisMode
from restock.export import (
    cross_check_to_dataframe,
    missing_products_to_dataframe,
    shelf_life_to_dataframe,
    suggestions_to_dataframe,
)
from restock.models import AnalysisResult, CrossCheckResult, ShelfLifeResult

from .filters import filter_by_text, render_report_filters


def render_analysis(result: AnalysisResult, mode: AnalysisMode, prefix: str = "default"):
    """Render a restock analysis with summary metrics.

    Args:
        result: Analysis result to display
        mode: Mode the analysis ran in (controls the report columns)
        prefix: Unique prefix for widget keys to avoid duplicate IDs
    """
    restock_items = result.restock_items
    short_items = [s for s in restock_items if s.quantity_short > 0]

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Evaluated", len(result.suggestions), help=f"{len(result.ok_items)} already OK")
    col2.metric("To Restock", len(restock_items))
    col3.metric("Total Units", result.total_to_restock)
    if mode == AnalysisMode.SALES:
        col4.metric("Missing Products", len(result.missing_products))
    else:
        col4.metric("Reserve Short", len(short_items))

    show_only_restock = st.checkbox(
        "Show only items to restock",
        value=True,
        key=f"{prefix}_show_only_restock"
    )

    suggestions = restock_items if show_only_restock else result.suggestions
    if not suggestions:
        st.info("Nothing to restock for the current settings.")
    else:
        df = render_report_filters(suggestions_to_dataframe(suggestions, mode), prefix)
        st.dataframe(df, use_container_width=True, hide_index=True)

    if mode == AnalysisMode.LEVELS and short_items:
        with st.expander(f"Reserve could not cover the max level ({len(short_items)})"):
            for s in short_items:
                st.markdown(f"└─ **{s.sku}** → {s.destination_location}: {s.quantity_short} units short")

    if result.missing_products:
        with st.expander(f"Products without inventory ({len(result.missing_products)})"):
            st.dataframe(
                missing_products_to_dataframe(result.missing_products),
                use_container_width=True,
                hide_index=True,
            )


def render_cross_check(results: list[CrossCheckResult], prefix: str = "cross_check"):
    """Render cross-check differences."""
    with_difference = [r for r in results if r.difference != 0]

    col1, col2, col3 = st.columns(3)
    col1.metric("Keys Compared", len(results))
    col2.metric("With Differences", len(with_difference))
    col3.metric("Net Difference", sum(r.difference for r in results))

    show_only_differences = st.checkbox(
        "Show only differences",
        value=True,
        key=f"{prefix}_show_only_differences"
    )
    rows = with_difference if show_only_differences else results
    if not rows:
        st.success("Both inventories match.")
        return

    df = cross_check_to_dataframe(rows)
    query = st.text_input("SKU contains", key=f"{prefix}_filter_sku")
    st.dataframe(filter_by_text(df, "SKU", query), use_container_width=True, hide_index=True)


def render_shelf_life(results: list[ShelfLifeResult], prefix: str = "shelf_life"):
    """Render shelf-life alerts."""
    alerts = [r for r in results if not r.compliant]

    col1, col2 = st.columns(2)
    col1.metric("Records Checked", len(results))
    col2.metric("Alerts", len(alerts))

    show_only_alerts = st.checkbox(
        "Show only alerts",
        value=True,
        key=f"{prefix}_show_only_alerts"
    )
    rows = alerts if show_only_alerts else results
    if not rows:
        st.success("All stock is within its shelf-life limit.")
        return

    st.dataframe(shelf_life_to_dataframe(rows), use_container_width=True, hide_index=True)
