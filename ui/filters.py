"""Filter UI components for Streamlit.

This module provides Streamlit UI components for filtering report DataFrames
before they are displayed.
"""

import streamlit as st
import pandas as pd

from restock.export import RESTOCK_TYPE_COLUMN
from restock.models import normalize


def filter_by_text(df: pd.DataFrame, column: str, query: str) -> pd.DataFrame:
    """Keep rows whose column contains query (case-insensitive)."""
    query = normalize(query)
    if not query or column not in df.columns:
        return df
    return df[df[column].astype(str).str.upper().str.contains(query, regex=False)]


def render_report_filters(df: pd.DataFrame, prefix: str) -> pd.DataFrame:
    """Render filter UI for a restock report and return the filtered DataFrame.

    Args:
        df: Report DataFrame (see restock.export.suggestions_to_dataframe)
        prefix: Unique prefix for widget keys

    Returns:
        Filtered DataFrame
    """
    if df.empty:
        return df

    with st.expander("Filter Options", expanded=False):
        col1, col2 = st.columns(2)

        query = col1.text_input(
            "SKU contains",
            key=f"{prefix}_filter_sku",
        )
        filtered_df = filter_by_text(df, "SKU", query)

        if RESTOCK_TYPE_COLUMN in df.columns:
            restock_types = sorted(df[RESTOCK_TYPE_COLUMN].dropna().unique().tolist())
            selected_types = col2.multiselect(
                f"Filter by {RESTOCK_TYPE_COLUMN}",
                options=restock_types,
                default=[],
                key=f"{prefix}_filter_restock_type",
                help="Leave empty to include all"
            )
            if selected_types:
                filtered_df = filtered_df[filtered_df[RESTOCK_TYPE_COLUMN].isin(selected_types)]

        # Show filter summary
        if len(filtered_df) != len(df):
            st.info(f"Filtered: {len(filtered_df)} of {len(df)} rows")

    return filtered_df
