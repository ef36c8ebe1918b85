"""UI module for Streamlit components.

This package contains all Streamlit-specific UI components.
The components are separated from business logic (in restock/) to allow:
- Testing of business logic without Streamlit
- The command-line script to reuse the same engine
"""

from .session_state import (
    init_session_state,
    reset_config,
    add_config_value,
    remove_config_value,
    get_config,
)
from .filters import filter_by_text, render_report_filters
from .preview import render_analysis, render_cross_check, render_shelf_life
from .results import render_results, render_table_download, build_analysis_files

__all__ = [
    # Session state
    "init_session_state",
    "reset_config",
    "add_config_value",
    "remove_config_value",
    "get_config",
    # Filters
    "filter_by_text",
    "render_report_filters",
    # Preview
    "render_analysis",
    "render_cross_check",
    "render_shelf_life",
    # Results
    "render_results",
    "render_table_download",
    "build_analysis_files",
]
