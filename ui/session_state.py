"""Session state initialization and management.

This module provides functions for initializing and managing Streamlit session state.
"""

import streamlit as st

from restock.config import (
    DEFAULT_VALID_STATUSES,
    DEFAULT_IGNORED_LOCATIONS,
    DEFAULT_PICKING_LEVELS,
    DEFAULT_RESERVE_LEVELS,
    DEFAULT_ADDITIONAL_RESERVE_LOCATIONS,
)
from restock.models import AnalysisConfig, normalize

# Session key -> default list for each editable config list
CONFIG_LISTS = {
    "valid_statuses": DEFAULT_VALID_STATUSES,
    "ignored_locations": DEFAULT_IGNORED_LOCATIONS,
    "picking_levels": DEFAULT_PICKING_LEVELS,
    "reserve_levels": DEFAULT_RESERVE_LEVELS,
    "additional_reserve_locations": DEFAULT_ADDITIONAL_RESERVE_LOCATIONS,
}

# Per-tab result slots
RESULT_KEYS = [
    "sales_result",
    "levels_result",
    "cross_check_result",
    "shelf_life_result",
    "inbound_result",
]


def init_session_state():
    """Initialize all session state variables with defaults."""
    # Analysis configuration
    for key, default in CONFIG_LISTS.items():
        if key not in st.session_state:
            st.session_state[key] = default.copy()

    # Results
    for key in RESULT_KEYS:
        if key not in st.session_state:
            st.session_state[key] = None


def reset_config():
    """Restore every config list to its default."""
    for key, default in CONFIG_LISTS.items():
        st.session_state[key] = default.copy()


def add_config_value(key: str, value: str):
    """Append a value to a config list, ignoring blanks and duplicates.

    Args:
        key: Session key of the list (one of CONFIG_LISTS)
        value: Value typed by the user
    """
    value = value.strip()
    if not value:
        return
    values = st.session_state[key]
    if normalize(value) not in {normalize(v) for v in values}:
        values.append(value)
        st.session_state[key] = values


def remove_config_value(key: str, idx: int):
    """Remove the value at idx from a config list."""
    values = st.session_state[key]
    if 0 <= idx < len(values):
        values.pop(idx)
        st.session_state[key] = values


def get_config() -> AnalysisConfig:
    """Create config from current session state."""
    return AnalysisConfig.from_dict({key: list(st.session_state[key]) for key in CONFIG_LISTS})
