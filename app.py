"""
Restock Analysis Streamlit App

A web interface for reserve-to-picking restock suggestions and related
inventory checks.
"""

import streamlit as st
import pandas as pd

from restock import (
    AnalysisMode,
    MissingColumnsError,
    RestockAnalyzer,
    check_shelf_life,
    cross_check,
    load_cross_check_rows,
    load_inventory_records,
    load_min_max_rules,
    load_sales_lines,
    load_shelf_life_limits,
    read_table,
)
from restock.config import (
    INBOUND_FIELDS,
    SYSTEM_INVENTORY_MAPPING,
    WAREHOUSE_INVENTORY_MAPPING,
)
from restock.export import cross_check_to_dataframe, shelf_life_to_dataframe
from restock.inbound import build_inbound_rows, inbound_to_dataframe
from ui import (
    add_config_value,
    get_config,
    init_session_state,
    remove_config_value,
    render_analysis,
    render_cross_check,
    render_results,
    render_shelf_life,
    render_table_download,
    reset_config,
)

# Page config
st.set_page_config(
    page_title="Restock Analysis",
    page_icon="📦",
    layout="wide",
)

init_session_state()

CONFIG_EDITORS = [
    ("valid_statuses", "Valid Statuses", "Inventory states counted as usable stock"),
    ("ignored_locations", "Ignored Locations", "Locations excluded from every analysis"),
    ("picking_levels", "Picking Levels", "Last segment of a picking location code"),
    ("reserve_levels", "Reserve Levels", "Last segment of a reserve location code"),
    ("additional_reserve_locations", "Additional Reserve Locations", "Location prefixes always treated as reserve"),
]


def add_from_input(key: str):
    """Add the value typed in the sidebar input, then clear the input."""
    add_config_value(key, st.session_state[f"new_{key}"])
    st.session_state[f"new_{key}"] = ""


def render_config_list(key: str, title: str, caption: str):
    """Editable list of config values in the sidebar."""
    st.subheader(title)
    st.caption(caption)

    for idx, value in enumerate(st.session_state[key]):
        col1, col2 = st.columns([6, 1])
        col1.write(value)
        col2.button("✕", key=f"remove_{key}_{idx}", on_click=remove_config_value, args=(key, idx))

    st.text_input("Add", key=f"new_{key}", label_visibility="collapsed", placeholder="Add value")
    st.button("Add", key=f"add_{key}", on_click=add_from_input, args=(key,))


def load_uploaded(uploaded_file, loader, *args):
    """Read an uploaded file and convert it with a loader; errors are shown in the UI."""
    try:
        records = loader(read_table(uploaded_file, uploaded_file.name), *args)
    except MissingColumnsError as e:
        st.error(str(e))
        return None
    except Exception as e:
        st.error(f"Error loading {uploaded_file.name}: {e}")
        return None

    st.success(f"{uploaded_file.name}: {len(records)} rows loaded")
    return records


def render_restock_tab(mode: AnalysisMode, demand_label: str, demand_loader):
    """Upload inventory + demand, run the analysis, show results and downloads."""
    prefix = mode.value
    col1, col2 = st.columns(2)
    inventory_file = col1.file_uploader(
        "Upload Inventory File",
        type=["xlsx", "csv", "txt"],
        key=f"{prefix}_inventory_file",
    )
    demand_file = col2.file_uploader(
        f"Upload {demand_label} File",
        type=["xlsx", "csv", "txt"],
        key=f"{prefix}_demand_file",
    )

    if not (inventory_file and demand_file):
        return

    inventory = load_uploaded(inventory_file, load_inventory_records)
    demand = load_uploaded(demand_file, demand_loader)
    if inventory is None or demand is None:
        return

    if st.button("Run Analysis", key=f"{prefix}_run", type="primary"):
        analyzer = RestockAnalyzer(get_config())
        with st.spinner("Analyzing..."):
            st.session_state[f"{prefix}_result"] = analyzer.analyze(mode, inventory, demand)

    result = st.session_state[f"{prefix}_result"]
    if result is not None:
        st.divider()
        st.subheader("Suggestions")
        render_analysis(result, mode, prefix=prefix)

        st.divider()
        st.subheader("Downloads")
        render_results(result, mode, prefix=prefix)


# Main UI
st.title("📦 Restock Analysis")
st.markdown("Suggest reserve-to-picking moves from sales or min/max levels")

# Sidebar for configuration
with st.sidebar:
    st.header("⚙️ Configuration")

    for key, title, caption in CONFIG_EDITORS:
        render_config_list(key, title, caption)
        st.divider()

    st.button("Reset to Defaults", on_click=reset_config)

# Main content area
tab_sales, tab_levels, tab_cross, tab_shelf, tab_inbound = st.tabs([
    "🧾 Sales Restock",
    "📊 Min/Max Restock",
    "🔀 Inventory Cross-Check",
    "⏳ Shelf Life",
    "📥 Inbound Builder",
])

# Tab 1: Sales-driven restock
with tab_sales:
    st.subheader("Restock from Sales")
    st.markdown("""
    Compares invoiced quantities with picking stock. Short SKUs are refilled
    with **whole reserve pallets**, soonest expiry first.
    """)
    render_restock_tab(AnalysisMode.SALES, "Sales", load_sales_lines)

# Tab 2: Min/max-driven restock
with tab_levels:
    st.subheader("Restock to Min/Max Levels")
    st.markdown("""
    Checks every picking slot against its min level. Slots below min are
    refilled **exactly up to max** from reserve, soonest expiry first.
    """)
    render_restock_tab(AnalysisMode.LEVELS, "Min/Max", load_min_max_rules)

# Tab 3: Inventory cross-check
with tab_cross:
    st.subheader("System vs Warehouse Inventory")

    group_by_lot = st.checkbox("Compare per lot", value=True, key="cross_check_group_by_lot")

    col1, col2 = st.columns(2)
    system_file = col1.file_uploader("Upload System Inventory", type=["xlsx", "csv", "txt"], key="system_file")
    warehouse_file = col2.file_uploader("Upload Warehouse Inventory", type=["xlsx", "csv", "txt"], key="warehouse_file")

    if system_file and warehouse_file:
        system_rows = load_uploaded(system_file, load_cross_check_rows, SYSTEM_INVENTORY_MAPPING)
        warehouse_rows = load_uploaded(warehouse_file, load_cross_check_rows, WAREHOUSE_INVENTORY_MAPPING)

        if system_rows is not None and warehouse_rows is not None:
            if st.button("Compare", key="cross_check_run", type="primary"):
                st.session_state.cross_check_result = cross_check(system_rows, warehouse_rows, group_by_lot)

            if st.session_state.cross_check_result is not None:
                st.divider()
                render_cross_check(st.session_state.cross_check_result)
                render_table_download(
                    cross_check_to_dataframe(st.session_state.cross_check_result), "Cross Check", "cross_check"
                )

# Tab 4: Shelf-life check
with tab_shelf:
    st.subheader("Shelf-Life Compliance")
    st.markdown("Flags stock with more days to expiry than the SKU master allows.")

    col1, col2 = st.columns(2)
    shelf_inventory_file = col1.file_uploader("Upload Inventory File", type=["xlsx", "csv", "txt"], key="shelf_inventory_file")
    master_file = col2.file_uploader("Upload Shelf-Life Master", type=["xlsx", "csv", "txt"], key="master_file")

    if shelf_inventory_file and master_file:
        records = load_uploaded(shelf_inventory_file, load_inventory_records)
        master = load_uploaded(master_file, load_shelf_life_limits)

        if records is not None and master is not None:
            if st.button("Check", key="shelf_life_run", type="primary"):
                st.session_state.shelf_life_result = check_shelf_life(records, master)

            if st.session_state.shelf_life_result is not None:
                st.divider()
                render_shelf_life(st.session_state.shelf_life_result)
                render_table_download(
                    shelf_life_to_dataframe(st.session_state.shelf_life_result), "Shelf Life", "shelf_life"
                )

# Tab 5: Inbound receipt builder
with tab_inbound:
    st.subheader("Inbound Receipt Builder")
    st.markdown("Maps any source sheet onto the WMS inbound schema.")

    source_file = st.file_uploader("Upload Source File", type=["xlsx", "csv", "txt"], key="inbound_source_file")

    if source_file:
        try:
            source_df = read_table(source_file, source_file.name)
        except Exception as e:
            st.error(f"Error loading file: {e}")
            source_df = None

        if source_df is not None:
            st.success(f"File loaded: {len(source_df)} rows")
            columns = [""] + [str(c) for c in source_df.columns]

            mapping = {}
            fixed_values = {}
            with st.expander("Field Mapping", expanded=True):
                for field in INBOUND_FIELDS:
                    col1, col2 = st.columns(2)
                    column = col1.selectbox(field, options=columns, key=f"inbound_map_{field}")
                    fixed = col2.text_input(
                        f"{field} fixed value",
                        key=f"inbound_fixed_{field}",
                        help="Overrides the mapped column when set",
                    )
                    if column:
                        mapping[field] = column
                    if fixed:
                        fixed_values[field] = fixed

            if st.button("Build Inbound File", key="inbound_run", type="primary"):
                rows = source_df.to_dict("records")
                st.session_state.inbound_result = inbound_to_dataframe(
                    build_inbound_rows(rows, mapping, fixed_values)
                )

            inbound_df = st.session_state.inbound_result
            if isinstance(inbound_df, pd.DataFrame):
                st.divider()
                st.dataframe(inbound_df, use_container_width=True, hide_index=True)
                render_table_download(inbound_df, "Inbound", "inbound")

# Footer
st.divider()
st.caption("Restock Analysis App v1.0")
