"""
CSV Explorer data table.
Shows the selected file's rows with one sort button per column header.
"""

import pandas as pd
import streamlit as st

from frontend.helpers.file_identity import get_file_name
from frontend.helpers.session import get_client, get_explorer_state


def sort_label(column_name, sort_spec):
    """Header button text, with an arrow on the active sort column."""
    if sort_spec.column_name != column_name:
        return column_name
    return f"{column_name} {'▲' if sort_spec.ascending else '▼'}"


def show_data_table():
    """
    Render the selected dataset. A file picked in the list is loaded here,
    behind a spinner, so the previous table is never shown while loading.
    """
    state = get_explorer_state()
    st.subheader("Data table")

    pending = st.session_state.pop('pending_selection', None)
    if pending:
        with st.spinner(f"Loading {get_file_name(pending)}..."):
            if not state.select_file(get_client(), pending):
                st.warning(f"Could not open {get_file_name(pending)}: {state.last_error}")

    dataset = state.dataset
    if dataset is None:
        st.info("Select a file in the list above (👁) to view its data.")
        return

    st.caption(f"{get_file_name(state.selected_identity)} · {len(dataset.rows):,} rows · {len(dataset.columns)} columns")

    header = st.columns(len(dataset.columns))
    for col, column_name in zip(header, dataset.columns):
        if col.button(sort_label(column_name, state.sort_spec), key=f"sort_{column_name}", use_container_width=True):
            state.activate_column(column_name)
            st.rerun()

    st.dataframe(
        pd.DataFrame(dataset.to_records(), columns=dataset.columns),
        hide_index=True,
        use_container_width=True
    )
