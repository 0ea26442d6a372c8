import locale
import os

import streamlit as st

from frontend.frontend_config import API_BASE as CONFIG_API_BASE
from frontend.helpers.api_client import ApiError
from frontend.helpers.data_table import show_data_table
from frontend.helpers.file_list import show_file_list
from frontend.helpers.file_upload import handle_file_upload
from frontend.helpers.logger import get_logger
from frontend.helpers.session import get_client, stop_event_listener
from frontend.helpers.ui_patterns import status_badge, sticky_section_header

logger = get_logger(__name__)

# Use a runtime API base which can be overridden per-session via the UI
API_BASE = os.getenv("API_URL", CONFIG_API_BASE)

try:
    # Text columns sort with the user's collation rules
    locale.setlocale(locale.LC_COLLATE, "")
except locale.Error:
    logger.warning("System locale unavailable, text columns sort by code point")


def reset_app():
    stop_event_listener()
    for key in ['explorer', 'files_loaded', 'pending_selection', 'uploader_key']:
        st.session_state.pop(key, None)


def show_sidebar():
    with st.sidebar:
        st.header("Configuration")
        st.subheader("API")
        current_api = st.session_state.custom_api or API_BASE
        st.write("Current API URL:")
        st.code(current_api)
        if st.button("Edit API URL"):
            st.session_state.edit_api = True
        if st.session_state.edit_api:
            new_api = st.text_input("API URL", value=current_api)
            cols = st.columns([1, 1])
            if cols[0].button("Save API URL"):
                st.session_state.custom_api = new_api.strip() if new_api else None
                st.session_state.edit_api = False
                reset_app()
                st.rerun()
            if cols[1].button("Cancel"):
                st.session_state.edit_api = False

        if st.button("Reset App", key="reset_app", help="Clear the selection and reload the file list"):
            reset_app()
            st.rerun()

        # Quick API health check tool
        st.markdown("---")
        st.subheader("API Health")
        cols_api = st.columns([3, 1])
        if cols_api[1].button("Test", key="test_api", help="Check if the API is reachable"):
            try:
                with st.spinner("Testing API connection..."):
                    get_client().health()
                status_badge("API Online", "complete")
            except ApiError as e:
                if e.status_code:
                    status_badge(f"Status {e.status_code}", "warning")
                else:
                    status_badge("API Offline", "error")
                    st.error(f"Connection failed: {str(e)}")


def main():
    st.set_page_config(page_title="CSV Explorer", layout="wide")

    # --- Session state initialization ---
    if 'custom_api' not in st.session_state:
        st.session_state.custom_api = None
    if 'edit_api' not in st.session_state:
        st.session_state.edit_api = False

    show_sidebar()

    sticky_section_header(
        "CSV Explorer",
        subtitle="Upload csv files, browse them and sort their columns.",
        icon="📁"
    )
    st.divider()

    upload_col, files_col = st.columns([2, 3])
    with upload_col:
        handle_file_upload()
    with files_col:
        show_file_list()

    st.divider()
    show_data_table()


if __name__ == "__main__":
    main()
