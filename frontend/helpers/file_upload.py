"""
CSV Explorer file input card.
Lets the user pick a CSV file, checks its size and sends it to the backend.
The uploader widget is reset after each successful upload so the same file
is not sent again on the next rerun.
"""

import streamlit as st

from frontend import frontend_config as config
from frontend.helpers.session import get_api_base, get_client, get_explorer_state


def handle_file_upload():
    """
    Handles uploading a CSV file, sending it to the backend,
    and refreshing the stored file listing.
    """
    st.subheader("Select csv data")
    if 'uploader_key' not in st.session_state:
        st.session_state.uploader_key = 0

    uploaded_file = st.file_uploader(
        "Select csv file to explore",
        type=["csv"],
        help=config.FILE_INPUT_HELP,
        key=f"file_uploader_{st.session_state.uploader_key}"
    )
    st.caption(config.FILE_INPUT_HELP)

    if uploaded_file is None:
        return

    # Basic client-side size validation
    raw = uploaded_file.getvalue()
    size = len(raw)
    if size > config.MAX_UPLOAD_SIZE:
        st.error(f"File too large ({size/1024/1024:.2f} MB). Max allowed is {config.MAX_UPLOAD_SIZE/1024/1024:.1f} MB.")
        return

    state = get_explorer_state()
    with st.spinner("Uploading file to API..."):
        ok = state.upload(get_client(), uploaded_file.name, raw)

    if ok:
        st.session_state.uploader_key += 1
        st.toast(f"Uploaded {uploaded_file.name}")
        st.rerun()
    else:
        st.error(
            f"Upload failed: {state.last_error}\n\n"
            f"Check that the API at `{get_api_base()}` is running."
        )
