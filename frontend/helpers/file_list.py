"""
CSV Explorer file list ("Data infos" card).
"""

import streamlit as st

from frontend import frontend_config as config
from frontend.helpers.file_identity import get_file_name, get_time_string
from frontend.helpers.session import ensure_event_listener, get_client, get_explorer_state


@st.fragment(run_every=config.EVENT_POLL_SECONDS)
def show_file_list():
    """
    Render stored files with view/delete actions.

    Re-runs on a timer to pick up uploads and deletions announced on the
    event stream; the listing itself is only fetched when something changed.
    """
    state = get_explorer_state()
    client = get_client()
    listener = ensure_event_listener()

    if not st.session_state.get('files_loaded'):
        st.session_state.files_loaded = state.refresh_files(client)

    selected_before = state.selected_identity
    if state.apply_events(client, listener.drain()) and state.selected_identity != selected_before:
        # The open file was deleted elsewhere; redraw the table too
        st.rerun()

    st.subheader("Data infos")
    if not state.files:
        st.info("No files uploaded yet.")
        return

    header = st.columns([1, 5, 4, 2])
    for col, title in zip(header, ["#", "File name", "Uploaded", "Action"]):
        col.markdown(f"**{title}**")

    # Sequential display index, not a stable identity
    for count, identity in enumerate(state.files, start=1):
        cols = st.columns([1, 5, 4, 1, 1])
        cols[0].write(count)
        name = get_file_name(identity)
        cols[1].write(f"**{name}**" if identity == state.selected_identity else name)
        cols[2].write(get_time_string(identity))
        if cols[3].button("👁", key=f"view_{identity}", help="View data"):
            st.session_state.pending_selection = identity
            st.rerun()
        if cols[4].button("🗑", key=f"delete_{identity}", help="Delete file"):
            if state.delete_file(client, identity):
                st.rerun()
            else:
                st.error(state.last_error)
