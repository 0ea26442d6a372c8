"""
Session-state accessors shared by the page sections.
"""

import os

import streamlit as st

from frontend import frontend_config as config
from frontend.helpers.api_client import FileApiClient
from frontend.helpers.event_listener import FileEventListener
from frontend.helpers.explorer_state import ExplorerState


def get_api_base():
    return st.session_state.get('custom_api') or os.getenv("API_URL") or config.API_BASE


def get_client() -> FileApiClient:
    """API client for the current base URL (rebuilt when the URL is edited)."""
    client = st.session_state.get('api_client')
    if client is None or client.base_url != get_api_base().rstrip("/"):
        client = FileApiClient(get_api_base())
        st.session_state.api_client = client
    return client


def get_explorer_state() -> ExplorerState:
    if 'explorer' not in st.session_state:
        st.session_state.explorer = ExplorerState()
    return st.session_state.explorer


def ensure_event_listener() -> FileEventListener:
    """Start (or restart after an API change) the lifecycle event listener."""
    client = get_client()
    listener = st.session_state.get('event_listener')
    if listener is not None and listener.client is not client:
        listener.stop()
        listener = None
    if listener is None:
        listener = FileEventListener(client, owner=get_explorer_state())
        st.session_state.event_listener = listener
    return listener.start()


def stop_event_listener() -> None:
    listener = st.session_state.pop('event_listener', None)
    if listener is not None:
        listener.stop()
