import streamlit as st


def status_badge(label: str, status: str):
    """
    Display a visual status badge with theme-aware colors.
    status: 'active', 'pending', 'error', 'complete', 'warning'
    """
    colors = {
        'active': '#5fca75',
        'pending': '#FFA500',
        'error': '#FF4B4B',
        'complete': '#4B9BFF',
        'warning': '#FFD700'
    }
    icons = {
        'active': '▶️',
        'pending': '⏳',
        'error': '❌',
        'complete': '✅',
        'warning': '⚠️'
    }
    color = colors.get(status, '#808080')
    icon = icons.get(status, '•')
    st.markdown(f"""
        <span style="background:{color};color:white;padding:4px 12px;
                     border-radius:16px;font-size:0.9rem;font-weight:600;
                     display:inline-flex;align-items:center;gap:6px;">
            {icon} {label}
        </span>
    """, unsafe_allow_html=True)


def sticky_section_header(title, subtitle=None, icon=None):
    """Render a sticky top header with an optional caption line."""
    icon_html = f"{icon} " if icon else ""
    subtitle_html = f'<p class="sticky-top-caption">{subtitle}</p>' if subtitle else ""

    st.markdown(
        f"""
        <div class="sticky-top">
            <h1 class="sticky-top-title">{icon_html}{title}</h1>
            {subtitle_html}
        </div>
        """,
        unsafe_allow_html=True,
    )
