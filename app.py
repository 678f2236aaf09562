# epidash/app.py
#
# Main Application Entry Point
# Single-page dashboard: the sidebar drives the navigation state machine and
# the active view renders itself in the main area. Run with
# `streamlit run app.py`.

import streamlit as st
import logging
from pathlib import Path

# --- Core Application Imports ---
try:
    from config.settings import settings
except ImportError:
    st.error("FATAL ERROR: The application's configuration `config.settings` could not be loaded. Ensure the file exists and is correct.")
    st.stop()
except Exception as e:
    st.error(f"An unhandled exception occurred during configuration import: {e}")
    st.stop()

# --- Logging Configuration ---
logging.basicConfig(
    level=settings.app.log_level,
    format=settings.app.log_format,
    datefmt=settings.app.log_date_format,
    force=True  # Override any existing handlers
)
logger = logging.getLogger(__name__)

from data_processing.store import create_record_store
from views.navigation import Navigator, Page
from views.dashboard import DashboardView
from views.climate_impact import ClimateImpactView
from views.outbreak_map import OutbreakMapView
from visualization.ui_elements import render_main_header

# --- Page & Theme Configuration ---
st.set_page_config(
    page_title=settings.app.name,
    page_icon="🦠",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        "Get Help": f"mailto:{settings.app.support_contact}?subject=Help Request - {settings.app.name}",
        "About": f"### {settings.app.name} (v{settings.app.version})\n\n{settings.app_footer_text}"
    }
)


@st.cache_resource
def load_css(path: Path):
    """Loads a CSS file and injects it into the Streamlit app."""
    if not path.is_file():
        logger.debug(f"CSS file not found at {path}. Skipping custom styles.")
        return
    try:
        with open(path) as f:
            st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)
    except OSError as e:
        logger.error(f"Error loading CSS from {path}: {e}", exc_info=True)

load_css(settings.style_css_path)


def get_navigator() -> Navigator:
    """One navigator (and one record store) per browser session."""
    if "navigator" not in st.session_state:
        store = create_record_store()
        st.session_state.navigator = Navigator({
            Page.DASHBOARD: lambda: DashboardView(store),
            Page.CLIMATE_IMPACT: lambda: ClimateImpactView(store),
            Page.OUTBREAK_MAP: lambda: OutbreakMapView(store),
        })
    return st.session_state.navigator


navigator = get_navigator()

# --- Sidebar Navigation ---
st.sidebar.title(f"🗄️ {settings.app.name}")
pages = list(Page)
selected = st.sidebar.radio(
    "Navigation",
    pages,
    index=pages.index(navigator.current_page or Page.DASHBOARD),
    format_func=lambda page: page.heading,
)
view = navigator.navigate(selected)

st.sidebar.divider()
st.sidebar.caption(
    "Data source: " + ("synthetic demonstration data" if settings.api.use_mock else settings.api.base_url)
)
st.sidebar.caption(settings.app_footer_text)

# --- Active View ---
render_main_header(navigator.current_page.heading, "Epidemiological surveillance: case trends, climate correlation and outbreak mapping")
view.render()

logger.debug(f"Rendered '{navigator.current_page.value}' for {settings.app.name} v{settings.app.version}.")
