# epidash/views/__init__.py
#
# Views Package
# The navigation state machine is importable on its own; the Streamlit views
# (dashboard, climate_impact, outbreak_map) are imported by the app entry point.

from .navigation import Navigator, Page, PAGE_TITLES

__all__ = ["Navigator", "Page", "PAGE_TITLES"]
