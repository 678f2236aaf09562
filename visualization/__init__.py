# epidash/visualization/__init__.py
#
# Visualization Package API
# Themed Plotly charts, the outbreak map point layer and Streamlit UI elements.

"""
Initializes the visualization package, making key functions and classes
available at the top level for easier, cleaner imports in other modules.
"""

# --- Charting Functions ---
from .plots import (
    create_empty_figure,
    plot_weekly_trend,
    plot_top_diseases,
    plot_climate_factors,
    plot_lai_impact,
    plot_outbreak_map,
)

# --- Map Point Layer ---
from .map_layer import (
    MapSession,
    build_point_features,
    build_feature_collection,
    point_radius,
    point_color,
    severity_band,
)

# --- Theming ---
from .themes import epidash_theme_template


__all__ = [
    # charts
    "create_empty_figure",
    "plot_weekly_trend",
    "plot_top_diseases",
    "plot_climate_factors",
    "plot_lai_impact",
    "plot_outbreak_map",

    # map layer
    "MapSession",
    "build_point_features",
    "build_feature_collection",
    "point_radius",
    "point_color",
    "severity_band",

    # themes
    "epidash_theme_template",
]
