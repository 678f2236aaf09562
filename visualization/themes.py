# epidash/visualization/themes.py
#
# Centralized Plotting Theme
# One Plotly template shared by the trend, climate and map charts. Built from
# the ThemeConfig so a palette change in settings restyles every figure.

import logging

import plotly.graph_objects as go

try:
    from config.settings import ThemeConfig, settings
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in themes.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)

_FONT = "Inter, Segoe UI, sans-serif"


def build_theme_template(theme: ThemeConfig) -> go.layout.Template:
    """Surveillance chart template: flat white panels, dashed value grid, legend above the plot."""
    surface = theme.secondary_background
    axis_common = dict(zeroline=False, ticks='outside', title_standoff=10, linecolor=theme.text)
    return go.layout.Template(
        layout=go.Layout(
            font=dict(family=_FONT, size=12, color=theme.text),
            title=dict(font=dict(size=17, family=_FONT), x=0.02, xanchor='left'),
            paper_bgcolor=surface,
            plot_bgcolor=surface,
            colorway=theme.plotly_colorway,
            xaxis=dict(showgrid=False, showline=True, **axis_common),
            yaxis=dict(showgrid=True, gridcolor='#E5E7EB', griddash='dash', showline=False,
                       rangemode='tozero', **axis_common),
            legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1,
                        bgcolor=surface, bordercolor=surface),
            bargap=0.25,
            margin=dict(l=60, r=60, t=80, b=60),
            hoverlabel=dict(bgcolor="#FFFFFF", font_size=12, font_family=_FONT),
        )
    )


epidash_theme_template = build_theme_template(settings.theme)
logger.debug("EpiDash Plotly theme template created.")
