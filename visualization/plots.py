# epidash/visualization/plots.py
#
# Surveillance Chart Factory
# Builds every chart the dashboard shows from record collections. Empty input
# always produces a themed placeholder figure rather than an error.

import html
import logging
from typing import Any, Dict, List, Optional, Sequence

import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

# --- Core Application & Visualization Imports ---
try:
    from config.settings import settings
    from data_processing.models import ClimateRecord, Record, TopDiseaseRecord
    from data_processing.pipeline import RecordPipeline
    from .themes import epidash_theme_template
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in plots.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)


class SurveillanceChartFactory:
    """A factory class for creating the dashboard's standardized Plotly charts."""

    def __init__(self, theme_template: go.layout.Template):
        self.theme = theme_template
        px.defaults.template = self.theme

    def create_empty_figure(self, title: str) -> go.Figure:
        """Creates a themed, blank figure with a user-friendly message."""
        fig = go.Figure()
        fig.update_layout(template=self.theme, title_text=f'<b>{title}</b>', xaxis={'visible': False}, yaxis={'visible': False})
        fig.add_annotation(text="No data available for the selected filters.", xref="paper", yref="paper", x=0.5, y=0.5, showarrow=False, font_size=14)
        return fig

    def plot_weekly_trend(self, trend: Sequence[Record], weeks: Sequence[str], title: str = "Weekly Case Trends") -> go.Figure:
        """Line chart of cases summed per week, in domain week order."""
        if not trend:
            return self.create_empty_figure(title)
        df = RecordPipeline(trend).order_categories('week', weeks).sum_by('week', 'cases').get_df()
        fig = px.line(df, x='week', y='cases', title=f"<b>{title}</b>", markers=True)
        fig.update_traces(
            line=dict(color=settings.theme.primary, width=3),
            hovertemplate="<b>%{x}</b><br>Cases: %{y:,}<extra></extra>")
        fig.update_layout(yaxis_title="Cases", xaxis_title=None, xaxis_type='category', showlegend=False, hovermode='x unified')
        return fig

    def plot_top_diseases(self, top: Sequence[TopDiseaseRecord], title: str) -> go.Figure:
        """Pie chart of case counts, labelled with each disease's reported percentage."""
        if not top:
            return self.create_empty_figure(title)
        df = RecordPipeline(top).get_df()
        fig = go.Figure(go.Pie(
            labels=df['disease'], values=df['cases'],
            text=[f"{html.escape(d)}: {p:g}%" for d, p in zip(df['disease'], df['percentage'])],
            textinfo='text', sort=False,
            marker=dict(colors=settings.theme.plotly_colorway),
            hovertemplate="<b>%{label}</b><br>Cases: %{value:,}<extra></extra>"))
        fig.update_layout(template=self.theme, title_text=f"<b>{title}</b>", showlegend=False)
        return fig

    def _dual_axis_bars(self, climate: Sequence[ClimateRecord], bars: List[Dict[str, Any]], cases_color: str, title: str) -> go.Figure:
        df = RecordPipeline(climate).get_df()
        fig = make_subplots(specs=[[{"secondary_y": True}]])
        for bar in bars:
            fig.add_trace(go.Bar(x=df['state'], y=df[bar['column']], name=bar['name'], marker_color=bar['color'], offsetgroup=bar['column']), secondary_y=False)
        fig.add_trace(go.Bar(x=df['state'], y=df['cases'], name="Cases", marker_color=cases_color, offsetgroup="cases"), secondary_y=True)
        fig.update_layout(template=self.theme, title_text=f"<b>{title}</b>", barmode='group', hovermode='x unified', xaxis_type='category')
        fig.update_xaxes(tickangle=-45)
        fig.update_yaxes(title_text="Cases", secondary_y=True, showgrid=False)
        return fig

    def plot_climate_factors(self, climate: Sequence[ClimateRecord], disease: Optional[str]) -> go.Figure:
        """Temperature and precipitation against cases per state, cases on the right axis."""
        title = f"Climate Factors vs {disease or 'All Diseases'} Cases by State"
        if not climate:
            return self.create_empty_figure(title)
        return self._dual_axis_bars(climate, [
            {'column': 'avg_temp', 'name': "Temperature (°C)", 'color': settings.theme.temperature},
            {'column': 'avg_preci', 'name': "Precipitation (mm)", 'color': settings.theme.precipitation},
        ], settings.theme.cases, title)

    def plot_lai_impact(self, climate: Sequence[ClimateRecord]) -> go.Figure:
        """Leaf Area Index against cases per state."""
        title = "Leaf Area Index (LAI) Impact"
        if not climate:
            return self.create_empty_figure(title)
        return self._dual_axis_bars(climate, [
            {'column': 'avg_lai', 'name': "LAI Index", 'color': settings.theme.vegetation},
        ], settings.theme.cases_alt, title)

    def plot_outbreak_map(self, features: Sequence[Dict[str, Any]], title: str = "Outbreak Distribution Map") -> go.Figure:
        """Point map over normalized GeoJSON features; size and color come from each feature."""
        if not features:
            return self.create_empty_figure(title)
        props = [f['properties'] for f in features]
        lons = [f['geometry']['coordinates'][0] for f in features]
        lats = [f['geometry']['coordinates'][1] for f in features]
        hover = [
            f"<b>{html.escape(p['district'])}</b><br>State: {html.escape(p['state'])}"
            f"<br>Disease: {html.escape(p['disease'])}<br>Cases: {p['cases']}<br>Week: {html.escape(p['week'])}"
            for p in props
        ]
        fig = go.Figure(go.Scattermapbox(
            lat=lats, lon=lons, mode='markers',
            marker=dict(size=[p['radius'] * 2 for p in props], color=[p['color'] for p in props], opacity=0.8),
            text=hover, hoverinfo='text'))
        fig.update_layout(
            template=self.theme,
            title_text=f"<b>{title}</b>",
            mapbox=dict(
                accesstoken=settings.mapbox_token or None,
                style=settings.map.mapbox_style if settings.mapbox_token else settings.map.open_style,
                zoom=settings.map.default_zoom,
                center={"lat": settings.map.default_center_lat, "lon": settings.map.default_center_lon}),
            margin={"r": 0, "t": 40, "l": 0, "b": 0},
            hovermode='closest')
        return fig

# --- Singleton Instance and Public API ---
_chart_factory = SurveillanceChartFactory(epidash_theme_template)

create_empty_figure = _chart_factory.create_empty_figure
plot_weekly_trend = _chart_factory.plot_weekly_trend
plot_top_diseases = _chart_factory.plot_top_diseases
plot_climate_factors = _chart_factory.plot_climate_factors
plot_lai_impact = _chart_factory.plot_lai_impact
plot_outbreak_map = _chart_factory.plot_outbreak_map
