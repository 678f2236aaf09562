# epidash/views/climate_impact.py

import streamlit as st
import logging

try:
    from config.settings import settings
    from analytics.aggregation import climate_metrics
    from data_processing.filter_state import FilterState
    from data_processing.models import RecordKind
    from data_processing.pipeline import RecordPipeline
    from visualization.plots import plot_climate_factors, plot_lai_impact
    from visualization.ui_elements import render_export_button, render_fetch_warnings, render_filter_section, render_metric_card
    from .base import BaseView
except ImportError as e:
    st.error(f"A required application module could not be loaded. Error: {e}")
    st.stop()

logger = logging.getLogger(__name__)


class ClimateImpactView(BaseView):
    """Climate averages per state set against the selected disease's cases."""
    kinds = (RecordKind.CLIMATE,)

    def initial_filters(self) -> FilterState:
        return FilterState(disease=settings.domains.climate_default_disease)

    def render(self) -> None:
        render_filter_section(self.filters, {"disease": settings.domains.diseases},
                              key_prefix="climate", allow_all=False)
        with st.spinner("Loading climate data..."):
            self.sync()
        render_fetch_warnings(self.errors)

        climate = self.collection(RecordKind.CLIMATE)
        metrics = climate_metrics(climate)
        cols = st.columns(4)
        with cols[0]:
            render_metric_card("Avg Temperature", metrics['avg_temp'], "{:.1f}", unit_suffix="°C")
        with cols[1]:
            render_metric_card("Avg Precipitation", metrics['avg_preci'], "{:.1f}", unit_suffix="mm")
        with cols[2]:
            render_metric_card("Avg LAI", metrics['avg_lai'], "{:.2f}",
                               help_text="Leaf Area Index: leaf area per unit of ground area.")
        with cols[3]:
            render_metric_card("Total Cases", metrics['total_cases'])

        st.plotly_chart(plot_climate_factors(climate, self.filters.disease), use_container_width=True)
        st.plotly_chart(plot_lai_impact(climate), use_container_width=True)

        render_export_button(RecordPipeline(climate), "climate_impact", key="climate_export")
