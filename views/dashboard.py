# epidash/views/dashboard.py

import streamlit as st
import logging

try:
    from config.settings import settings
    from analytics.aggregation import dashboard_metrics
    from data_processing.filter_state import FilterState
    from data_processing.models import RecordKind
    from data_processing.pipeline import RecordPipeline
    from visualization.plots import plot_top_diseases, plot_weekly_trend
    from visualization.ui_elements import render_export_button, render_fetch_warnings, render_filter_section, render_metric_card
    from .base import BaseView
except ImportError as e:
    st.error(f"A required application module could not be loaded. Error: {e}")
    st.stop()

logger = logging.getLogger(__name__)


class DashboardView(BaseView):
    """Weekly case trends, key metrics and the top-disease breakdown."""
    kinds = (RecordKind.TREND, RecordKind.TOP_DISEASES)

    def initial_filters(self) -> FilterState:
        return FilterState(week=settings.domains.dashboard_default_week)

    def _render_metrics(self, metrics):
        cols = st.columns(4)
        with cols[0]:
            render_metric_card("Total Cases", metrics['total_cases'])
        with cols[1]:
            render_metric_card("Weekly Average", metrics['weekly_average'])
        with cols[2]:
            render_metric_card("Active Diseases", metrics['active_diseases'])
        with cols[3]:
            render_metric_card("States Affected", metrics['states_affected'])

    def render(self) -> None:
        domains = {
            "state": settings.domains.states,
            "disease": settings.domains.diseases,
            "week": settings.domains.weeks,
        }
        render_filter_section(self.filters, domains, key_prefix="dashboard")
        with st.spinner("Loading surveillance data..."):
            self.sync()
        render_fetch_warnings(self.errors)

        trend = self.collection(RecordKind.TREND)
        top = self.collection(RecordKind.TOP_DISEASES)
        self._render_metrics(dashboard_metrics(trend))

        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(plot_weekly_trend(trend, settings.domains.weeks), use_container_width=True)
        with col2:
            title = f"Top 5 Diseases - {self.filters.state or 'All States'}"
            st.plotly_chart(plot_top_diseases(top, title), use_container_width=True)

        render_export_button(RecordPipeline(trend), "trend", key="dashboard_export")
