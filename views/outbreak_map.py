# epidash/views/outbreak_map.py

import streamlit as st
import logging
from contextlib import ExitStack
from typing import Optional

try:
    from config.settings import settings
    from analytics.aggregation import map_metrics
    from data_processing.models import RecordKind
    from data_processing.pipeline import RecordPipeline
    from visualization.map_layer import MapSession
    from visualization.plots import plot_outbreak_map
    from visualization.ui_elements import (
        render_export_button, render_fetch_warnings, render_filter_section,
        render_map_legend, render_metric_card
    )
    from .base import BaseView
except ImportError as e:
    st.error(f"A required application module could not be loaded. Error: {e}")
    st.stop()

logger = logging.getLogger(__name__)


class OutbreakMapView(BaseView):
    """District-level case points on a map. The map session exists only while this view is active."""
    kinds = (RecordKind.MAP,)

    def __init__(self, store):
        super().__init__(store)
        self.map_session: Optional[MapSession] = None

    def enter(self, scope: ExitStack) -> None:
        super().enter(scope)
        self.map_session = scope.enter_context(MapSession())

    def render(self) -> None:
        render_filter_section(self.filters, {
            "disease": settings.domains.diseases,
            "week": settings.domains.weeks,
        }, key_prefix="map")
        with st.spinner("Loading outbreak data..."):
            self.sync()
        render_fetch_warnings(self.errors)

        records = self.collection(RecordKind.MAP)
        metrics = map_metrics(records)
        cols = st.columns(3)
        with cols[0]:
            render_metric_card("Highest Cases", metrics['max_cases'])
        with cols[1]:
            render_metric_card("Districts Affected", metrics['total_districts'])
        with cols[2]:
            render_metric_card("Average Cases", metrics['avg_cases'])

        if self.map_session is None or not self.map_session.is_open:
            st.info("The map is not available outside the Outbreak Map view.")
            return
        if not settings.mapbox_token:
            st.caption("No Mapbox token configured; using the open street style.")
        figure = self.map_session.update(records, plot_outbreak_map)
        st.plotly_chart(figure, use_container_width=True)
        render_map_legend()

        render_export_button(RecordPipeline(records), "outbreak_map", key="map_export")
