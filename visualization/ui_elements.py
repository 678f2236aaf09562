# epidash/visualization/ui_elements.py

import streamlit as st
import logging
from typing import Dict, Optional, Sequence

try:
    from config.settings import settings
    from data_processing.filter_state import FilterState
    from data_processing.pipeline import RecordPipeline
    from .map_layer import COLOR_STOPS, SEVERITY_BANDS
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in ui_elements.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)

ALL_OPTION = "All"

FILTER_LABELS: Dict[str, str] = {"state": "State/UT", "disease": "Disease", "week": "Week"}


def render_main_header(title: str, subtitle: str) -> None:
    """Renders a standardized main page header."""
    st.title(title)
    st.caption(subtitle)
    st.divider()


def render_metric_card(title: str, value, value_format: str = "{:,}", unit_suffix: str = "", help_text: Optional[str] = None) -> None:
    """Renders one key-metric card."""
    value_str = f"{value_format.format(value)}{unit_suffix}" if value is not None else "N/A"
    st.metric(label=title, value=value_str, help=help_text)


def render_filter_section(
    filter_state: FilterState,
    domains: Dict[str, Sequence[str]],
    key_prefix: str,
    allow_all: bool = True,
) -> bool:
    """
    Renders one selectbox per filter field plus a Reset button, writing user
    choices back into `filter_state`. Returns True if anything changed.
    """
    changed = False
    header_cols = st.columns([0.8, 0.2])
    header_cols[0].markdown("#### Filters")
    if header_cols[1].button("↺ Reset", key=f"{key_prefix}_reset", use_container_width=True):
        filter_state.reset()
        changed = True

    cols = st.columns(max(len(domains), 1))
    for col, (field, options) in zip(cols, domains.items()):
        choices = ([ALL_OPTION] if allow_all else []) + list(options)
        current = filter_state.get(field)
        index = choices.index(current) if current in choices else 0
        # The widget key embeds the current value so a reset re-renders it.
        selected = col.selectbox(FILTER_LABELS.get(field, field.title()), choices, index=index,
                                 key=f"{key_prefix}_{field}_{current}")
        value = None if selected == ALL_OPTION else selected
        if value != current:
            filter_state.select(field, value)
            changed = True
    return changed


def render_export_button(pipeline: RecordPipeline, file_stem: str, key: str) -> None:
    """CSV download of the collection currently shown."""
    st.download_button(
        "⬇️ Export CSV", pipeline.to_csv(),
        file_name=f"{settings.app.name.lower()}_{file_stem}.csv", mime="text/csv", key=key)


def render_map_legend() -> None:
    st.markdown("##### Map Legend")
    cols = st.columns(3)
    bands = zip([color for _, color in COLOR_STOPS], [label for _, label in SEVERITY_BANDS])
    for col, (color, label) in zip(cols, bands):
        col.markdown(f"<span style='color:{color}'>●</span> {label}", unsafe_allow_html=True)


def render_fetch_warnings(errors: Sequence[Exception]) -> None:
    """Surfaces failed fetches; the affected charts are already showing empty data."""
    for error in errors:
        st.warning(f"Some data could not be loaded and is shown as empty. {error}")
