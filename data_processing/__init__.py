# epidash/data_processing/__init__.py
#
# Data Processing Package API
# Record models, filter state, data sources and table preparation.

"""
Initializes the data_processing package, making key functions and classes
available at the top level for easier, cleaner imports in other modules.

The record store and view controller depend on the analytics package and are
imported from their modules directly (`data_processing.store`,
`data_processing.controller`).
"""

# --- Record Models ---
from .models import (
    RecordKind,
    TrendRecord,
    TopDiseaseRecord,
    ClimateRecord,
    MapRecord,
)

# --- Filter State ---
from .filter_state import FilterState, FILTER_FIELDS

# --- Data Sources ---
from .mock_data import MockDataGenerator
from .api_client import EpidemiologyApiClient, FetchError

# --- Table Preparation ---
from .pipeline import RecordPipeline, records_to_frame


__all__ = [
    # --- Models ---
    "RecordKind",
    "TrendRecord",
    "TopDiseaseRecord",
    "ClimateRecord",
    "MapRecord",

    # --- Filters ---
    "FilterState",
    "FILTER_FIELDS",

    # --- Sources ---
    "MockDataGenerator",
    "EpidemiologyApiClient",
    "FetchError",

    # --- Preparation ---
    "RecordPipeline",
    "records_to_frame",
]
