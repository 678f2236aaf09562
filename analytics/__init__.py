# epidash/analytics/__init__.py
#
# Analytics Package API
# Pure aggregation over record collections: filtered subsets and the scalar
# summary metrics every view displays.

"""
Initializes the analytics package, making key functions available at the
top level for easier, cleaner imports in other modules.
"""

# --- Filtering & Scalar Aggregates ---
from .aggregation import (
    filter_by,
    sum_field,
    average,
    rounded_average,
    distinct_count,
    max_field,
)

# --- Per-View Metric Bundles ---
from .aggregation import (
    dashboard_metrics,
    climate_metrics,
    map_metrics,
)


__all__ = [
    # Filtering & aggregates
    "filter_by",
    "sum_field",
    "average",
    "rounded_average",
    "distinct_count",
    "max_field",

    # Metric bundles
    "dashboard_metrics",
    "climate_metrics",
    "map_metrics",
]
