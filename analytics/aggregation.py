# epidash/analytics/aggregation.py
#
# Record Aggregation & Summary Metrics
# Pure, synchronous functions over record collections. Nothing here mutates
# its input or performs I/O, so every result depends only on the arguments.

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

try:
    from data_processing.filter_state import FilterState
    from data_processing.models import Record, resolve_field_name
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in aggregation.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)

FilterLike = Union[FilterState, Mapping[str, Optional[str]], None]

_MISSING = object()


def filter_criteria(filter_state: FilterLike) -> Dict[str, str]:
    """Present filter fields as a plain dict; None and empty strings count as absent."""
    if filter_state is None:
        return {}
    if isinstance(filter_state, FilterState):
        return filter_state.as_dict()
    return {k: v for k, v in filter_state.items() if v is not None and v != ""}


def _get(record: Record, field: str) -> Any:
    return getattr(record, resolve_field_name(record, field), _MISSING)


def _field_values(collection: Iterable[Record], field: str) -> List[Any]:
    values = []
    for record in collection:
        value = _get(record, field)
        if value is _MISSING:
            raise KeyError(f"{type(record).__name__} has no field '{field}'.")
        values.append(value)
    return values


def filter_by(collection: Sequence[Record], filter_state: FilterLike) -> Tuple[Record, ...]:
    """
    Keeps a record iff every present filter field equals the record's
    corresponding field exactly (case-sensitive). Absent fields impose no
    constraint; with no fields set the full collection is returned in order.
    A record that does not carry a filtered field never matches.
    """
    criteria = filter_criteria(filter_state)
    if not criteria:
        return tuple(collection)
    return tuple(
        record for record in collection
        if all(_get(record, field) == value for field, value in criteria.items())
    )


def sum_field(collection: Sequence[Record], field: str) -> Union[int, float]:
    """Arithmetic sum of `field`; 0 for an empty collection."""
    return sum(_field_values(collection, field))


def average(collection: Sequence[Record], field: str) -> float:
    """Mean of `field`, dividing by max(count, 1) so an empty collection yields 0."""
    return sum_field(collection, field) / max(len(collection), 1)


def rounded_average(collection: Sequence[Record], field: str) -> int:
    """`average` rounded to the nearest integer, halves rounding up."""
    return int(math.floor(average(collection, field) + 0.5))


def distinct_count(collection: Sequence[Record], field: str) -> int:
    """Number of distinct values of `field`; 0 for an empty collection."""
    return len(set(_field_values(collection, field)))


def max_field(collection: Sequence[Record], field: str) -> Union[int, float]:
    """Largest value of `field`, floored at 0 (so an empty collection yields 0)."""
    return max([0, *_field_values(collection, field)])


# --- Per-View Metric Bundles ---

def dashboard_metrics(trend: Sequence[Record]) -> Dict[str, Any]:
    """Key metrics for the analytics dashboard's trend collection."""
    return {
        'total_cases': sum_field(trend, 'cases'),
        'weekly_average': rounded_average(trend, 'cases'),
        'active_diseases': distinct_count(trend, 'disease'),
        'states_affected': distinct_count(trend, 'state'),
    }


def climate_metrics(climate: Sequence[Record]) -> Dict[str, Any]:
    """Climate averages across states plus the case total."""
    return {
        'avg_temp': round(average(climate, 'avgTemp'), 1),
        'avg_preci': round(average(climate, 'avgPreci'), 1),
        'avg_lai': round(average(climate, 'avgLAI'), 2),
        'total_cases': sum_field(climate, 'cases'),
    }


def map_metrics(map_records: Sequence[Record]) -> Dict[str, Any]:
    """Outbreak map statistics; an empty collection yields all zeros."""
    return {
        'max_cases': max_field(map_records, 'cases'),
        'total_districts': len(map_records),
        'avg_cases': rounded_average(map_records, 'cases'),
    }
