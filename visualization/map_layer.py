# epidash/visualization/map_layer.py
#
# Outbreak Map Point Layer
# Normalizes map records into GeoJSON point features and computes the
# radius/color encoding of each point. The map session is the view-owned
# handle to the rendered map; it exists only while the Outbreak Map is active.

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import plotly.graph_objects as go

try:
    from data_processing.models import MapRecord
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in map_layer.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)

# (cases, radius px)
RADIUS_STOPS: Tuple[Tuple[float, float], ...] = ((0, 4), (1000, 20))
# (cases, hex color)
COLOR_STOPS: Tuple[Tuple[float, str], ...] = ((0, "#ffffcc"), (250, "#fd8d3c"), (500, "#e31a1c"))

SEVERITY_BANDS: Tuple[Tuple[float, str], ...] = (
    (250, "Low (0-250 cases)"),
    (500, "Medium (250-500 cases)"),
    (float("inf"), "High (500+ cases)"),
)


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip('#')
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _interpolate(value: float, stops: Sequence[Tuple[float, Any]]) -> Tuple[int, float]:
    """Index of the segment containing `value` and the position within it, clamped to the ends."""
    if value <= stops[0][0]:
        return 0, 0.0
    if value >= stops[-1][0]:
        return len(stops) - 2, 1.0
    for i in range(len(stops) - 1):
        lo, hi = stops[i][0], stops[i + 1][0]
        if lo <= value <= hi:
            return i, (value - lo) / (hi - lo)
    return len(stops) - 2, 1.0


def point_radius(cases: float) -> float:
    """Linear radius from 4 px at 0 cases to 20 px at 1000 cases."""
    i, t = _interpolate(cases, RADIUS_STOPS)
    lo, hi = RADIUS_STOPS[i][1], RADIUS_STOPS[i + 1][1]
    return lo + (hi - lo) * t


def point_color(cases: float) -> str:
    """Linear color ramp through yellow (0), orange (250) and red (500)."""
    i, t = _interpolate(cases, COLOR_STOPS)
    lo, hi = _hex_to_rgb(COLOR_STOPS[i][1]), _hex_to_rgb(COLOR_STOPS[i + 1][1])
    r, g, b = (round(start + (end - start) * t) for start, end in zip(lo, hi))
    return f"#{r:02x}{g:02x}{b:02x}"


def severity_band(cases: float) -> str:
    """Legend band a case count falls into."""
    for upper, label in SEVERITY_BANDS:
        if cases < upper:
            return label
    return SEVERITY_BANDS[-1][1]


def build_point_features(records: Iterable[MapRecord]) -> Iterator[Dict[str, Any]]:
    """Yields one GeoJSON Point feature per record, coordinates in [lon, lat] order."""
    for record in records:
        yield {
            "type": "Feature",
            "properties": {
                "cases": record.cases,
                "district": record.district,
                "state": record.state,
                "disease": record.disease,
                "week": record.week,
                "radius": point_radius(record.cases),
                "color": point_color(record.cases),
            },
            "geometry": {"type": "Point", "coordinates": [record.longitude, record.latitude]},
        }


def build_feature_collection(records: Iterable[MapRecord]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(build_point_features(records))}


class MapSession:
    """
    Scoped handle to the outbreak map. Acquired when the Outbreak Map view is
    entered and released when the view is left; the figure is not reachable
    after release.
    """
    def __init__(self):
        self._figure: Optional[go.Figure] = None
        self._features: List[Dict[str, Any]] = []
        self.is_open = False

    def __enter__(self) -> 'MapSession':
        self.is_open = True
        logger.debug("Map session opened.")
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self.is_open:
            self._figure = None
            self._features = []
            self.is_open = False
            logger.debug("Map session released.")

    @property
    def features(self) -> List[Dict[str, Any]]:
        return self._features

    def update(self, records: Sequence[MapRecord], build_figure) -> go.Figure:
        """Replaces the point layer with `records` and rebuilds the figure."""
        if not self.is_open:
            raise RuntimeError("Map session is closed.")
        self._features = list(build_point_features(records))
        self._figure = build_figure(self._features)
        return self._figure

    @property
    def figure(self) -> Optional[go.Figure]:
        return self._figure
