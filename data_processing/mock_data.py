# epidash/data_processing/mock_data.py
#
# Synthetic Surveillance Data
# Generates demonstration record collections over fixed domains. Numeric
# fields are drawn from bounded uniform distributions; the bounds are part of
# the contract, reproducibility is not (pass a seeded Generator to get it).

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

try:
    from config.settings import settings
    from .models import ClimateRecord, MapRecord, TopDiseaseRecord, TrendRecord
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in mock_data.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)

DISTRICTS_PER_STATE = 5

# (disease, cases, percentage)
TOP_DISEASES: Tuple[Tuple[str, int, float], ...] = (
    ("Dengue", 1250, 35),
    ("Malaria", 980, 28),
    ("Chikungunya", 650, 18),
    ("H1N1", 420, 12),
    ("Typhoid", 250, 7),
)


class MockDataGenerator:
    """Builds the four record collections from fixed state/disease/week domains."""

    def __init__(
        self,
        states: Optional[Sequence[str]] = None,
        diseases: Optional[Sequence[str]] = None,
        weeks: Optional[Sequence[str]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.states: List[str] = list(states if states is not None else settings.domains.states)
        self.diseases: List[str] = list(diseases if diseases is not None else settings.domains.diseases)
        self.weeks: List[str] = list(weeks if weeks is not None else settings.domains.weeks)
        self._rng = rng if rng is not None else np.random.default_rng()

    def _uniform(self, low: float, span: float) -> float:
        # [low, low + span); float rounding can land on the upper bound itself.
        high = low + span
        return float(min(low + self._rng.random() * span, np.nextafter(high, low)))

    def _int_between(self, low: int, high: int) -> int:
        # [low, high] inclusive
        return int(self._rng.integers(low, high + 1))

    def generate_trend_data(self) -> Tuple[TrendRecord, ...]:
        """One record per (state, disease, week) combination, cases in [50, 1049]."""
        records = tuple(
            TrendRecord(week=week, cases=self._int_between(50, 1049), state=state, disease=disease)
            for state in self.states
            for disease in self.diseases
            for week in self.weeks
        )
        logger.debug(f"Generated {len(records)} mock trend records.")
        return records

    def generate_top_diseases(self) -> Tuple[TopDiseaseRecord, ...]:
        """The fixed top-5 disease ranking."""
        return tuple(
            TopDiseaseRecord(disease=disease, cases=cases, percentage=pct)
            for disease, cases, pct in TOP_DISEASES
        )

    def generate_climate_data(self) -> Tuple[ClimateRecord, ...]:
        """One record per state with bounded climate averages."""
        return tuple(
            ClimateRecord(
                state=state,
                avg_temp=self._uniform(25, 15),
                avg_preci=self._uniform(0, 200),
                avg_lai=self._uniform(0, 5),
                cases=self._int_between(100, 1099),
            )
            for state in self.states
        )

    def generate_map_data(self) -> Tuple[MapRecord, ...]:
        """Five synthetic districts per state inside the country's bounding box."""
        records = []
        for state in self.states:
            for i in range(DISTRICTS_PER_STATE):
                records.append(MapRecord(
                    district=f"{state} District {i + 1}",
                    state=state,
                    latitude=self._uniform(20, 15),
                    longitude=self._uniform(70, 15),
                    cases=self._int_between(10, 509),
                    disease=self.diseases[int(self._rng.integers(len(self.diseases)))],
                    week=self.weeks[int(self._rng.integers(len(self.weeks)))],
                ))
        logger.debug(f"Generated {len(records)} mock map records.")
        return tuple(records)
