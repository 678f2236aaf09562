import numpy as np
import pytest

from data_processing.models import ClimateRecord
from tests.factories import make_trend


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def trend_records():
    return (
        make_trend("Delhi", "Dengue", "2024-W01", 120),
        make_trend("Maharashtra", "Dengue", "2024-W01", 300),
        make_trend("Delhi", "Malaria", "2024-W02", 80),
        make_trend("Maharashtra", "Typhoid", "2024-W02", 55),
        make_trend("Delhi", "Dengue", "2024-W02", 200),
    )


@pytest.fixture
def climate_records():
    return (
        ClimateRecord(state="Delhi", avgTemp=30.0, avgPreci=100.0, avgLAI=2.0, cases=400),
        ClimateRecord(state="Gujarat", avg_temp=35.0, avg_preci=50.0, avg_lai=1.0, cases=600),
    )
