# epidash/data_processing/models.py
#
# Record Models
# The four surveillance record kinds as immutable, validated value objects.
# Each record accepts both the API's wire names (camelCase) and the Python
# field names, so payloads from the remote service and mock generation share
# one shape.

from enum import Enum
from typing import Dict, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field


class RecordKind(str, Enum):
    """The four record collections a view can request."""
    TREND = "trend"
    TOP_DISEASES = "top_diseases"
    CLIMATE = "climate"
    MAP = "map"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')


class TrendRecord(_Record):
    """Weekly case count for one state and disease."""
    week: str
    cases: int = Field(ge=0)
    state: str
    disease: str


class TopDiseaseRecord(_Record):
    """One entry of a top-N disease ranking. Percentages need not sum to 100."""
    disease: str
    cases: int = Field(ge=0)
    percentage: float = Field(ge=0, le=100)


class ClimateRecord(_Record):
    """Climate averages and case total for one state."""
    state: str
    avg_temp: float = Field(alias="avgTemp")
    avg_preci: float = Field(alias="avgPreci", ge=0)
    avg_lai: float = Field(alias="avgLAI", ge=0)
    cases: int = Field(ge=0)


class MapRecord(_Record):
    """Case count for one district, positioned for the outbreak map."""
    district: str
    state: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    cases: int = Field(ge=0)
    disease: str
    week: str


Record = Union[TrendRecord, TopDiseaseRecord, ClimateRecord, MapRecord]
Collection = Tuple[Record, ...]

RECORD_TYPES: Dict[RecordKind, Type[_Record]] = {
    RecordKind.TREND: TrendRecord,
    RecordKind.TOP_DISEASES: TopDiseaseRecord,
    RecordKind.CLIMATE: ClimateRecord,
    RecordKind.MAP: MapRecord,
}


def resolve_field_name(record: BaseModel, field: str) -> str:
    """
    Maps a wire name (e.g. 'avgTemp') to the model's attribute name
    ('avg_temp'). Names the model does not know are returned unchanged.
    """
    fields = type(record).model_fields
    if field in fields:
        return field
    for name, info in fields.items():
        if info.alias == field:
            return name
    return field
