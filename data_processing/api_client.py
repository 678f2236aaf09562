# epidash/data_processing/api_client.py
#
# Remote Epidemiology API Client
# Four read-only, parameterized GET queries returning JSON arrays of records.
# Only the filter fields that are explicitly set are sent; every failure
# (network, timeout, HTTP status, malformed payload) surfaces as FetchError.
# There is no retry: a failed query is reported to the caller as-is.

import logging
from typing import Dict, Mapping, NamedTuple, Optional, Tuple

import requests
from pydantic import ValidationError

try:
    from config.settings import settings
    from .models import RECORD_TYPES, Record, RecordKind
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in api_client.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A record query failed. The only error kind the data layer raises."""
    def __init__(self, message: str, kind: Optional[RecordKind] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class QuerySpec(NamedTuple):
    path: str
    required: Tuple[str, ...]
    optional: Tuple[str, ...]

    @property
    def fields(self) -> Tuple[str, ...]:
        return self.required + self.optional


QUERY_SPECS: Dict[RecordKind, QuerySpec] = {
    RecordKind.TREND: QuerySpec("/trend", required=(), optional=("state", "disease")),
    RecordKind.TOP_DISEASES: QuerySpec("/top-diseases", required=("state", "week"), optional=()),
    RecordKind.CLIMATE: QuerySpec("/climate-impact", required=("disease",), optional=()),
    RecordKind.MAP: QuerySpec("/map", required=(), optional=("disease", "week")),
}

# Filter field -> query parameter name expected by the service.
WIRE_PARAMS: Dict[str, str] = {"state": "state_ut", "disease": "Disease", "week": "week"}


def project_criteria(kind: RecordKind, criteria: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Keeps only the present filter fields that the given query accepts."""
    spec = QUERY_SPECS[RecordKind(kind)]
    return {f: criteria[f] for f in spec.fields if criteria.get(f)}


class EpidemiologyApiClient:
    """
    Thin `requests` wrapper around the surveillance query endpoints.
    The base URL and timeout are fixed for the lifetime of the client.
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.api.base_url).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.api.timeout_seconds
        self._session = session or requests.Session()

    def build_params(self, kind: RecordKind, criteria: Mapping[str, Optional[str]]) -> Dict[str, str]:
        """Translates filter criteria into query parameters, omitting absent fields."""
        kind = RecordKind(kind)
        projected = project_criteria(kind, criteria)
        missing = [f for f in QUERY_SPECS[kind].required if f not in projected]
        if missing:
            raise FetchError(f"Query '{kind.value}' requires {missing}.", kind=kind)
        return {WIRE_PARAMS[f]: v for f, v in projected.items()}

    def fetch_records(self, kind: RecordKind, criteria: Mapping[str, Optional[str]]) -> Tuple[Record, ...]:
        """Runs one query and validates the JSON array into record models."""
        kind = RecordKind(kind)
        params = self.build_params(kind, criteria)
        url = f"{self.base_url}{QUERY_SPECS[kind].path}"
        log_ctx = f"API({kind.value})"
        logger.info(f"[{log_ctx}] GET {url} params={params}")

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise FetchError(f"[{log_ctx}] Request timed out after {self.timeout}s.", kind=kind) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(f"[{log_ctx}] Server responded with HTTP {status}.", kind=kind, status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"[{log_ctx}] Network error: {e}", kind=kind) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"[{log_ctx}] Response body is not valid JSON.", kind=kind) from e
        if not isinstance(payload, list):
            raise FetchError(f"[{log_ctx}] Expected a JSON array, got {type(payload).__name__}.", kind=kind)

        record_type = RECORD_TYPES[kind]
        try:
            records = tuple(record_type.model_validate(item) for item in payload)
        except ValidationError as e:
            raise FetchError(f"[{log_ctx}] Payload does not match the record shape: {e}", kind=kind) from e

        logger.info(f"[{log_ctx}] Received {len(records)} records.")
        return records

    # --- Named Queries ---

    def get_trend_data(self, state: Optional[str] = None, disease: Optional[str] = None) -> Tuple[Record, ...]:
        return self.fetch_records(RecordKind.TREND, {"state": state, "disease": disease})

    def get_top_diseases(self, state: str, week: str) -> Tuple[Record, ...]:
        return self.fetch_records(RecordKind.TOP_DISEASES, {"state": state, "week": week})

    def get_climate_impact(self, disease: str) -> Tuple[Record, ...]:
        return self.fetch_records(RecordKind.CLIMATE, {"disease": disease})

    def get_map_data(self, disease: Optional[str] = None, week: Optional[str] = None) -> Tuple[Record, ...]:
        return self.fetch_records(RecordKind.MAP, {"disease": disease, "week": week})
