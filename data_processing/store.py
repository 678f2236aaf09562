# epidash/data_processing/store.py
#
# Record Store
# Two interchangeable sources behind one asynchronous contract:
#   fetch(kind, filter_state) -> tuple of records
# RemoteRecordStore queries the surveillance API; MockRecordStore generates
# synthetic data. Neither caches nor retries.

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

try:
    from config.settings import settings
    from analytics.aggregation import FilterLike, filter_criteria, filter_by
    from .api_client import EpidemiologyApiClient, project_criteria
    from .mock_data import MockDataGenerator
    from .models import Record, RecordKind
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in store.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Produces a fresh record collection for a kind and filter state."""

    @abstractmethod
    async def fetch(self, kind: RecordKind, filter_state: FilterLike) -> Tuple[Record, ...]:
        ...


class RemoteRecordStore(RecordStore):
    """Runs the blocking HTTP query in a worker thread so the event loop stays free."""

    def __init__(self, client: Optional[EpidemiologyApiClient] = None):
        self._client = client or EpidemiologyApiClient()

    async def fetch(self, kind: RecordKind, filter_state: FilterLike) -> Tuple[Record, ...]:
        return await asyncio.to_thread(self._client.fetch_records, RecordKind(kind), filter_criteria(filter_state))


class MockRecordStore(RecordStore):
    """
    Generates demonstration data and applies the query's filter fields to it,
    mirroring how the remote service constrains its results. Top-disease and
    climate records carry no filterable dimension and are returned whole.
    """
    _FILTERABLE = (RecordKind.TREND, RecordKind.MAP)

    def __init__(self, generator: Optional[MockDataGenerator] = None):
        self._generator = generator or MockDataGenerator()
        self._generators: Dict[RecordKind, Callable[[], Tuple[Record, ...]]] = {
            RecordKind.TREND: self._generator.generate_trend_data,
            RecordKind.TOP_DISEASES: self._generator.generate_top_diseases,
            RecordKind.CLIMATE: self._generator.generate_climate_data,
            RecordKind.MAP: self._generator.generate_map_data,
        }

    async def fetch(self, kind: RecordKind, filter_state: FilterLike) -> Tuple[Record, ...]:
        kind = RecordKind(kind)
        records = self._generators[kind]()
        if kind in self._FILTERABLE:
            records = filter_by(records, project_criteria(kind, filter_criteria(filter_state)))
        # Resolves immediately, but still yields once like a real query would.
        await asyncio.sleep(0)
        logger.debug(f"Mock store produced {len(records)} '{kind.value}' records.")
        return records


def create_record_store() -> RecordStore:
    """Selects the data source configured at startup."""
    if settings.api.use_mock:
        logger.info("Using synthetic (mock) data source.")
        return MockRecordStore()
    logger.info(f"Using remote data source at {settings.api.base_url}.")
    return RemoteRecordStore()
