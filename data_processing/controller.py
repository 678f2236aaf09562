# epidash/data_processing/controller.py
#
# View Data Controller
# Owns the most recently fetched collection of one view. Every fetch is tagged
# with a monotonically increasing request id; a completion is applied only if
# its id is still the latest issued, so a superseded fetch that resolves late
# can never overwrite newer data.

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

try:
    from analytics.aggregation import FilterLike, filter_criteria
    from .api_client import FetchError
    from .filter_state import FilterState
    from .models import Record, RecordKind
    from .store import RecordStore
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in controller.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)


def frozen_criteria(filter_state: FilterLike) -> Mapping[str, str]:
    """Read-only copy of the present filter fields, handed to the store as the query."""
    if isinstance(filter_state, FilterState):
        return filter_state.snapshot()
    return MappingProxyType(filter_criteria(filter_state))


class ViewDataController:
    def __init__(self, store: RecordStore, kind: RecordKind):
        self._store = store
        self.kind = RecordKind(kind)
        self._latest_request_id = 0
        self.collection: Tuple[Record, ...] = ()
        self.last_error: Optional[FetchError] = None
        self.last_filter: Optional[Mapping[str, str]] = None

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def needs_refresh(self, filter_state: FilterLike) -> bool:
        """True until a fetch for exactly these filter values has been issued."""
        return self.last_filter != filter_criteria(filter_state)

    def cancel(self) -> None:
        """Invalidates every in-flight request; their results will be discarded."""
        self._latest_request_id += 1
        self.last_filter = None
        logger.debug(f"[{self.kind.value}] In-flight fetches cancelled.")

    async def refresh(self, filter_state: FilterLike) -> bool:
        """
        Fetches a fresh collection for the given filters.

        A FetchError is logged and the view falls back to an empty collection.
        Returns True if this request's outcome was applied, False if a newer
        request (or a cancel) superseded it while it was in flight.
        """
        self._latest_request_id += 1
        request_id = self._latest_request_id
        criteria = frozen_criteria(filter_state)
        self.last_filter = criteria

        try:
            records = await self._store.fetch(self.kind, criteria)
            error = None
        except FetchError as e:
            records, error = (), e

        if request_id != self._latest_request_id:
            logger.debug(
                f"[{self.kind.value}] Discarding stale result of request #{request_id} "
                f"(latest is #{self._latest_request_id})."
            )
            return False

        if error is not None:
            logger.error(f"[{self.kind.value}] Fetch failed, showing empty state: {error}")
        else:
            logger.info(f"[{self.kind.value}] Request #{request_id} applied with {len(records)} records.")
        self.collection = tuple(records)
        self.last_error = error
        return True
