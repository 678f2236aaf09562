# epidash/views/base.py
#
# Shared view lifecycle: filter state, one data controller per record kind,
# and the scope hook the navigator uses to cancel in-flight fetches.

import asyncio
import logging
from contextlib import ExitStack
from typing import Dict, List, Sequence, Tuple

try:
    from data_processing.api_client import FetchError
    from data_processing.controller import ViewDataController
    from data_processing.filter_state import FilterState
    from data_processing.models import Record, RecordKind
    from data_processing.store import RecordStore
except ImportError as e:
    logging.basicConfig(level="CRITICAL")
    logging.critical(f"FATAL ERROR in views/base.py: A core dependency is missing. {e}", exc_info=True)
    raise

logger = logging.getLogger(__name__)


class BaseView:
    """A dashboard page backed by one or more record collections."""
    kinds: Sequence[RecordKind] = ()

    def __init__(self, store: RecordStore):
        self.filters = self.initial_filters()
        self.controllers: Dict[RecordKind, ViewDataController] = {
            kind: ViewDataController(store, kind) for kind in self.kinds
        }

    def initial_filters(self) -> FilterState:
        return FilterState()

    def enter(self, scope: ExitStack) -> None:
        scope.callback(self.cancel)

    def cancel(self) -> None:
        for controller in self.controllers.values():
            controller.cancel()

    @property
    def errors(self) -> List[FetchError]:
        return [c.last_error for c in self.controllers.values() if c.last_error is not None]

    def collection(self, kind: RecordKind) -> Tuple[Record, ...]:
        return self.controllers[kind].collection

    async def refresh(self, force: bool = False) -> None:
        """Refetches every collection whose filters changed since its last fetch."""
        stale = [c for c in self.controllers.values() if force or c.needs_refresh(self.filters)]
        if stale:
            await asyncio.gather(*(c.refresh(self.filters) for c in stale))

    def sync(self, force: bool = False) -> None:
        """Blocking entry point for the render loop."""
        asyncio.run(self.refresh(force=force))
