# epidash/views/navigation.py
#
# Page Navigation State Machine
# States: Dashboard, Climate Impact, Outbreak Map. The only transition is
# `navigate(page_id)`. Each active view lives inside its own ExitStack scope;
# leaving the view closes the scope, which cancels the view's in-flight
# fetches and releases any resource it acquired (e.g. the map session).

import logging
from contextlib import ExitStack
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class Page(str, Enum):
    DASHBOARD = "dashboard"
    CLIMATE_IMPACT = "climate"
    OUTBREAK_MAP = "map"

    @property
    def heading(self) -> str:
        return PAGE_TITLES[self]


PAGE_TITLES: Dict[Page, str] = {
    Page.DASHBOARD: "Analytics Dashboard",
    Page.CLIMATE_IMPACT: "Climate Impact Analysis",
    Page.OUTBREAK_MAP: "Outbreak Map Visualization",
}


class View(Protocol):
    def enter(self, scope: ExitStack) -> None:
        """Acquire view-owned resources, registering their teardown on `scope`."""


class Navigator:
    """Owns the active page and the lifetime of its view."""

    def __init__(self, view_factories: Mapping[Page, Callable[[], View]], initial: Union[Page, str] = Page.DASHBOARD):
        missing = set(Page) - set(view_factories)
        if missing:
            raise ValueError(f"No view registered for pages: {sorted(p.value for p in missing)}")
        self._factories = dict(view_factories)
        self._page: Optional[Page] = None
        self._view: Optional[View] = None
        self._scope: Optional[ExitStack] = None
        self.navigate(initial)

    @property
    def current_page(self) -> Optional[Page]:
        return self._page

    @property
    def current_view(self) -> Optional[View]:
        return self._view

    def navigate(self, page_id: Union[Page, str]) -> View:
        """
        Switches to `page_id`. Unknown ids fall back to the Dashboard;
        navigating to the active page keeps the current view as it is.
        """
        try:
            page = Page(page_id)
        except ValueError:
            logger.warning(f"Unknown page '{page_id}', falling back to the dashboard.")
            page = Page.DASHBOARD

        if page == self._page and self._view is not None:
            return self._view

        self._teardown()
        scope = ExitStack()
        view = self._factories[page]()
        try:
            view.enter(scope)
        except Exception:
            scope.close()
            raise
        self._page, self._view, self._scope = page, view, scope
        logger.info(f"Navigated to '{page.value}'.")
        return view

    def close(self) -> None:
        """Tears down the active view."""
        self._teardown()
        self._page, self._view = None, None

    def _teardown(self) -> None:
        if self._scope is not None:
            logger.debug(f"Leaving '{self._page.value if self._page else None}', closing view scope.")
            scope, self._scope = self._scope, None
            scope.close()
