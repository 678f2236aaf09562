import asyncio

import pytest

from data_processing.mock_data import MockDataGenerator
from data_processing.models import RecordKind
from data_processing.store import MockRecordStore
from views.dashboard import DashboardView
from views.navigation import Navigator, Page
from views.outbreak_map import OutbreakMapView


class RecordingView:
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def enter(self, scope):
        self.log.append(("enter", self.name))
        scope.callback(self.log.append, ("exit", self.name))


@pytest.fixture
def log():
    return []


@pytest.fixture
def navigator(log):
    return Navigator({page: (lambda page=page: RecordingView(page.value, log)) for page in Page})


def test_starts_on_dashboard(navigator, log):
    assert navigator.current_page is Page.DASHBOARD
    assert log == [("enter", "dashboard")]


def test_switching_pages_exits_previous_view_first(navigator, log):
    navigator.navigate(Page.OUTBREAK_MAP)
    navigator.navigate("climate")
    assert navigator.current_page is Page.CLIMATE_IMPACT
    assert log == [
        ("enter", "dashboard"),
        ("exit", "dashboard"), ("enter", "map"),
        ("exit", "map"), ("enter", "climate"),
    ]


def test_navigating_to_active_page_keeps_the_view(navigator, log):
    view = navigator.current_view
    assert navigator.navigate(Page.DASHBOARD) is view
    assert log == [("enter", "dashboard")]


def test_unknown_page_falls_back_to_dashboard(navigator, log):
    navigator.navigate(Page.CLIMATE_IMPACT)
    navigator.navigate("reports")
    assert navigator.current_page is Page.DASHBOARD
    assert log[-2:] == [("exit", "climate"), ("enter", "dashboard")]


def test_close_tears_down_the_active_view(navigator, log):
    navigator.close()
    assert navigator.current_page is None
    assert log[-1] == ("exit", "dashboard")


def test_every_page_needs_a_view():
    with pytest.raises(ValueError):
        Navigator({Page.DASHBOARD: lambda: None})


def test_failed_enter_releases_partial_scope(log):
    class Broken(RecordingView):
        def enter(self, scope):
            super().enter(scope)
            raise RuntimeError("boom")

    nav = Navigator({
        Page.DASHBOARD: lambda: RecordingView("dashboard", log),
        Page.CLIMATE_IMPACT: lambda: Broken("climate", log),
        Page.OUTBREAK_MAP: lambda: RecordingView("map", log),
    })
    with pytest.raises(RuntimeError):
        nav.navigate(Page.CLIMATE_IMPACT)
    assert ("exit", "climate") in log


@pytest.fixture
def store(rng):
    return MockRecordStore(MockDataGenerator(rng=rng))


@pytest.fixture
def app_navigator(store):
    return Navigator({
        Page.DASHBOARD: lambda: DashboardView(store),
        Page.CLIMATE_IMPACT: lambda: DashboardView(store),
        Page.OUTBREAK_MAP: lambda: OutbreakMapView(store),
    })


def test_map_session_lives_only_while_map_view_is_active(app_navigator):
    view = app_navigator.navigate(Page.OUTBREAK_MAP)
    session = view.map_session
    assert session.is_open

    app_navigator.navigate(Page.DASHBOARD)
    assert not session.is_open
    with pytest.raises(RuntimeError):
        session.update([], lambda features: None)


def test_leaving_a_view_cancels_its_fetches(app_navigator):
    view = app_navigator.current_view
    view.sync()
    controller = view.controllers[RecordKind.TREND]
    issued = controller.latest_request_id
    assert len(controller.collection) == 180

    app_navigator.navigate(Page.OUTBREAK_MAP)
    assert controller.latest_request_id > issued
    assert controller.needs_refresh(view.filters)


def test_view_refresh_skips_unchanged_filters(store):
    view = DashboardView(store)
    asyncio.run(view.refresh())
    issued = view.controllers[RecordKind.TREND].latest_request_id
    asyncio.run(view.refresh())
    assert view.controllers[RecordKind.TREND].latest_request_id == issued

    view.filters.select("state", "Delhi")
    asyncio.run(view.refresh())
    assert len(view.collection(RecordKind.TREND)) == 30
