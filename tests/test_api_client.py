from unittest.mock import MagicMock

import pytest
import requests

from data_processing.api_client import EpidemiologyApiClient, FetchError, project_criteria
from data_processing.models import ClimateRecord, RecordKind, TrendRecord


def _response(payload=None, status=200, json_error=None):
    response = MagicMock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return EpidemiologyApiClient(base_url="https://surveillance.test/", timeout=2.5, session=session)


def test_trend_query_sends_only_present_params(client, session):
    session.get.return_value = _response([])
    client.get_trend_data(state="Kerala")
    session.get.assert_called_once_with(
        "https://surveillance.test/trend", params={"state_ut": "Kerala"}, timeout=2.5,
    )


def test_no_params_when_nothing_selected(client, session):
    session.get.return_value = _response([])
    client.get_map_data()
    assert session.get.call_args.kwargs["params"] == {}


def test_top_diseases_wire_names(client, session):
    session.get.return_value = _response([{"disease": "Dengue", "cases": 1250, "percentage": 35}])
    records = client.get_top_diseases(state="Delhi", week="2024-W05")
    assert session.get.call_args.args[0] == "https://surveillance.test/top-diseases"
    assert session.get.call_args.kwargs["params"] == {"state_ut": "Delhi", "week": "2024-W05"}
    assert records[0].cases == 1250


def test_climate_query_parses_camel_case_fields(client, session):
    session.get.return_value = _response([
        {"state": "Delhi", "avgTemp": 31.2, "avgPreci": 120.5, "avgLAI": 2.25, "cases": 640},
    ])
    records = client.get_climate_impact("Dengue")
    assert session.get.call_args.kwargs["params"] == {"Disease": "Dengue"}
    assert records == (ClimateRecord(state="Delhi", avg_temp=31.2, avg_preci=120.5, avg_lai=2.25, cases=640),)


def test_unknown_payload_keys_are_ignored(client, session):
    session.get.return_value = _response([
        {"week": "2024-W01", "cases": 5, "state": "Goa", "disease": "Malaria", "source": "district-office"},
    ])
    assert client.get_trend_data() == (TrendRecord(week="2024-W01", cases=5, state="Goa", disease="Malaria"),)


def test_missing_required_param_fails_before_any_request(client, session):
    with pytest.raises(FetchError) as excinfo:
        client.fetch_records(RecordKind.TOP_DISEASES, {"week": "2024-W05"})
    assert excinfo.value.kind is RecordKind.TOP_DISEASES
    session.get.assert_not_called()


def test_timeout_becomes_fetch_error(client, session):
    session.get.side_effect = requests.exceptions.Timeout()
    with pytest.raises(FetchError, match="timed out"):
        client.get_trend_data()


def test_http_error_carries_status_code(client, session):
    session.get.return_value = _response(status=503)
    with pytest.raises(FetchError) as excinfo:
        client.get_map_data(disease="Dengue")
    assert excinfo.value.status_code == 503
    assert excinfo.value.kind is RecordKind.MAP


def test_connection_error_becomes_fetch_error(client, session):
    session.get.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(FetchError, match="Network error"):
        client.get_trend_data()


def test_invalid_json_becomes_fetch_error(client, session):
    session.get.return_value = _response(json_error=ValueError("Expecting value"))
    with pytest.raises(FetchError, match="not valid JSON"):
        client.get_trend_data()


def test_non_array_payload_becomes_fetch_error(client, session):
    session.get.return_value = _response({"data": []})
    with pytest.raises(FetchError, match="JSON array"):
        client.get_trend_data()


def test_malformed_record_becomes_fetch_error(client, session):
    session.get.return_value = _response([{"week": "2024-W01", "cases": -4, "state": "Goa", "disease": "Malaria"}])
    with pytest.raises(FetchError, match="record shape"):
        client.get_trend_data()


def test_project_criteria_drops_fields_the_query_does_not_take():
    criteria = {"state": "Delhi", "disease": "Dengue", "week": "2024-W05"}
    assert project_criteria(RecordKind.TREND, criteria) == {"state": "Delhi", "disease": "Dengue"}
    assert project_criteria(RecordKind.MAP, criteria) == {"disease": "Dengue", "week": "2024-W05"}
    assert project_criteria(RecordKind.CLIMATE, {"disease": ""}) == {}


def test_defaults_come_from_settings():
    client = EpidemiologyApiClient(session=MagicMock())
    assert client.timeout == 10.0
    assert client.base_url == "https://api.epidemiological-data.com"
