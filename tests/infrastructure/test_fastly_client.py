from __future__ import annotations

import itertools

import pytest
import requests

from domain.models import QueryMode, Session, StatsQuery
from infrastructure.fastly.client import FastlyStatsClient, build_params, build_path
from shared.errors import HttpError, ParseError, TimeoutError
from tests.fixtures.http import DummyResponse, DummySession

BASE = "https://api.example.test"
KEY_SESSION = Session(api_key="secret")


def _client(session: DummySession) -> FastlyStatsClient:
    return FastlyStatsClient(base_url=BASE, session=session)  # type: ignore[arg-type]


# Path precedence -------------------------------------------------------------

_PATH_FLAGS = {
    "aggregate": "stats/aggregate",
    "usage": "stats/usage",
    "service_usage": "stats/usage_by_service",
}
_PRECEDENCE = ["aggregate", "usage", "service_usage"]


@pytest.mark.parametrize("first,second", list(itertools.combinations(_PRECEDENCE, 2)))
def test_path_precedence_pairs(first, second):
    query = StatsQuery(**{first: True, second: True}, service="svc", field="hits")

    assert build_path(query) == _PATH_FLAGS[first]


@pytest.mark.parametrize("flag", _PRECEDENCE)
def test_path_modes_override_service_and_field(flag):
    query = StatsQuery(**{flag: True}, service="svc", field="hits")

    assert build_path(query) == _PATH_FLAGS[flag]


def test_all_path_flags_pick_aggregate():
    query = StatsQuery(aggregate=True, usage=True, service_usage=True)

    assert build_path(query) == "stats/aggregate"
    assert query.mode is QueryMode.AGGREGATE


@pytest.mark.parametrize(
    "query,expected,mode",
    [
        (StatsQuery(), "stats", QueryMode.DEFAULT),
        (StatsQuery(service="svc1"), "stats/service/svc1", QueryMode.BY_SERVICE),
        (StatsQuery(field="hit_ratio"), "stats/field/hit_ratio", QueryMode.BY_FIELD),
        (StatsQuery(service="svc1", field="hits"), "stats/service/svc1/field/hits", QueryMode.BY_SERVICE),
        (StatsQuery(usage=True, service="svc1"), "stats/usage", QueryMode.USAGE),
        (StatsQuery(service_usage=True), "stats/usage_by_service", QueryMode.USAGE_BY_SERVICE),
    ],
)
def test_service_and_field_segments(query, expected, mode):
    assert build_path(query) == expected
    assert query.mode is mode


# Parameters ------------------------------------------------------------------


def test_params_omit_unset_fields_and_keep_order():
    assert build_params(StatsQuery()) == "by=day"
    assert build_params(StatsQuery(by=None)) == ""
    query = StatsQuery(by="minute", from_time="1 day ago", to_time="now", region="europe")
    assert build_params(query) == "by=minute&from=1+day+ago&to=now&region=europe"
    assert build_params(StatsQuery(to_time="2024-01-01")) == "by=day&to=2024-01-01"


@pytest.mark.parametrize("kwargs", [{"by": "week"}, {"region": "mars"}])
def test_query_rejects_unknown_choices(kwargs):
    with pytest.raises(ValueError):
        StatsQuery(**kwargs)


# Fetch -----------------------------------------------------------------------


def test_fetch_builds_url_and_key_header():
    payload = {"data": [], "status": "success"}
    session = DummySession([DummyResponse(200, payload)])

    result = _client(session).fetch(StatsQuery(aggregate=True, region="usa"), KEY_SESSION)

    assert result == payload
    call = session.calls[0]
    assert call["url"] == f"{BASE}/stats/aggregate?by=day&region=usa"
    assert call["headers"]["Fastly-Key"] == "secret"
    assert call["headers"]["Content-Type"] == "application/json"
    assert "Cookie" not in call["headers"]


def test_fetch_uses_cookie_when_logged_in():
    session = DummySession([DummyResponse(200, {"data": {}})])

    _client(session).fetch(StatsQuery(by=None), Session(cookie="fastly.session=abc"))

    call = session.calls[0]
    assert call["url"] == f"{BASE}/stats"
    assert call["headers"]["Cookie"] == "fastly.session=abc"
    assert "Fastly-Key" not in call["headers"]


@pytest.mark.parametrize("status", [301, 400, 401, 404, 500, 503])
def test_fetch_raises_http_error_on_non_2xx(status):
    session = DummySession([DummyResponse(status, {"msg": "nope"})])

    with pytest.raises(HttpError) as excinfo:
        _client(session).fetch(StatsQuery(), KEY_SESSION)
    assert excinfo.value.status_code == status
    assert len(session.calls) == 1


def test_fetch_transport_errors():
    session = DummySession([requests.ConnectionError("down"), requests.Timeout("slow")])
    client = _client(session)

    with pytest.raises(HttpError):
        client.fetch(StatsQuery(), KEY_SESSION)
    with pytest.raises(TimeoutError):
        client.fetch(StatsQuery(), KEY_SESSION)
    assert len(session.calls) == 2


def test_fetch_raises_parse_error_on_invalid_json():
    session = DummySession([DummyResponse(200, None, text="<html>")])

    with pytest.raises(ParseError):
        _client(session).fetch(StatsQuery(), KEY_SESSION)


def test_get_service_path():
    session = DummySession([DummyResponse(200, {"name": "www"})])

    assert _client(session).get_service("svc1", KEY_SESSION) == {"name": "www"}
    assert session.urls("GET") == [f"{BASE}/service/svc1"]
