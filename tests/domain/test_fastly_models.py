import pytest
from dataclasses import FrozenInstanceError

from domain.models import MetricTriple, QueryMode, Session, StatsQuery


def test_stats_query_defaults():
    q = StatsQuery()
    assert q.by == "day"
    assert q.region is None
    assert q.service is None
    assert q.field is None
    assert not (q.aggregate or q.usage or q.service_usage)
    assert q.mode is QueryMode.DEFAULT


def test_stats_query_immutability():
    q = StatsQuery()
    with pytest.raises(FrozenInstanceError):
        q.aggregate = True  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs,mode",
    [
        ({"aggregate": True, "usage": True}, QueryMode.AGGREGATE),
        ({"aggregate": True, "service_usage": True}, QueryMode.AGGREGATE),
        ({"usage": True, "service_usage": True}, QueryMode.USAGE),
        ({"service_usage": True, "service": "x"}, QueryMode.USAGE_BY_SERVICE),
        ({"service": "x", "field": "hits"}, QueryMode.BY_SERVICE),
        ({"field": "hits"}, QueryMode.BY_FIELD),
    ],
)
def test_mode_precedence(kwargs, mode):
    assert StatsQuery(**kwargs).mode is mode


def test_session_headers():
    assert Session(api_key="k").headers() == {"Fastly-Key": "k"}
    assert Session(api_key="k", cookie="c=1").headers() == {"Cookie": "c=1"}
    assert Session().headers() == {}
    assert Session(cookie="c=1").is_login


def test_metric_triple_defaults_and_immutability():
    metric = MetricTriple("a.b", 1)
    assert metric.timestamp is None
    with pytest.raises(AttributeError):
        metric.value = 2  # type: ignore[misc]
