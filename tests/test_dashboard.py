# dashboard orchestration with fake clients; threading.Event controls which fetch finishes first

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from weatherdash.client import UpstreamFailure, UpstreamNotFound
from weatherdash.dashboard import (
    FETCH_FAILED_MESSAGE,
    NO_DATA_MESSAGE,
    NOT_FOUND_MESSAGE,
    Dashboard,
)
from weatherdash.messages import FALLBACK_MESSAGE
from weatherdash.models import LocationQuery

DATA = Path(__file__).parent / "data"


def load_payload(name="London"):
    payload = json.loads((DATA / "example_forecast.json").read_text(encoding="utf-8"))
    payload["city"]["name"] = name
    return payload


class FakeClient:
    def __init__(self, responses):
        # city -> payload dict or exception instance
        self.responses = responses
        self.gates = {}
        self.entered = {}
        self.calls = []

    def hold(self, city):
        # the fetch for this city blocks until the returned event is set
        gate = threading.Event()
        self.gates[city] = gate
        self.entered[city] = threading.Event()
        return gate

    def get_forecast(self, query):
        self.calls.append(query.city)
        gate = self.gates.get(query.city)
        if gate is not None:
            self.entered[query.city].set()
            assert gate.wait(5)
        result = self.responses[query.city]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def dash_factory():
    created = []

    def make(responses, executor=None):
        dash = Dashboard(FakeClient(responses), executor=executor)
        created.append(dash)
        return dash

    yield make
    for d in created:
        d.close()


def test_view_before_any_search(dash_factory):
    view = dash_factory({}).view()
    assert not view.has_data
    assert view.label is None
    assert view.status is None
    assert not view.loading


def test_successful_search(dash_factory):
    view = dash_factory({"London": load_payload()}).load(LocationQuery.for_city("London"))
    assert view.has_data
    assert view.location == "London"
    assert view.label == "Today"
    assert view.sample.timestamp == 1735743600
    assert view.message == "☀ It's sunny, wear sunglasses!"
    assert not view.can_go_previous
    assert view.can_go_next
    assert not view.loading


def test_navigation_through_dashboard(dash_factory):
    dash = dash_factory({"London": load_payload()})
    dash.load(LocationQuery.for_city("London"))

    view = dash.next()
    assert view.label == "Thursday"
    assert view.message.startswith("🌫")

    view = dash.next()
    # 12:00 on the last day is a squall, which has no dedicated text
    assert view.message == FALLBACK_MESSAGE
    assert not view.can_go_next
    assert dash.next().label == "Friday"

    assert dash.previous().label == "Thursday"


def test_not_found_clears_data(dash_factory):
    dash = dash_factory({"London": load_payload(), "Atlantis": UpstreamNotFound("nope")})
    dash.load(LocationQuery.for_city("London"))

    view = dash.load(LocationQuery.for_city("Atlantis"))
    assert not view.has_data
    assert view.status == NOT_FOUND_MESSAGE
    # navigating without data is a quiet no-op
    assert not dash.next().has_data


def test_upstream_failure_message(dash_factory):
    view = dash_factory({"Paris": UpstreamFailure("down", 503)}).load(LocationQuery.for_city("Paris"))
    assert view.status == FETCH_FAILED_MESSAGE


def test_bad_payload_is_a_fetch_failure(dash_factory):
    view = dash_factory({"Paris": {"unexpected": True}}).load(LocationQuery.for_city("Paris"))
    assert view.status == FETCH_FAILED_MESSAGE


def test_empty_forecast(dash_factory):
    payload = load_payload("Nowhere")
    payload["list"] = []
    view = dash_factory({"Nowhere": payload}).load(LocationQuery.for_city("Nowhere"))
    assert not view.has_data
    assert view.status == NO_DATA_MESSAGE


def test_new_search_supersedes_slow_one(dash_factory):
    dash = dash_factory({"Slow": load_payload("Slow"), "Fast": load_payload("Fast")})
    gate = dash.client.hold("Slow")

    slow = dash.search(LocationQuery.for_city("Slow"))
    # make sure the slow fetch is on the wire, so it cannot simply be cancelled
    assert dash.client.entered["Slow"].wait(5)
    assert dash.view().loading

    fast = dash.search(LocationQuery.for_city("Fast"))
    assert fast.result(timeout=5) is True
    assert dash.view().location == "Fast"

    # the stale response arrives last and must not overwrite the newer state
    gate.set()
    assert slow.result(timeout=5) is False
    view = dash.view()
    assert view.location == "Fast"
    assert not view.loading


def test_navigation_after_reload_starts_at_today(dash_factory):
    dash = dash_factory({"London": load_payload(), "Paris": load_payload("Paris")})
    dash.load(LocationQuery.for_city("London"))
    dash.next()
    view = dash.load(LocationQuery.for_city("Paris"))
    assert view.label == "Today"
    assert view.location == "Paris"


def test_new_search_does_not_wait_for_stale_fetches(dash_factory):
    dash = dash_factory({c: load_payload(c) for c in ("A", "B", "C")})
    gates = [dash.client.hold("A"), dash.client.hold("B")]

    a = dash.search(LocationQuery.for_city("A"))
    assert dash.client.entered["A"].wait(5)
    b = dash.search(LocationQuery.for_city("B"))
    assert dash.client.entered["B"].wait(5)

    # both older fetches are still on the wire
    c = dash.search(LocationQuery.for_city("C"))
    assert c.result(timeout=2) is True
    view = dash.view()
    assert view.location == "C"
    assert not view.loading

    for gate in gates:
        gate.set()
    assert a.result(timeout=5) is False
    assert b.result(timeout=5) is False
    assert dash.view().location == "C"


def test_queued_search_is_cancelled_when_superseded(dash_factory):
    pool = ThreadPoolExecutor(max_workers=1)
    dash = dash_factory({c: load_payload(c) for c in ("A", "B", "C")}, executor=pool)
    gate = dash.client.hold("A")

    a = dash.search(LocationQuery.for_city("A"))
    assert dash.client.entered["A"].wait(5)
    # the only worker is busy, so B waits in the queue
    b = dash.search(LocationQuery.for_city("B"))
    c = dash.search(LocationQuery.for_city("C"))
    assert b.cancelled()

    gate.set()
    assert c.result(timeout=5) is True
    assert a.result(timeout=5) is False
    assert "B" not in dash.client.calls
    assert dash.view().location == "C"
