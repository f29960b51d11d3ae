"""
Test fixtures for the Convergent backend tests
"""

import copy

import pytest

from fakes import FakeClock, FakeSession, author_payload
from mock_data import DemoData, PROPOSALS, ROSTER
from openalex_client import OpenAlexClient
from schemas import Researcher
from throttle import RateGate


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client_factory(fake_clock):
    """Build an OpenAlexClient wired to fakes; no real time or network."""

    def build(session, **kwargs):
        gate = RateGate(0.025, clock=fake_clock, sleep=fake_clock.sleep)
        options = {
            "base_url": "https://api.test",
            "mailto": "tests@example.com",
            "user_agent": "Convergent Tests (mailto:tests@example.com)",
            "gate": gate,
            "timeout": 5,
            "max_retries": 2,
            "backoff": 0.5,
            "sleep": fake_clock.sleep,
        }
        options.update(kwargs)
        return OpenAlexClient(session=session, **options)

    return build


@pytest.fixture
def make_researcher():
    def build(**kwargs):
        return Researcher.model_validate(author_payload(**kwargs))

    return build


@pytest.fixture
def demo_data():
    return DemoData(copy.deepcopy(PROPOSALS), copy.deepcopy(ROSTER))


@pytest.fixture
def sarah_chen():
    return Researcher.model_validate(copy.deepcopy(ROSTER[0]))
