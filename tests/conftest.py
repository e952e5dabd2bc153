from __future__ import annotations

import logging

import pytest

from tests.fixtures.http import DummySession


@pytest.fixture
def dummy_session() -> DummySession:
    """Provide an empty recording HTTP session."""

    return DummySession()


@pytest.fixture(autouse=True)
def _quiet_logging(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
