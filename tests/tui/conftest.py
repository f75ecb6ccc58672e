"""Fixtures for TUI tests."""

import pytest

from notedoc.pipeline.orchestrator import Orchestrator
from notedoc.tui.state import AppState


@pytest.fixture
def app_state(client, config) -> AppState:
    """GIVEN an AppState with an orchestrator wired to the fake service."""
    return AppState(orchestrator=Orchestrator(client, config=config))
