"""Pytest fixtures for mate tests."""

from datetime import datetime, timedelta

import pytest

from mate.ledger import Ledger
from mate.session import SessionController

T0 = datetime(2024, 3, 5, 9, 15, 0)


class FakeClock:
    """Deterministic clock that only moves when told to."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def ledger_path(tmp_path):
    """Path to a not-yet-created ledger file.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path inside the temporary directory
    """
    return tmp_path / "mate.csv"


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger(ledger_path, clock):
    return Ledger(ledger_path, clock=clock)


@pytest.fixture
def controller(ledger):
    return SessionController(ledger)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's real config and ledger out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("MATE_LEDGER", raising=False)
    monkeypatch.delenv("MATE_CONFIG", raising=False)
    monkeypatch.delenv("MATE_WORK_DAY_MINUTES", raising=False)
