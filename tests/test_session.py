"""Tests for the start/stop/resume state machine."""

from datetime import timedelta

import pytest

from mate.errors import AlreadyWorkingError, NoHistoryError, NoPreviousTicketError
from mate.models.ledger import STOP_TOKEN
from mate.models.segment import Segment


def _titles(ledger):
    return [e.title for e in ledger.read_all()]


def test_start_appends_title(controller, ledger):
    event = controller.start("A")

    assert ledger.read_all()[-1] == event
    assert event.title == "A"


def test_start_while_working_does_not_insert_stop(controller, ledger, clock, t0):
    controller.start("A")
    clock.advance(minutes=20)
    controller.start("B")
    clock.advance(minutes=10)

    assert _titles(ledger) == ["A", "B"]
    assert controller.segments() == [
        Segment(title="A", duration=timedelta(minutes=20)),
        Segment(title="B", duration=timedelta(minutes=10)),
    ]


def test_stop_returns_stopped_title(controller, ledger, clock):
    controller.start("A")
    clock.advance(hours=1)

    assert controller.stop() == "A"
    assert _titles(ledger) == ["A", STOP_TOKEN]


def test_stop_twice_appends_one_stop(controller, ledger):
    controller.start("A")

    assert controller.stop() == "A"
    assert controller.stop() is None
    assert _titles(ledger) == ["A", STOP_TOKEN]


def test_stop_on_empty_ledger_is_noop(controller, ledger):
    assert controller.stop() is None
    assert ledger.read_all() == []


def test_current_status(controller, clock):
    assert controller.current_status() == STOP_TOKEN

    controller.start("A")
    assert controller.current_status() == "A"

    clock.advance(minutes=1)
    controller.stop()
    assert controller.current_status() == STOP_TOKEN


def test_resume_empty_ledger(controller):
    with pytest.raises(NoHistoryError):
        controller.resume_last()


def test_resume_single_stop(controller, ledger):
    ledger.append(STOP_TOKEN)

    with pytest.raises(NoPreviousTicketError):
        controller.resume_last()


def test_resume_single_open_ticket(controller):
    controller.start("A")

    with pytest.raises(AlreadyWorkingError) as exc_info:
        controller.resume_last()

    assert exc_info.value.title == "A"


def test_resume_while_working(controller, clock):
    controller.start("A")
    clock.advance(minutes=5)
    controller.stop()
    clock.advance(minutes=5)
    controller.start("B")

    with pytest.raises(AlreadyWorkingError) as exc_info:
        controller.resume_last()

    assert exc_info.value.title == "B"


def test_resume_after_stop(controller, ledger, clock, t0):
    controller.start("A")
    clock.advance(hours=1)
    controller.stop()
    clock.advance(hours=1)

    assert controller.resume_last() == "A"

    events = ledger.read_all()
    assert [e.title for e in events] == ["A", STOP_TOKEN, "A"]
    assert events[-1].timestamp == t0 + timedelta(hours=2)


def test_resume_after_two_stops(controller, ledger, clock):
    ledger.append("A")
    clock.advance(hours=1)
    ledger.append(STOP_TOKEN)
    clock.advance(hours=1)
    ledger.append(STOP_TOKEN)

    with pytest.raises(NoPreviousTicketError):
        controller.resume_last()

    assert _titles(ledger) == ["A", STOP_TOKEN, STOP_TOKEN]


def test_resume_twice_in_a_row(controller, clock):
    controller.start("A")
    clock.advance(minutes=1)
    controller.stop()

    assert controller.resume_last() == "A"
    with pytest.raises(AlreadyWorkingError):
        controller.resume_last()


def test_segments_default_to_ledger_clock(controller, clock):
    controller.start("A")
    clock.advance(minutes=30)

    assert controller.segments() == [Segment(title="A", duration=timedelta(minutes=30))]
