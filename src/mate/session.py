"""Start/stop/resume state machine over the ledger tail."""

import logging
from datetime import datetime
from typing import Optional, Sequence

from .errors import AlreadyWorkingError, NoHistoryError, NoPreviousTicketError
from .ledger import Ledger
from .models.ledger import STOP_TOKEN, LedgerEvent
from .models.segment import Segment
from .segments import compute_segments

logger = logging.getLogger(__name__)


def session_status(events: Sequence[LedgerEvent]) -> str:
    """Title being worked on, or STOP when idle."""
    if not events:
        return STOP_TOKEN
    return events[-1].title


class SessionController:
    """Interprets the ledger tail and appends start/stop events.

    Holds no state of its own: the session is idle when the ledger is empty
    or ends with a STOP, and working on the last title otherwise.
    """

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def start(self, title: str) -> LedgerEvent:
        """Append ``title`` unconditionally.

        Starting while another ticket is open does not insert a STOP; the
        previous ticket's segment simply ends at this event.
        """
        event = self.ledger.append(title)
        logger.info(f"Started {title!r}")
        return event

    def stop(self) -> Optional[str]:
        """Close the open ticket.

        Returns:
            The stopped title, or None if nothing was open (no-op)
        """
        events = self.ledger.read_all()
        if not events or events[-1].is_stop:
            logger.debug("Stop requested while idle")
            return None

        stopped = events[-1].title
        self.ledger.append(STOP_TOKEN)
        logger.info(f"Stopped {stopped!r}")
        return stopped

    def resume_last(self) -> str:
        """Restart the ticket that preceded the last STOP.

        Returns:
            The resumed title

        Raises:
            NoHistoryError: The ledger is empty
            NoPreviousTicketError: No ticket precedes the last STOP
            AlreadyWorkingError: A ticket is currently open
        """
        events = self.ledger.read_all()

        if not events:
            raise NoHistoryError("No entry saved yet")

        last = events[-1]
        if not last.is_stop:
            raise AlreadyWorkingError(last.title)

        if len(events) == 1 or events[-2].is_stop:
            raise NoPreviousTicketError("No previous ticket to restart")

        title = events[-2].title
        self.start(title)
        return title

    def current_status(self) -> str:
        """Last event's title, or STOP if the ledger is empty."""
        return session_status(self.ledger.read_all())

    def segments(self, now: Optional[datetime] = None) -> list[Segment]:
        """Read the ledger and derive its segments up to ``now``."""
        events = self.ledger.read_all()
        return compute_segments(events, now or self.ledger.clock())
