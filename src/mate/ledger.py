"""Append-only ledger for mate."""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .errors import CorruptionError, StorageError
from .models.ledger import LedgerEvent

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y/%m/%d %H:%M:%S"
CSV_HEADER = "timestamp,title\n"


def wall_clock_now() -> datetime:
    """Local wall-clock time, truncated to the ledger's one-second resolution."""
    return datetime.now().replace(microsecond=0)


class Ledger:
    """Append-only event ledger.

    Stored as a flat CSV file: a ``timestamp,title`` header followed by one
    quoted row per event. Rows are only ever appended; ``clear`` resets
    the file back to its header.
    """

    def __init__(self, ledger_path: Path, clock: Callable[[], datetime] = wall_clock_now):
        """Initialize ledger.

        Args:
            ledger_path: Path to the ledger CSV file
            clock: Source of "now" for appended events
        """
        self.ledger_path = ledger_path
        self.clock = clock

    def ensure_initialized(self) -> None:
        """Write the header if the file is missing or empty."""
        try:
            if self.ledger_path.exists() and self.ledger_path.stat().st_size > 0:
                return
            self.ledger_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.ledger_path, "a", encoding="utf-8", newline="") as f:
                f.write(CSV_HEADER)
        except OSError as e:
            raise StorageError(f"Cannot initialize ledger {self.ledger_path}: {e}") from e

        logger.debug(f"Initialized empty ledger at {self.ledger_path}")

    def append(self, title: str, timestamp: Optional[datetime] = None) -> LedgerEvent:
        """Append an event to the ledger.

        Args:
            title: Ticket title or STOP sentinel
            timestamp: Event time; defaults to the ledger clock

        Returns:
            The appended LedgerEvent
        """
        self.ensure_initialized()

        ts = (timestamp or self.clock()).replace(microsecond=0)
        event = LedgerEvent(timestamp=ts, title=title)

        try:
            with open(self.ledger_path, "a", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
                writer.writerow([event.timestamp.strftime(TIME_FORMAT), event.title])
        except OSError as e:
            raise StorageError(f"Cannot write to ledger {self.ledger_path}: {e}") from e

        logger.debug(f"Appended {event.title!r} at {event.timestamp}")
        return event

    def read_all(self) -> list[LedgerEvent]:
        """Read every event, in append order.

        Raises:
            StorageError: If the file cannot be read
            CorruptionError: If any row cannot be decoded
        """
        self.ensure_initialized()

        events: list[LedgerEvent] = []
        try:
            with open(self.ledger_path, "r", encoding="utf-8", newline="") as f:
                reader = csv.reader(f)
                for index, row in enumerate(reader):
                    # Header
                    if index == 0:
                        continue
                    if not row:
                        continue
                    events.append(_decode_row(row, reader.line_num))
        except OSError as e:
            raise StorageError(f"Cannot read ledger {self.ledger_path}: {e}") from e
        except (csv.Error, UnicodeDecodeError) as e:
            raise CorruptionError(f"Malformed ledger {self.ledger_path}: {e}") from e

        logger.debug(f"Read {len(events)} event(s) from {self.ledger_path}")
        return events

    def clear(self) -> None:
        """Remove every event, keeping only the header."""
        self.ensure_initialized()
        try:
            with open(self.ledger_path, "w", encoding="utf-8", newline="") as f:
                f.write(CSV_HEADER)
        except OSError as e:
            raise StorageError(f"Cannot clear ledger {self.ledger_path}: {e}") from e

        logger.info(f"Cleared ledger {self.ledger_path}")


def _decode_row(row: list[str], line: int) -> LedgerEvent:
    if len(row) != 2:
        raise CorruptionError(f"Line {line}: expected 2 fields, found {len(row)}", line=line)
    raw_ts, title = row
    try:
        timestamp = datetime.strptime(raw_ts, TIME_FORMAT)
    except ValueError as e:
        raise CorruptionError(f"Line {line}: invalid timestamp {raw_ts!r}", line=line) from e
    # strptime accepts unpadded fields
    if timestamp.strftime(TIME_FORMAT) != raw_ts:
        raise CorruptionError(f"Line {line}: invalid timestamp {raw_ts!r}", line=line)
    return LedgerEvent(timestamp=timestamp, title=title)
