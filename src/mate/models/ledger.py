"""Pydantic models for ledger events."""

from datetime import datetime

from pydantic import BaseModel, Field

# Reserved title marking the end of a work session.
STOP_TOKEN = "STOP"


class LedgerEvent(BaseModel):
    """Append-only ledger event record.

    Written as one quoted CSV row to the ledger file.
    Never mutate or delete; only append.
    """

    timestamp: datetime = Field(description="Local wall-clock time, second precision")
    title: str = Field(description="Ticket title, or the STOP sentinel")

    model_config = {"frozen": True}

    @property
    def is_stop(self) -> bool:
        return self.title == STOP_TOKEN
