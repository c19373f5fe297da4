"""Pydantic models for mate."""

from .ledger import STOP_TOKEN, LedgerEvent
from .segment import Segment

__all__ = [
    "STOP_TOKEN",
    "LedgerEvent",
    "Segment",
]
