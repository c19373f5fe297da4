"""Pydantic model for derived work segments."""

from datetime import timedelta

from pydantic import BaseModel, Field


class Segment(BaseModel):
    """Time between one ledger event and the next (or now).

    Never persisted; recomputed from the ledger on every query.
    """

    title: str = Field(description="Title of the event that opened the segment")
    duration: timedelta = Field(description="Elapsed time until the next event")

    model_config = {"frozen": True}
