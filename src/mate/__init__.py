"""mate - personal time tracking on an append-only ledger."""

__version__ = "0.1.0"
