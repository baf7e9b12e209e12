"""visitctl — country-per-day travel ledger and statistics."""

__version__ = "0.1.0"
