"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, visitctl.toml only carries
overrides. A fresh data directory needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LedgerConfig(BaseModel):
    """[ledger] section."""

    model_config = {"frozen": True}

    filename: str = "ledger.db"


class StatsConfig(BaseModel):
    """[stats] section."""

    model_config = {"frozen": True}

    default_limit: int = 5


class CountriesConfig(BaseModel):
    """[countries] section — display names keyed by country code.

    Read-only lookup for renderers. The domain layer never consults it.
    """

    model_config = {"frozen": True}

    names: dict[str, str] = Field(default_factory=dict)

    def display_name(self, country_code: str) -> str:
        return self.names.get(country_code, country_code)
