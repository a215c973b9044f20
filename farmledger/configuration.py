"""Mini README: Centralised configuration for Farm Ledger.

Structure:
    * FarmLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.
    * FarmLedgerSettings.log_level - logging level derived from ``environment``.

Usage:
    Import ``get_settings`` to locate the ledger store, choose the storage
    backend, and configure the web interface. Values are read from
    ``FARMLEDGER_*`` environment variables or a local ``.env`` file and are
    validated once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class FarmLedgerSettings(BaseSettings):
    """Runtime configuration for the Farm Ledger service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory where the persisted ledger document is stored.",
    )
    store_backend: Literal["json", "memory"] = Field(
        "json",
        description="Persistence backend: a JSON file on disk or a process-local store.",
    )
    storage_key: str = Field(
        "ledger_document",
        description="Key under which the whole ledger document is persisted.",
        min_length=1,
    )
    currency_prefix: str = Field(
        "₨ ",
        description="Prefix applied when formatting monetary values for reports.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the web service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "FARMLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure the data directory expands user paths and exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_level(self) -> int:
        """Verbose logging while developing, INFO everywhere else."""

        return logging.DEBUG if self.environment.lower() == "development" else logging.INFO


@lru_cache()
def get_settings() -> FarmLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FarmLedgerSettings()
