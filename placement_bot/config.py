"""Placement bot configuration — loaded from .env via pydantic-settings."""

from pydantic_settings import BaseSettings
from pydantic import Field


class PlacementSettings(BaseSettings):
    """All bot configuration. Reads from .env file and environment variables."""

    # --- JU portal ---
    portal_base_url: str = Field(
        default="https://portal.ju.edu.et",
        description="Base URL of the university results portal",
    )
    portal_results_path: str = Field(
        default="/freshmanR",
        description="Path of the freshman placement results page",
    )
    portal_query_param: str = Field(
        default="AdmissionNumber",
        description="Query parameter carrying the student identifier",
    )
    portal_verify_tls: bool = Field(
        default=True,
        description="Verify the portal TLS certificate (the portal has served broken chains before)",
    )
    fetch_timeout_seconds: float = Field(
        default=30.0,
        description="Whole-request timeout for one portal fetch",
    )

    # --- Inbound messages ---
    dedup_window_seconds: float = Field(
        default=1.0,
        description="Window in which a repeated message id is treated as a re-delivery",
    )
    identifier_min_length: int = Field(default=3, description="Shortest accepted identifier")
    identifier_max_length: int = Field(default=20, description="Longest accepted identifier")

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="console",
        description="Log format: 'console' for dev, 'json' for production",
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton — import this everywhere
settings = PlacementSettings()
