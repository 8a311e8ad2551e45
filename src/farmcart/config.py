"""Application configuration and settings management."""

import json
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FARMCART_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Farm Cart Fulfillment API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    catalog_file: Path = Field(
        default=Path("data/catalog.json"),
        description="Catalog snapshot with farms, delivery zones and products.",
    )
    default_basket_size: int = Field(default=10, ge=0, description="Items proposed by the magic basket.")
    freshness_threshold: int = Field(
        default=80,
        ge=0,
        le=100,
        description="Freshness score above which an out-of-season product still qualifies.",
    )
    default_tax_rate: float = Field(default=0.08, ge=0.0, description="Flat tax rate applied at checkout.")
    basket_generation_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Simulated latency of the recommendation backend call.",
    )
    log_level: str = Field(default="INFO")
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "catalog_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> tuple[str, ...]:
        """Accept a JSON array or a comma-separated list from the environment."""
        if not isinstance(value, str):
            return tuple(str(origin) for origin in value or ())
        text = value.strip()
        if text.startswith("["):
            return tuple(str(origin) for origin in json.loads(text))
        return tuple(origin.strip() for origin in text.split(",") if origin.strip())


settings = Settings()
