from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ANY_ORIGIN = ("*",)


class Settings(BaseSettings):
    """Application settings read from the environment."""

    app_env: Literal["dev", "prod", "test"] = Field("dev", alias="APP_ENV")
    api_prefix: str = Field("/v1", alias="API_PREFIX")
    allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        ANY_ORIGIN, alias="ALLOWED_ORIGINS"
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    room_catalog_path: str | None = Field(
        None,
        alias="ROOM_CATALOG_PATH",
        description="JSON file with room capacity and price tables",
    )
    tax_per_room_night: float = Field(2.0, alias="TAX_PER_ROOM_NIGHT")
    currency_symbol: str = Field("€", alias="CURRENCY_SYMBOL")

    hotel_name: str = Field("Hotel Maroussi", alias="HOTEL_NAME")
    hotel_address: str = Field(
        "Olympias 10, Maroussi, Athens, 15124, Greece", alias="HOTEL_ADDRESS"
    )
    email_from: str = Field("", alias="EMAIL_FROM")
    email_to: str = Field("", alias="EMAIL_TO")

    turnstile_secret_key: str = Field("", alias="TURNSTILE_SECRET_KEY")
    turnstile_verify_url: AnyHttpUrl = Field(
        "https://challenges.cloudflare.com/turnstile/v0/siteverify",
        alias="TURNSTILE_VERIFY_URL",
    )
    http_timeout: float = Field(10.0, alias="HTTP_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, v: Any) -> Any:
        """Accepts a JSON list or a comma/space separated ALLOWED_ORIGINS value."""
        if v is None:
            return ANY_ORIGIN
        if isinstance(v, str):
            text = v.strip()
            try:
                v = json.loads(text) if text.startswith(("[", '"')) else None
            except json.JSONDecodeError:
                v = None
            if v is None:
                v = re.split(r"[,\s]+", text)
            elif isinstance(v, str):
                v = [v]
        if isinstance(v, (list, tuple, set)):
            origins = tuple(
                origin for origin in (str(item).strip().strip("\"'") for item in v) if origin
            )
            return origins or ANY_ORIGIN
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
