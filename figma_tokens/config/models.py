"""Configuration model for the token pipeline."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, validator

DEFAULT_TARGET_COLLECTIONS = [
    "Colour",
    "Component themes",
    "Foundations",
    "Layout",
    "Typography",
]


class TokensConfig(BaseModel):
    """Pipeline configuration with validation."""

    # Figma API
    figma_access_token: str = Field(default="")
    figma_file_key: str = Field(default="")
    figma_base_url: str = Field(default="https://api.figma.com/v1")
    request_timeout: float = Field(default=30.0, gt=0)

    # Files
    raw_path: Path = Field(default=Path("tokens/figma-variables-raw.json"))
    output_dir: Path = Field(default=Path("tokens"))

    # Output collections, in output order. Link and Link menu are folded
    # into Component themes before filtering.
    target_collections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TARGET_COLLECTIONS)
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text")
    log_file: Path | None = Field(default=None)

    @validator("figma_base_url")
    def validate_base_url(cls, v: Any) -> str:
        v = str(v).strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("figma_base_url must be an http(s) URL")
        return v.rstrip("/")

    @validator("log_level")
    def validate_log_level(cls, v: Any) -> str:
        level = str(v).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @validator("log_format")
    def validate_log_format(cls, v: Any) -> str:
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v

    @validator("target_collections")
    def validate_target_collections(cls, v: Any) -> list[str]:
        names = [str(name).strip() for name in v if str(name).strip()]
        if not names:
            raise ValueError("target_collections cannot be empty")
        return names

    @property
    def has_fetch_credentials(self) -> bool:
        return bool(self.figma_access_token and self.figma_file_key)
