"""Configuration loading from overrides, environment and ``.env`` files."""

import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigurationError
from ..tokens_logging import get_logger
from .models import TokensConfig

logger = get_logger()

ENV_FILENAME = ".env"

# Environment variable -> config field
ENV_MAPPING = {
    "FIGMA_ACCESS_TOKEN": "figma_access_token",
    "FIGMA_FILE_KEY": "figma_file_key",
    "FIGMA_BASE_URL": "figma_base_url",
    "FIGMA_REQUEST_TIMEOUT": "request_timeout",
    "FIGMA_TOKENS_RAW_PATH": "raw_path",
    "FIGMA_TOKENS_OUTPUT_DIR": "output_dir",
    "FIGMA_TOKENS_LOG_LEVEL": "log_level",
}


def parse_env_file(env_file: Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines, ignoring blanks and ``#`` comments."""
    values: dict[str, str] = {}
    if not env_file.exists():
        return values

    try:
        with open(env_file, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                key = key.strip()
                value = raw_value.strip()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                    value = value[1:-1]
                if key and value:
                    values[key] = value
    except OSError as e:
        logger.warning(f"Failed to read {env_file}: {e}")

    return values


def load_config(env_file: Path | str | None = None, **overrides: Any) -> TokensConfig:
    """Load configuration from all sources.

    Precedence (highest to lowest):
    1. Explicit overrides (None values are ignored)
    2. Environment variables
    3. ``.env`` file (defaults to ``./.env``)
    4. Defaults

    Raises:
        ConfigurationError: If the merged settings fail validation.
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ENV_FILENAME
    config_dict: dict[str, Any] = {}

    file_values = parse_env_file(env_path)
    environment = {**file_values, **os.environ}

    env_count = 0
    for env_key, field_name in ENV_MAPPING.items():
        value = environment.get(env_key)
        if value:
            config_dict[field_name] = value
            env_count += 1
    if env_count:
        logger.debug(f"Applied {env_count} settings from environment")

    config_dict.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return TokensConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}",
            config_file=str(env_path) if env_path.exists() else None,
        ) from e


def require_fetch_credentials(config: TokensConfig) -> None:
    """Ensure the Figma credentials needed for fetching are present.

    Raises:
        ConfigurationError: Listing every missing credential.
    """
    missing = []
    if not config.figma_access_token:
        missing.append("FIGMA_ACCESS_TOKEN")
    if not config.figma_file_key:
        missing.append("FIGMA_FILE_KEY")

    if missing:
        raise ConfigurationError(
            f"Missing required settings: {', '.join(missing)}",
            suggestion=(
                "Set them in the environment or a .env file, e.g. "
                "FIGMA_ACCESS_TOKEN=your_token FIGMA_FILE_KEY=your_file_key figma-tokens fetch"
            ),
        )
