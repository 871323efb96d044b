"""Configuration package.

Configuration Precedence (highest to lowest):
1. Explicit overrides
2. Environment variables
3. ``.env`` file
4. Defaults
"""

from .loader import load_config, parse_env_file, require_fetch_credentials
from .models import DEFAULT_TARGET_COLLECTIONS, TokensConfig

__all__ = [
    "DEFAULT_TARGET_COLLECTIONS",
    "TokensConfig",
    "load_config",
    "parse_env_file",
    "require_fetch_credentials",
]
