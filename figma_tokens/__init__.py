"""Figma variables to mode-expanded design tokens.

Loads the raw variable graph exported by the Figma API, resolves alias
chains under combined mode contexts, and writes one token file per output
collection.
"""

__version__ = "1.0.0"

from .errors import (
    ConfigurationError,
    FetchError,
    StructureError,
    TokensError,
    TreePollutionError,
)
from .pipeline import PipelineResult, TokenPipeline

__all__ = [
    "ConfigurationError",
    "FetchError",
    "PipelineResult",
    "StructureError",
    "TokenPipeline",
    "TokensError",
    "TreePollutionError",
    "__version__",
]
