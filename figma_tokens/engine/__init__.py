"""Resolution and expansion engine.

Turns an indexed variable graph into mode-expanded token trees, one per
output collection.
"""

from .context import ModeContext
from .expander import (
    ExpansionResult,
    ExpansionStats,
    TokenExpander,
    expand_graph,
    filter_collections,
    is_status_name,
)
from .naming import has_invalid_final_segment, parse_variable_name
from .resolver import AliasResolver
from .tree import RESERVED_SEGMENTS, ResolvedToken, TokenTree
from .values import classify_token_kind, convert_value, rgb_to_hex

__all__ = [
    "AliasResolver",
    "ExpansionResult",
    "ExpansionStats",
    "ModeContext",
    "RESERVED_SEGMENTS",
    "ResolvedToken",
    "TokenExpander",
    "TokenTree",
    "classify_token_kind",
    "convert_value",
    "expand_graph",
    "filter_collections",
    "has_invalid_final_segment",
    "is_status_name",
    "parse_variable_name",
    "rgb_to_hex",
]
