"""Raw variable graph models and loader."""

from .loader import DEFAULT_MODE_NAMES, GraphLoader, VariableGraph, load_graph, load_raw_graph
from .models import (
    Collection,
    Mode,
    ModeDimension,
    ModeOption,
    ResolvedType,
    Variable,
    VariableAlias,
)
from .policies import ProcessingPolicy, output_collection_for, policy_for_collection

__all__ = [
    "Collection",
    "DEFAULT_MODE_NAMES",
    "GraphLoader",
    "Mode",
    "ModeDimension",
    "ModeOption",
    "ProcessingPolicy",
    "ResolvedType",
    "Variable",
    "VariableAlias",
    "VariableGraph",
    "load_graph",
    "load_raw_graph",
    "output_collection_for",
    "policy_for_collection",
]
