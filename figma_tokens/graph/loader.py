"""Graph loader and normalizer.

Validates the raw Figma variable graph and indexes it into a
:class:`VariableGraph`: variables and collections by id, the mode catalogs
of the three mode dimensions, and the processing policy of every collection.
"""

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import StructureError
from ..tokens_logging import LogCategory, get_category_logger
from .models import Collection, ModeDimension, ModeOption, Variable
from .policies import ProcessingPolicy, policy_for_collection

logger = get_category_logger(LogCategory.LOADER)

# Placeholder catalogs used when a designated collection is missing. The
# null mode ids make alias resolution fall back to each target's first mode.
DEFAULT_MODE_NAMES: dict[ModeDimension, tuple[str, ...]] = {
    ModeDimension.COLOR: ("Blue", "Green", "Red", "Yellow"),
    ModeDimension.STATUS: ("Info", "Success", "Warning", "Error", "Generic"),
    ModeDimension.THEME: ("Neutral", "Neutral inverse", "Subtle", "Bold"),
}


@dataclass
class VariableGraph:
    """Immutable, indexed view of one raw variable graph."""

    variables: dict[str, Variable] = field(default_factory=dict)
    collections: dict[str, Collection] = field(default_factory=dict)
    mode_catalogs: dict[ModeDimension, list[ModeOption]] = field(default_factory=dict)
    policies: dict[str, ProcessingPolicy] = field(default_factory=dict)

    # Variable lookup. The tiers are exposed separately so each can be
    # exercised on its own; find_variable chains them.

    def find_exact(self, variable_id: str) -> Variable | None:
        return self.variables.get(variable_id)

    def find_by_short_id(self, variable_id: str) -> Variable | None:
        """Look up by the segment after the last ``:`` of a composite id."""
        short_id = variable_id.split(":")[-1]
        if not short_id:
            return None
        return self.variables.get(short_id)

    def find_fuzzy(self, variable_id: str) -> Variable | None:
        """Compatibility shim for id formats that drift across API versions.

        Returns the first variable whose key is a suffix of the id or has the
        id as a suffix. Empty ids and keys never match.
        """
        if not variable_id:
            return None
        for key, variable in self.variables.items():
            if not key:
                continue
            if key == variable_id or key.endswith(variable_id) or variable_id.endswith(key):
                return variable
        return None

    def find_variable(self, variable_id: str) -> Variable | None:
        """Three-tier lookup: exact, then short id, then fuzzy match."""
        if not variable_id:
            return None
        return (
            self.find_exact(variable_id)
            or self.find_by_short_id(variable_id)
            or self.find_fuzzy(variable_id)
        )

    def collection_of(self, variable: Variable) -> Collection | None:
        return self.collections.get(variable.collection_id)

    def find_collection_by_name(self, name: str) -> Collection | None:
        """First collection with the given name, in declaration order."""
        for collection in self.collections.values():
            if collection.name == name:
                return collection
        return None

    def modes_for(self, dimension: ModeDimension) -> list[ModeOption]:
        return self.mode_catalogs.get(dimension, [])

    @property
    def color_modes(self) -> list[ModeOption]:
        return self.modes_for(ModeDimension.COLOR)

    @property
    def status_modes(self) -> list[ModeOption]:
        return self.modes_for(ModeDimension.STATUS)

    @property
    def theme_modes(self) -> list[ModeOption]:
        return self.modes_for(ModeDimension.THEME)

    def policy_for(self, collection: Collection) -> ProcessingPolicy:
        return self.policies.get(collection.id, ProcessingPolicy.STANDARD)

    def iter_variables(self) -> Iterator[Variable]:
        """Variables in declaration order."""
        return iter(self.variables.values())


class GraphLoader:
    """Builds a :class:`VariableGraph` from the raw JSON document."""

    def __init__(self, source: str | None = None):
        """Initialize the loader.

        Args:
            source: Optional description of where the document came from,
                reported in structure errors.
        """
        self.source = source

    def load(self, raw: Any) -> VariableGraph:
        """Validate and index a raw graph document.

        Args:
            raw: Parsed JSON document with a ``meta`` object.

        Returns:
            The indexed graph.

        Raises:
            StructureError: If ``meta.variables`` or
                ``meta.variableCollections`` is missing or not a mapping, or a
                record inside them is malformed.
        """
        if not isinstance(raw, dict):
            raise StructureError("Invalid raw data structure: expected a JSON object", self.source)

        meta = raw.get("meta")
        if not isinstance(meta, dict):
            raise StructureError("Invalid raw data structure: missing 'meta'", self.source)

        raw_variables = meta.get("variables")
        raw_collections = meta.get("variableCollections")
        if not isinstance(raw_variables, dict) or not isinstance(raw_collections, dict):
            raise StructureError(
                "Invalid raw data structure: 'meta' requires 'variables' and "
                "'variableCollections' maps",
                self.source,
            )

        collections: dict[str, Collection] = {}
        for collection_id, record in raw_collections.items():
            if not isinstance(record, dict):
                raise StructureError(f"Collection record {collection_id} is not an object", self.source)
            if not isinstance(record.get("modes") or [], list):
                raise StructureError(
                    f"Collection record {collection_id} has a malformed 'modes' list", self.source
                )
            collections[collection_id] = Collection.from_dict(record, collection_id)

        variables: dict[str, Variable] = {}
        for variable_id, record in raw_variables.items():
            if not isinstance(record, dict):
                raise StructureError(f"Variable record {variable_id} is not an object", self.source)
            if not isinstance(record.get("valuesByMode") or {}, dict):
                raise StructureError(
                    f"Variable record {variable_id} has a malformed 'valuesByMode' map", self.source
                )
            variables[variable_id] = Variable.from_dict(record, variable_id)

        graph = VariableGraph(
            variables=variables,
            collections=collections,
            mode_catalogs={
                dimension: self._mode_catalog(collections, dimension)
                for dimension in ModeDimension
            },
            policies={
                collection_id: policy_for_collection(collection.name)
                for collection_id, collection in collections.items()
            },
        )

        logger.info(f"Found {len(variables)} variables")
        logger.info(f"Found {len(collections)} collections")
        return graph

    @staticmethod
    def _mode_catalog(
        collections: dict[str, Collection], dimension: ModeDimension
    ) -> list[ModeOption]:
        """Mode options of a dimension, from its designated collection."""
        for collection in collections.values():
            if collection.name == dimension.collection_name and collection.modes:
                return [ModeOption(mode.name, mode.mode_id) for mode in collection.modes]

        logger.debug(
            f"No '{dimension.collection_name}' collection, using default "
            f"{dimension.name.lower()} modes"
        )
        return [ModeOption(name) for name in DEFAULT_MODE_NAMES[dimension]]


def load_graph(raw: Any, source: str | None = None) -> VariableGraph:
    """Validate and index a raw graph document."""
    return GraphLoader(source).load(raw)


def load_raw_graph(path: Path | str) -> dict[str, Any]:
    """Read a raw graph JSON document from disk.

    Raises:
        StructureError: If the file is missing, is not valid JSON, or its top
            level is not an object.
    """
    path = Path(path)
    if not path.exists():
        raise StructureError(f"Raw graph file not found: {path}", str(path))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StructureError(f"Raw graph is not valid JSON: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise StructureError("Invalid raw data structure: expected a JSON object", str(path))
    return data
