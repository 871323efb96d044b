"""Data models for the raw Figma variable graph.

The raw graph is the ``meta`` payload of the Figma
``/files/<key>/variables/local`` endpoint: a map of variables and a map of
variable collections. Records are converted into these dataclasses once per
run and are not mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ALIAS_TYPE = "VARIABLE_ALIAS"


class ResolvedType(Enum):
    """Declared value type of a variable."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class ModeDimension(Enum):
    """Independent axes of variation, keyed by their designated collection name."""

    COLOR = "Colour"
    STATUS = "Status"
    THEME = "Component themes"

    @property
    def collection_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class VariableAlias:
    """A raw value that references another variable by id."""

    id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the raw upstream representation."""
        return {"type": ALIAS_TYPE, "id": self.id}

    @staticmethod
    def is_alias(value: Any) -> bool:
        """Check whether a raw upstream value is an alias marker."""
        return isinstance(value, dict) and value.get("type") == ALIAS_TYPE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VariableAlias":
        return cls(id=str(data.get("id", "")))


@dataclass(frozen=True)
class Mode:
    """One named variant declared by a collection."""

    mode_id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"modeId": self.mode_id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Mode":
        return cls(mode_id=str(data.get("modeId", "")), name=str(data.get("name", "")))


@dataclass
class Collection:
    """A group of modes and the variables that vary across them."""

    id: str
    name: str
    modes: list[Mode] = field(default_factory=list)
    default_mode_id: str | None = None

    def find_mode(self, mode_id: str) -> Mode | None:
        """Look up a declared mode by id."""
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode
        return None

    @property
    def is_multi_mode(self) -> bool:
        return len(self.modes) > 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to the raw upstream representation."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "modes": [mode.to_dict() for mode in self.modes],
        }
        if self.default_mode_id is not None:
            data["defaultModeId"] = self.default_mode_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any], collection_id: str | None = None) -> "Collection":
        """Create from a raw upstream record.

        Args:
            data: Raw collection record.
            collection_id: Key of the record in the collections map, used when
                the record itself carries no id.
        """
        return cls(
            id=str(data.get("id") or collection_id or ""),
            name=str(data.get("name", "")),
            modes=[Mode.from_dict(m) for m in data.get("modes") or [] if isinstance(m, dict)],
            default_mode_id=data.get("defaultModeId"),
        )


@dataclass
class Variable:
    """A named, typed design value with per-mode raw values.

    ``values_by_mode`` preserves declaration order. Each value is either a
    concrete literal or a :class:`VariableAlias`.
    """

    id: str
    name: str
    collection_id: str
    resolved_type: ResolvedType | str
    values_by_mode: dict[str, Any] = field(default_factory=dict)
    description: str | None = None

    @property
    def first_mode_id(self) -> str | None:
        """The first declared mode id, used as the resolution fallback."""
        return next(iter(self.values_by_mode), None)

    @property
    def type_name(self) -> str:
        if isinstance(self.resolved_type, ResolvedType):
            return self.resolved_type.value
        return self.resolved_type

    def to_dict(self) -> dict[str, Any]:
        """Convert to the raw upstream representation."""
        return {
            "id": self.id,
            "name": self.name,
            "variableCollectionId": self.collection_id,
            "resolvedType": self.type_name,
            "description": self.description or "",
            "valuesByMode": {
                mode_id: value.to_dict() if isinstance(value, VariableAlias) else value
                for mode_id, value in self.values_by_mode.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], variable_id: str | None = None) -> "Variable":
        """Create from a raw upstream record."""
        raw_type = str(data.get("resolvedType", ""))
        try:
            resolved_type: ResolvedType | str = ResolvedType(raw_type)
        except ValueError:
            resolved_type = raw_type

        values: dict[str, Any] = {}
        for mode_id, value in (data.get("valuesByMode") or {}).items():
            values[mode_id] = (
                VariableAlias.from_dict(value) if VariableAlias.is_alias(value) else value
            )

        return cls(
            id=str(data.get("id") or variable_id or ""),
            name=str(data.get("name", "")),
            collection_id=str(data.get("variableCollectionId", "")),
            resolved_type=resolved_type,
            values_by_mode=values,
            description=data.get("description") or None,
        )


@dataclass(frozen=True)
class ModeOption:
    """One entry of a mode dimension catalog.

    ``mode_id`` is None for the placeholder entries used when the designated
    collection is absent from the graph.
    """

    name: str
    mode_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "modeId": self.mode_id}
