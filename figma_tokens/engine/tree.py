"""Hierarchical token tree keyed by name path."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ..errors import TreePollutionError
from .values import TokenValue

# Names that would corrupt the tree or its persisted form. The ``$`` keys
# are the metadata keys written alongside the tree in token files.
RESERVED_SEGMENTS = frozenset(
    ["__proto__", "constructor", "prototype", "$description", "$timestamp"]
)


@dataclass(frozen=True)
class ResolvedToken:
    """A fully resolved, concrete token."""

    value: TokenValue
    type: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"value": self.value, "type": self.type}
        if self.description:
            data["description"] = self.description
        return data


class TokenTree:
    """Ordered nested mapping of path segments to tokens.

    Inner nodes are plain dicts; leaves are :class:`ResolvedToken`. Writes
    are last-write-wins: inserting at an existing path replaces the node
    there, and inserting through an existing leaf replaces that leaf with a
    nested mapping.
    """

    def __init__(self) -> None:
        self._root: dict[str, Any] = {}

    @staticmethod
    def _check_segment(segment: str, path: list[str]) -> None:
        if segment in RESERVED_SEGMENTS:
            raise TreePollutionError(segment, path)

    def insert(self, path: list[str], token: ResolvedToken) -> None:
        """Write a token at a path, creating intermediate levels.

        Raises:
            TreePollutionError: If any segment is a reserved name.
            ValueError: If the path is empty.
        """
        if not path:
            raise ValueError("Token path must not be empty")

        current = self._root
        for segment in path[:-1]:
            self._check_segment(segment, path)
            child = current.get(segment)
            # Tokens never hold child keys; a leaf in the way is dropped
            # rather than extended with the deeper path.
            if not isinstance(child, dict):
                child = {}
                current[segment] = child
            current = child

        self._check_segment(path[-1], path)
        current[path[-1]] = token

    def get(self, path: list[str]) -> Any:
        """Node at a path: a token, a nested dict, or None when absent."""
        current: Any = self._root
        for segment in path:
            if not isinstance(current, dict) or segment not in current:
                return None
            current = current[segment]
        return current

    def leaves(self) -> Iterator[tuple[list[str], ResolvedToken]]:
        """Iterate ``(path, token)`` pairs in insertion order."""

        def walk(node: dict[str, Any], prefix: list[str]) -> Iterator[tuple[list[str], ResolvedToken]]:
            for key, child in node.items():
                if isinstance(child, dict):
                    yield from walk(child, prefix + [key])
                else:
                    yield prefix + [key], child

        return walk(self._root, [])

    def __len__(self) -> int:
        return sum(1 for _ in self.leaves())

    def __bool__(self) -> bool:
        return bool(self._root)

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested plain dictionaries for JSON serialization."""

        def convert(node: dict[str, Any]) -> dict[str, Any]:
            return {
                key: convert(child) if isinstance(child, dict) else child.to_dict()
                for key, child in node.items()
            }

        return convert(self._root)
