"""Per-collection processing policies.

A collection's policy decides how its variables expand across mode
dimensions. The policy is chosen once per collection when the graph is
loaded.
"""

from enum import Enum

from .models import ModeDimension

LINK_COLLECTIONS = frozenset(["Link", "Link menu"])


class ProcessingPolicy(Enum):
    """How a collection's variables are expanded into tokens."""

    STANDARD = "standard"  # one token per declared mode
    THEME_BEARING = "theme_bearing"  # own theme modes x color or status modes
    LINK_BEARING = "link_bearing"  # all theme modes x color or status modes

    @property
    def expands(self) -> bool:
        return self is not ProcessingPolicy.STANDARD


def policy_for_collection(name: str) -> ProcessingPolicy:
    """Select the processing policy for a collection name.

    Unrecognised collections fall back to the standard policy.
    """
    if name == ModeDimension.THEME.collection_name:
        return ProcessingPolicy.THEME_BEARING
    if name in LINK_COLLECTIONS:
        return ProcessingPolicy.LINK_BEARING
    return ProcessingPolicy.STANDARD


def output_collection_for(name: str) -> str:
    """Name of the output tree a collection's tokens are written into.

    Link collections are folded into the Component themes output.
    """
    if name in LINK_COLLECTIONS:
        return ModeDimension.THEME.collection_name
    return name
