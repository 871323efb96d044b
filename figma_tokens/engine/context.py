"""Mode context carried through alias resolution."""

from dataclasses import dataclass

from ..graph.models import ModeDimension


@dataclass(frozen=True)
class ModeContext:
    """Selected mode id per mode dimension.

    The context is fixed for a whole alias chain, so a chain that passes
    from a Component themes variable into a Colour variable picks the
    matching sibling mode at each hop.
    """

    theme_mode_id: str | None = None
    color_mode_id: str | None = None
    status_mode_id: str | None = None

    def mode_for_collection(self, collection_name: str) -> str | None:
        """Mode id the context selects for a collection, if any."""
        if collection_name == ModeDimension.THEME.collection_name:
            return self.theme_mode_id
        if collection_name == ModeDimension.COLOR.collection_name:
            return self.color_mode_id
        if collection_name == ModeDimension.STATUS.collection_name:
            return self.status_mode_id
        return None

    def with_expansion(self, dimension: ModeDimension, mode_id: str | None) -> "ModeContext":
        """Copy of this context with the color or status mode id set."""
        if dimension is ModeDimension.STATUS:
            return ModeContext(self.theme_mode_id, self.color_mode_id, mode_id)
        if dimension is ModeDimension.COLOR:
            return ModeContext(self.theme_mode_id, mode_id, self.status_mode_id)
        return ModeContext(mode_id, self.color_mode_id, self.status_mode_id)
