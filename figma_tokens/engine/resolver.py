"""Mode-aware alias resolution.

An alias chain is followed hop by hop until a concrete value is reached.
At every hop the mode of the target variable is selected from the mode
context according to the target's collection, falling back to the target's
first declared mode. The concrete value is converted with the declared type
of the variable that holds it.

Unresolvable ids and cycles resolve to None ("no token"), they never raise.
"""

from collections.abc import Callable
from typing import Any

from ..graph.loader import VariableGraph
from ..graph.models import Variable, VariableAlias
from ..tokens_logging import LogCategory, get_category_logger
from .context import ModeContext
from .values import convert_value

logger = get_category_logger(LogCategory.ENGINE)

# Picks the mode id to read on a target variable, given the mode id used on
# the previous hop.
ModeSelector = Callable[[Variable, str | None], str | None]


class AliasResolver:
    """Resolves alias chains against one variable graph."""

    def __init__(self, graph: VariableGraph):
        self.graph = graph

    def resolve_alias(
        self,
        alias_id: str,
        context: ModeContext,
        seen: set[str] | None = None,
    ) -> Any:
        """Resolve an alias under a mode context.

        Args:
            alias_id: Id of the referenced variable, possibly in a drifted
                or composite format.
            context: Mode ids to select for Component themes, Colour and
                Status targets. Kept unchanged along the whole chain.
            seen: Ids already visited in this resolution.

        Returns:
            The canonical token value, or None if the chain is broken or
            cyclic.
        """

        def select(target: Variable, previous: str | None) -> str | None:
            collection = self.graph.collection_of(target)
            if collection is None:
                return None
            return context.mode_for_collection(collection.name)

        return self._follow(alias_id, select, None, seen)

    def resolve_value(self, variable: Variable, value: Any, mode_id: str | None) -> Any:
        """Resolve one raw value of a variable under a single mode id.

        Concrete values are converted with the variable's own type. Aliases
        are followed reading each target at the current mode id when the
        target declares it, else at the target's first mode.
        """
        if isinstance(value, VariableAlias):
            return self._follow(value.id, lambda target, previous: previous, mode_id, None)
        return convert_value(variable.resolved_type, value)

    def _follow(
        self,
        alias_id: str,
        select: ModeSelector,
        mode_id: str | None,
        seen: set[str] | None,
    ) -> Any:
        seen = set() if seen is None else seen
        current_id = alias_id

        while True:
            target = self.graph.find_variable(current_id)
            if target is None:
                logger.debug(f"Unresolved alias: {current_id}")
                return None

            if target.id in seen or current_id in seen:
                logger.debug(f"Alias cycle detected at {target.name} ({target.id})")
                return None
            seen.add(target.id)
            seen.add(current_id)

            selected = select(target, mode_id)
            if not selected or selected not in target.values_by_mode:
                selected = target.first_mode_id
            if selected is None:
                return None
            mode_id = selected

            value = target.values_by_mode[selected]
            if isinstance(value, VariableAlias):
                current_id = value.id
                continue

            return convert_value(target.resolved_type, value)
