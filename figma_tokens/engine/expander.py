"""Token expansion across mode dimensions.

Every variable is dispatched on the processing policy of its collection:

- STANDARD: one token per declared mode. The mode name becomes a trailing
  path segment only when the collection declares more than one mode.
- THEME_BEARING: each of the variable's own theme modes is crossed with
  every color mode, or every status mode for status-flavored names. The
  path gains ``[theme mode, color/status mode]``.
- LINK_BEARING: the variable's value is crossed with every theme mode and
  every color (or status) mode, and written into the Component themes tree.
"""

from dataclasses import dataclass, field
from typing import Any

from ..graph.loader import VariableGraph
from ..graph.models import Collection, ModeDimension, ModeOption, Variable, VariableAlias
from ..graph.policies import ProcessingPolicy, output_collection_for
from ..tokens_logging import LogCategory, get_category_logger
from .context import ModeContext
from .naming import has_invalid_final_segment, parse_variable_name
from .resolver import AliasResolver
from .tree import ResolvedToken, TokenTree
from .values import classify_token_kind, convert_value

logger = get_category_logger(LogCategory.ENGINE)

DEFAULT_MODE_NAME = "default"


@dataclass
class ExpansionStats:
    """Counters for one expansion pass."""

    variables_processed: int = 0
    tokens_produced: int = 0
    skipped_invalid_name: int = 0
    skipped_unknown_collection: int = 0
    unresolved_values: int = 0

    @property
    def skipped(self) -> int:
        return self.skipped_invalid_name + self.skipped_unknown_collection

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "variables_processed": self.variables_processed,
            "tokens_produced": self.tokens_produced,
            "skipped_invalid_name": self.skipped_invalid_name,
            "skipped_unknown_collection": self.skipped_unknown_collection,
            "unresolved_values": self.unresolved_values,
        }


@dataclass
class ExpansionResult:
    """Token trees per output collection plus pass statistics."""

    trees: dict[str, TokenTree] = field(default_factory=dict)
    stats: ExpansionStats = field(default_factory=ExpansionStats)

    def to_dict(self) -> dict[str, Any]:
        return {name: tree.to_dict() for name, tree in self.trees.items()}


def filter_collections(
    trees: dict[str, TokenTree], allowed: list[str]
) -> dict[str, TokenTree]:
    """Keep only allow-listed output collections, in allow-list order."""
    return {name: trees[name] for name in allowed if name in trees}


def is_status_name(name: str) -> bool:
    """Status-flavored tokens expand across status modes instead of color modes."""
    return "status" in name.lower()


class TokenExpander:
    """Expands every variable of a graph into resolved tokens."""

    def __init__(self, graph: VariableGraph):
        self.graph = graph
        self.resolver = AliasResolver(graph)

    def expand(self) -> ExpansionResult:
        """Run one full pass over all variables in declaration order.

        Returns:
            Trees for every collection that received variables, including
            collections later dropped by the output allow-list.

        Raises:
            TreePollutionError: If a token path contains a reserved segment.
        """
        result = ExpansionResult()

        for variable in self.graph.iter_variables():
            collection = self.graph.collection_of(variable)
            if collection is None:
                logger.debug(
                    f"Skipping variable {variable.name}: unknown collection "
                    f"{variable.collection_id}"
                )
                result.stats.skipped_unknown_collection += 1
                continue

            name_path = parse_variable_name(variable.name)
            if has_invalid_final_segment(variable.name):
                logger.warning(
                    f"Skipping variable with invalid name (contains space): {variable.name}"
                )
                result.stats.skipped_invalid_name += 1
                continue
            if not name_path:
                logger.warning(f"Skipping variable with empty name: {variable.id}")
                result.stats.skipped_invalid_name += 1
                continue

            tree = result.trees.setdefault(output_collection_for(collection.name), TokenTree())
            result.stats.variables_processed += 1

            policy = self.graph.policy_for(collection)
            if policy is ProcessingPolicy.THEME_BEARING:
                self._expand_theme_variable(variable, collection, name_path, tree, result.stats)
            elif policy is ProcessingPolicy.LINK_BEARING:
                self._expand_link_variable(variable, name_path, tree, result.stats)
            else:
                self._expand_standard_variable(variable, collection, name_path, tree, result.stats)

        for name, tree in result.trees.items():
            logger.debug(f"{name}: {len(tree)} tokens")

        return result

    def _make_token(self, variable: Variable, value: Any) -> ResolvedToken:
        return ResolvedToken(
            value=value,
            type=classify_token_kind(variable.resolved_type, variable.name),
            description=variable.description,
        )

    def _write(
        self,
        tree: TokenTree,
        path: list[str],
        variable: Variable,
        value: Any,
        stats: ExpansionStats,
    ) -> None:
        if value is None:
            stats.unresolved_values += 1
            return
        tree.insert(path, self._make_token(variable, value))
        stats.tokens_produced += 1

    def _expansion_modes(self, variable: Variable) -> tuple[ModeDimension, list[ModeOption]]:
        dimension = ModeDimension.STATUS if is_status_name(variable.name) else ModeDimension.COLOR
        return dimension, self.graph.modes_for(dimension)

    def _expand_standard_variable(
        self,
        variable: Variable,
        collection: Collection,
        name_path: list[str],
        tree: TokenTree,
        stats: ExpansionStats,
    ) -> None:
        for mode_id, value in variable.values_by_mode.items():
            mode = collection.find_mode(mode_id)
            # Orphaned mode data left behind by deleted modes
            if mode is None:
                continue

            mode_name = mode.name or DEFAULT_MODE_NAME
            resolved = self.resolver.resolve_value(variable, value, mode_id)

            if collection.is_multi_mode and mode_name != DEFAULT_MODE_NAME:
                path = name_path + [mode_name]
            else:
                path = name_path
            self._write(tree, path, variable, resolved, stats)

    def _expand_theme_variable(
        self,
        variable: Variable,
        collection: Collection,
        name_path: list[str],
        tree: TokenTree,
        stats: ExpansionStats,
    ) -> None:
        dimension, expansion_modes = self._expansion_modes(variable)

        for theme_mode_id, value in variable.values_by_mode.items():
            mode = collection.find_mode(theme_mode_id)
            theme_name = mode.name if mode and mode.name else DEFAULT_MODE_NAME
            theme_context = ModeContext(theme_mode_id=theme_mode_id)

            for option in expansion_modes:
                if isinstance(value, VariableAlias):
                    context = theme_context.with_expansion(dimension, option.mode_id)
                    resolved = self.resolver.resolve_alias(value.id, context)
                else:
                    resolved = convert_value(variable.resolved_type, value)
                self._write(tree, name_path + [theme_name, option.name], variable, resolved, stats)

    def _expand_link_variable(
        self,
        variable: Variable,
        name_path: list[str],
        tree: TokenTree,
        stats: ExpansionStats,
    ) -> None:
        dimension, expansion_modes = self._expansion_modes(variable)

        # Link collections declare a single default mode; every theme mode
        # is applied to it.
        for value in variable.values_by_mode.values():
            for theme in self.graph.theme_modes:
                theme_context = ModeContext(theme_mode_id=theme.mode_id)
                for option in expansion_modes:
                    if isinstance(value, VariableAlias):
                        context = theme_context.with_expansion(dimension, option.mode_id)
                        resolved = self.resolver.resolve_alias(value.id, context)
                    else:
                        resolved = convert_value(variable.resolved_type, value)
                    self._write(tree, name_path + [theme.name, option.name], variable, resolved, stats)


def expand_graph(graph: VariableGraph) -> ExpansionResult:
    """Expand every variable of a graph into token trees."""
    return TokenExpander(graph).expand()
