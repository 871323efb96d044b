"""Batch orchestration of the token pipeline.

Coordinates the one-shot flow:
- Load and index the raw variable graph
- Resolve and expand every variable into token trees
- Filter to the output collections
- Write one token file per collection
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import TokensConfig
from .engine import ExpansionStats, TokenExpander, TokenTree, filter_collections
from .graph import load_graph, load_raw_graph
from .storage import TokenFileWriter
from .tokens_logging import get_logger

logger = get_logger()


@dataclass
class PipelineResult:
    """Outcome of one pipeline run."""

    trees: dict[str, TokenTree] = field(default_factory=dict)
    stats: ExpansionStats = field(default_factory=ExpansionStats)
    written_files: dict[str, Path] = field(default_factory=dict)
    dropped_collections: list[str] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def token_counts(self) -> dict[str, int]:
        return {name: len(tree) for name, tree in self.trees.items()}

    @property
    def summary(self) -> str:
        """Generate brief summary of results."""
        parts = [
            f"Produced {sum(self.token_counts.values())} tokens",
            f"in {len(self.trees)} collections",
            f"from {self.stats.variables_processed} variables.",
        ]
        if self.stats.skipped:
            parts.append(f"Skipped {self.stats.skipped} variables.")
        if self.stats.unresolved_values:
            parts.append(f"{self.stats.unresolved_values} values did not resolve.")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "token_counts": self.token_counts,
            "stats": self.stats.to_dict(),
            "written_files": {name: str(path) for name, path in self.written_files.items()},
            "dropped_collections": self.dropped_collections,
            "execution_time_ms": self.execution_time_ms,
        }


class TokenPipeline:
    """Runs the raw-graph-to-token-files transformation."""

    def __init__(self, config: TokensConfig | None = None):
        self.config = config or TokensConfig()

    def run(
        self,
        raw: dict[str, Any] | None = None,
        dry_run: bool = False,
        timestamp: str | None = None,
    ) -> PipelineResult:
        """Execute one full pass.

        Args:
            raw: Parsed raw graph. Read from ``config.raw_path`` when omitted.
            dry_run: Resolve and expand without writing files.
            timestamp: Fixed timestamp for written files.

        Returns:
            PipelineResult with the filtered trees and statistics.

        Raises:
            StructureError: If the raw graph is malformed.
            TreePollutionError: If a token path uses a reserved name. No
                files are written in that case.
        """
        start = time.perf_counter()
        source = None
        if raw is None:
            source = str(self.config.raw_path)
            logger.info(f"Reading raw Figma data from {source}")
            raw = load_raw_graph(self.config.raw_path)

        graph = load_graph(raw, source)
        expansion = TokenExpander(graph).expand()

        trees = filter_collections(expansion.trees, self.config.target_collections)
        dropped = [name for name in expansion.trees if name not in trees]
        if dropped:
            logger.debug(f"Dropped collections outside the output list: {', '.join(dropped)}")

        written: dict[str, Path] = {}
        if not dry_run:
            written = TokenFileWriter(self.config.output_dir).write(trees, timestamp)

        return PipelineResult(
            trees=trees,
            stats=expansion.stats,
            written_files=written,
            dropped_collections=dropped,
            execution_time_ms=(time.perf_counter() - start) * 1000,
        )
