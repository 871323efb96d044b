"""Persistence of raw graphs and per-collection token files."""

import json
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .engine.tree import TokenTree
from .tokens_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.STORAGE)

_WHITESPACE_RE = re.compile(r"\s+")


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def collection_filename(name: str) -> str:
    """File name for a collection, e.g. ``Component themes`` -> ``component-themes.json``."""
    return _WHITESPACE_RE.sub("-", name.lower()) + ".json"


def _write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


class TokenFileWriter:
    """Writes one standalone JSON document per output collection."""

    def __init__(self, output_dir: Path | str):
        self.output_dir = Path(output_dir)

    def build_document(
        self, collection_name: str, tree: TokenTree, timestamp: str | None = None
    ) -> dict[str, Any]:
        """Token file payload: metadata keys followed by the token tree."""
        return {
            "$description": f"Design tokens from {collection_name} collection",
            "$timestamp": timestamp or utc_timestamp(),
            **tree.to_dict(),
        }

    def write(
        self, trees: dict[str, TokenTree], timestamp: str | None = None
    ) -> dict[str, Path]:
        """Write every tree to its collection file.

        Args:
            trees: Token trees keyed by output collection name.
            timestamp: Timestamp to stamp on every file. Defaults to now.

        Returns:
            Written file path per collection name.
        """
        timestamp = timestamp or utc_timestamp()
        written: dict[str, Path] = {}

        for collection_name, tree in trees.items():
            path = self.output_dir / collection_filename(collection_name)
            _write_json(path, self.build_document(collection_name, tree, timestamp))
            logger.info(f"Wrote {path}", extra={"collection": collection_name, "token_count": len(tree)})
            written[collection_name] = path

        return written


def save_raw_graph(data: dict[str, Any], path: Path | str, file_key: str) -> Path:
    """Save a fetched raw graph with source metadata.

    Returns:
        The written path.
    """
    path = Path(path)
    document = {
        "$description": "Raw design variables from Figma API (unprocessed)",
        "$timestamp": utc_timestamp(),
        "$source": f"figma://file/{file_key}",
        "$endpoint": f"/files/{file_key}/variables/local",
        **data,
    }
    _write_json(path, document)
    logger.info(f"Raw data saved to: {path}")
    return path
