"""Console reporting for the figma-tokens commands.

Results go to stdout and failures to stderr. Color follows the NO_COLOR
convention (https://no-color.org/), FORCE_COLOR and the --no-color flag.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

import click

from .errors import handle_exception
from .graph import ModeDimension, ModeOption


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Decide whether to emit ANSI styling.

    The explicit flag wins, then NO_COLOR, then FORCE_COLOR, then whether
    the stream is a terminal.
    """
    if explicit_flag is not None:
        return explicit_flag
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True

    stream = stream or sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())


@dataclass
class OutputConfig:
    """Console behavior selected by the command-line flags."""

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> "OutputConfig":
        use_color = should_use_color(explicit_flag=False if no_color else None)
        return cls(use_color=use_color, quiet=quiet, verbose=verbose)


class OutputManager:
    """Prints command results and failures.

    Example:
        >>> output = OutputManager(OutputConfig(use_color=False))
        >>> output.collection_written("Colour", 4, Path("tokens/colour.json"))
        [OK] Colour: 4 tokens -> tokens/colour.json
    """

    # status -> (plain label, colored symbol, color)
    STATUS_MARKS = {
        "ok": ("[OK]", "✓", "green"),
        "warn": ("[WARN]", "⚠", "yellow"),
    }

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _emit(self, line: str, err: bool = False, force: bool = False) -> None:
        if self.config.quiet and not err and not force:
            return
        stream = self.config.err_stream if err else self.config.stream
        click.echo(line, file=stream)

    def _mark(self, status: str) -> str:
        label, symbol, color = self.STATUS_MARKS[status]
        if not self.config.use_color:
            return label
        return click.style(symbol, fg=color)

    def success(self, message: str, force: bool = False) -> None:
        self._emit(f"{self._mark('ok')} {message}", force=force)

    def warning(self, message: str, force: bool = False) -> None:
        self._emit(f"{self._mark('warn')} {message}", force=force)

    def plain(self, message: str) -> None:
        self._emit(message)

    def header(self, title: str) -> None:
        """Section title underlined with ``=``."""
        styled = click.style(title, bold=True) if self.config.use_color else title
        self._emit(styled)
        self._emit("=" * len(title))

    def collection_written(self, name: str, token_count: int, path: Path | None) -> None:
        """One line per output collection; dry runs have no path."""
        target = f" -> {path}" if path else ""
        self.success(f"{name}: {token_count} tokens{target}")

    def raw_summary(self, summary: dict[str, Any]) -> None:
        """Counts and collection modes of a fetched raw graph."""
        self.header("Raw Data Summary")
        self.plain(f"Total variables: {summary['variable_count']}")
        self.plain(f"Total collections: {summary['collection_count']}")
        for name, modes in summary["collections"].items():
            self.plain(f"  {name}: [{', '.join(modes) or 'none'}]")
        if summary["error"]:
            self.warning(f"API returned error: {summary['error']}", force=True)

    def mode_catalogs(self, catalogs: dict[ModeDimension, list[ModeOption]]) -> None:
        """Mode dimension catalogs, marking placeholder modes with ``*``."""
        self.header("Mode dimensions")
        has_placeholders = False
        for dimension, options in catalogs.items():
            names = []
            for option in options:
                if option.mode_id is None:
                    has_placeholders = True
                    names.append(f"{option.name}*")
                else:
                    names.append(option.name)
            self.plain(f"  {dimension.name.lower()}: [{', '.join(names)}]")
        if has_placeholders:
            self.plain("  * default placeholder, designated collection missing")

    def summary(
        self,
        total: int,
        skipped: int = 0,
        unresolved: int = 0,
        duration_ms: float | None = None,
    ) -> None:
        """Final produced/skipped line, shown even in quiet mode."""
        parts = [f"{total} tokens"]
        if skipped > 0:
            parts.append(f"{skipped} skipped")
        if unresolved > 0:
            parts.append(f"{unresolved} unresolved")
        if duration_ms is not None:
            parts.append(f"{duration_ms:.0f}ms" if duration_ms < 1000 else f"{duration_ms / 1000:.1f}s")

        status = "warn" if skipped or unresolved else "ok"
        self._emit(f"{self._mark(status)} {' | '.join(parts)}", force=True)

    def error(self, error: Exception) -> int:
        """Report a fatal error on stderr.

        Returns:
            The exit code for the failure.
        """
        message, exit_code = handle_exception(
            error, use_color=self.config.use_color, verbose=self.config.verbose
        )
        self._emit(message, err=True)
        return exit_code
