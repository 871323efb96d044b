"""Structured error types with recovery suggestions.

Only structural and integrity violations are raised. Unresolvable aliases,
alias cycles and invalid variable names are absorbed by the engine and never
surface here.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of pipeline errors."""

    INPUT = "input"  # Raw graph is malformed
    INTEGRITY = "integrity"  # Output tree would be corrupted
    CONFIGURATION = "configuration"  # Missing credentials, invalid settings
    CONNECTION = "connection"  # Figma API failures
    RUNTIME = "runtime"


@dataclass
class TokensError(Exception):
    """Base class for structured pipeline errors.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the run.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class StructureError(TokensError):
    """The raw variable graph lacks its required top-level structure."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(
            category=ErrorCategory.INPUT,
            message=message,
            suggestion=(
                "Expected a JSON object with meta.variables and "
                "meta.variableCollections. Re-run 'figma-tokens fetch'"
            ),
            details={"source": source} if source else None,
            exit_code=1,
        )


class TreePollutionError(TokensError):
    """A token path segment collides with a reserved structural name."""

    def __init__(self, segment: str, path: list[str] | None = None):
        super().__init__(
            category=ErrorCategory.INTEGRITY,
            message=f"Reserved name in token path: {segment}",
            suggestion="Rename the offending variable in the design file",
            details={"path": "/".join(path)} if path else None,
            exit_code=1,
        )
        self.segment = segment


class ConfigurationError(TokensError):
    """Error in configuration or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or "Check your .env file and environment variables",
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


class FetchError(TokensError):
    """Error fetching the variable graph from the Figma API."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ):
        details: dict[str, Any] = {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status"] = status_code
        super().__init__(
            category=ErrorCategory.CONNECTION,
            message=message,
            suggestion="Verify FIGMA_ACCESS_TOKEN and FIGMA_FILE_KEY",
            details=details or None,
            exit_code=1,
        )
        self.status_code = status_code


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    if not isinstance(error, TokensError):
        error = TokensError(
            category=ErrorCategory.RUNTIME,
            message=str(error) or type(error).__name__,
            suggestion=None if verbose else "Re-run with --verbose to see the traceback",
        )

    message = error.format(use_color=use_color)
    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, error.exit_code
