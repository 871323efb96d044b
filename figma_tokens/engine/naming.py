"""Variable name segmentation."""

import re

_SEPARATOR_RE = re.compile(r"\s*[/\\]\s*")
_HYPHEN_RE = re.compile(r"\s*-\s*")
_WHITESPACE_RE = re.compile(r"\s+")


def parse_variable_name(name: str) -> list[str]:
    """Split a slash-delimited variable name into path segments.

    Forward and back slashes are both separators. Whitespace around
    separators and hyphens is removed and remaining whitespace runs collapse
    to a single space.

    Example:
        >>> parse_variable_name("Button / background - hover/ 1")
        ['Button', 'background-hover', '1']
    """
    normalized = _SEPARATOR_RE.sub("/", name)
    normalized = _HYPHEN_RE.sub("-", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized).strip()
    return [part.strip() for part in normalized.split("/") if part.strip()]


def has_invalid_final_segment(name: str) -> bool:
    """Check whether the final raw name segment contains a space.

    Such names cannot be expressed in the downstream naming scheme and the
    variable produces no tokens.
    """
    return " " in name.split("/")[-1]
