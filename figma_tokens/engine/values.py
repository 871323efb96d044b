"""Raw value conversion and token kind classification.

Conversion is keyed by the declared type of the variable that holds the
concrete value, never inferred from the value itself.
"""

import math
from typing import Any

from ..graph.models import ResolvedType

TokenValue = str | int | float | bool


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert 0-1 float color components to a lowercase ``#rrggbb`` string."""

    def to_hex(component: float) -> str:
        scaled = min(255, max(0, math.floor(float(component) * 255 + 0.5)))
        return format(scaled, "02x")

    return f"#{to_hex(r)}{to_hex(g)}{to_hex(b)}"


def _to_number(value: Any) -> int | float | None:
    """Numeric token value, or None for non-numeric and non-finite input."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    # float() accepts "nan" and "inf", which have no JSON representation
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() and "." not in str(value) else number


def convert_value(resolved_type: ResolvedType | str, value: Any) -> Any:
    """Convert a concrete raw value to its canonical token value.

    Args:
        resolved_type: Declared type of the variable holding the value.
        value: Concrete (non-alias) raw value.

    Returns:
        The canonical value, or None when no token should be produced.
    """
    if value is None:
        return None

    if resolved_type is ResolvedType.COLOR:
        if isinstance(value, dict) and all(k in value for k in ("r", "g", "b")):
            try:
                return rgb_to_hex(value["r"], value["g"], value["b"])
            except (TypeError, ValueError, OverflowError):
                # Non-numeric or non-finite components
                return None
        return value

    if resolved_type is ResolvedType.FLOAT:
        return _to_number(value)

    if resolved_type is ResolvedType.STRING:
        return value if isinstance(value, str) else str(value)

    if resolved_type is ResolvedType.BOOLEAN:
        if isinstance(value, str):
            return value.strip().lower() not in ("", "false", "0")
        return bool(value)

    return value


def classify_token_kind(resolved_type: ResolvedType | str, name: str) -> str:
    """Derive the advisory token kind from declared type and name.

    Example:
        >>> classify_token_kind(ResolvedType.FLOAT, "Typography/font size/body")
        'fontSizes'
    """
    name = name.lower()

    if resolved_type is ResolvedType.COLOR:
        return "color"

    if resolved_type is ResolvedType.FLOAT:
        if "font" in name and "size" in name:
            return "fontSizes"
        if "font" in name and "weight" in name:
            return "fontWeights"
        if "space" in name or "padding" in name or "margin" in name:
            return "spacing"
        if "border" in name and "radius" in name:
            return "borderRadius"
        if "border" in name and "width" in name:
            return "borderWidth"
        if "line" in name and "height" in name:
            return "lineHeights"
        return "sizing"

    if resolved_type is ResolvedType.STRING:
        if "font" in name and "family" in name:
            return "fontFamilies"
        if "font" in name and "weight" in name:
            return "fontWeights"
        return "other"

    return "other"
