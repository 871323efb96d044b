"""
Shared fixtures for the figma_tokens test suite.

Provides:
- GraphBuilder for assembling raw Figma variable graphs
- A sample graph covering every collection policy
- A sample graph written to disk
"""

import json
import logging
from pathlib import Path
from typing import Any

import pytest


class GraphBuilder:
    """Assembles a raw ``/variables/local`` payload."""

    def __init__(self) -> None:
        self.variables: dict[str, dict[str, Any]] = {}
        self.collections: dict[str, dict[str, Any]] = {}

    @staticmethod
    def alias(variable_id: str) -> dict[str, str]:
        return {"type": "VARIABLE_ALIAS", "id": variable_id}

    @staticmethod
    def rgb(r: float, g: float, b: float, a: float = 1.0) -> dict[str, float]:
        return {"r": r, "g": g, "b": b, "a": a}

    def collection(
        self, collection_id: str, name: str, modes: list[tuple[str, str]]
    ) -> "GraphBuilder":
        """Add a collection; ``modes`` is a list of (mode_id, name)."""
        self.collections[collection_id] = {
            "id": collection_id,
            "name": name,
            "modes": [{"modeId": mode_id, "name": mode_name} for mode_id, mode_name in modes],
            "defaultModeId": modes[0][0] if modes else None,
        }
        return self

    def variable(
        self,
        variable_id: str,
        name: str,
        collection_id: str,
        resolved_type: str,
        values: dict[str, Any],
        description: str = "",
    ) -> "GraphBuilder":
        self.variables[variable_id] = {
            "id": variable_id,
            "name": name,
            "variableCollectionId": collection_id,
            "resolvedType": resolved_type,
            "description": description,
            "valuesByMode": values,
        }
        return self

    def build(self) -> dict[str, Any]:
        return {
            "status": 200,
            "error": False,
            "meta": {
                "variables": self.variables,
                "variableCollections": self.collections,
            },
        }


COLOUR = "VariableCollectionId:1:0"
STATUS = "VariableCollectionId:2:0"
THEMES = "VariableCollectionId:3:0"
FOUNDATIONS = "VariableCollectionId:4:0"
LINK = "VariableCollectionId:5:0"
TYPOGRAPHY = "VariableCollectionId:6:0"
LAYOUT = "VariableCollectionId:7:0"
PRIMITIVES = "VariableCollectionId:8:0"

COLOR_MODES = [("1:0", "Blue"), ("1:1", "Green"), ("1:2", "Red"), ("1:3", "Yellow")]
STATUS_MODES = [("2:0", "Info"), ("2:1", "Success"), ("2:2", "Warning"), ("2:3", "Error"), ("2:4", "Generic")]
THEME_MODES = [("3:0", "Neutral"), ("3:1", "Neutral inverse"), ("3:2", "Subtle"), ("3:3", "Bold")]


def build_sample_graph() -> dict[str, Any]:
    """A graph with every collection kind and cross-collection alias chains.

    Primitive colors:
        blue/500 #0000ff, green/500 #00ff00, red/500 #ff0000,
        yellow/500 #ffff00, neutral/100 #ffffff, neutral/900 #000000
    """
    a = GraphBuilder.alias
    rgb = GraphBuilder.rgb
    builder = (
        GraphBuilder()
        .collection(COLOUR, "Colour", COLOR_MODES)
        .collection(STATUS, "Status", STATUS_MODES)
        .collection(THEMES, "Component themes", THEME_MODES)
        .collection(FOUNDATIONS, "Foundations", [("4:0", "Value")])
        .collection(LINK, "Link", [("5:0", "Default")])
        .collection(TYPOGRAPHY, "Typography", [("6:0", "Mode 1")])
        .collection(LAYOUT, "Layout", [("7:0", "SM"), ("7:1", "LG")])
        .collection(PRIMITIVES, "Primitives", [("8:0", "Value")])
    )

    builder.variable("VariableID:8:1", "blue/500", PRIMITIVES, "COLOR", {"8:0": rgb(0, 0, 1)})
    builder.variable("VariableID:8:2", "green/500", PRIMITIVES, "COLOR", {"8:0": rgb(0, 1, 0)})
    builder.variable("VariableID:8:3", "red/500", PRIMITIVES, "COLOR", {"8:0": rgb(1, 0, 0)})
    builder.variable("VariableID:8:4", "yellow/500", PRIMITIVES, "COLOR", {"8:0": rgb(1, 1, 0)})
    builder.variable("VariableID:8:5", "neutral/100", PRIMITIVES, "COLOR", {"8:0": rgb(1, 1, 1)})
    builder.variable("VariableID:8:6", "neutral/900", PRIMITIVES, "COLOR", {"8:0": rgb(0, 0, 0)})

    builder.variable(
        "VariableID:1:2",
        "brand/primary",
        COLOUR,
        "COLOR",
        {
            "1:0": a("VariableID:8:1"),
            "1:1": a("VariableID:8:2"),
            "1:2": a("VariableID:8:3"),
            "1:3": a("VariableID:8:4"),
        },
        description="Primary brand colour",
    )

    builder.variable(
        "VariableID:2:1",
        "status/fill",
        STATUS,
        "COLOR",
        {
            "2:0": a("VariableID:8:1"),
            "2:1": a("VariableID:8:2"),
            "2:2": a("VariableID:8:4"),
            "2:3": a("VariableID:8:3"),
            "2:4": a("VariableID:8:6"),
        },
    )

    builder.variable(
        "VariableID:3:1",
        "button/background",
        THEMES,
        "COLOR",
        {
            "3:0": a("VariableID:1:2"),
            "3:1": a("VariableID:8:5"),
            "3:2": a("VariableID:1:2"),
            "3:3": a("VariableID:8:6"),
        },
    )
    builder.variable(
        "VariableID:3:2",
        "button/status/background",
        THEMES,
        "COLOR",
        {mode_id: a("VariableID:2:1") for mode_id, _ in THEME_MODES},
    )

    builder.variable("VariableID:5:1", "link/text", LINK, "COLOR", {"5:0": a("VariableID:3:1")})

    builder.variable("VariableID:4:1", "border/radius/md", FOUNDATIONS, "FLOAT", {"4:0": 8})
    builder.variable("VariableID:4:2", "space/4", FOUNDATIONS, "FLOAT", {"4:0": 16})
    builder.variable("VariableID:4:3", "invalid/has space", FOUNDATIONS, "FLOAT", {"4:0": 1})

    builder.variable("VariableID:6:1", "font/family/body", TYPOGRAPHY, "STRING", {"6:0": "Inter"})
    builder.variable("VariableID:6:2", "font/size/body", TYPOGRAPHY, "FLOAT", {"6:0": "16"})

    builder.variable("VariableID:7:1", "grid/columns", LAYOUT, "FLOAT", {"7:0": 4, "7:1": 12})

    return builder.build()


@pytest.fixture
def graph_builder() -> GraphBuilder:
    """Fresh builder for ad hoc graphs."""
    return GraphBuilder()


@pytest.fixture
def sample_raw_graph() -> dict[str, Any]:
    """Sample raw graph covering every collection policy."""
    return build_sample_graph()


@pytest.fixture
def sample_raw_file(tmp_path: Path, sample_raw_graph: dict[str, Any]) -> Path:
    """Sample raw graph written to disk."""
    path = tmp_path / "tokens" / "figma-variables-raw.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(sample_raw_graph), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_figma_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the developer's Figma settings."""
    for key in (
        "FIGMA_ACCESS_TOKEN",
        "FIGMA_FILE_KEY",
        "FIGMA_BASE_URL",
        "FIGMA_REQUEST_TIMEOUT",
        "FIGMA_TOKENS_RAW_PATH",
        "FIGMA_TOKENS_OUTPUT_DIR",
        "FIGMA_TOKENS_LOG_LEVEL",
        "NO_COLOR",
        "FORCE_COLOR",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger("figma_tokens")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
