"""Unit tests for the graph loader and variable graph index."""

import json
from pathlib import Path

import pytest

from figma_tokens.engine import expand_graph
from figma_tokens.errors import StructureError
from figma_tokens.graph import (
    DEFAULT_MODE_NAMES,
    GraphLoader,
    ModeDimension,
    ModeOption,
    ProcessingPolicy,
    ResolvedType,
    VariableAlias,
    load_graph,
    load_raw_graph,
    output_collection_for,
    policy_for_collection,
)
from tests.conftest import COLOUR, FOUNDATIONS, LINK, PRIMITIVES, THEMES, GraphBuilder


class TestStructureValidation:
    """Tests for top-level structure validation."""

    @pytest.mark.parametrize(
        "raw",
        [
            [],
            "not a graph",
            {},
            {"meta": None},
            {"meta": {"variables": {}}},
            {"meta": {"variableCollections": {}}},
            {"meta": {"variables": [], "variableCollections": {}}},
        ],
    )
    def test_missing_structure_is_fatal(self, raw):
        """Test that a graph without both maps raises StructureError."""
        with pytest.raises(StructureError):
            load_graph(raw)

    def test_empty_maps_are_valid(self):
        """Test that empty but present maps load."""
        graph = load_graph({"meta": {"variables": {}, "variableCollections": {}}})

        assert graph.variables == {}
        assert graph.collections == {}

    def test_non_object_record_is_fatal(self):
        """Test that a variable record that is not an object is rejected."""
        raw = {"meta": {"variables": {"VariableID:1:1": "oops"}, "variableCollections": {}}}

        with pytest.raises(StructureError, match="VariableID:1:1"):
            load_graph(raw)

    def test_malformed_values_by_mode_is_fatal(self, graph_builder: GraphBuilder):
        """Test that a valuesByMode list is rejected."""
        graph_builder.collection(PRIMITIVES, "Primitives", [("8:0", "Value")])
        graph_builder.variable("VariableID:8:1", "blue", PRIMITIVES, "COLOR", ["8:0"])

        with pytest.raises(StructureError, match="valuesByMode"):
            load_graph(graph_builder.build())

    def test_malformed_modes_is_fatal(self, graph_builder: GraphBuilder):
        """Test that a modes mapping is rejected."""
        raw = graph_builder.build()
        raw["meta"]["variableCollections"][PRIMITIVES] = {
            "id": PRIMITIVES,
            "name": "Primitives",
            "modes": {"8:0": "Value"},
        }

        with pytest.raises(StructureError, match="modes"):
            load_graph(raw)

    def test_error_carries_source(self):
        """Test that the source is reported in error details."""
        with pytest.raises(StructureError) as exc_info:
            GraphLoader(source="raw.json").load({})

        assert exc_info.value.details == {"source": "raw.json"}


class TestIndexing:
    """Tests for variable and collection indexing."""

    def test_indexes_variables_and_collections(self, sample_raw_graph):
        """Test that every record is indexed by id."""
        graph = load_graph(sample_raw_graph)

        assert len(graph.collections) == 8
        assert graph.collections[COLOUR].name == "Colour"
        assert graph.variables["VariableID:1:2"].name == "brand/primary"

    def test_variable_fields(self, sample_raw_graph):
        """Test conversion of raw variable records."""
        graph = load_graph(sample_raw_graph)
        variable = graph.variables["VariableID:1:2"]

        assert variable.resolved_type is ResolvedType.COLOR
        assert variable.collection_id == COLOUR
        assert variable.description == "Primary brand colour"
        assert list(variable.values_by_mode) == ["1:0", "1:1", "1:2", "1:3"]
        assert variable.values_by_mode["1:0"] == VariableAlias("VariableID:8:1")
        assert variable.first_mode_id == "1:0"

    def test_unknown_type_is_kept_raw(self, graph_builder: GraphBuilder):
        """Test that unknown upstream types are preserved as strings."""
        graph_builder.collection(PRIMITIVES, "Primitives", [("8:0", "Value")])
        graph_builder.variable("VariableID:9:9", "misc", PRIMITIVES, "GRADIENT", {"8:0": "x"})

        variable = load_graph(graph_builder.build()).variables["VariableID:9:9"]

        assert variable.resolved_type == "GRADIENT"
        assert variable.type_name == "GRADIENT"

    def test_collection_of(self, sample_raw_graph):
        """Test collection lookup for a variable."""
        graph = load_graph(sample_raw_graph)

        collection = graph.collection_of(graph.variables["VariableID:3:1"])

        assert collection is not None
        assert collection.name == "Component themes"
        assert collection.find_mode("3:1").name == "Neutral inverse"
        assert collection.find_mode("missing") is None

    def test_variable_round_trip(self, sample_raw_graph):
        """Test Variable.to_dict restores the raw record shape."""
        raw_record = sample_raw_graph["meta"]["variables"]["VariableID:3:1"]
        graph = load_graph(sample_raw_graph)

        assert graph.variables["VariableID:3:1"].to_dict() == raw_record


class TestVariableLookup:
    """Tests for the three-tier variable lookup."""

    @pytest.fixture
    def graph(self, graph_builder: GraphBuilder):
        graph_builder.collection(PRIMITIVES, "Primitives", [("8:0", "Value")])
        graph_builder.variable("VariableID:8:1", "exact", PRIMITIVES, "FLOAT", {"8:0": 1})
        graph_builder.variable("8:2", "short", PRIMITIVES, "FLOAT", {"8:0": 2})
        graph_builder.variable("lib/8:3", "drifted", PRIMITIVES, "FLOAT", {"8:0": 3})
        return load_graph(graph_builder.build())

    def test_exact_tier(self, graph):
        """Test exact id match."""
        assert graph.find_exact("VariableID:8:1").name == "exact"
        assert graph.find_exact("8:1") is None

    def test_short_id_tier(self, graph):
        """Test lookup by the segment after the last colon."""
        assert graph.find_exact("VariableID:8:2") is None
        assert graph.find_by_short_id("VariableID:8:2") is None
        assert graph.find_by_short_id("VariableID:xyz:8:2") is None

    def test_short_id_tier_uses_last_segment(self, graph_builder: GraphBuilder):
        """Test that a key equal to the trailing segment is found."""
        graph_builder.collection(PRIMITIVES, "Primitives", [("8:0", "Value")])
        graph_builder.variable("42", "answer", PRIMITIVES, "FLOAT", {"8:0": 42})
        graph = load_graph(graph_builder.build())

        assert graph.find_by_short_id("VariableID:library:42").name == "answer"

    def test_fuzzy_tier_suffix_of_key(self, graph):
        """Test fuzzy match where the key ends with the alias id."""
        assert graph.find_fuzzy("8:3").name == "drifted"

    def test_fuzzy_tier_alias_ends_with_key(self, graph):
        """Test fuzzy match where the alias id ends with the key."""
        assert graph.find_fuzzy("VariableID:8:2").name == "short"

    def test_find_variable_chains_tiers(self, graph):
        """Test that find_variable falls through all tiers."""
        assert graph.find_variable("VariableID:8:1").name == "exact"
        assert graph.find_variable("VariableID:8:2").name == "short"
        assert graph.find_variable("8:3").name == "drifted"
        assert graph.find_variable("VariableID:0:0") is None

    def test_empty_id_never_matches(self, graph):
        """Test that an empty id is not a suffix of every key."""
        assert graph.find_fuzzy("") is None
        assert graph.find_variable("") is None
        assert graph.find_by_short_id("VariableID:") is None

    def test_alias_without_id_produces_no_token(self, graph_builder: GraphBuilder):
        """Test that an alias record missing its id resolves to nothing."""
        graph_builder.collection(FOUNDATIONS, "Foundations", [("4:0", "Value")])
        graph_builder.variable("VariableID:4:1", "first/unrelated", FOUNDATIONS, "FLOAT", {"4:0": 99})
        graph_builder.variable(
            "VariableID:4:2", "space/sm", FOUNDATIONS, "FLOAT", {"4:0": {"type": "VARIABLE_ALIAS"}}
        )

        result = expand_graph(load_graph(graph_builder.build()))

        assert result.trees["Foundations"].get(["space", "sm"]) is None
        assert result.stats.unresolved_values == 1


class TestModeCatalogs:
    """Tests for mode dimension catalogs."""

    def test_catalogs_from_designated_collections(self, sample_raw_graph):
        """Test catalogs follow the designated collections' declared modes."""
        graph = load_graph(sample_raw_graph)

        assert [m.name for m in graph.color_modes] == ["Blue", "Green", "Red", "Yellow"]
        assert [m.mode_id for m in graph.color_modes] == ["1:0", "1:1", "1:2", "1:3"]
        assert [m.name for m in graph.status_modes] == [
            "Info",
            "Success",
            "Warning",
            "Error",
            "Generic",
        ]
        assert graph.theme_modes[1] == ModeOption("Neutral inverse", "3:1")

    def test_defaults_when_collections_absent(self):
        """Test placeholder catalogs with null mode ids."""
        graph = load_graph({"meta": {"variables": {}, "variableCollections": {}}})

        for dimension in ModeDimension:
            options = graph.modes_for(dimension)
            assert [o.name for o in options] == list(DEFAULT_MODE_NAMES[dimension])
            assert all(o.mode_id is None for o in options)

    def test_default_theme_names(self):
        """Test the default theme mode names."""
        graph = load_graph({"meta": {"variables": {}, "variableCollections": {}}})

        assert [o.name for o in graph.theme_modes] == [
            "Neutral",
            "Neutral inverse",
            "Subtle",
            "Bold",
        ]


class TestPolicies:
    """Tests for per-collection policy assignment."""

    @pytest.mark.parametrize(
        "name,policy",
        [
            ("Component themes", ProcessingPolicy.THEME_BEARING),
            ("Link", ProcessingPolicy.LINK_BEARING),
            ("Link menu", ProcessingPolicy.LINK_BEARING),
            ("Colour", ProcessingPolicy.STANDARD),
            ("Something else", ProcessingPolicy.STANDARD),
        ],
    )
    def test_policy_for_collection(self, name, policy):
        """Test policy selection by collection name."""
        assert policy_for_collection(name) is policy

    def test_policies_assigned_at_load(self, sample_raw_graph):
        """Test that each collection gets its policy during loading."""
        graph = load_graph(sample_raw_graph)

        assert graph.policy_for(graph.collections[THEMES]) is ProcessingPolicy.THEME_BEARING
        assert graph.policy_for(graph.collections[LINK]) is ProcessingPolicy.LINK_BEARING
        assert graph.policy_for(graph.collections[COLOUR]) is ProcessingPolicy.STANDARD

    def test_link_output_collection(self):
        """Test that Link collections write into Component themes."""
        assert output_collection_for("Link") == "Component themes"
        assert output_collection_for("Link menu") == "Component themes"
        assert output_collection_for("Layout") == "Layout"


class TestLoadRawGraph:
    """Tests for reading raw graph files."""

    def test_reads_file(self, sample_raw_file: Path):
        """Test reading a valid raw graph file."""
        data = load_raw_graph(sample_raw_file)

        assert "meta" in data

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file raises StructureError."""
        with pytest.raises(StructureError, match="not found"):
            load_raw_graph(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path):
        """Test that invalid JSON raises StructureError."""
        path = tmp_path / "raw.json"
        path.write_text("{not json")

        with pytest.raises(StructureError, match="not valid JSON"):
            load_raw_graph(path)

    def test_non_object_top_level(self, tmp_path: Path):
        """Test that a JSON array is rejected."""
        path = tmp_path / "raw.json"
        path.write_text(json.dumps([1, 2, 3]))

        with pytest.raises(StructureError):
            load_raw_graph(path)
