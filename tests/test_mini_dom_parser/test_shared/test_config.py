"""Comprehensive tests for configuration system."""

import json

import pytest

from mini_dom_parser.shared.config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    TokenizerConfig,
    TreeConfig,
)


class TestComponentConfigs:
    """Test suite for component configuration classes."""

    def test_defaults(self) -> None:
        """Test default component values disable every limit."""
        assert TokenizerConfig().track_positions is True
        assert TokenizerConfig().max_input_size is None
        assert TreeConfig().max_tree_depth is None
        assert TreeConfig().collect_statistics is True
        assert GlobalConfig().logging_level == "WARNING"
        assert GlobalConfig().enable_correlation_tracking is True

    @pytest.mark.parametrize("factory", [
        lambda: TokenizerConfig(max_input_size=0),
        lambda: TreeConfig(max_tree_depth=-1),
        lambda: GlobalConfig(logging_level="LOUD"),
    ])
    def test_validation(self, factory) -> None:
        """Test invalid component values are rejected."""
        with pytest.raises(ValueError):
            factory()


class TestParserConfig:
    """Test suite for the top-level configuration."""

    def test_default_configuration(self) -> None:
        config = ParserConfig()
        assert config.name is None
        assert config.tokenizer == TokenizerConfig()
        assert ParserConfig.default().name == "default"

    def test_strict_preset(self) -> None:
        config = ParserConfig.strict()
        assert config.name == "strict"
        assert config.tokenizer.max_input_size == 1_000_000
        assert config.tree.max_tree_depth == 256

    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            ParserConfig().name = "other"  # type: ignore[misc]

    def test_override_component_field(self) -> None:
        """Test component__field overrides leave the original untouched."""
        base = ParserConfig()
        changed = base.override(tree__max_tree_depth=10, name="custom")

        assert changed.tree.max_tree_depth == 10
        assert changed.name == "custom"
        assert base.tree.max_tree_depth is None

    def test_override_global_component(self) -> None:
        config = ParserConfig().override(global___enable_correlation_tracking=False)
        assert config.global_.enable_correlation_tracking is False

    def test_override_unknown_component(self) -> None:
        with pytest.raises(ConfigValidationError) as excinfo:
            ParserConfig().override(character__encoding="utf-8")

        assert "tokenizer" in excinfo.value.suggestions

    @pytest.mark.parametrize("overrides", [
        {"tree__max_tree_depth": 0},
        {"tree__no_such_field": 1},
        {"no_such_field": 1},
    ])
    def test_override_invalid(self, overrides) -> None:
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(**overrides)

    def test_post_init_revalidates_components(self) -> None:
        """Test components mutated before composition are re-validated."""
        tree = TreeConfig()
        tree.max_tree_depth = 0
        with pytest.raises(ConfigValidationError):
            ParserConfig(tree=tree)


class TestSerialization:
    """Test dictionary, JSON and file round trips."""

    def test_to_dict(self) -> None:
        data = ParserConfig.strict().to_dict()
        assert data["tree"] == {"max_tree_depth": 256, "collect_statistics": True}
        assert data["name"] == "strict"

    def test_json_round_trip(self) -> None:
        config = ParserConfig.strict(max_tree_depth=8)
        assert ParserConfig.from_json(config.to_json()) == config

    def test_from_dict_partial(self) -> None:
        """Test missing sections keep their defaults."""
        config = ParserConfig.from_dict({"tokenizer": {"max_input_size": 50}})
        assert config.tokenizer.max_input_size == 50
        assert config.tree == TreeConfig()

    @pytest.mark.parametrize("data", [
        {"character": {}},
        {"tree": 5},
        {"tree": {"depth": 3}},
        {"global_": {"logging_level": "LOUD"}},
    ])
    def test_from_dict_invalid(self, data) -> None:
        with pytest.raises(ConfigValidationError):
            ParserConfig.from_dict(data)

    @pytest.mark.parametrize("text", ["{not json", "[1, 2]"])
    def test_from_json_invalid(self, text: str) -> None:
        with pytest.raises(ConfigValidationError):
            ParserConfig.from_json(text)

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"tree": {"max_tree_depth": 3}, "name": "file"}))

        config = ParserConfig.from_file(path)

        assert config.tree.max_tree_depth == 3
        assert config.name == "file"

    def test_from_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="Could not read"):
            ParserConfig.from_file(tmp_path / "missing.json")
