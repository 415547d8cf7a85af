"""Configuration classes for the mini DOM parser.

All limits are disabled by default, so a default configuration parses any
well-formed document regardless of size or nesting depth.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
COMPONENTS = ("tokenizer", "tree", "global_")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class TokenizerConfig:
    """Configuration for the tokenizer."""

    track_positions: bool = True
    max_input_size: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tokenizer configuration."""
        if self.max_input_size is not None and self.max_input_size <= 0:
            raise ValueError("max_input_size must be > 0 or None")


@dataclass
class TreeConfig:
    """Configuration for tree building."""

    max_tree_depth: Optional[int] = None
    collect_statistics: bool = True

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.max_tree_depth is not None and self.max_tree_depth <= 0:
            raise ValueError("max_tree_depth must be > 0 or None")


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "WARNING"
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


@dataclass(frozen=True)
class ParserConfig:
    """Immutable configuration for a complete parse.

    Example:
        >>> config = ParserConfig.strict(max_tree_depth=64)
        >>> config.tree.max_tree_depth
        64
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Re-validate components, which may have been mutated after creation."""
        try:
            for component in COMPONENTS:
                getattr(self, component).__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override, using ``component__field`` notation
                for component settings

        Returns:
            New ParserConfig instance with overrides applied

        Example:
            >>> ParserConfig().override(tree__max_tree_depth=10).tree.max_tree_depth
            10
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.rsplit("__", 1)
                if component not in COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(COMPONENTS),
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        try:
            for component, overrides in nested.items():
                top_level[component] = replace(getattr(self, component), **overrides)
            return replace(self, **top_level)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if is_dataclass(value):
                value = {sub.name: getattr(value, sub.name) for sub in fields(value)}
            result[f.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown top-level keys are rejected; missing keys keep their defaults.
        """
        component_types = {
            "tokenizer": TokenizerConfig,
            "tree": TreeConfig,
            "global_": GlobalConfig,
        }
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_types:
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Section '{key}' must be an object", field_name=key
                    )
                try:
                    values[key] = component_types[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key == "name":
                values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}",
                    field_name=key,
                    suggestions=sorted(list(component_types) + ["name"]),
                )
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read configuration file {config_path}: {e}") from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Unlimited configuration with position tracking enabled."""
        return cls(name="default")

    @classmethod
    def strict(
        cls,
        max_input_size: Optional[int] = 1_000_000,
        max_tree_depth: Optional[int] = 256
    ) -> "ParserConfig":
        """Configuration preset that bounds input size and nesting depth."""
        return cls(
            tokenizer=TokenizerConfig(max_input_size=max_input_size),
            tree=TreeConfig(max_tree_depth=max_tree_depth),
            name="strict",
        )
