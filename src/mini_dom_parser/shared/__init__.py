"""Shared utilities for the mini DOM parser.

This package provides the error hierarchy, configuration objects, diagnostic
result types and logging helpers used by every processing layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    ParserConfig,
    TokenizerConfig,
    TreeConfig,
)
from .errors import (
    InputTooLargeError,
    MalformedAttributeError,
    MaxDepthExceededError,
    MismatchedEndTagError,
    ParseError,
    UnclosedElementError,
    UnexpectedEndTagError,
    UnterminatedAttributeValueError,
    UnterminatedTagError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "GlobalConfig",
    "InputTooLargeError",
    "MalformedAttributeError",
    "MaxDepthExceededError",
    "MismatchedEndTagError",
    "ParseError",
    "ParserConfig",
    "PerformanceMetrics",
    "TokenizerConfig",
    "TreeConfig",
    "UnclosedElementError",
    "UnexpectedEndTagError",
    "UnterminatedAttributeValueError",
    "UnterminatedTagError",
    "configure_logging",
    "get_logger",
    "new_correlation_id",
]
