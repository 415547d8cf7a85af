"""Mini DOM Parser.

A minimal markup-to-tree parser for simplified HTML: a pull-based tokenizer
feeds a stack-based tree builder over a closed tag and attribute vocabulary.

Progressive API Disclosure:
- Level 1: ``parse(text)`` returns root-level nodes or raises ``ParseError``
- Level 2: ``DOMParser`` with ``ParserConfig`` and diagnostics
"""

__version__ = "0.1.0"
__author__ = "Mini DOM Parser Team"

from .api import DOMParser, parse
from .shared import (
    MismatchedEndTagError,
    ParseError,
    ParserConfig,
    UnclosedElementError,
    UnterminatedAttributeValueError,
    UnterminatedTagError,
)
from .tree import Element, Node, ParseResult, Text, serialize
from .vocabulary import Attribute, AttributeKind, Tag, TagKind

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: parsing entry point
    "parse",

    # Level 2: configured parser
    "DOMParser",
    "ParserConfig",
    "ParseResult",

    # Document model
    "Attribute",
    "AttributeKind",
    "Element",
    "Node",
    "Tag",
    "TagKind",
    "Text",
    "serialize",

    # Errors
    "MismatchedEndTagError",
    "ParseError",
    "UnclosedElementError",
    "UnterminatedAttributeValueError",
    "UnterminatedTagError",
]
