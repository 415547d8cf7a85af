"""Tree building layer for the mini DOM parser.

Key Components:
    TreeBuilder: Stack-based assembly of a token stream into nodes
    Element: Element node with tag, attributes and children
    Text: Text leaf node
    ParseResult: Nodes plus diagnostics for non-raising parses
"""

from .builder import (
    Element,
    ElementFrame,
    Node,
    ParseResult,
    Text,
    TreeBuilder,
    build_tree,
    tree_depth,
)
from .serializer import format_tree, serialize

__all__ = [
    "Element",
    "ElementFrame",
    "Node",
    "ParseResult",
    "Text",
    "TreeBuilder",
    "build_tree",
    "format_tree",
    "serialize",
    "tree_depth",
]
