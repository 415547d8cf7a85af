"""Public API for the mini DOM parser.

Level 1: ``parse()`` returns root-level nodes or raises ``ParseError``.
Level 2: ``DOMParser`` adds configuration and non-raising diagnostics.
Adapters hand the produced tree to ElementTree, lxml or BeautifulSoup.
"""

from .adapters import (
    AdapterUnavailableError,
    BeautifulSoupAdapter,
    ElementTreeAdapter,
    LxmlAdapter,
    TreeAdapter,
    get_adapter,
    list_available_adapters,
)
from .parser import DOMParser, parse

__all__ = [
    "AdapterUnavailableError",
    "BeautifulSoupAdapter",
    "DOMParser",
    "ElementTreeAdapter",
    "LxmlAdapter",
    "TreeAdapter",
    "get_adapter",
    "list_available_adapters",
    "parse",
]
