"""Adapters that hand a parsed tree to other XML/HTML libraries.

``ElementTreeAdapter`` needs only the standard library. ``LxmlAdapter`` and
``BeautifulSoupAdapter`` import their libraries lazily and raise
``AdapterUnavailableError`` when the library is not installed
(``pip install mini-dom-parser[adapters]``).
"""

import importlib
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Type

from mini_dom_parser.shared import get_logger
from mini_dom_parser.tree import Element, Node, Text, serialize

# Wrapper tag used when a document has several roots or root-level text
FRAGMENT_TAG = "fragment"

logger = get_logger(__name__, component="adapters")


class AdapterUnavailableError(ImportError):
    """Raised when an adapter's backing library is not installed."""


class TreeAdapter(ABC):
    """Convert a root-level node sequence into another library's object model."""

    name: str = ""
    module_name: Optional[str] = None

    def is_available(self) -> bool:
        """Check whether the backing library can be imported."""
        if self.module_name is None:
            return True
        try:
            importlib.import_module(self.module_name)
        except ImportError:
            return False
        return True

    def _require(self) -> Any:
        try:
            return importlib.import_module(self.module_name)
        except ImportError as e:
            raise AdapterUnavailableError(
                f"Adapter '{self.name}' requires the '{self.module_name}' module"
            ) from e

    @abstractmethod
    def convert(self, nodes: Sequence[Node]) -> Any:
        """Convert nodes to the target representation."""


def _build_etree(nodes: Sequence[Node], etree: Any) -> Any:
    """Build an ElementTree-compatible tree using ``etree.Element``/``SubElement``.

    Text before the first child element becomes ``text``; text after a child
    becomes that child's ``tail``.
    """
    if len(nodes) == 1 and isinstance(nodes[0], Element):
        top = nodes[0]
        root = etree.Element(top.tag.name, _attrib(top))
        children: Sequence[Node] = top.children
    else:
        root = etree.Element(FRAGMENT_TAG)
        children = nodes

    pending = [(root, children)]
    while pending:
        parent, kids = pending.pop()
        last = None
        for child in kids:
            if isinstance(child, Text):
                if last is None:
                    parent.text = (parent.text or "") + child.text
                else:
                    last.tail = (last.tail or "") + child.text
            else:
                last = etree.SubElement(parent, child.tag.name, _attrib(child))
                pending.append((last, child.children))
    return root


def _attrib(element: Element) -> Dict[str, str]:
    # Later duplicates win, matching dict semantics in the target libraries
    return {attribute.name: attribute.value for attribute in element.attributes}


class ElementTreeAdapter(TreeAdapter):
    """Convert to ``xml.etree.ElementTree.Element``."""

    name = "etree"
    module_name = "xml.etree.ElementTree"

    def convert(self, nodes: Sequence[Node]) -> Any:
        return _build_etree(nodes, self._require())


class LxmlAdapter(TreeAdapter):
    """Convert to ``lxml.etree._Element``.

    lxml validates names, so unknown tags or attributes that are not valid
    XML names raise ``ValueError``.
    """

    name = "lxml"
    module_name = "lxml.etree"

    def convert(self, nodes: Sequence[Node]) -> Any:
        return _build_etree(nodes, self._require())


class BeautifulSoupAdapter(TreeAdapter):
    """Convert to a ``bs4.BeautifulSoup`` document via re-serialized markup."""

    name = "bs4"
    module_name = "bs4"

    def convert(self, nodes: Sequence[Node]) -> Any:
        bs4 = self._require()
        return bs4.BeautifulSoup(serialize(nodes), "html.parser")


_ADAPTERS: Dict[str, Type[TreeAdapter]] = {
    adapter.name: adapter
    for adapter in (ElementTreeAdapter, LxmlAdapter, BeautifulSoupAdapter)
}


def get_adapter(name: str) -> TreeAdapter:
    """Instantiate a registered adapter by name.

    Raises:
        KeyError: If no adapter is registered under ``name``
    """
    try:
        return _ADAPTERS[name]()
    except KeyError:
        raise KeyError(
            f"Unknown adapter '{name}'; expected one of {sorted(_ADAPTERS)}"
        ) from None


def list_available_adapters() -> List[str]:
    """Names of adapters whose backing library is importable."""
    available = [name for name, adapter in _ADAPTERS.items() if adapter().is_available()]
    logger.debug("Available adapters", extra={"adapters": available})
    return available
