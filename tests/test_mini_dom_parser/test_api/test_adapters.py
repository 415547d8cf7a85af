"""Tests for tree adapters."""

import xml.etree.ElementTree as ET

import pytest

from mini_dom_parser import parse
from mini_dom_parser.api.adapters import (
    FRAGMENT_TAG,
    AdapterUnavailableError,
    BeautifulSoupAdapter,
    ElementTreeAdapter,
    LxmlAdapter,
    TreeAdapter,
    get_adapter,
    list_available_adapters,
)


class TestElementTreeAdapter:
    """Test conversion to the standard library ElementTree."""

    def test_single_root(self) -> None:
        """Test a single root element maps directly."""
        root = ElementTreeAdapter().convert(parse('<body><h1 class="t">Hi</h1></body>'))

        assert root.tag == "body"
        assert root[0].tag == "h1"
        assert root[0].get("class") == "t"
        assert root[0].text == "Hi"

    def test_text_and_tail(self) -> None:
        """Test leading text becomes text and trailing text becomes tail."""
        root = ElementTreeAdapter().convert(parse("<p>a<h1>b</h1>c<h1></h1>d</p>"))

        assert root.text == "a"
        assert root[0].text == "b"
        assert root[0].tail == "c"
        assert root[1].tail == "d"

    def test_fragment_wrapper(self) -> None:
        """Test several roots are wrapped in a fragment element."""
        root = ElementTreeAdapter().convert(parse("lead<p>x</p><p>y</p>"))

        assert root.tag == FRAGMENT_TAG
        assert root.text == "lead"
        assert [child.text for child in root] == ["x", "y"]

    def test_empty_document(self) -> None:
        root = ElementTreeAdapter().convert([])
        assert root.tag == FRAGMENT_TAG
        assert len(root) == 0

    def test_round_trip_through_etree(self) -> None:
        """Test the converted tree serializes to equivalent markup."""
        markup = '<html><body><p id="x">one</p>two</body></html>'
        root = ElementTreeAdapter().convert(parse(markup))
        assert ET.tostring(root, encoding="unicode") == markup

    def test_deep_document(self) -> None:
        """Test conversion does not recurse."""
        depth = 3000
        root = ElementTreeAdapter().convert(parse("<p>" * depth + "</p>" * depth))

        levels = 0
        node = root
        while len(node):
            node = node[0]
            levels += 1
        assert levels == depth - 1


class TestOptionalAdapters:
    """Test adapters backed by optional libraries."""

    def test_lxml(self) -> None:
        pytest.importorskip("lxml")
        root = LxmlAdapter().convert(parse('<p id="a">x<h1>y</h1>z</p>'))

        assert root.tag == "p"
        assert root.get("id") == "a"
        assert root.text == "x"
        assert root[0].tail == "z"

    def test_beautifulsoup(self) -> None:
        pytest.importorskip("bs4")
        soup = BeautifulSoupAdapter().convert(parse('<h1 class="header">Hi</h1>'))

        assert soup.h1.get_text() == "Hi"
        assert soup.h1["class"] == ["header"]

    def test_missing_library(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an uninstalled backing library raises AdapterUnavailableError."""
        adapter = LxmlAdapter()
        monkeypatch.setattr(adapter, "module_name", "mini_dom_parser_missing_module")

        assert not adapter.is_available()
        with pytest.raises(AdapterUnavailableError, match="requires"):
            adapter.convert(parse("<p></p>"))

    def test_unavailable_error_is_import_error(self) -> None:
        assert issubclass(AdapterUnavailableError, ImportError)


class TestRegistry:
    """Test adapter lookup helpers."""

    @pytest.mark.parametrize("name,adapter_type", [
        ("etree", ElementTreeAdapter),
        ("lxml", LxmlAdapter),
        ("bs4", BeautifulSoupAdapter),
    ])
    def test_get_adapter(self, name: str, adapter_type: type) -> None:
        adapter = get_adapter(name)
        assert isinstance(adapter, adapter_type)
        assert isinstance(adapter, TreeAdapter)

    def test_unknown_adapter(self) -> None:
        with pytest.raises(KeyError, match="Unknown adapter"):
            get_adapter("pandas")

    def test_etree_always_available(self) -> None:
        assert "etree" in list_available_adapters()
