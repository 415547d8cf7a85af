"""Test module for mini_dom_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    import mini_dom_parser

    assert mini_dom_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import mini_dom_parser

    assert isinstance(mini_dom_parser.__version__, str)
    assert mini_dom_parser.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    import mini_dom_parser

    assert mini_dom_parser.__author__ == "Mini DOM Parser Team"


def test_package_exports_entry_point() -> None:
    """Test that the parse entry point and document model are exported."""
    import mini_dom_parser

    for name in ("parse", "DOMParser", "Element", "Text", "Tag", "Attribute", "ParseError"):
        assert name in mini_dom_parser.__all__
        assert hasattr(mini_dom_parser, name)
