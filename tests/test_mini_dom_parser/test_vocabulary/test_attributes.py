"""Tests for the closed attribute vocabulary."""

import pytest

from mini_dom_parser.vocabulary import Attribute, AttributeKind


class TestAttributeResolve:
    """Test Attribute.resolve lookups."""

    def test_class_attribute(self) -> None:
        """Test class resolves and keeps its value."""
        attribute = Attribute.resolve("class", "header")

        assert attribute.kind is AttributeKind.CLASS
        assert attribute.value == "header"
        assert attribute == Attribute.class_("header")

    def test_id_attribute(self) -> None:
        """Test id resolves and keeps its value."""
        attribute = Attribute.resolve("id", "main")

        assert attribute.kind is AttributeKind.ID
        assert attribute == Attribute.id("main")

    @pytest.mark.parametrize("name", ["href", "CLASS", "Id", "data-x", ""])
    def test_other_names_are_unknown(self, name: str) -> None:
        """Test unrecognized names never fail and keep name and value."""
        attribute = Attribute.resolve(name, "v")

        assert attribute.kind is AttributeKind.UNKNOWN
        assert attribute.is_unknown
        assert attribute.name == name
        assert attribute.value == "v"

    def test_value_is_part_of_equality(self) -> None:
        """Test attributes with different values differ."""
        assert Attribute.resolve("class", "a") != Attribute.resolve("class", "b")

    def test_str_renders_markup(self) -> None:
        """Test string form is name="value"."""
        assert str(Attribute.resolve("data-x", "1")) == 'data-x="1"'
