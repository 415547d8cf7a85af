"""Tests for the closed tag vocabulary."""

import pytest

from mini_dom_parser.vocabulary import Tag, TagKind


class TestTagResolve:
    """Test Tag.resolve lookups."""

    @pytest.mark.parametrize(
        "name,kind",
        [
            ("html", TagKind.HTML),
            ("head", TagKind.HEAD),
            ("title", TagKind.TITLE),
            ("body", TagKind.BODY),
            ("h1", TagKind.H1),
            ("p", TagKind.P),
        ],
    )
    def test_known_names_resolve_to_their_kind(self, name: str, kind: TagKind) -> None:
        """Test every recognized name maps to its own kind."""
        tag = Tag.resolve(name)

        assert tag.kind is kind
        assert tag.name == name
        assert not tag.is_unknown

    @pytest.mark.parametrize("name", ["div", "HTML", "H1", " p", "p ", "", "span"])
    def test_other_names_are_unknown(self, name: str) -> None:
        """Test matching is exact and case-sensitive with an UNKNOWN fallback."""
        tag = Tag.resolve(name)

        assert tag.kind is TagKind.UNKNOWN
        assert tag.is_unknown

    def test_unknown_keeps_original_name(self) -> None:
        """Test the unknown variant preserves the source spelling."""
        assert Tag.resolve("Div").name == "Div"
        assert str(Tag.resolve("section")) == "section"

    def test_equality(self) -> None:
        """Test tags compare by kind and name."""
        assert Tag.resolve("p") == Tag.of(TagKind.P)
        assert Tag.resolve("div") == Tag.resolve("div")
        assert Tag.resolve("div") != Tag.resolve("span")
        assert Tag.resolve("p") != Tag.resolve("div")

    def test_tags_are_hashable_and_immutable(self) -> None:
        """Test tags behave as value types."""
        tag = Tag.resolve("body")

        assert {tag, Tag.resolve("body")} == {tag}
        with pytest.raises(AttributeError):
            tag.name = "head"  # type: ignore[misc]


class TestTagOf:
    """Test Tag.of construction."""

    def test_of_builds_canonical_tag(self) -> None:
        """Test Tag.of uses the kind's canonical name."""
        assert Tag.of(TagKind.TITLE) == Tag(TagKind.TITLE, "title")

    def test_of_rejects_unknown(self) -> None:
        """Test unknown tags need an explicit name."""
        with pytest.raises(ValueError, match="Tag.resolve"):
            Tag.of(TagKind.UNKNOWN)
