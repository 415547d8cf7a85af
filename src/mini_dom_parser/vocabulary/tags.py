"""Closed tag vocabulary.

Tag names are matched exactly and case-sensitively: ``"html"`` resolves to
``TagKind.HTML`` while ``"HTML"`` is unknown.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TagKind(Enum):
    """Recognized tag names plus the ``UNKNOWN`` catch-all."""

    HTML = "html"
    HEAD = "head"
    TITLE = "title"
    BODY = "body"
    H1 = "h1"
    P = "p"
    UNKNOWN = "unknown"


_KNOWN_TAGS: Dict[str, TagKind] = {
    kind.value: kind for kind in TagKind if kind is not TagKind.UNKNOWN
}


@dataclass(frozen=True)
class Tag:
    """A resolved tag.

    ``name`` always holds the source spelling, so unknown tags can still be
    serialized and reported. Unknown tags are equal only when their names are.
    """

    kind: TagKind
    name: str

    @classmethod
    def resolve(cls, name: str) -> "Tag":
        """Resolve a tag name; never fails."""
        return cls(_KNOWN_TAGS.get(name, TagKind.UNKNOWN), name)

    @classmethod
    def of(cls, kind: TagKind) -> "Tag":
        """Build the canonical tag for a recognized kind."""
        if kind is TagKind.UNKNOWN:
            raise ValueError("Unknown tags must be created with Tag.resolve(name)")
        return cls(kind, kind.value)

    @property
    def is_unknown(self) -> bool:
        return self.kind is TagKind.UNKNOWN

    def __str__(self) -> str:
        return self.name
