"""Closed attribute vocabulary."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class AttributeKind(Enum):
    """Recognized attribute names plus the ``UNKNOWN`` catch-all."""

    CLASS = "class"
    ID = "id"
    UNKNOWN = "unknown"


_KNOWN_ATTRIBUTES: Dict[str, AttributeKind] = {
    kind.value: kind for kind in AttributeKind if kind is not AttributeKind.UNKNOWN
}


@dataclass(frozen=True)
class Attribute:
    """A resolved ``name="value"`` pair; unknown attributes keep both strings."""

    kind: AttributeKind
    name: str
    value: str

    @classmethod
    def resolve(cls, name: str, value: str) -> "Attribute":
        """Resolve an attribute by exact, case-sensitive name; never fails."""
        return cls(_KNOWN_ATTRIBUTES.get(name, AttributeKind.UNKNOWN), name, value)

    @classmethod
    def class_(cls, value: str) -> "Attribute":
        return cls(AttributeKind.CLASS, "class", value)

    @classmethod
    def id(cls, value: str) -> "Attribute":
        return cls(AttributeKind.ID, "id", value)

    @property
    def is_unknown(self) -> bool:
        return self.kind is AttributeKind.UNKNOWN

    def __str__(self) -> str:
        return f'{self.name}="{self.value}"'
