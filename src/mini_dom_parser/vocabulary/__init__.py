"""Tag and attribute vocabularies.

Both lookups are total functions: names outside the recognized set resolve to
an ``UNKNOWN`` kind that keeps the original spelling.
"""

from .attributes import Attribute, AttributeKind
from .tags import Tag, TagKind

__all__ = [
    "Attribute",
    "AttributeKind",
    "Tag",
    "TagKind",
]
