"""Exception hierarchy for parse failures.

Vocabulary lookups never fail; every structural problem in the input is
reported as a ``ParseError`` subclass carrying the position at which it was
detected.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

if TYPE_CHECKING:
    from mini_dom_parser.tokenization.tokenizer import TokenPosition
    from mini_dom_parser.vocabulary import Tag


class ParseError(Exception):
    """Base class for all failures reported by ``parse()``."""

    code = "parse_error"

    def __init__(self, message: str, position: Optional["TokenPosition"] = None) -> None:
        if position is not None:
            message = f"{message} (line {position.line}, column {position.column})"
        super().__init__(message)
        self.message = message
        self.position = position

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary suitable for diagnostics and JSON output."""
        result: Dict[str, Any] = {
            "code": self.code,
            "error": type(self).__name__,
            "message": self.message,
        }
        if self.position is not None:
            result["position"] = {
                "line": self.position.line,
                "column": self.position.column,
                "offset": self.position.offset,
            }
        return result


class UnterminatedTagError(ParseError):
    """A ``<`` was seen but no closing ``>`` before end of input."""

    code = "unterminated_tag"


class UnterminatedAttributeValueError(ParseError):
    """An attribute value's opening quote has no matching closing quote."""

    code = "unterminated_attribute_value"


class MalformedAttributeError(ParseError):
    """An ``=`` inside a start tag is not followed by a quoted value."""

    code = "malformed_attribute"


class MismatchedEndTagError(ParseError):
    """An end tag does not match the currently open element."""

    code = "mismatched_end_tag"

    def __init__(
        self,
        expected: "Tag",
        found: "Tag",
        position: Optional["TokenPosition"] = None
    ) -> None:
        super().__init__(
            f"Expected </{expected.name}> but found </{found.name}>", position
        )
        self.expected = expected
        self.found = found

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["expected"] = self.expected.name
        result["found"] = self.found.name
        return result


class UnclosedElementError(ParseError):
    """Input ended while one or more elements were still open."""

    code = "unclosed_element"

    def __init__(
        self,
        tag: "Tag",
        open_tags: Tuple["Tag", ...] = (),
        position: Optional["TokenPosition"] = None
    ) -> None:
        super().__init__(f"Element <{tag.name}> was never closed", position)
        self.tag = tag
        self.open_tags = open_tags or (tag,)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["tag"] = self.tag.name
        result["open_tags"] = [tag.name for tag in self.open_tags]
        return result


class InputTooLargeError(ParseError):
    """Input exceeds the configured ``max_input_size``."""

    code = "input_too_large"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Input of {size} characters exceeds limit of {limit}")
        self.size = size
        self.limit = limit


class MaxDepthExceededError(ParseError):
    """Element nesting exceeds the configured ``max_tree_depth``."""

    code = "max_depth_exceeded"

    def __init__(
        self,
        depth: int,
        limit: int,
        position: Optional["TokenPosition"] = None
    ) -> None:
        super().__init__(f"Nesting depth {depth} exceeds limit of {limit}", position)
        self.depth = depth
        self.limit = limit


class UnexpectedEndTagError(ParseError):
    """An end tag appeared while no element was open."""

    code = "unexpected_end_tag"

    def __init__(self, found: "Tag", position: Optional["TokenPosition"] = None) -> None:
        super().__init__(f"Unexpected end tag </{found.name}> with no open element", position)
        self.found = found

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["found"] = self.found.name
        return result
