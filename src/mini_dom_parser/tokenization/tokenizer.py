"""Pull-based tokenizer for simplified HTML.

The tokenizer scans its input once, left to right, and yields start tags
(with their attributes), end tags and text runs. Its only mutable state is
the cursor into the input; line and column bookkeeping is derived from it.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, Tuple

from mini_dom_parser.shared import (
    InputTooLargeError,
    MalformedAttributeError,
    TokenizerConfig,
    UnterminatedAttributeValueError,
    UnterminatedTagError,
    get_logger,
)
from mini_dom_parser.vocabulary import Attribute, Tag

TAG_OPEN = "<"
TAG_CLOSE = ">"
END_TAG_MARKER = "/"
ATTR_SEPARATOR = " "
ATTR_ASSIGN = "="
ATTR_QUOTE = '"'

_TAG_NAME_STOPS = ATTR_SEPARATOR + TAG_CLOSE
_ATTR_NAME_STOPS = ATTR_ASSIGN + ATTR_SEPARATOR + TAG_CLOSE

logger = get_logger(__name__, component="html_tokenizer")


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    START_TAG = auto()
    END_TAG = auto()
    TEXT = auto()


@dataclass(frozen=True)
class TokenPosition:
    """Position of the first character of a token."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


START_POSITION = TokenPosition(1, 1, 0)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Positions are excluded from equality so token streams can be compared
    structurally.
    """

    type: TokenType
    tag: Optional[Tag] = None
    attributes: Tuple[Attribute, ...] = ()
    text: Optional[str] = None
    position: TokenPosition = field(default=START_POSITION, compare=False)

    def __post_init__(self) -> None:
        """Validate that each token type carries exactly its own payload."""
        if self.type is TokenType.TEXT:
            if not self.text:
                raise ValueError("Text tokens must carry non-empty text")
            if self.tag is not None or self.attributes:
                raise ValueError("Text tokens cannot carry a tag or attributes")
        else:
            if self.tag is None:
                raise ValueError(f"{self.type.name} tokens must carry a tag")
            if self.text is not None:
                raise ValueError(f"{self.type.name} tokens cannot carry text")
            if self.type is TokenType.END_TAG and self.attributes:
                raise ValueError("End tag tokens cannot carry attributes")

    @classmethod
    def start_tag(
        cls,
        tag: Tag,
        attributes: Tuple[Attribute, ...] = (),
        position: TokenPosition = START_POSITION
    ) -> "Token":
        return cls(TokenType.START_TAG, tag=tag, attributes=tuple(attributes),
                   position=position)

    @classmethod
    def end_tag(cls, tag: Tag, position: TokenPosition = START_POSITION) -> "Token":
        return cls(TokenType.END_TAG, tag=tag, position=position)

    @classmethod
    def text_run(cls, text: str, position: TokenPosition = START_POSITION) -> "Token":
        return cls(TokenType.TEXT, text=text, position=position)

    def __str__(self) -> str:
        if self.type is TokenType.TEXT:
            return f"TEXT {self.text!r}"
        if self.type is TokenType.END_TAG:
            return f"END_TAG {self.tag}"
        attrs = " ".join(str(attribute) for attribute in self.attributes)
        return f"START_TAG {self.tag}" + (f" [{attrs}]" if attrs else "")


@dataclass
class TokenizationResult:
    """All tokens of a document plus scan statistics."""

    tokens: List[Token]
    character_count: int = 0
    processing_time_ms: float = 0.0
    max_depth: int = 0

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def type_distribution(self) -> Dict[str, int]:
        """Number of tokens per token type name."""
        distribution: Dict[str, int] = {}
        for token in self.tokens:
            distribution[token.type.name] = distribution.get(token.type.name, 0) + 1
        return distribution


class HTMLTokenizer:
    """Single-pass tokenizer over an immutable input string.

    Example:
        >>> [str(token) for token in HTMLTokenizer("<p>hi</p>")]
        ['START_TAG p', "TEXT 'hi'", 'END_TAG p']
    """

    def __init__(
        self,
        text: str,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            text: Markup to tokenize
            config: Optional tokenizer configuration
            correlation_id: Optional correlation ID for log records

        Raises:
            InputTooLargeError: If the input exceeds ``config.max_input_size``
        """
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self.logger = logger.bind(correlation_id)

        limit = self.config.max_input_size
        if limit is not None and len(text) > limit:
            raise InputTooLargeError(len(text), limit)

        self._text = text
        self._length = len(text)
        self.reset()

    def reset(self) -> None:
        """Rewind to the start of the input."""
        self._pos = 0
        self._line = 1
        self._line_start = 0

    @property
    def at_end(self) -> bool:
        return self._pos >= self._length

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Optional[Token]:
        """Return the next token, or None once the input is exhausted."""
        if self._pos >= self._length:
            return None

        if self._text[self._pos] == TAG_OPEN:
            token = self._scan_tag()
        else:
            token = self._scan_text()

        if self.logger.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                "Token emitted",
                extra={"token": str(token), "offset": token.position.offset}
            )
        return token

    def tokenize(self) -> TokenizationResult:
        """Tokenize the whole input from the beginning.

        Also measures the deepest start/end tag nesting seen in the stream.
        """
        start_time = time.time()
        self.reset()

        tokens: List[Token] = []
        depth = 0
        max_depth = 0
        for token in self:
            if token.type is TokenType.START_TAG:
                depth += 1
                max_depth = max(max_depth, depth)
            elif token.type is TokenType.END_TAG:
                depth -= 1
            tokens.append(token)

        return TokenizationResult(
            tokens=tokens,
            character_count=self._length,
            processing_time_ms=(time.time() - start_time) * 1000,
            max_depth=max_depth,
        )

    # Position bookkeeping

    def _position_at(self, index: int) -> TokenPosition:
        """Position of ``index``, which must not precede the cursor."""
        if not self.config.track_positions:
            return TokenPosition(1, index + 1, index)
        line = self._line
        line_start = self._line_start
        newlines = self._text.count("\n", self._pos, index)
        if newlines:
            line += newlines
            line_start = self._text.rindex("\n", self._pos, index) + 1
        return TokenPosition(line, index - line_start + 1, index)

    def _advance(self, index: int) -> None:
        if self.config.track_positions:
            newlines = self._text.count("\n", self._pos, index)
            if newlines:
                self._line += newlines
                self._line_start = self._text.rindex("\n", self._pos, index) + 1
        self._pos = index

    def _scan_until(self, index: int, stops: str) -> int:
        """Index of the first character in ``stops`` at or after ``index``."""
        text = self._text
        while index < self._length and text[index] not in stops:
            index += 1
        return index

    # Scanning states

    def _scan_text(self) -> Token:
        position = self._position_at(self._pos)
        end = self._text.find(TAG_OPEN, self._pos)
        if end == -1:
            end = self._length
        value = self._text[self._pos:end]
        self._advance(end)
        return Token.text_run(value, position)

    def _scan_tag(self) -> Token:
        position = self._position_at(self._pos)
        name_start = self._pos + 1
        if name_start >= self._length:
            raise UnterminatedTagError("Tag opened at end of input", position)

        if self._text[name_start] == END_TAG_MARKER:
            return self._scan_end_tag(name_start + 1, position)
        return self._scan_start_tag(name_start, position)

    def _scan_end_tag(self, name_start: int, position: TokenPosition) -> Token:
        close = self._text.find(TAG_CLOSE, name_start)
        if close == -1:
            raise UnterminatedTagError("End tag is missing '>'", position)
        tag = Tag.resolve(self._text[name_start:close])
        self._advance(close + 1)
        return Token.end_tag(tag, position)

    def _scan_start_tag(self, name_start: int, position: TokenPosition) -> Token:
        name_end = self._scan_until(name_start, _TAG_NAME_STOPS)
        if name_end >= self._length:
            raise UnterminatedTagError("Start tag is missing '>'", position)

        tag = Tag.resolve(self._text[name_start:name_end])
        attributes: List[Attribute] = []
        close = name_end
        if self._text[name_end] == ATTR_SEPARATOR:
            close = self._scan_attributes(name_end + 1, attributes, position)

        self._advance(close + 1)
        return Token.start_tag(tag, tuple(attributes), position)

    def _scan_attributes(
        self, index: int, attributes: List[Attribute], position: TokenPosition
    ) -> int:
        """Collect attributes in source order; return the index of the closing '>'."""
        text = self._text
        while True:
            while index < self._length and text[index] == ATTR_SEPARATOR:
                index += 1
            if index >= self._length:
                raise UnterminatedTagError("Start tag is missing '>'", position)
            if text[index] == TAG_CLOSE:
                return index

            name_end = self._scan_until(index, _ATTR_NAME_STOPS)
            if name_end >= self._length:
                raise UnterminatedTagError("Start tag is missing '>'", position)
            name = text[index:name_end]

            if text[name_end] != ATTR_ASSIGN:
                # Valueless attribute such as <p hidden>
                attributes.append(Attribute.resolve(name, ""))
                index = name_end
                continue

            value, index = self._scan_attribute_value(name_end + 1, position)
            attributes.append(Attribute.resolve(name, value))

    def _scan_attribute_value(self, index: int, position: TokenPosition) -> Tuple[str, int]:
        """Read a quoted value starting at ``index``; return it and the index after it."""
        if index >= self._length:
            raise UnterminatedTagError("Start tag is missing '>'", position)
        if self._text[index] != ATTR_QUOTE:
            raise MalformedAttributeError(
                "Attribute value must be enclosed in double quotes",
                self._position_at(index),
            )
        close = self._text.find(ATTR_QUOTE, index + 1)
        if close == -1:
            raise UnterminatedAttributeValueError(
                "Attribute value is missing its closing quote",
                self._position_at(index),
            )
        return self._text[index + 1:close], close + 1


def tokenize(text: str, config: Optional[TokenizerConfig] = None) -> List[Token]:
    """Tokenize ``text`` and return the token list."""
    return HTMLTokenizer(text, config).tokenize().tokens
