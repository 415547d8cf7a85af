"""Tree building from token streams.

The builder keeps an explicit stack of open element frames, so nesting depth
is bounded by memory rather than by the interpreter's recursion limit. Any
structural problem (an end tag that does not match the innermost open
element, or elements left open at the end of input) is a fatal ParseError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from mini_dom_parser.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MaxDepthExceededError,
    MismatchedEndTagError,
    ParseError,
    PerformanceMetrics,
    TreeConfig,
    UnclosedElementError,
    UnexpectedEndTagError,
    get_logger,
)
from mini_dom_parser.tokenization import Token, TokenPosition, TokenType
from mini_dom_parser.vocabulary import Attribute, Tag, TagKind

TagQuery = Union[TagKind, str]

logger = get_logger(__name__, component="tree_builder")


def _matches(tag: Tag, query: TagQuery) -> bool:
    if isinstance(query, TagKind):
        return tag.kind is query
    return tag.name == query


@dataclass(frozen=True)
class Text:
    """Leaf node holding literal text content."""

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class Element:
    """Element node; owns its children, which appear in document order."""

    tag: Tag
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = ()

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and all descendant elements in document order."""
        stack: List[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(
                child for child in reversed(element.children)
                if isinstance(child, Element)
            )

    def _descendants(self, query: TagQuery) -> Iterator["Element"]:
        elements = self.iter()
        next(elements)
        return (element for element in elements if _matches(element.tag, query))

    def find(self, query: TagQuery) -> Optional["Element"]:
        """Find the first descendant element matching a tag kind or tag name."""
        return next(self._descendants(query), None)

    def find_all(self, query: TagQuery) -> List["Element"]:
        """Find all descendant elements matching a tag kind or tag name."""
        return list(self._descendants(query))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default

    @property
    def text_content(self) -> str:
        """Concatenation of all descendant text in document order."""
        parts: List[str] = []
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                parts.append(node.text)
            else:
                stack.extend(reversed(node.children))
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element and its subtree to dictionary representation."""
        result = self._element_dict()
        stack: List[Tuple[Element, Dict[str, Any]]] = [(self, result)]
        while stack:
            element, data = stack.pop()
            if not element.children:
                continue
            children: List[Dict[str, Any]] = []
            for child in element.children:
                if isinstance(child, Text):
                    children.append(child.to_dict())
                else:
                    child_data = child._element_dict()
                    children.append(child_data)
                    stack.append((child, child_data))
            data["children"] = children
        return result

    def _element_dict(self) -> Dict[str, Any]:
        return {
            "type": "element",
            "tag": self.tag.name,
            "known": not self.tag.is_unknown,
            "attributes": [
                {"name": attribute.name, "value": attribute.value}
                for attribute in self.attributes
            ],
        }


Node = Union[Element, Text]


def tree_depth(nodes: Iterable[Node]) -> int:
    """Maximum element nesting depth of a root-level sequence."""
    deepest = 0
    stack: List[Tuple[Node, int]] = [(node, 1) for node in nodes]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Element):
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in node.children)
    return deepest


@dataclass
class ElementFrame:
    """An element whose end tag has not been seen yet."""

    tag: Tag
    attributes: Tuple[Attribute, ...]
    position: TokenPosition
    children: List[Node] = field(default_factory=list)

    def seal(self) -> Element:
        return Element(self.tag, self.attributes, tuple(self.children))


class TreeBuilder:
    """Assemble a token stream into a list of root-level nodes.

    Example:
        >>> builder = TreeBuilder()
        >>> builder.feed(Token.start_tag(Tag.resolve("p")))
        >>> builder.feed(Token.text_run("hi"))
        >>> builder.feed(Token.end_tag(Tag.resolve("p")))
        >>> builder.finish()[0].text_content
        'hi'
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Optional tree configuration
            correlation_id: Optional correlation ID for log records
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = logger.bind(correlation_id)

        self._stack: List[ElementFrame] = []
        self._roots: List[Node] = []
        self._finished = False
        self._max_depth = 0
        self.elements_created = 0

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack)

    @property
    def max_depth(self) -> int:
        """Deepest nesting reached so far."""
        return self._max_depth

    @property
    def open_tags(self) -> Tuple[Tag, ...]:
        return tuple(frame.tag for frame in self._stack)

    def feed(self, token: Token) -> None:
        """Apply one token to the partial tree.

        Raises:
            MismatchedEndTagError: If an end tag does not match the innermost open element
            MaxDepthExceededError: If nesting exceeds ``config.max_tree_depth``
        """
        self._check_open()
        if token.type is TokenType.START_TAG:
            self._open(token)
        elif token.type is TokenType.END_TAG:
            self._close(token)
        else:
            self._append(Text(token.text))

    def finish(self) -> List[Node]:
        """Return the root-level nodes; the builder cannot be used afterwards.

        Raises:
            UnclosedElementError: If any element is still open
        """
        self._check_open()
        self._finished = True

        if self._stack:
            innermost = self._stack[-1]
            raise UnclosedElementError(
                innermost.tag, self.open_tags, innermost.position
            )

        roots, self._roots = self._roots, []
        self.logger.debug(
            "Tree building completed",
            extra={
                "root_count": len(roots),
                "elements_created": self.elements_created,
                "max_depth": self._max_depth,
            }
        )
        return roots

    def build(self, tokens: Iterable[Token]) -> List[Node]:
        """Feed every token, then finish."""
        for token in tokens:
            self.feed(token)
        return self.finish()

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("TreeBuilder.finish() has already been called")

    def _open(self, token: Token) -> None:
        depth = len(self._stack) + 1
        limit = self.config.max_tree_depth
        if limit is not None and depth > limit:
            raise MaxDepthExceededError(depth, limit, token.position)

        self._stack.append(ElementFrame(token.tag, token.attributes, token.position))
        self._max_depth = max(self._max_depth, depth)

    def _close(self, token: Token) -> None:
        if not self._stack:
            raise UnexpectedEndTagError(token.tag, token.position)

        frame = self._stack[-1]
        if frame.tag != token.tag:
            raise MismatchedEndTagError(frame.tag, token.tag, token.position)

        self._stack.pop()
        self.elements_created += 1
        self._append(frame.seal())

    def _append(self, node: Node) -> None:
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self._roots.append(node)


@dataclass
class ParseResult:
    """Outcome of a parse that reports failures instead of raising them."""

    nodes: List[Node] = field(default_factory=list)
    success: bool = True
    error: Optional[ParseError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def root(self) -> Optional[Element]:
        """First root-level element, if any."""
        return next((node for node in self.nodes if isinstance(node, Element)), None)

    def raise_for_error(self) -> None:
        """Re-raise the captured ParseError, if there is one."""
        if self.error is not None:
            raise self.error

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(diag.severity is DiagnosticSeverity.ERROR for diag in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "success": self.success,
            "nodes": [node.to_dict() for node in self.nodes],
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "performance": self.performance.to_dict(),
        }
        if self.error is not None:
            result["error"] = self.error.to_dict()
        if self.correlation_id is not None:
            result["correlation_id"] = self.correlation_id
        return result


def build_tree(tokens: Iterable[Token], config: Optional[TreeConfig] = None) -> List[Node]:
    """Build root-level nodes from a token iterable."""
    return TreeBuilder(config).build(tokens)
