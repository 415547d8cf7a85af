"""Public parsing API.

``parse()`` is the single entry point most callers need: it turns a markup
string into its root-level nodes or raises a ``ParseError``. ``DOMParser``
adds configuration, correlation-aware logging and a non-raising variant that
reports failures as diagnostics.
"""

import time
from typing import List, Optional

from mini_dom_parser.shared import (
    DiagnosticSeverity,
    ParseError,
    ParserConfig,
    get_logger,
    new_correlation_id,
)
from mini_dom_parser.tokenization import HTMLTokenizer
from mini_dom_parser.tree import Node, ParseResult, TreeBuilder

# Max length for content preview in logs
PREVIEW_LENGTH = 100
MS_PER_SECOND = 1000

logger = get_logger(__name__, component="dom_parser")


def _preview(text: str) -> str:
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


class DOMParser:
    """Configured parser.

    Each call to ``parse`` or ``parse_with_diagnostics`` uses its own tokenizer
    and builder, so one instance can be shared between threads.

    Examples:
        >>> parser = DOMParser(ParserConfig.strict(max_tree_depth=32))
        >>> parser.parse("<p>hi</p>")[0].text_content
        'hi'

        >>> result = parser.parse_with_diagnostics("<p>hi")
        >>> result.success, result.error.code
        (False, 'unclosed_element')
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        if correlation_id is None and self.config.global_.enable_correlation_tracking:
            correlation_id = new_correlation_id()
        self.correlation_id = correlation_id
        self.logger = logger.bind(correlation_id)

    def parse(self, text: str) -> List[Node]:
        """Parse markup into root-level nodes.

        Raises:
            TypeError: If ``text`` is not a string
            ParseError: If the markup is structurally malformed
        """
        return self._run(text, ParseResult(correlation_id=self.correlation_id))

    def parse_with_diagnostics(self, text: str) -> ParseResult:
        """Parse markup, capturing any ParseError in the returned result."""
        result = ParseResult(correlation_id=self.correlation_id)
        try:
            result.nodes = self._run(text, result)
        except ParseError as e:
            result.success = False
            result.error = e
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                e.message,
                "dom_parser",
                position=e.to_dict().get("position"),
                details={"code": e.code, "error": type(e).__name__},
            )
        return result

    def _run(self, text: str, result: ParseResult) -> List[Node]:
        if not isinstance(text, str):
            raise TypeError(f"parse() expects str, got {type(text).__name__}")

        start_time = time.time()
        metrics = result.performance
        metrics.characters_processed = len(text)
        self.logger.info(
            "Starting parse",
            extra={"content_length": len(text), "preview": _preview(text)}
        )

        collect = self.config.tree.collect_statistics
        builder = TreeBuilder(self.config.tree, self.correlation_id)
        try:
            tokenizer = HTMLTokenizer(text, self.config.tokenizer, self.correlation_id)
            for token in tokenizer:
                if collect:
                    metrics.tokens_generated += 1
                builder.feed(token)
            nodes = builder.finish()
        except ParseError as e:
            self.logger.warning("Parse failed", extra={"parse_error": e.to_dict()})
            raise
        finally:
            metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
            if collect:
                metrics.elements_created = builder.elements_created
                metrics.max_depth = builder.max_depth

        if not nodes:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "Document contains no nodes",
                "dom_parser",
            )
        self.logger.info(
            "Parse completed",
            extra={
                "root_count": len(nodes),
                "elements_created": metrics.elements_created,
                "processing_time_ms": metrics.processing_time_ms,
            }
        )
        return nodes


def parse(text: str) -> List[Node]:
    """Parse markup into its root-level nodes.

    Args:
        text: Markup source

    Returns:
        Root-level nodes in document order (empty for empty input)

    Raises:
        ParseError: If the markup is structurally malformed

    Examples:
        >>> parse('<h1 class="header">Hi</h1>')[0].get_attribute("class")
        'header'
        >>> parse("")
        []
    """
    return DOMParser().parse(text)
