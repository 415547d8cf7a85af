"""Render node trees back to markup or to an indented outline.

Both renderers walk the tree with an explicit stack, so they handle any
tree the builder can produce.
"""

from typing import Iterable, List, Tuple

from .builder import Element, Node, Text


def _start_tag(element: Element) -> str:
    if not element.attributes:
        return f"<{element.tag.name}>"
    attrs = " ".join(f'{attr.name}="{attr.value}"' for attr in element.attributes)
    return f"<{element.tag.name} {attrs}>"


def serialize(nodes: Iterable[Node]) -> str:
    """Re-emit markup for a root-level sequence.

    Attribute order and text content are preserved, so parsing the output
    yields an equal tree.

    Example:
        >>> from mini_dom_parser import parse
        >>> serialize(parse('<p class="a">hi</p>'))
        '<p class="a">hi</p>'
    """
    parts: List[str] = []
    # (node, closing): closing entries emit the end tag after all children
    stack: List[Tuple[Node, bool]] = [(node, False) for node in reversed(list(nodes))]
    while stack:
        node, closing = stack.pop()
        if isinstance(node, Text):
            parts.append(node.text)
        elif closing:
            parts.append(f"</{node.tag.name}>")
        else:
            parts.append(_start_tag(node))
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
    return "".join(parts)


def format_tree(nodes: Iterable[Node], indent: str = "  ") -> str:
    """Indented outline with one node per line; text nodes are shown quoted."""
    lines: List[str] = []
    stack: List[Tuple[Node, int]] = [(node, 0) for node in reversed(list(nodes))]
    while stack:
        node, level = stack.pop()
        prefix = indent * level
        if isinstance(node, Text):
            lines.append(f"{prefix}{node.text!r}")
            continue
        marker = "?" if node.tag.is_unknown else ""
        lines.append(f"{prefix}{_start_tag(node)}{marker}")
        stack.extend((child, level + 1) for child in reversed(node.children))
    return "\n".join(lines)
