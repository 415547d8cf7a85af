"""Tokenization layer for the mini DOM parser.

Key Components:
    HTMLTokenizer: Pull-based tokenizer over a markup string
    Token: Start tag, end tag or text run with its source position
    TokenType: Enumeration of token types
    TokenPosition: Line, column and offset of a token
    TokenizationResult: Token list plus scan statistics
"""

from .tokenizer import (
    HTMLTokenizer,
    Token,
    TokenizationResult,
    TokenPosition,
    TokenType,
    tokenize,
)

__all__ = [
    "HTMLTokenizer",
    "Token",
    "TokenPosition",
    "TokenType",
    "TokenizationResult",
    "tokenize",
]
