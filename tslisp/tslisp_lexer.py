"""
TSLisp Lexer

Splits source text into chunks, then classifies each chunk as a token.
Quoted strings and ``;`` comments are kept whole, even when they contain
whitespace or parentheses. Tokenizing never fails.
"""
import re
from typing import List

from tslisp.tslisp_types import KEYWORDS, Token, TokenType

# Same acceptance rule as JavaScript's parseFloat: a numeric prefix is enough.
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def is_numeric(text: str) -> bool:
    return _NUMERIC_PREFIX.match(text.lstrip()) is not None


def detect_token_type(chunk: str) -> TokenType:
    """Classify a chunk. Unknown chunks are identifiers."""
    if chunk == "(":
        return TokenType.OPEN_PAREN
    if chunk == ")":
        return TokenType.CLOSE_PAREN
    if chunk in ("true", "false"):
        return TokenType.BOOLEAN
    if chunk in KEYWORDS:
        return KEYWORDS[chunk]
    if is_numeric(chunk):
        return TokenType.NUMBER
    if chunk.startswith('"'):
        return TokenType.STRING
    if chunk.startswith(";"):
        return TokenType.COMMENT
    return TokenType.IDENTIFIER


def chunk_source(source: str) -> List[str]:
    chunks = []
    chunk = ""
    in_string = False
    in_comment = False

    for char in source:
        # Each flag is only flipped outside the other region, so "a;b"
        # stays one string and a quote inside a comment opens nothing.
        # A newline only ever ends a comment; toggling it would start one
        # at the end of every ordinary line.
        if char == ";" and not in_string:
            in_comment = True
        elif char == '"' and not in_comment:
            in_string = not in_string
        elif char == "\n":
            in_comment = False

        if in_string or in_comment:
            chunk += char
            continue

        if char.isspace():
            if chunk:
                chunks.append(chunk)
                chunk = ""
        elif char in "()":
            if chunk:
                chunks.append(chunk)
                chunk = ""
            chunks.append(char)
        else:
            chunk += char

    if chunk:
        chunks.append(chunk)

    return chunks


def tokenize(source: str) -> List[Token]:
    return [Token(detect_token_type(chunk), chunk) for chunk in chunk_source(source)]
