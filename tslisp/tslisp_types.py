"""
TSLisp core data types: tokens, bracket groups and AST nodes.

Every structure here is created fresh per compiled input and dropped once
the next pipeline stage has consumed it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union


class TslispSyntaxError(Exception):
    """Fatal compile error. ``str(err)`` is the plain diagnostic message."""


# ─── Tokens ───────────────────────────────────────────────────────────────────

class TokenType(Enum):
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    COMMENT = "comment"
    IDENTIFIER = "identifier"
    DEF_CONSTANT = "defconstant"
    DEF_FUNCTION = "defun"
    DEF_VARIABLE = "defvar"


# Reserved words, matched exactly and case-sensitively.
KEYWORDS = {
    "defconstant": TokenType.DEF_CONSTANT,
    "defun": TokenType.DEF_FUNCTION,
    "defvar": TokenType.DEF_VARIABLE,
}

# Token kinds allowed as call arguments.
LEAF_TYPES = frozenset({
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.BOOLEAN,
    TokenType.IDENTIFIER,
})


@dataclass(frozen=True)
class Token:
    type: TokenType
    content: str


# A bracket group is one nesting level: tokens and nested groups in order.
BracketGroup = List[Union[Token, "BracketGroup"]]


# ─── AST ──────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EmptyNode:
    pass


@dataclass(frozen=True)
class ExpressionNode:
    token: Token


@dataclass(frozen=True)
class FunctionNode:
    name: str
    children: Tuple["AstNode", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DefConstantNode:
    name: str
    value: str


@dataclass(frozen=True)
class DefVariableNode:
    name: str
    value: str


@dataclass(frozen=True)
class DefFunctionNode:
    name: str
    params: Tuple[str, ...]
    body: Tuple["AstNode", ...] = field(default_factory=tuple)


AstNode = Union[
    EmptyNode,
    ExpressionNode,
    FunctionNode,
    DefConstantNode,
    DefVariableNode,
    DefFunctionNode,
]
