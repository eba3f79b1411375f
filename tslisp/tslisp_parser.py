"""
TSLisp Parser

Turns a token stream into AST nodes in two passes.

1. ``structure`` groups tokens by parentheses, so that

     (map (list 1 2 3))

   becomes ``[[map, [list, 1, 2, 3]]]``. Unbalanced parentheses are fatal.

2. ``build`` turns every group into a typed node. A group led by an
   identifier is a function call; groups led by ``defconstant``, ``defvar``
   or ``defun`` are definitions.
"""
import logging
import time
from typing import List, Sequence, Tuple

from tslisp.tslisp_lexer import tokenize
from tslisp.tslisp_types import (
    LEAF_TYPES,
    AstNode,
    BracketGroup,
    DefConstantNode,
    DefFunctionNode,
    DefVariableNode,
    EmptyNode,
    ExpressionNode,
    FunctionNode,
    Token,
    TokenType,
    TslispSyntaxError,
)

logger = logging.getLogger("tslisp.parser")

DEFUN_FORM_ERROR = "defun node must be in form (defun name (params) body...)"
NESTING_ERROR = "Expression nested too deeply"


# ─── Bracket Structurer ───────────────────────────────────────────────────────

def _structure(tokens: Sequence[Token], pos: int, depth: int) -> Tuple[int, int, BracketGroup]:
    group: BracketGroup = []

    while pos < len(tokens):
        tok = tokens[pos]

        if tok.type is TokenType.OPEN_PAREN:
            depth, pos, nested = _structure(tokens, pos + 1, depth + 1)
            group.append(nested)
        elif tok.type is TokenType.CLOSE_PAREN:
            # The caller consumes the closing paren.
            return depth - 1, pos, group
        elif depth > 0:
            group.append(tok)
        else:
            raise TslispSyntaxError("Found token outside of parenthesis")

        pos += 1

    return depth, pos, group


def structure(tokens: Sequence[Token], depth: int = 0) -> Tuple[int, List[Token], BracketGroup]:
    """
    Group ``tokens`` by parentheses.

    Returns ``(depth, remaining_tokens, groups)``. For balanced input the
    final depth is 0, positive when a group is left open and negative when
    a closing paren has no partner.
    """
    depth, pos, groups = _structure(tokens, 0, depth)
    return depth, list(tokens[pos:]), groups


# ─── AST Builder ──────────────────────────────────────────────────────────────

def _build_child(child) -> AstNode:
    if isinstance(child, list):
        return build_node(child)
    if child.type in LEAF_TYPES:
        return ExpressionNode(child)
    raise TslispSyntaxError(f"Unexpected token in function call: {child.content}")


def _build_function(group: BracketGroup) -> FunctionNode:
    name = group[0].content
    return FunctionNode(name, tuple(_build_child(child) for child in group[1:]))


def _build_definition(group: BracketGroup, keyword: str, node_cls):
    # Nested lists as name or value are not supported.
    if len(group) != 3 or any(isinstance(item, list) for item in group[1:]):
        raise TslispSyntaxError(f"{keyword} node must be in form ({keyword} name value)")
    return node_cls(group[1].content, group[2].content)


def _build_def_constant(group: BracketGroup) -> DefConstantNode:
    return _build_definition(group, "defconstant", DefConstantNode)


def _build_def_variable(group: BracketGroup) -> DefVariableNode:
    return _build_definition(group, "defvar", DefVariableNode)


def _build_def_function(group: BracketGroup) -> DefFunctionNode:
    if len(group) < 3 or isinstance(group[1], list) or not isinstance(group[2], list):
        raise TslispSyntaxError(DEFUN_FORM_ERROR)
    if any(isinstance(param, list) for param in group[2]):
        raise TslispSyntaxError(DEFUN_FORM_ERROR)

    name = group[1].content
    params = tuple(param.content for param in group[2])

    seen = set()
    for param in params:
        if param in seen:
            raise TslispSyntaxError(f"Duplicate parameter '{param}' in defun {name}")
        seen.add(param)

    body = tuple(_build_child(stmt) for stmt in group[3:])
    return DefFunctionNode(name, params, body)


NODE_BUILDERS = {
    TokenType.IDENTIFIER: _build_function,
    TokenType.DEF_CONSTANT: _build_def_constant,
    TokenType.DEF_VARIABLE: _build_def_variable,
    TokenType.DEF_FUNCTION: _build_def_function,
}


def build_node(group: BracketGroup) -> AstNode:
    if not group:
        return EmptyNode()

    first = group[0]
    if isinstance(first, list):
        raise TslispSyntaxError("Cannot have list as first element of list")

    builder = NODE_BUILDERS.get(first.type)
    if builder is None:
        raise TslispSyntaxError(f"List must start with an identifier or keyword, got {first.content}")
    return builder(group)


def build(groups: BracketGroup) -> List[AstNode]:
    """One node per top-level group."""
    return [build_node(group) for group in groups if isinstance(group, list)]


def tokens_to_ast(tokens: Sequence[Token]) -> List[AstNode]:
    tokens = [tok for tok in tokens if tok.type is not TokenType.COMMENT]

    depth, _, groups = structure(tokens)

    if depth > 0:
        raise TslispSyntaxError("Expected closing parenthesis")
    if depth < 0:
        raise TslispSyntaxError("Expected opening parenthesis")

    return build(groups)


def count_nodes(nodes: Sequence[AstNode]) -> int:
    total = 0
    for node in nodes:
        total += 1
        if isinstance(node, FunctionNode):
            total += count_nodes(node.children)
        elif isinstance(node, DefFunctionNode):
            total += count_nodes(node.body)
    return total


class TslispParser:
    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse(self, code: str) -> List[AstNode]:
        """Parse ``code`` into top-level nodes. Raises TslispSyntaxError."""
        start_time = time.time()

        try:
            nodes = tokens_to_ast(tokenize(code))
            if self.debug:
                dur = (time.time() - start_time) * 1000
                logger.debug(
                    "Parsed %d bytes in %.2fms. Nodes: %d", len(code), dur, count_nodes(nodes)
                )
        except RecursionError:
            # Structuring and building recurse once per nesting level.
            if self.debug:
                logger.debug("Parse failed for %r: %s", code, NESTING_ERROR)
            raise TslispSyntaxError(NESTING_ERROR) from None
        except TslispSyntaxError as e:
            if self.debug:
                logger.debug("Parse failed for %r: %s", code, e)
            raise

        return nodes
