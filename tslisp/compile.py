"""
TSLisp Code Generator

Walks the AST and emits the JavaScript equivalent of each node, e.g.

    (console.log "hello world")   ->   console.log("hello world")

Definitions do not use ``const``/``let``: every line is evaluated on its
own, so names are written into a process-wide slot object instead
(``global`` under node). The slot object name is chosen by the caller.
"""
import sys
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tslisp.tslisp_parser import NESTING_ERROR, TslispParser
from tslisp.tslisp_types import (
    AstNode,
    DefConstantNode,
    DefFunctionNode,
    DefVariableNode,
    ExpressionNode,
    FunctionNode,
    TslispSyntaxError,
)

DEFAULT_NAMESPACE = "global"

# Binary operators: TSLisp name -> JavaScript infix operator.
BINARY_OPERATORS: Dict[str, str] = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "=": "===",
    "!=": "!==",
    "or": "||",
    "and": "&&",
    "xor": "^",
    "mod": "%",
    "<": "<",
    "<=": "<=",
    ">": ">",
    ">=": ">=",
    "exp": "**",
    # Named after the JavaScript operators they emit, so rshift is >>.
    "rshift": ">>",
    "lshift": "<<",
}

UNARY_OPERATORS: Dict[str, str] = {
    "not": "!",
    "neg": "-",
}

LIST_METHODS = frozenset({"filter", "map", "some", "every", "includes"})
LIST_OPERATIONS = frozenset({"list"}) | LIST_METHODS

MISC_FORMS = frozenset({"exit", "set"})

EXIT_CALL = "process.exit(0)"


class SlotWriter:
    """Renders ``define(name, value)`` as a write into the slot object."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self.namespace = namespace

    def define(self, name: str, value: str) -> str:
        return f"{self.namespace}.{name} = {value}"


def _param(params: Sequence[str], index: int) -> str:
    return params[index] if index < len(params) else "undefined"


# ─── Function Forms ───────────────────────────────────────────────────────────

def handle_binary_expr(name: str, params: Sequence[str], slots: SlotWriter) -> str:
    oper = BINARY_OPERATORS[name]
    return "(" + f" {oper} ".join(params) + ")"


def handle_unary_expr(name: str, params: Sequence[str], slots: SlotWriter) -> str:
    # Only the first operand is used.
    return UNARY_OPERATORS[name] + _param(params, 0)


def handle_list_expr(name: str, params: Sequence[str], slots: SlotWriter) -> str:
    if name == "list":
        return "[" + ", ".join(params) + "]"
    return f"{_param(params, 1)}.{name}({_param(params, 0)})"


def handle_misc_expr(name: str, params: Sequence[str], slots: SlotWriter) -> str:
    if name == "exit":
        return EXIT_CALL
    return slots.define(_param(params, 0), _param(params, 1))


def handle_function_expr(name: str, params: Sequence[str], slots: SlotWriter) -> str:
    return f"{name}({', '.join(params)})"


Handler = Callable[[str, Sequence[str], SlotWriter], str]

# Checked in order; the first table containing the name wins.
DISPATCH_TABLE: List[Tuple[object, Handler]] = [
    (BINARY_OPERATORS, handle_binary_expr),
    (UNARY_OPERATORS, handle_unary_expr),
    (LIST_OPERATIONS, handle_list_expr),
    (MISC_FORMS, handle_misc_expr),
]


def resolve_handler(name: str) -> Handler:
    for names, handler in DISPATCH_TABLE:
        if name in names:
            return handler
    return handle_function_expr


# ─── Node Handlers ────────────────────────────────────────────────────────────

def generate_expression(node: ExpressionNode, slots: SlotWriter) -> str:
    return node.token.content


def generate_function(node: FunctionNode, slots: SlotWriter) -> str:
    params = [generate(child, slots) for child in node.children]
    return resolve_handler(node.name)(node.name, params, slots)


def generate_definition(node, slots: SlotWriter) -> str:
    return slots.define(node.name, node.value)


def generate_def_function(node: DefFunctionNode, slots: SlotWriter) -> str:
    # Empty statements and empty bodies become undefined: a bare "()" in
    # the arrow body is a SyntaxError under node.
    body = ", ".join(f"({generate(stmt, slots) or 'undefined'})" for stmt in node.body)
    lambda_expr = f"({', '.join(node.params)}) => ({body or 'undefined'})"
    return slots.define(node.name, lambda_expr) + ";"


NODE_HANDLERS = {
    ExpressionNode: generate_expression,
    FunctionNode: generate_function,
    DefConstantNode: generate_definition,
    DefVariableNode: generate_definition,
    DefFunctionNode: generate_def_function,
}


def generate(node: AstNode, slots: Optional[SlotWriter] = None) -> str:
    """JavaScript text for ``node``. Empty and unknown nodes give ``""``."""
    handler = NODE_HANDLERS.get(type(node))
    if handler is None:
        return ""
    return handler(node, slots or SlotWriter())


class TslispCompiler:
    def __init__(self, namespace: str = DEFAULT_NAMESPACE, debug: bool = False):
        self.parser = TslispParser(debug=debug)
        self.slots = SlotWriter(namespace)

    def compile(self, code: str) -> str:
        """Compile one input line. Only its first top-level form is emitted."""
        nodes = self.parser.parse(code)
        if not nodes:
            return ""
        return self._generate_all(nodes[:1])[0]

    def compile_program(self, code: str) -> List[str]:
        """One JavaScript statement per top-level form, each compiled on its own."""
        return self._generate_all(self.parser.parse(code))

    def _generate_all(self, nodes: Sequence[AstNode]) -> List[str]:
        # Generation recurses deeper per level than parsing does.
        try:
            return [generate(node, self.slots) for node in nodes]
        except RecursionError:
            raise TslispSyntaxError(NESTING_ERROR) from None

    def compile_script(self, code: str) -> str:
        """Newline-separated statements ready to hand to node. Empty forms are dropped."""
        statements = [stmt for stmt in self.compile_program(code) if stmt]
        return "\n".join(stmt if stmt.endswith(";") else stmt + ";" for stmt in statements)


def compile_source(code: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return TslispCompiler(namespace).compile(code)


def compile_program(code: str, namespace: str = DEFAULT_NAMESPACE) -> List[str]:
    return TslispCompiler(namespace).compile_program(code)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: tslisp compile <file> [output]", file=sys.stderr)
        return 1

    from tslisp.config import settings

    with open(argv[0], "r", encoding="utf-8") as f:
        code = f.read()

    compiler = TslispCompiler(settings.SLOT_NAMESPACE, debug=settings.PARSE_DEBUG)
    output = compiler.compile_script(code)

    if len(argv) > 1:
        with open(argv[1], "w", encoding="utf-8") as f:
            f.write(output + "\n")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
