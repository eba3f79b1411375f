"""TSLisp: compiles S-expressions to JavaScript, one line at a time."""
from tslisp.compile import TslispCompiler, compile_program, compile_source, generate
from tslisp.tslisp_lexer import tokenize
from tslisp.tslisp_parser import build, structure, tokens_to_ast
from tslisp.tslisp_types import TslispSyntaxError

__version__ = "0.1.0"

__all__ = [
    "TslispCompiler",
    "TslispSyntaxError",
    "build",
    "compile_program",
    "compile_source",
    "generate",
    "structure",
    "tokenize",
    "tokens_to_ast",
]
