"""
TSLisp command line entry point.

    tslisp compile <file> [output]   write the JavaScript translation
    tslisp run <file>                compile and execute with node
    tslisp repl [--no-exec]          interactive shell
    tslisp version
"""
import logging
import sys

from tslisp import __version__
from tslisp.colors import Colors
from tslisp.config import settings
from tslisp.tslisp_types import TslispSyntaxError

USAGE = "Usage: tslisp <command> [args]"
COMMANDS = "Available commands: compile, run, repl, version"


def run_file(path: str) -> int:
    from tslisp.compile import TslispCompiler
    from tslisp.sandbox import LocalSandbox

    print(f"{Colors.OKCYAN}[TSLisp {__version__}] Running {path}{Colors.ENDC}", file=sys.stderr)
    with open(path, "r", encoding="utf-8") as f:
        code = f.read()

    compiler = TslispCompiler(settings.SLOT_NAMESPACE, debug=settings.PARSE_DEBUG)
    result = LocalSandbox().execute(compiler.compile_script(code))
    sys.stdout.write(result.stdout)
    if not result.ok:
        print(f"{Colors.FAIL}Runtime Error: {result.stderr}{Colors.ENDC}", file=sys.stderr)
        return 1
    if result.stderr:
        sys.stderr.write(result.stderr)
    return 0


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING))

    if not argv:
        print(USAGE)
        return 1

    cmd, args = argv[0], argv[1:]

    try:
        if cmd == "compile":
            from tslisp import compile as tslisp_compile
            return tslisp_compile.main(args)
        elif cmd == "run":
            if not args:
                print("Usage: tslisp run <file>")
                return 1
            return run_file(args[0])
        elif cmd == "repl":
            from tslisp.repl import run_repl
            return run_repl(execute="--no-exec" not in args)
        elif cmd == "version":
            print(f"TSLisp {__version__}")
            return 0
    except TslispSyntaxError as e:
        print(f"{Colors.FAIL}Syntax Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    print(f"Unknown command: {cmd}")
    print(COMMANDS)
    return 1


if __name__ == "__main__":
    sys.exit(main())
