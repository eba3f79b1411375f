"""
TSLisp REPL

Reads one line at a time, prints its JavaScript translation as a comment
and runs it in a persistent node session. A compile error is reported and
the loop keeps going; EOF or ``(exit)`` ends it.
"""
import logging
import sys

from tslisp.colors import Colors
from tslisp.compile import EXIT_CALL, TslispCompiler
from tslisp.config import settings
from tslisp.sandbox import NodeSession, SandboxSessionClosed
from tslisp.tslisp_types import TslispSyntaxError

logger = logging.getLogger("tslisp.repl")

BANNER = "Use ^D or (exit) to quit\n"


def _start_session():
    try:
        return NodeSession().start()
    except FileNotFoundError:
        print(
            f"{Colors.WARNING}{settings.NODE_BINARY} not found, running without execution{Colors.ENDC}",
            file=sys.stderr,
        )
        return None


def run_repl(execute: bool = True, stdin=None, stdout=None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    compiler = TslispCompiler(settings.SLOT_NAMESPACE, debug=settings.PARSE_DEBUG)
    session = _start_session() if execute else None

    print(BANNER, file=stdout)
    try:
        while True:
            stdout.write(settings.REPL_PROMPT)
            stdout.flush()
            code = stdin.readline()
            if code == "":
                stdout.write("\n")
                return 0

            try:
                transpiled = compiler.compile(code)
            except TslispSyntaxError as e:
                print(f"{Colors.FAIL}Syntax Error: {e}{Colors.ENDC}", file=stdout)
                continue

            if settings.REPL_ECHO:
                print(f"// {transpiled}", file=stdout)

            if session is None:
                # Nothing will run process.exit, so (exit) ends the loop here.
                if transpiled == EXIT_CALL:
                    return 0
                continue
            if not transpiled:
                continue

            try:
                result = session.execute(transpiled)
            except KeyboardInterrupt:
                print(f"{Colors.WARNING}Interrupted, restarting node session{Colors.ENDC}", file=stdout)
                session.close()
                session = _start_session()
                continue
            except SandboxSessionClosed as e:
                logger.error("Session lost: %s", e)
                return 1

            if result.output:
                stdout.write(result.output)
            if result.closed:
                return 0
            if not result.ok:
                print(f"{Colors.FAIL}{result.error}{Colors.ENDC}", file=stdout)
            elif result.value is not None:
                print(result.value, file=stdout)
    finally:
        if session is not None:
            session.close()
