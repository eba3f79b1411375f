"""
Persistent node process for the REPL.

Each compiled line is sent to a small driver script as one JSON string.
The driver evaluates it with ``vm.runInThisContext`` so that ``global``
survives between lines, then answers with a NUL-prefixed JSON reply.
Anything the program itself printed arrives before that reply.
"""
import json
import logging
import subprocess
from typing import Optional

from tslisp.config import settings
from .base import SandboxSessionClosed, SessionResult

logger = logging.getLogger("tslisp.sandbox")

SENTINEL = "\x00"

DRIVER_SCRIPT = r"""
const readline = require('readline');
const util = require('util');
const vm = require('vm');

const rl = readline.createInterface({ input: process.stdin, terminal: false });

rl.on('line', (line) => {
  let reply;
  try {
    const value = vm.runInThisContext(JSON.parse(line));
    reply = { ok: true, value: value === undefined ? null : util.inspect(value) };
  } catch (err) {
    reply = { ok: false, error: String(err) };
  }
  process.stdout.write('\u0000' + JSON.stringify(reply) + '\n');
});
"""


class NodeSession:
    def __init__(self, node_binary: Optional[str] = None):
        self.node_binary = node_binary or settings.NODE_BINARY
        self.process = None

    @property
    def alive(self) -> bool:
        return self.process is not None and self.process.poll() is None

    def start(self) -> "NodeSession":
        logger.info("Starting node session (%s)", self.node_binary)
        self.process = subprocess.Popen(
            [self.node_binary, "-e", DRIVER_SCRIPT],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            text=True,
            bufsize=1,
        )
        return self

    def execute(self, code: str) -> SessionResult:
        if not self.alive:
            raise SandboxSessionClosed("node session is not running")

        try:
            self.process.stdin.write(json.dumps(code) + "\n")
            self.process.stdin.flush()
        except BrokenPipeError:
            raise SandboxSessionClosed("node session exited")

        output = []
        while True:
            line = self.process.stdout.readline()
            if line == "":
                # EOF: the program ended the process, e.g. (exit).
                exit_code = self.process.wait()
                logger.info("Node session exited with code %s", exit_code)
                return SessionResult(output="".join(output), closed=True)

            idx = line.find(SENTINEL)
            if idx == -1:
                output.append(line)
                continue

            output.append(line[:idx])
            reply = json.loads(line[idx + 1:])
            return SessionResult(
                output="".join(output),
                value=reply.get("value"),
                error=None if reply.get("ok") else reply.get("error", "unknown error"),
            )

    def close(self):
        if self.process is None:
            return
        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()
        self.process = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()
