import logging
import os
import subprocess
import tempfile
import time
from typing import Optional

from tslisp.config import settings
from .base import BaseSandbox, ExecutionResult, truncate_output

logger = logging.getLogger("tslisp.sandbox")


class LocalSandbox(BaseSandbox):
    """Runs a whole compiled program with a local node binary."""

    def __init__(self, node_binary: Optional[str] = None):
        self.node_binary = node_binary or settings.NODE_BINARY

    def execute(self, code: str, timeout: Optional[int] = None) -> ExecutionResult:
        timeout = timeout or settings.SANDBOX_TIMEOUT
        start_time = time.time()

        # Fresh directory per run.
        with tempfile.TemporaryDirectory(prefix="tslisp_sandbox_") as temp_dir:
            filepath = os.path.join(temp_dir, "main.js")
            try:
                with open(filepath, "w", encoding="utf-8") as f:
                    f.write(code)
            except OSError as e:
                return ExecutionResult(
                    stdout="",
                    stderr=f"Failed to write code to file: {e}",
                    exit_code=1,
                    duration_ms=(time.time() - start_time) * 1000,
                )

            # Only pass through what node needs to start.
            clean_env = {}
            for k in ("PATH", "SYSTEMROOT", "TEMP", "TMP"):
                if k in os.environ:
                    clean_env[k] = os.environ[k]

            cmd = [self.node_binary, filepath]
            logger.info("Running %s (timeout %ss)", " ".join(cmd), timeout)

            try:
                result = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=timeout,
                    cwd=temp_dir,
                    env=clean_env,
                )
            except subprocess.TimeoutExpired:
                logger.warning("Execution timed out after %ss", timeout)
                return ExecutionResult(
                    stdout="",
                    stderr=f"Execution timed out after {timeout}s",
                    exit_code=-1,
                    duration_ms=(time.time() - start_time) * 1000,
                    timed_out=True,
                )
            except FileNotFoundError:
                return ExecutionResult(
                    stdout="",
                    stderr=f"{self.node_binary} not found",
                    exit_code=1,
                    duration_ms=(time.time() - start_time) * 1000,
                )

        max_output_bytes = settings.SANDBOX_MAX_OUTPUT_KB * 1024
        stdout_str, is_truncated = truncate_output(result.stdout or "", max_output_bytes)

        return ExecutionResult(
            stdout=stdout_str,
            stderr=result.stderr or "",
            exit_code=result.returncode,
            duration_ms=(time.time() - start_time) * 1000,
            truncated=is_truncated,
        )
