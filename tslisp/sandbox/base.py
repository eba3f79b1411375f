from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class SandboxError(Exception):
    """Base class for JavaScript runtime failures."""


class SandboxSessionClosed(SandboxError):
    """The persistent node process is gone."""


@dataclass
class ExecutionResult:
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float
    truncated: bool = False
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


@dataclass
class SessionResult:
    """Outcome of one line run inside a NodeSession."""
    output: str
    value: Optional[str] = None
    error: Optional[str] = None
    closed: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def truncate_output(text: str, max_bytes: int):
    """Cut ``text`` down to ``max_bytes`` and mark it. Returns (text, truncated)."""
    if len(text.encode("utf-8", errors="ignore")) <= max_bytes:
        return text, False
    trunc_point = max(0, max_bytes - 32)
    return text[:trunc_point] + "\n... (output truncated)", True


class BaseSandbox(ABC):
    @abstractmethod
    def execute(self, code: str, timeout: Optional[int] = None) -> ExecutionResult:
        """Run a complete JavaScript program."""
