from .base import (
    BaseSandbox,
    ExecutionResult,
    SandboxError,
    SandboxSessionClosed,
    SessionResult,
    truncate_output,
)
from .local import LocalSandbox
from .session import NodeSession

__all__ = [
    "BaseSandbox",
    "ExecutionResult",
    "LocalSandbox",
    "NodeSession",
    "SandboxError",
    "SandboxSessionClosed",
    "SessionResult",
    "truncate_output",
]
