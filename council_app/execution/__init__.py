"""
Execution module.

Executors perform a passed proposal's action and report success or failure.
"""
from .base import BaseActionExecutor, ExecutionResult, ExecutionStatus
from .http_executor import HttpActionExecutor
from .local_executor import LocalActionExecutor

__all__ = [
    "BaseActionExecutor",
    "ExecutionResult",
    "ExecutionStatus",
    "HttpActionExecutor",
    "LocalActionExecutor",
]
