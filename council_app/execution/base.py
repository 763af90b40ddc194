"""Base classes for proposal action executors."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog

from ..ledger.models import ActionTarget


class ExecutionStatus(Enum):
    """Outcome of an execution attempt."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ExecutionResult:
    """Result of the most recent execution attempt."""
    status: ExecutionStatus
    target: str
    message: Optional[str] = None
    execution_time_ms: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.status == ExecutionStatus.SUCCESS


class BaseActionExecutor(ABC):
    """Base class for proposal action executors.

    Subclasses implement `_perform`. Callers use `execute`, which makes
    exactly one attempt and never retries.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"council.execution.{name}")
        self._attempt_count = 0
        self._failure_count = 0
        self.last_result: Optional[ExecutionResult] = None

    @abstractmethod
    def _perform(self, target: ActionTarget) -> ExecutionResult:
        """
        Perform the action described by target.

        Args:
            target: Action address and payload

        Returns:
            Execution result for the single attempt
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the executor is able to perform actions."""
        pass

    def execute(self, target: ActionTarget) -> bool:
        """Perform the action once and report whether it succeeded."""
        start_time = time.time()
        result = self._perform(target)
        result.execution_time_ms = int((time.time() - start_time) * 1000)

        self._attempt_count += 1
        if not result.succeeded:
            self._failure_count += 1
        self.last_result = result

        self.logger.info(
            "Action executed",
            executor=self.name,
            target=target.address,
            status=result.status.value,
            message=result.message,
            execution_time_ms=result.execution_time_ms
        )

        return result.succeeded

    def get_stats(self) -> dict[str, Any]:
        """Get execution statistics."""
        return {
            "name": self.name,
            "attempt_count": self._attempt_count,
            "failure_count": self._failure_count,
        }

    def reset_stats(self):
        """Reset execution statistics."""
        self._attempt_count = 0
        self._failure_count = 0
        self.last_result = None
