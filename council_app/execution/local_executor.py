"""In-process action executor dispatching on the target address."""

from typing import Callable

from ..ledger.models import ActionTarget
from .base import BaseActionExecutor, ExecutionResult, ExecutionStatus

ActionHandler = Callable[[bytes], bool]


class LocalActionExecutor(BaseActionExecutor):
    """Dispatches actions to handlers registered by address.

    A handler receives the payload and returns a truthy value on success.
    A handler that raises, or a target with no registered handler, counts
    as a failed execution.
    """

    def __init__(self, name: str = "local"):
        super().__init__(name)
        self.handlers: dict[str, ActionHandler] = {}

    def register(self, address: str, handler: ActionHandler) -> None:
        self.handlers[address] = handler

    def _perform(self, target: ActionTarget) -> ExecutionResult:
        handler = self.handlers.get(target.address)
        if handler is None:
            return ExecutionResult(
                status=ExecutionStatus.FAILED,
                target=target.address,
                message="No handler registered"
            )

        try:
            ok = bool(handler(target.payload))
        except Exception as e:
            self.logger.warning(
                "Action handler raised",
                target=target.address,
                error=str(e)
            )
            return ExecutionResult(
                status=ExecutionStatus.FAILED,
                target=target.address,
                message=f"Handler error: {e}",
                error=e
            )

        return ExecutionResult(
            status=ExecutionStatus.SUCCESS if ok else ExecutionStatus.FAILED,
            target=target.address,
            message="Handler completed" if ok else "Handler reported failure"
        )

    def health_check(self) -> bool:
        return True
