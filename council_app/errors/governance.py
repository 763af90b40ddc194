"""
Governance error classifications for proposal and vote operations.

None of these are retried by the ledger. A caller that wants to retry
re-submits the same operation.
"""

from typing import Any, Dict, Optional


class GovernanceError(Exception):
    """Base class for errors raised by ledger operations."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class Unauthorized(GovernanceError):
    """Caller is not a member of the council."""

    def __init__(self, message: str, principal: Optional[str] = None,
                 operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.principal = principal
        self.operation = operation


class NotFound(GovernanceError):
    """Referenced proposal id does not exist."""

    def __init__(self, message: str, proposal_id: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.proposal_id = proposal_id


class ExecutionFailed(GovernanceError):
    """The proposal action failed on the vote that reached the threshold.

    The vote that triggered the attempt has been rolled back, so the same
    voter may re-submit it later.
    """

    def __init__(self, message: str, proposal_id: Optional[int] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.proposal_id = proposal_id
        self.target = target
        self.recoverable = True


class VoteInProgress(GovernanceError):
    """A vote on the proposal is already being applied by the calling thread.

    Raised when an action executor calls back into the ledger to vote on the
    proposal it is executing.
    """

    def __init__(self, message: str, proposal_id: Optional[int] = None,
                 principal: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.proposal_id = proposal_id
        self.principal = principal
