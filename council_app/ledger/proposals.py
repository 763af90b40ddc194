"""
Proposal ledger: proposal creation, vote casting and threshold execution.

All ledger state lives in an injected key-value store under these keys:

    ledger:proposal_count      number of proposals, also the next id
    proposal:{id}              Proposal record (tallies, executed flag, target)
    vote:{id}:{principal}      "yes" / "no"; a missing key means ABSENT

A cast_vote call either commits every write it made or none of them. When
the action executor fails on the vote that reaches the threshold, the
proposal record and the voter's entry are restored from the snapshot taken
before the vote, and the events produced by the call are discarded.

The executed flag is written together with the triggering vote, before the
action runs. Once the executor has reported success nothing else is
written, so a successful action is never followed by a rollback.

Votes on one proposal are serialized. A vote on a proposal issued from the
thread that is already voting on it (an executor calling back into the
ledger) raises VoteInProgress instead of deadlocking or interleaving.
"""

import threading
from typing import TYPE_CHECKING, Optional

from ..config.defaults import VOTE_THRESHOLD
from ..errors import ExecutionFailed, NotFound, VoteInProgress
from ..logging.config import get_ledger_logger, log_execution_attempt, log_vote_cast
from ..membership.registry import MembershipRegistry, Principal
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.events import LedgerEvent, ProposalCreated, VoteCast
from ..persistence.base import KeyValueStore
from ..persistence.memory_store import MemoryKeyValueStore
from ..utils.time import utc_now
from .models import ActionTarget, Proposal, ProposalStatus, VoteState

if TYPE_CHECKING:
    from ..execution.base import BaseActionExecutor

COUNT_KEY = "ledger:proposal_count"

ledger_logger = get_ledger_logger(__name__)


def proposal_key(proposal_id: int) -> str:
    return f"proposal:{proposal_id}"


def vote_prefix(proposal_id: int) -> str:
    return f"vote:{proposal_id}:"


def vote_key(proposal_id: int, principal: Principal) -> str:
    return f"{vote_prefix(proposal_id)}{principal}"


class ProposalLedger:
    """Append-only proposal ledger with threshold-triggered execution."""

    def __init__(
        self,
        registry: MembershipRegistry,
        executor: "BaseActionExecutor",
        store: Optional[KeyValueStore] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        vote_threshold: int = VOTE_THRESHOLD,
    ) -> None:
        self.registry = registry
        self.executor = executor
        self.store = store if store is not None else MemoryKeyValueStore()
        self.dispatcher = dispatcher if dispatcher is not None else NotificationDispatcher()
        self.vote_threshold = vote_threshold
        self.logger = ledger_logger

        self._create_lock = threading.Lock()
        self._locks_guard = threading.Lock()
        self._proposal_locks: dict[int, threading.Lock] = {}
        # proposal ids this thread is currently voting on
        self._local = threading.local()

        self.logger.info(
            "Proposal ledger initialized",
            vote_threshold=vote_threshold,
            existing_proposals=self.proposal_count()
        )

    # ----- operations -----

    def create_proposal(self, caller: Principal, target: str, payload: bytes = b"") -> int:
        """
        Append a new proposal and return its id.

        Args:
            caller: Proposing member
            target: Address of the action to perform once passed
            payload: Opaque bytes handed to the executor with the target

        Raises:
            Unauthorized: caller is not a member
        """
        self.registry.require_member(caller, "create_proposal")

        with self._create_lock:
            proposal_id = self.proposal_count()
            proposal = Proposal(
                id=proposal_id,
                target=ActionTarget(address=target, payload=bytes(payload)),
                proposer=caller,
                created_at=utc_now(),
            )
            # Record first, count second: the count never points at a missing record
            self.store.put(proposal_key(proposal_id), proposal.to_record())
            self.store.put(COUNT_KEY, proposal_id + 1)

            self.logger.info(
                "Proposal created",
                proposal_id=proposal_id,
                proposer=caller,
                target=target,
                payload_size=len(proposal.target.payload)
            )
            self.dispatcher.dispatch([ProposalCreated(proposal_id=proposal_id)])

        return proposal_id

    def cast_vote(self, caller: Principal, proposal_id: int, supports: bool) -> None:
        """
        Record the caller's vote, replacing any earlier vote of theirs.

        If the vote brings the yes tally to exactly the threshold and the
        proposal has not executed yet, the proposal action runs. A failed
        action aborts the whole vote.

        Raises:
            Unauthorized: caller is not a member
            NotFound: no proposal with this id
            ExecutionFailed: the action failed; nothing from this call was kept
            VoteInProgress: this thread is already voting on the proposal
        """
        self.registry.require_member(caller, "cast_vote")
        self._require_exists(proposal_id)

        in_flight = self._votes_in_flight()
        if proposal_id in in_flight:
            raise VoteInProgress(
                f"A vote on proposal {proposal_id} is already in progress on this thread",
                proposal_id=proposal_id,
                principal=caller,
            )

        with self._lock_for(proposal_id):
            in_flight.add(proposal_id)
            try:
                self._apply_vote(caller, proposal_id, supports)
            finally:
                in_flight.discard(proposal_id)

    # ----- read-only accessors -----

    def proposal_count(self) -> int:
        return self.store.get(COUNT_KEY, 0)

    def get_proposal(self, proposal_id: int) -> Proposal:
        """Return the current proposal snapshot, raising NotFound if absent."""
        self._require_exists(proposal_id)
        return self._load(proposal_id)

    def list_proposals(self) -> list[Proposal]:
        return [self._load(i) for i in range(self.proposal_count())]

    def target(self, proposal_id: int) -> ActionTarget:
        return self.get_proposal(proposal_id).target

    def is_executed(self, proposal_id: int) -> bool:
        return self.get_proposal(proposal_id).executed

    def yes_count(self, proposal_id: int) -> int:
        return self.get_proposal(proposal_id).yes_count

    def no_count(self, proposal_id: int) -> int:
        return self.get_proposal(proposal_id).no_count

    def status(self, proposal_id: int) -> ProposalStatus:
        return self.get_proposal(proposal_id).status

    def get_vote(self, proposal_id: int, principal: Principal) -> VoteState:
        self._require_exists(proposal_id)
        raw = self.store.get(vote_key(proposal_id, principal))
        return VoteState(raw) if raw else VoteState.ABSENT

    def get_votes(self, proposal_id: int) -> dict[Principal, VoteState]:
        """All recorded (non-ABSENT) votes on a proposal, keyed by principal."""
        self._require_exists(proposal_id)
        prefix = vote_prefix(proposal_id)
        return {
            key[len(prefix):]: VoteState(self.store.get(key))
            for key in self.store.keys(prefix)
        }

    # ----- internals -----

    def _require_exists(self, proposal_id: int) -> None:
        valid = (
            isinstance(proposal_id, int)
            and not isinstance(proposal_id, bool)
            and 0 <= proposal_id < self.proposal_count()
        )
        if not valid:
            raise NotFound(
                f"Proposal {proposal_id!r} does not exist",
                proposal_id=proposal_id if isinstance(proposal_id, int) else None,
            )

    def _lock_for(self, proposal_id: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._proposal_locks.get(proposal_id)
            if lock is None:
                lock = threading.Lock()
                self._proposal_locks[proposal_id] = lock
            return lock

    def _votes_in_flight(self) -> set[int]:
        in_flight = getattr(self._local, "proposal_ids", None)
        if in_flight is None:
            in_flight = self._local.proposal_ids = set()
        return in_flight

    def _apply_vote(self, caller: Principal, proposal_id: int, supports: bool) -> None:
        """Apply one vote under the proposal lock; commit all of it or none."""
        before = self._load(proposal_id)
        key = vote_key(proposal_id, caller)
        previous_raw = self.store.get(key)
        previous = VoteState(previous_raw) if previous_raw else VoteState.ABSENT
        current = VoteState.YES if supports else VoteState.NO

        after = before.with_vote_correction(previous, supports)
        triggered = after.yes_count == self.vote_threshold and not after.executed
        if triggered:
            # Persisted with the vote, before the action runs
            after = after.with_executed()
        events: list[LedgerEvent] = []

        try:
            self.store.put(proposal_key(proposal_id), after.to_record())
            self.store.put(key, current.value)
            events.append(VoteCast(proposal_id=proposal_id, principal=caller))

            log_vote_cast(
                self.logger,
                proposal_id=proposal_id,
                principal=caller,
                previous=previous.value,
                current=current.value,
                yes_count=after.yes_count,
                no_count=after.no_count
            )

            if triggered:
                self._execute(after, caller)

        except Exception:
            self._restore(before, key, previous_raw, caller)
            raise

        self.dispatcher.dispatch(events)

    def _load(self, proposal_id: int) -> Proposal:
        record = self.store.get(proposal_key(proposal_id))
        if record is None:
            raise NotFound(f"Proposal {proposal_id} has no record", proposal_id=proposal_id)
        return Proposal.from_record(record)

    def _execute(self, proposal: Proposal, caller: Principal) -> None:
        """Run the proposal action once, raising ExecutionFailed on failure."""
        try:
            succeeded = self.executor.execute(proposal.target)
        except Exception as e:
            log_execution_attempt(
                self.logger,
                proposal_id=proposal.id,
                target=proposal.target.address,
                succeeded=False,
                trigger_principal=caller,
                context={"error": str(e)}
            )
            raise ExecutionFailed(
                f"Execution of proposal {proposal.id} raised: {e}",
                proposal_id=proposal.id,
                target=proposal.target.address,
            ) from e

        log_execution_attempt(
            self.logger,
            proposal_id=proposal.id,
            target=proposal.target.address,
            succeeded=succeeded,
            trigger_principal=caller,
            context={"yes_count": proposal.yes_count, "no_count": proposal.no_count}
        )

        if not succeeded:
            raise ExecutionFailed(
                f"Execution of proposal {proposal.id} failed",
                proposal_id=proposal.id,
                target=proposal.target.address,
            )

    def _restore(self, before: Proposal, key: str, previous_raw: Optional[str],
                 caller: Principal) -> None:
        """Put the proposal record and the caller's vote entry back as they were."""
        self.store.put(proposal_key(before.id), before.to_record())
        if previous_raw is None:
            self.store.delete(key)
        else:
            self.store.put(key, previous_raw)

        self.logger.warning(
            "Vote rolled back",
            proposal_id=before.id,
            principal=caller,
            yes_count=before.yes_count,
            no_count=before.no_count
        )
