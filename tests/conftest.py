"""Pytest configuration and shared fixtures."""

import pytest
from typing import List
from unittest.mock import Mock

from council_app.execution.base import BaseActionExecutor
from council_app.execution.local_executor import LocalActionExecutor
from council_app.ledger.proposals import ProposalLedger
from council_app.membership.registry import MembershipRegistry
from council_app.notifications.dispatcher import NotificationDispatcher
from council_app.notifications.memory_sink import MemoryNotificationSink
from council_app.persistence.memory_store import MemoryKeyValueStore

TARGET = "treasury.payout"


@pytest.fixture
def founder() -> str:
    return "member-00"


@pytest.fixture
def members() -> List[str]:
    """Twelve principals, enough to pass the default threshold of 10."""
    return [f"member-{i:02d}" for i in range(12)]


@pytest.fixture
def registry(founder, members) -> MembershipRegistry:
    return MembershipRegistry(founder, members)


@pytest.fixture
def action_calls() -> List[bytes]:
    """Payloads received by the treasury.payout handler."""
    return []


@pytest.fixture
def executor(action_calls) -> LocalActionExecutor:
    """Executor whose treasury.payout handler records payloads and succeeds."""
    executor = LocalActionExecutor()

    def payout(payload: bytes) -> bool:
        action_calls.append(payload)
        return True

    executor.register(TARGET, payout)
    return executor


@pytest.fixture
def failing_executor() -> Mock:
    """Executor mock that reports failure on every call."""
    executor = Mock(spec=BaseActionExecutor)
    executor.execute.return_value = False
    return executor


@pytest.fixture
def sink() -> MemoryNotificationSink:
    return MemoryNotificationSink()


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def ledger(registry, executor, store, sink) -> ProposalLedger:
    return ProposalLedger(
        registry=registry,
        executor=executor,
        store=store,
        dispatcher=NotificationDispatcher([sink]),
        vote_threshold=10,
    )
