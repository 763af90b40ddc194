#!/usr/bin/env python3
"""
Basic Usage Example - Council Governance Engine

This script demonstrates the basic usage of the council governance engine
with an in-process action handler. It shows how to:
- Build a council with a small membership
- Create a proposal
- Collect votes, including a changed vote
- Watch the action run once at the threshold

Run: python examples/basic_usage.py
"""

from council_app.council import Council
from council_app.execution.local_executor import LocalActionExecutor
from council_app.logging.config import configure_logging
from council_app.notifications.memory_sink import MemoryNotificationSink


def main() -> None:
    configure_logging(level="WARNING")

    payouts: list[bytes] = []

    def treasury_payout(payload: bytes) -> bool:
        payouts.append(payload)
        return True

    executor = LocalActionExecutor()
    executor.register("treasury.payout", treasury_payout)
    sink = MemoryNotificationSink()

    council = Council.from_config_dir(
        overrides={
            "ledger": {"vote_threshold": 3},
            "membership": {"founder": "alice", "members": ["bob", "carol", "dave"]},
        },
        executor=executor,
        sinks=[sink],
    )

    proposal_id = council.propose("alice", "treasury.payout", b"pay:bob:100")
    print(f"Created proposal {proposal_id}")

    council.vote("alice", proposal_id, True)
    council.vote("bob", proposal_id, False)
    print("After two votes:", council.proposal_summary(proposal_id))

    council.vote("bob", proposal_id, True)       # bob switches to yes
    print("After bob switches:", council.proposal_summary(proposal_id))

    council.vote("carol", proposal_id, True)     # third yes reaches the threshold
    print("After carol votes:", council.proposal_summary(proposal_id))

    council.vote("dave", proposal_id, True)      # executed already, no second payout
    print(f"Payouts performed: {payouts}")

    for event in sink.get_events():
        print("event:", event.to_dict())


if __name__ == "__main__":
    main()
