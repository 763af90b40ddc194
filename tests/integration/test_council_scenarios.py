"""End-to-end scenarios through the Council coordinator."""

import json
import pytest
import yaml

from council_app.council import Council
from council_app.errors import ConfigurationError, ExecutionFailed, NotFound, Unauthorized
from council_app.execution.http_executor import HttpActionExecutor
from council_app.execution.local_executor import LocalActionExecutor
from council_app.ledger.models import VoteState
from council_app.notifications.events import ProposalCreated, VoteCast
from council_app.notifications.memory_sink import MemoryNotificationSink
from council_app.persistence.sqlite_store import SqliteKeyValueStore

MEMBERS = [f"member-{i:02d}" for i in range(1, 12)]


@pytest.fixture
def payouts():
    return []


@pytest.fixture
def council(tmp_path, payouts):
    executor = LocalActionExecutor()
    executor.register("treasury.payout", lambda payload: payouts.append(payload) or True)
    return Council.from_config_dir(
        tmp_path,
        overrides={"membership": {"founder": "member-00", "members": MEMBERS}},
        executor=executor,
        sinks=[MemoryNotificationSink()],
    )


class TestThresholdScenario:
    """Threshold of 10 with twelve members."""

    def test_nine_then_tenth_then_eleventh(self, council, payouts):
        pid = council.propose("member-00", "treasury.payout", b"grant:42")

        for member in MEMBERS[:9]:
            council.vote(member, pid, True)
        summary = council.proposal_summary(pid)
        assert summary["executed"] is False
        assert summary["yes_count"] == 9

        council.vote(MEMBERS[9], pid, True)
        summary = council.proposal_summary(pid)
        assert summary["executed"] is True
        assert summary["status"] == "executed"
        assert summary["yes_count"] == 10

        council.vote(MEMBERS[10], pid, True)
        assert council.proposal_summary(pid)["executed"] is True
        assert payouts == [b"grant:42"]

    def test_no_then_yes(self, council):
        pid = council.propose("member-00", "treasury.payout")
        council.vote(MEMBERS[0], pid, False)
        council.vote(MEMBERS[1], pid, False)
        before = council.proposal_summary(pid)

        council.vote(MEMBERS[0], pid, True)

        after = council.proposal_summary(pid)
        assert after["no_count"] == before["no_count"] - 1
        assert after["yes_count"] == before["yes_count"] + 1
        assert council.ledger.get_vote(pid, MEMBERS[0]) == VoteState.YES

    def test_event_stream(self, council):
        sink = council.dispatcher.sinks[0]
        pid = council.propose("member-00", "treasury.payout")
        council.vote(MEMBERS[0], pid, True)
        council.vote(MEMBERS[0], pid, True)

        assert sink.get_events() == [
            ProposalCreated(proposal_id=pid),
            VoteCast(proposal_id=pid, principal=MEMBERS[0]),
            VoteCast(proposal_id=pid, principal=MEMBERS[0]),
        ]

    def test_errors_surface_to_caller(self, council):
        with pytest.raises(Unauthorized):
            council.propose("outsider", "treasury.payout")
        with pytest.raises(NotFound):
            council.vote("member-00", 0, True)

    def test_failed_execution_then_handler_fixed(self, council, payouts):
        """Test the triggering vote is aborted and can be re-submitted."""
        pid = council.propose("member-00", "ops.rotate_keys", b"k2")
        for member in MEMBERS[:9]:
            council.vote(member, pid, True)

        with pytest.raises(ExecutionFailed):
            council.vote(MEMBERS[9], pid, True)
        assert council.proposal_summary(pid)["yes_count"] == 9

        council.executor.register("ops.rotate_keys", lambda payload: payouts.append(payload) or True)
        council.vote(MEMBERS[9], pid, True)

        assert council.proposal_summary(pid)["executed"] is True
        assert payouts == [b"k2"]


class TestCouncilConfiguration:
    """Test building a council from configuration."""

    def test_invalid_config_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            Council.from_config_dir(tmp_path, overrides={"ledger": {"vote_threshold": 0}})

        fields = {e.field for e in exc_info.value.errors}
        assert fields == {"ledger.vote_threshold", "membership.founder"}

    def test_builds_configured_backends(self, tmp_path):
        (tmp_path / "council.yaml").write_text(yaml.safe_dump({
            "ledger": {"vote_threshold": 2},
            "membership": {"founder": "alice", "members": ["bob"]},
            "persistence": {"backend": "sqlite", "sqlite_path": str(tmp_path / "council.db")},
            "execution": {"backend": "http", "http_timeout_seconds": 3},
            "notifications": {"sinks": ["file", "memory"], "file_path": str(tmp_path / "ev.jsonl")},
        }))

        council = Council.from_config_dir(tmp_path)

        assert isinstance(council.store, SqliteKeyValueStore)
        assert isinstance(council.executor, HttpActionExecutor)
        assert council.executor.timeout_seconds == 3
        assert [s.name for s in council.dispatcher.sinks] == ["file", "memory"]
        assert council.ledger.vote_threshold == 2

        council.propose("alice", "https://ops.example/noop")
        event = json.loads((tmp_path / "ev.jsonl").read_text().splitlines()[0])
        assert event["event_type"] == "proposal_created"

    def test_partial_config_filled_from_defaults(self):
        council = Council({"membership": {"founder": "alice", "members": ["bob"]}})

        assert council.ledger.vote_threshold == 10
        assert council.config["persistence"]["backend"] == "memory"
        assert "bob" in council.registry

    def test_partial_config_still_validated(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Council({"ledger": {"vote_threshold": 3}})

        assert [e.field for e in exc_info.value.errors] == ["membership.founder"]

    def test_non_mapping_section_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Council({"membership": {"founder": "alice"}, "persistence": "sqlite"})

        assert [e.field for e in exc_info.value.errors] == ["persistence"]

    def test_health_check(self, council):
        assert council.health_check() == {"executor": True, "sinks": {"memory": True}}


class TestPersistentLedger:
    """Test a ledger resuming from a SQLite store."""

    def test_resume_after_restart(self, tmp_path, payouts):
        overrides = {
            "ledger": {"vote_threshold": 3},
            "membership": {"founder": "alice", "members": ["bob", "carol", "dave"]},
            "persistence": {"backend": "sqlite", "sqlite_path": str(tmp_path / "council.db")},
        }

        def build():
            executor = LocalActionExecutor()
            executor.register("treasury.payout", lambda payload: payouts.append(payload) or True)
            return Council.from_config_dir(tmp_path, overrides=overrides, executor=executor)

        first = build()
        pid = first.propose("alice", "treasury.payout", b"p")
        first.vote("alice", pid, True)
        first.vote("bob", pid, False)

        second = build()
        assert second.ledger.proposal_count() == 1
        assert second.ledger.get_vote(pid, "bob") == VoteState.NO

        second.vote("bob", pid, True)
        second.vote("carol", pid, True)

        assert second.proposal_summary(pid)["executed"] is True
        assert payouts == [b"p"]
        assert second.propose("dave", "treasury.payout") == 1
