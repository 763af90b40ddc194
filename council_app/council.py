"""
Council coordinator.

Wires configuration into the membership registry, key-value store, action
executor, notification sinks and proposal ledger, and exposes the
propose/vote surface that a transport layer would call after authenticating
a principal.
"""

from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .errors import ConfigurationError
from .execution.base import BaseActionExecutor
from .execution.http_executor import HttpActionExecutor
from .execution.local_executor import LocalActionExecutor
from .ledger.proposals import ProposalLedger
from .logging.config import configure_logging
from .membership.registry import MembershipRegistry, Principal
from .notifications.base import BaseNotificationSink
from .notifications.dispatcher import NotificationDispatcher
from .notifications.file_sink import FileNotificationSink
from .notifications.memory_sink import MemoryNotificationSink
from .notifications.stdout_sink import StdoutNotificationSink
from .persistence.base import KeyValueStore
from .persistence.memory_store import MemoryKeyValueStore
from .persistence.sqlite_store import SqliteKeyValueStore

logger = structlog.get_logger(__name__)


class Council:
    """
    Main coordinator for the governance engine.

    Owns one registry and one ledger for its lifetime:
    Caller → Council → MembershipRegistry check → ProposalLedger → Executor / Sinks
    """

    def __init__(
        self,
        config: dict[str, Any],
        executor: Optional[BaseActionExecutor] = None,
        store: Optional[KeyValueStore] = None,
        sinks: Optional[list[BaseNotificationSink]] = None,
    ) -> None:
        config = ConfigLoader.create().with_defaults(config)
        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            logger.error("Configuration validation failed", errors=error_msgs)
            raise ConfigurationError("Invalid council configuration", errors=errors)

        self.config = config
        self.logger = logger

        self.registry = MembershipRegistry.from_config(config)
        self.store = store if store is not None else self._build_store(config["persistence"])
        self.executor = executor if executor is not None else self._build_executor(config["execution"])
        self.dispatcher = NotificationDispatcher(
            sinks if sinks is not None else self._build_sinks(config["notifications"])
        )
        self.ledger = ProposalLedger(
            registry=self.registry,
            executor=self.executor,
            store=self.store,
            dispatcher=self.dispatcher,
            vote_threshold=config["ledger"]["vote_threshold"],
        )

        self.logger.info(
            "Council initialized",
            members=len(self.registry),
            vote_threshold=self.ledger.vote_threshold,
            persistence=config["persistence"]["backend"],
            execution=config["execution"]["backend"]
        )

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        configure_logs: bool = False,
        **kwargs: Any,
    ) -> "Council":
        """Load config with defaults < council.yaml < overrides and build a council."""
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        config = loader.merge_config(overrides)

        if configure_logs:
            configure_logging(
                level=config["logging"]["level"],
                format_json=config["logging"]["format_json"],
                include_timestamp=config["logging"]["include_timestamp"],
            )

        return cls(config, **kwargs)

    # ----- caller surface -----

    def propose(self, caller: Principal, target: str, payload: bytes = b"") -> int:
        return self.ledger.create_proposal(caller, target, payload)

    def vote(self, caller: Principal, proposal_id: int, supports: bool) -> None:
        self.ledger.cast_vote(caller, proposal_id, supports)

    def proposal_summary(self, proposal_id: int) -> dict[str, Any]:
        """JSON-friendly view of one proposal for status pages and CLIs."""
        proposal = self.ledger.get_proposal(proposal_id)
        return {
            "id": proposal.id,
            "target": proposal.target.address,
            "payload_hex": proposal.target.payload.hex(),
            "status": proposal.status.value,
            "executed": proposal.executed,
            "yes_count": proposal.yes_count,
            "no_count": proposal.no_count,
            "vote_threshold": self.ledger.vote_threshold,
            "proposer": proposal.proposer,
        }

    def health_check(self) -> dict[str, Any]:
        return {
            "executor": self.executor.health_check(),
            "sinks": self.dispatcher.health_check(),
        }

    # ----- builders -----

    @staticmethod
    def _build_store(params: dict[str, Any]) -> KeyValueStore:
        if params["backend"] == "sqlite":
            return SqliteKeyValueStore(params["sqlite_path"])
        return MemoryKeyValueStore()

    @staticmethod
    def _build_executor(params: dict[str, Any]) -> BaseActionExecutor:
        if params["backend"] == "http":
            return HttpActionExecutor(
                timeout_seconds=params["http_timeout_seconds"],
                headers=params.get("http_headers") or {},
            )
        return LocalActionExecutor()

    @staticmethod
    def _build_sinks(params: dict[str, Any]) -> list[BaseNotificationSink]:
        sinks: list[BaseNotificationSink] = []
        for name in params["sinks"]:
            if name == "stdout":
                sinks.append(StdoutNotificationSink(format=params["stdout_format"]))
            elif name == "file":
                sinks.append(FileNotificationSink(params["file_path"]))
            else:
                sinks.append(MemoryNotificationSink())
        return sinks
