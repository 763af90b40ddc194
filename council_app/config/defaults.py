"""Default configuration parameters for the council governance engine."""

from dataclasses import dataclass, field

VOTE_THRESHOLD = 10


@dataclass(frozen=True)
class LedgerParams:
    """Proposal ledger parameters."""
    vote_threshold: int = VOTE_THRESHOLD          # Exact yes count that triggers execution


@dataclass(frozen=True)
class MembershipParams:
    """Initial membership set."""
    founder: str = ""                              # Constructing principal, always a member
    members: list = field(default_factory=list)


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class NotificationParams:
    """Notification sink parameters."""
    sinks: list = field(default_factory=lambda: ["memory"])  # memory, stdout, file
    file_path: str = "council_events.jsonl"
    stdout_format: str = "json"                    # json, pretty


@dataclass(frozen=True)
class PersistenceParams:
    """Key-value store parameters."""
    backend: str = "memory"                        # memory, sqlite
    sqlite_path: str = "council.db"


@dataclass(frozen=True)
class ExecutionParams:
    """Action executor parameters."""
    backend: str = "local"                         # local, http
    http_timeout_seconds: int = 30
    http_headers: dict = field(default_factory=dict)


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    ledger: LedgerParams
    membership: MembershipParams
    logging: LoggingParams
    notifications: NotificationParams
    persistence: PersistenceParams
    execution: ExecutionParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        ledger=LedgerParams(),
        membership=MembershipParams(),
        logging=LoggingParams(),
        notifications=NotificationParams(),
        persistence=PersistenceParams(),
        execution=ExecutionParams(),
    )
