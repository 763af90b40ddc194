"""
Centralized logging configuration for the council governance engine.

This module provides standardized logging configuration using structlog
for all components. Ledger mutations, rollbacks and execution attempts are
logged through the helpers here so the audit trail has a consistent shape.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog for the council engine.

    Records are routed through the stdlib root logger on stdout, so the
    level filter and any handlers a deployment adds apply to ledger audit
    records as well.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, one JSON object per record; otherwise console output
        include_timestamp: Add a UTC ISO timestamp to each record
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stdout,
        format="%(message)s",
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_ledger_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for ledger audit records.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for proposal and vote records
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="ledger",
        audit_trail=True
    )


def log_vote_cast(
    logger: FilteringBoundLogger,
    proposal_id: int,
    principal: str,
    previous: str,
    current: str,
    yes_count: int,
    no_count: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a recorded vote with standardized format.

    Args:
        logger: Structlog logger instance
        proposal_id: ID of the proposal voted on
        principal: Voting member
        previous: Vote state before this vote
        current: Vote state after this vote
        yes_count: Yes tally after the vote
        no_count: No tally after the vote
        context: Additional context data
    """
    bound_logger = logger.bind(
        proposal_id=proposal_id,
        principal=principal,
        previous_vote=previous,
        current_vote=current,
        yes_count=yes_count,
        no_count=no_count,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Vote recorded")


def log_execution_attempt(
    logger: FilteringBoundLogger,
    proposal_id: int,
    target: str,
    succeeded: bool,
    trigger_principal: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a proposal execution attempt with standardized format.

    Args:
        logger: Structlog logger instance
        proposal_id: ID of the proposal being executed
        target: Address of the action target
        succeeded: Whether the executor reported success
        trigger_principal: Member whose vote reached the threshold
        context: Additional context data
    """
    bound_logger = logger.bind(
        proposal_id=proposal_id,
        target=target,
        execution_result="SUCCESS" if succeeded else "FAILED",
        trigger_principal=trigger_principal,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if succeeded:
        bound_logger.info("Proposal executed")
    else:
        bound_logger.warning("Proposal execution failed")
