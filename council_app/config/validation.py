"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

PERSISTENCE_BACKENDS = ("memory", "sqlite")
EXECUTION_BACKENDS = ("local", "http")
NOTIFICATION_SINKS = ("memory", "stdout", "file")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_ledger_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate ledger parameters."""
        errors = []

        if "vote_threshold" in params:
            value = params["vote_threshold"]
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="vote_threshold",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_membership_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate membership parameters."""
        errors = []

        founder = params.get("founder")
        if not isinstance(founder, str) or not founder:
            errors.append(ValidationError(
                field="founder",
                message="Must be a non-empty string",
                value=founder
            ))

        members = params.get("members", [])
        if not isinstance(members, list):
            errors.append(ValidationError(
                field="members",
                message="Must be a list of principals",
                value=members
            ))
        else:
            for member in members:
                if not isinstance(member, str) or not member:
                    errors.append(ValidationError(
                        field="members",
                        message="Each member must be a non-empty string",
                        value=member
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_notification_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate notification sink parameters."""
        errors = []

        sinks = params.get("sinks", [])
        if not isinstance(sinks, list):
            errors.append(ValidationError(
                field="sinks",
                message="Must be a list of sink names",
                value=sinks
            ))
        else:
            for sink in sinks:
                if sink not in NOTIFICATION_SINKS:
                    errors.append(ValidationError(
                        field="sinks",
                        message=f"Unknown sink, expected one of {', '.join(NOTIFICATION_SINKS)}",
                        value=sink
                    ))

        if params.get("stdout_format", "json") not in ("json", "pretty"):
            errors.append(ValidationError(
                field="stdout_format",
                message="Must be 'json' or 'pretty'",
                value=params.get("stdout_format")
            ))

        return errors

    @staticmethod
    def validate_persistence_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate persistence parameters."""
        errors = []

        backend = params.get("backend", "memory")
        if backend not in PERSISTENCE_BACKENDS:
            errors.append(ValidationError(
                field="backend",
                message=f"Must be one of {', '.join(PERSISTENCE_BACKENDS)}",
                value=backend
            ))

        if backend == "sqlite":
            path = params.get("sqlite_path")
            if not isinstance(path, str) or not path:
                errors.append(ValidationError(
                    field="sqlite_path",
                    message="Must be a non-empty path when backend is sqlite",
                    value=path
                ))

        return errors

    @staticmethod
    def validate_execution_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate executor parameters."""
        errors = []

        backend = params.get("backend", "local")
        if backend not in EXECUTION_BACKENDS:
            errors.append(ValidationError(
                field="backend",
                message=f"Must be one of {', '.join(EXECUTION_BACKENDS)}",
                value=backend
            ))

        if "http_timeout_seconds" in params:
            value = params["http_timeout_seconds"]
            if not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="http_timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration; every section must be present."""
        errors = []

        section_validators = {
            "ledger": cls.validate_ledger_params,
            "membership": cls.validate_membership_params,
            "logging": cls.validate_logging_params,
            "notifications": cls.validate_notification_params,
            "persistence": cls.validate_persistence_params,
            "execution": cls.validate_execution_params,
        }

        for section, validator in section_validators.items():
            params = config.get(section)
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Missing section" if params is None else "Must be a mapping",
                    value=params
                ))
                continue

            for error in validator(params):
                errors.append(ValidationError(
                    field=f"{section}.{error.field}",
                    message=error.message,
                    value=error.value
                ))

        return errors
