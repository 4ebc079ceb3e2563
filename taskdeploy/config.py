"""Supervisor configuration and logging setup."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_logging_configured = False


class SupervisorConfig(BaseModel):
    """
    Settings shared by the deployment registry and the process backings.
    Built once at startup, read-only afterwards.
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = Field(default=False, description="Turn debugging output on")
    log_level: str = Field(default="INFO", description="Root logger level")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT, description="Log record format")
    kill_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for an external process to stop before forcing it",
    )
    ready_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Default upper bound for blocking wait_running() calls",
    )
    poll_interval: float = Field(
        default=0.05,
        gt=0,
        description="Polling period while waiting on an external process",
    )
    start_method: str | None = Field(
        default=None,
        description="multiprocessing start method for external processes",
        examples=["fork", "spawn", "forkserver"],
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @field_validator("start_method")
    @classmethod
    def _check_start_method(cls, value: str | None) -> str | None:
        if value is not None and value not in ("fork", "spawn", "forkserver"):
            raise ValueError(f"unknown start method '{value}'")
        return value

    @classmethod
    def from_debug_flag(cls, debug: bool, **overrides: object) -> SupervisorConfig:
        """Build a config where --debug forces the DEBUG log level."""
        if debug:
            overrides["log_level"] = "DEBUG"
        return cls(debug=debug, **overrides)  # type: ignore[arg-type]

    @property
    def effective_log_level(self) -> int:
        """Numeric logging level."""
        return logging.DEBUG if self.debug else logging.getLevelName(self.log_level)


def configure_logging(config: SupervisorConfig) -> bool:
    """
    Configure the root logger from config.

    Only the first call has an effect.

    Returns:
        True if logging was configured by this call.
    """
    global _logging_configured
    if _logging_configured:
        return False

    logging.basicConfig(
        level=config.effective_log_level,
        format=config.log_format,
        force=True,
    )
    _logging_configured = True
    logging.getLogger(__name__).debug("Logging configured at level %s", config.log_level)
    return True


def reset_logging_configuration() -> None:
    """Allow configure_logging() to run again (useful for testing)."""
    global _logging_configured
    _logging_configured = False
