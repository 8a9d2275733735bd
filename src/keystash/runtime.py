"""Execution context detection"""

import os

CLI_CONTEXT_ENV = "KEYSTASH_CONTEXT"


def mark_cli_context() -> None:
    """Flag the current process as a command-line invocation"""
    os.environ[CLI_CONTEXT_ENV] = "cli"


def in_cli_context() -> bool:
    """Check whether the current process was started as a command-line tool"""
    return os.getenv(CLI_CONTEXT_ENV, "").lower() == "cli"


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment"""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
