"""Exceptions raised by tssh collaborators."""

from __future__ import annotations


class TsshError(Exception):
    """Base class for errors that abort a tssh run."""


class StatusCommandError(TsshError):
    """The status command is missing or exited non-zero."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class ConfigError(TsshError):
    """The preference location could not be resolved."""


class SSHLaunchError(TsshError):
    """The ssh binary could not be started."""
