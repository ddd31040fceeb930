# fileseen/errors.py
from __future__ import annotations

__all__ = [
    "FileSeenError",
    "ShapeError",
    "ContractError",
    "FileNameError",
    "ConfigError",
]


class FileSeenError(Exception):
    """Base class for all errors raised by this package."""


class ShapeError(FileSeenError, ValueError):
    """A line is not well-formed JSON or breaks the record schema."""


class ContractError(FileSeenError, ValueError):
    """An operation was called on input its caller was expected to validate first."""


class FileNameError(ContractError):
    """A filename does not have the required ``head.tail`` shape."""


class ConfigError(FileSeenError):
    """Raised when a configuration file cannot be parsed or is invalid."""
