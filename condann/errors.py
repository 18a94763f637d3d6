"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from CondAnnUserError.

Programming errors and bugs should NOT inherit from CondAnnUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations


class CondAnnUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    configuration issues, unsupported files, missing paths.
    """
    pass


class ConfigError(CondAnnUserError):
    """Invalid configuration file or command line definition."""
    pass


class UnsupportedLanguageError(CondAnnUserError):
    """No grammar is registered for a file extension."""
    pass


__all__ = ["CondAnnUserError", "ConfigError", "UnsupportedLanguageError"]
