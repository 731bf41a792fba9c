from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a process set or band layout cannot be simulated."""


class PersistenceError(Exception):
    """Raised when a workload file cannot be read, parsed or written."""
