"""Typed error kinds raised by hostwatch components.

Callers distinguish transient failures (SampleSourceError, PersistenceError),
which the periodic tasks log and skip, from caller-visible failures
(FileAccessError, AlertNotFoundError) that propagate to whoever asked.
"""


class HostwatchError(Exception):
    """Base class for all hostwatch errors."""


class SampleSourceError(HostwatchError):
    """The sample source could not produce a CPU or memory reading."""


class PersistenceError(HostwatchError):
    """A metric, threshold or alert store operation failed."""


class FileAccessError(HostwatchError):
    """A log file could not be opened or read."""


class AlertNotFoundError(HostwatchError):
    """No active alert exists with the requested id."""


class ConfigurationError(HostwatchError, ValueError):
    """A configuration value is missing or malformed."""
