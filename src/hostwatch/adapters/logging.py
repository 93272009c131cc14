"""Python logging setup for hostwatch processes.

Components log through ``logging.getLogger(__name__)``; this module only
installs a root handler for entry points such as the CLI.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are noisy at DEBUG
_QUIET_LOGGERS = ("aiosqlite",)


def configure_logging(level: str | int = "INFO") -> None:
    """Install a stream handler on the root logger and set its level.

    A handler is only added when the root logger has none, so calling this
    twice, or under a test runner that captures logs, does not duplicate
    output.

    Args:
        level: Level name (e.g. "DEBUG") or numeric level. Unknown names
            fall back to INFO.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
