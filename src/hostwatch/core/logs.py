"""Log file analysis: level distribution and most frequent error messages."""

import logging
import os
import re
from collections import Counter
from collections.abc import Iterable

from hostwatch.core.exceptions import FileAccessError
from hostwatch.core.models import ErrorFrequency, LogEntry, LogLevel, LogStats

logger = logging.getLogger(__name__)

DEFAULT_TOP_ERRORS = 5

# Either "[LEVEL]" anywhere in the line or a leading "LEVEL:". The leftmost
# match wins when a line carries both forms.
LEVEL_PATTERN = re.compile(
    r"\[(INFO|WARN|ERROR|DEBUG)\]|^(INFO|WARN|ERROR|DEBUG):",
    re.IGNORECASE,
)


def parse_line(line: str) -> LogEntry | None:
    """Extract level and message from a single log line.

    Args:
        line: A log line, already stripped of surrounding whitespace.

    Returns:
        LogEntry for lines with a recognized level tag, None otherwise.
        The message is the text after the first "]" (bracketed form) or
        the first ":" (prefixed form); if that is empty, the whole line.
    """
    match = LEVEL_PATTERN.search(line)
    if match is None:
        return None

    bracketed, prefixed = match.groups()
    if bracketed is not None:
        level = LogLevel(bracketed.upper())
        _, _, rest = line.partition("]")
    else:
        level = LogLevel(prefixed.upper())
        _, _, rest = line.partition(":")

    message = rest.strip() or line
    return LogEntry(level=level, message=message)


class LogAnalyzer:
    """Computes LogStats over log files or line iterables.

    Stateless between calls; a single instance is safe to share.

    Args:
        top_n: Number of most frequent ERROR messages to report.
    """

    def __init__(self, top_n: int = DEFAULT_TOP_ERRORS) -> None:
        self._top_n = top_n

    def analyze_lines(self, lines: Iterable[str]) -> LogStats:
        """Aggregate level counts and top errors over lines of text."""
        level_counts: Counter[LogLevel] = Counter()
        error_messages: Counter[str] = Counter()
        total = 0

        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            entry = parse_line(line)
            if entry is None:
                continue
            level_counts[entry.level] += 1
            total += 1
            if entry.level == LogLevel.ERROR:
                error_messages[entry.message] += 1

        # most_common keeps first-seen order among equal counts
        top_errors = [
            ErrorFrequency(message=message, count=count)
            for message, count in error_messages.most_common(self._top_n)
        ]
        return LogStats(
            level_counts=dict(level_counts),
            top_errors=top_errors,
            total_entries=total,
        )

    def analyze(self, path: str | os.PathLike[str]) -> LogStats:
        """Analyze the log file at ``path``.

        Raises:
            FileAccessError: If the file cannot be opened or read.
        """
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                stats = self.analyze_lines(handle)
        except OSError as err:
            raise FileAccessError(f"failed to read log file {path}: {err}") from err
        logger.debug(
            "Analyzed %s: %d entries, %d distinct error messages reported",
            path,
            stats.total_entries,
            len(stats.top_errors),
        )
        return stats


def format_stats(stats: LogStats) -> str:
    """Render LogStats as a plain-text report."""
    lines = [
        "=== Log Analysis Results ===",
        f"Total log entries: {stats.total_entries}",
        "",
        "Log Level Counts:",
    ]
    for level in LogLevel:
        if level in stats.level_counts:
            lines.append(f"  {level}: {stats.level_counts[level]}")
    lines.append("")
    lines.append(f"Top {len(stats.top_errors)} Most Frequent Errors:")
    for rank, error in enumerate(stats.top_errors, start=1):
        lines.append(f"  {rank}. [{error.count} times] {error.message}")
    return "\n".join(lines) + "\n"
