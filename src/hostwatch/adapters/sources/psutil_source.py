"""psutil-backed sample source for host CPU and memory utilization."""

import asyncio

import psutil

from hostwatch.core.exceptions import SampleSourceError

DEFAULT_CPU_WINDOW = 1.0


class PsutilSampleSource:
    """SampleSourcePort implementation reading the local host via psutil.

    ``cpu_percent`` blocks for ``cpu_window`` seconds while psutil averages
    utilization over that window; the call runs in a worker thread so the
    event loop stays free.

    Args:
        cpu_window: Seconds to average CPU utilization over. 0 compares
            against the previous call instead of blocking.
    """

    def __init__(self, cpu_window: float = DEFAULT_CPU_WINDOW) -> None:
        self._cpu_window = cpu_window

    async def cpu_percent(self) -> float:
        """Return system-wide CPU utilization in percent."""
        try:
            value = await asyncio.to_thread(psutil.cpu_percent, self._cpu_window)
        except (psutil.Error, OSError) as err:
            raise SampleSourceError(f"failed to get CPU usage: {err}") from err
        return float(value)

    async def memory_percent(self) -> float:
        """Return virtual memory utilization in percent."""
        try:
            memory = psutil.virtual_memory()
        except (psutil.Error, OSError) as err:
            raise SampleSourceError(f"failed to get memory usage: {err}") from err
        return float(memory.percent)
