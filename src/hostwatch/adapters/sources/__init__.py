"""Sample source adapters implementing SampleSourcePort."""

from hostwatch.adapters.sources.psutil_source import PsutilSampleSource

__all__ = ["PsutilSampleSource"]
