"""
Sampler interface.

A sampler derives one numeric metric. Implementations either shell out to
text-producing system tools or read counters through psutil.
"""

from abc import ABC, abstractmethod


class Sampler(ABC):
    """Produces a single float per call, or raises SampleError."""

    #: Sample field this sampler populates.
    metric: str = ""

    @abstractmethod
    async def sample(self) -> float:
        """Take one reading."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(metric={self.metric!r})"
