"""
CPU usage sampler.

Sums the user and system columns of a single batch ``top`` iteration.
"""

from ..errors import SampleError
from .command import CommandSampler, parse_percentage

TOP_PIPELINE = "top -bn1 | grep 'Cpu(s)' | awk '{print $2 + $4}'"


def parse_cpu_output(output: str) -> float:
    """Parse the single number printed by the ``top`` pipeline."""
    value = output.strip()
    if not value:
        raise SampleError("empty output from cpu pipeline", output)
    return parse_percentage(value, output)


class CPUUsageSampler(CommandSampler):
    """Combined user + system CPU percentage."""

    metric = "cpu_usage"
    command = ("sh", "-c", TOP_PIPELINE)

    def parse(self, output: str) -> float:
        return parse_cpu_output(output)
