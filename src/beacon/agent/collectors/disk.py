"""
Disk usage sampler.

Uses ``df --output=pcent`` on a single mount point:

    Use%
     42%
"""

from ..errors import SampleError
from .command import CommandSampler, parse_percentage


def parse_disk_output(output: str) -> float:
    """Parse the percentage from the second line of ``df`` output."""
    lines = output.split('\n')
    if len(lines) < 2:
        raise SampleError("unexpected df output, expected a header and a value line", output)
    return parse_percentage(lines[1], output)


class DiskUsageSampler(CommandSampler):
    """Root filesystem (or ``path``) usage percentage."""

    metric = "disk_usage"

    def __init__(self, path: str = "/", timeout: float = 10.0):
        super().__init__(timeout=timeout)
        self.path = path
        self.command = ("df", "-h", "--output=pcent", path)

    def parse(self, output: str) -> float:
        return parse_disk_output(output)
