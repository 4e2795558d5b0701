"""
Command-backed samplers.

Runs an external utility and parses its loosely-structured text output
into a float.
"""

import asyncio
import math
import re
import subprocess
import logging
from typing import Sequence

from ..errors import SampleError
from .base import Sampler

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r'[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')


def parse_percentage(token: str, output: str = "") -> float:
    """
    Parse a percentage token such as ``42``, ``42%``, ``3.5``, ``3,5`` or ``1e-07``.

    ``output`` is the full command output, attached to the error for
    diagnostics when the token is not a number.
    """
    value = token.strip()
    if value.endswith('%'):
        value = value[:-1].rstrip()
    # Locale-dependent tools print a decimal comma
    value = value.replace(',', '.')

    if not _DECIMAL.fullmatch(value):
        raise SampleError(f"cannot parse {token.strip()!r} as a number", output or token)

    number = float(value)
    if not math.isfinite(number):
        raise SampleError(f"non-finite value {token.strip()!r}", output or token)
    return number


def run_command(cmd: Sequence[str], timeout: float) -> str:
    """Run a command and return its combined stdout/stderr text."""
    try:
        result = subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise SampleError(f"{cmd[0]} not found: {e}") from e
    except subprocess.TimeoutExpired as e:
        output = e.output or ""
        if isinstance(output, bytes):
            output = output.decode(errors="replace")
        raise SampleError(f"{cmd[0]} timed out after {timeout}s", output) from e
    except OSError as e:
        raise SampleError(f"{cmd[0]} could not be started: {e}") from e

    output = result.stdout or ""
    if result.returncode != 0:
        raise SampleError(f"{cmd[0]} exited with status {result.returncode}", output)
    return output


class CommandSampler(Sampler):
    """Sampler that runs ``command`` and hands its output to ``parse``."""

    command: tuple[str, ...] = ()

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def parse(self, output: str) -> float:
        raise NotImplementedError

    async def sample(self) -> float:
        """Run the command in the thread pool and parse the result."""
        loop = asyncio.get_running_loop()
        output = await loop.run_in_executor(None, run_command, self.command, self.timeout)
        logger.debug(f"{self.metric} raw output: {output!r}")
        return self.parse(output)
