"""
Beacon Agent - Main Loop.

Authenticates once, then samples and reports on a fixed interval until
asked to stop.
"""

import asyncio
import logging
import signal
import socket
from enum import Enum
from typing import Optional

from .auth import Authenticator
from .collectors import MetricSampler
from .config import AgentConfig
from .errors import AuthError, ReportError
from .models import Sample
from .sender import MetricsReporter

logger = logging.getLogger(__name__)


class AgentState(Enum):
    STARTING = "starting"
    AUTHENTICATING = "authenticating"
    RUNNING = "running"
    FATAL = "fatal"
    STOPPED = "stopped"


class TelemetryAgent:
    """
    Authenticated reporting loop.

    Owns the bearer token. Each cycle collects a Sample and hands it to
    the reporter; sampling and delivery failures are logged and the loop
    moves on to the next tick.
    """

    def __init__(
        self,
        config: AgentConfig,
        authenticator: Optional[Authenticator] = None,
        sampler: Optional[MetricSampler] = None,
        reporter: Optional[MetricsReporter] = None,
    ):
        """Initialize the agent."""
        self.config = config
        self.hostname = socket.gethostname()

        self.authenticator = authenticator or Authenticator(
            config.auth.shared_secret, config.collector
        )
        self.sampler = sampler or MetricSampler(config.sampling)
        self.reporter = reporter or MetricsReporter(config.collector)

        # State
        self.state = AgentState.STARTING
        self.cycles = 0
        self._token: Optional[str] = None
        self._token_stale = False
        self._stop = asyncio.Event()

    @property
    def token(self) -> Optional[str]:
        return self._token

    def _set_state(self, state: AgentState):
        logger.debug(f"Agent state {self.state.value} -> {state.value}")
        self.state = state

    def stop(self):
        """Request a clean stop; interrupts the inter-cycle wait."""
        if not self._stop.is_set():
            logger.info("Stop requested")
        self._stop.set()

    async def _wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; True if a stop was requested meanwhile."""
        if seconds <= 0:
            return self._stop.is_set()
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True

    async def authenticate(self) -> str:
        """Acquire the startup token, with optional bounded backoff."""
        self._set_state(AgentState.AUTHENTICATING)
        retries = self.config.auth.startup_retries
        last_error: Optional[AuthError] = None

        for attempt in range(retries + 1):
            try:
                self._token = await self.authenticator.acquire_token()
                self._token_stale = False
                logger.info("Authentication token acquired")
                return self._token
            except AuthError as e:
                last_error = e
                logger.error(f"Login attempt {attempt + 1}/{retries + 1} failed: {e}")

            if attempt < retries:
                delay = self.config.auth.retry_delay * (2 ** attempt)
                if await self._wait(delay):
                    break

        self._set_state(AgentState.FATAL)
        raise last_error or AuthError("authentication aborted before first attempt")

    async def _refresh_token(self) -> bool:
        """One re-login after the collector rejected the token."""
        try:
            self._token = await self.authenticator.acquire_token()
        except AuthError as e:
            logger.error(f"Re-authentication failed, skipping delivery this cycle: {e}")
            return False
        self._token_stale = False
        logger.info("Re-authenticated after token rejection")
        return True

    async def run_cycle(self) -> Sample:
        """Sample both metrics and report them once."""
        self.cycles += 1
        sample = await self.sampler.collect()

        if self._token_stale and not await self._refresh_token():
            return sample

        try:
            await self.reporter.report(sample, self._token)
        except ReportError as e:
            logger.warning(f"Cycle {self.cycles}: delivery failed: {e}")
            if e.body:
                logger.debug(f"Collector response body: {e.body}")
            if e.auth_rejected and self.config.auth.reauthenticate:
                self._token_stale = True
        else:
            logger.info(
                f"Cycle {self.cycles}: reported cpu={sample.cpu_usage:.1f}% "
                f"disk={sample.disk_usage:.1f}%"
            )

        return sample

    async def run(self):
        """Authenticate, then run cycles until stop() is called."""
        logger.info(f"Starting Beacon agent on {self.hostname}")
        logger.info(f"Collector URL: {self.config.collector.url}")

        try:
            await self.authenticate()

            self._set_state(AgentState.RUNNING)
            interval = self.config.sampling.interval
            loop = asyncio.get_running_loop()

            while not self._stop.is_set():
                started = loop.time()
                await self.run_cycle()
                elapsed = loop.time() - started
                if await self._wait(interval - elapsed):
                    break

            self._set_state(AgentState.STOPPED)
        finally:
            await self.close()

        logger.info("Agent stopped")

    async def close(self):
        """Close HTTP sessions."""
        await self.authenticator.close()
        await self.reporter.close()

    def install_signal_handlers(self):
        """Stop on SIGTERM/SIGINT."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self.stop)


def run_agent(config: AgentConfig):
    """Run the agent until a stop signal; AuthError propagates to the caller."""

    async def main() -> TelemetryAgent:
        agent = TelemetryAgent(config)
        agent.install_signal_handlers()
        await agent.run()
        return agent

    return asyncio.run(main())
