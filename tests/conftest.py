"""
Beacon Agent - Test fixtures

A fake collector served in-process with aiohttp, plus scripted samplers.
"""

import asyncio
import json
from typing import Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from beacon.agent.collectors.base import Sampler
from beacon.agent.config import AgentConfig
from beacon.agent.errors import SampleError


class FakeCollector:
    """Records login and ingestion requests and answers as scripted."""

    def __init__(self):
        self.url = ""
        self.login_status = 200
        self.login_raw: Optional[str] = None
        self.login_bytes: Optional[bytes] = None
        self.login_failures = 0  # fail this many logins with 500 first
        self.metrics_status = 200
        self.metrics_delay = 0.0
        self.metrics_bytes: Optional[bytes] = None
        self.logins: list[dict] = []
        self.reports: list[dict] = []

    async def handle_login(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.logins.append(body)

        if len(self.logins) <= self.login_failures:
            return web.json_response({'error': 'try later'}, status=500)
        if self.login_bytes is not None:
            return web.Response(body=self.login_bytes, status=self.login_status,
                                content_type="text/plain", charset="utf-8")
        if self.login_raw is not None:
            return web.Response(text=self.login_raw, status=self.login_status)
        return web.json_response(
            {'token': f'tok-{len(self.logins)}'},
            status=self.login_status,
        )

    async def handle_metrics(self, request: web.Request) -> web.Response:
        raw = await request.text()
        if self.metrics_delay:
            await asyncio.sleep(self.metrics_delay)

        self.reports.append({
            'headers': request.headers.copy(),
            'raw': raw,
            'json': json.loads(raw),
        })
        if self.metrics_bytes is not None:
            return web.Response(body=self.metrics_bytes, status=self.metrics_status,
                                content_type="text/plain", charset="utf-8")
        if self.metrics_status != 200:
            return web.json_response({'error': 'rejected'}, status=self.metrics_status)
        return web.json_response({'status': 'ok'})

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post('/login', self.handle_login)
        app.router.add_post('/api/metrics', self.handle_metrics)
        return app


class FakeSampler(Sampler):
    """Returns a fixed value or raises the given error, counting calls."""

    def __init__(self, metric: str, value: float = 0.0, error: Optional[Exception] = None):
        self.metric = metric
        self.value = value
        self.error = error
        self.calls = 0

    async def sample(self) -> float:
        self.calls += 1
        if self.error:
            raise self.error
        return self.value


@pytest_asyncio.fixture
async def collector():
    fake = FakeCollector()
    server = TestServer(fake.make_app())
    await server.start_server()
    fake.url = f"http://{server.host}:{server.port}"
    yield fake
    await server.close()


@pytest.fixture
def agent_config(collector) -> AgentConfig:
    config = AgentConfig()
    config.collector.url = collector.url
    config.collector.timeout = 2.0
    config.auth.shared_secret = "s3cret"
    config.auth.retry_delay = 0.01
    config.sampling.interval = 0.01
    return config


@pytest.fixture
def disk_ok():
    return FakeSampler("disk_usage", 42.0)


@pytest.fixture
def cpu_ok():
    return FakeSampler("cpu_usage", 7.1)


@pytest.fixture
def disk_broken():
    return FakeSampler("disk_usage", error=SampleError("df exited with status 1", "df: /: boom"))
