"""Pytest configuration and fixtures."""

import asyncio
import socket
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from tinylink.common.logging_config import setup_logging
from tinylink.common.validators import URLValidator
from tinylink.database.memory import MemoryLinkStore
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator
from web_app import create_app


class FakeResolver:
    """Stand-in for DNS: known hosts resolve, ``slow.example.org`` hangs."""

    def __init__(self, known_hosts=("example.com", "github.com", "stackoverflow.com", "sub.example.com")):
        self.known_hosts = set(known_hosts)
        self.lookups = []

    async def __call__(self, hostname: str):
        self.lookups.append(hostname)
        if hostname == "slow.example.org":
            await asyncio.sleep(10)
        if hostname not in self.known_hosts:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return [(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", ("93.184.216.34", 0))]


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def validator(resolver, logger):
    return URLValidator(resolver=resolver, timeout_seconds=0.2, logger=logger)


@pytest.fixture
async def store(logger) -> AsyncGenerator[MemoryLinkStore, None]:
    """Create test store instance."""
    db = MemoryLinkStore(logger=logger)
    await db.initialize()

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(store, validator, short_code_generator, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        store=store,
        validator=validator,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(
        database_url="memory://",
        base_url="http://testserver",
        _env_file=None,
    )


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(store=store, service=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
