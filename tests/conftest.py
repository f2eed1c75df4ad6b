"""Pytest configuration and fixtures."""

import itertools
from typing import AsyncGenerator, Callable, Iterable

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store import URLStore
from shortener.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(entropy_bytes=6)


@pytest.fixture
def store(short_code_generator, logger) -> URLStore:
    """Create an empty store."""
    return URLStore(generator=short_code_generator, logger=logger)


@pytest.fixture
def service(store, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(store=store, logger=logger)


@pytest.fixture
def config() -> Config:
    """Configuration used by the test app."""
    return Config(base_url="http://testserver")


@pytest.fixture
def fatal_calls():
    """Records calls to the app's fatal-error hook instead of signalling pytest."""
    return []


@pytest.fixture
def app(service, config, fatal_calls):
    """Create test FastAPI app."""
    return create_app(
        service_instance=service,
        config=config,
        on_fatal=lambda: fatal_calls.append(True),
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def scripted_tokens():
    """Factory for token sources replaying fixed byte strings, then repeating the last one."""
    def make(chunks: Iterable[bytes]) -> Callable[[int], bytes]:
        chunks = list(chunks)
        replay = itertools.chain(chunks, itertools.repeat(chunks[-1]))
        
        def source(n: int) -> bytes:
            return next(replay)
        
        return source
    
    return make
