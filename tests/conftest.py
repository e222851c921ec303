"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortlinks.registry import LinkRegistry
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage.json_file import JsonFileStore
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def data_file(tmp_path):
    """Path of a not-yet-existing data file."""
    return tmp_path / "data" / "links.json"


@pytest.fixture
def store(data_file, logger):
    """Create JSON file store."""
    return JsonFileStore(data_file, logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def registry(store, short_code_generator, logger) -> LinkRegistry:
    """Create registry instance."""
    return LinkRegistry(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config(data_file):
    """Configuration pointing at the temp data file."""
    return Config(data_file=str(data_file), base_url="http://testserver")


@pytest.fixture
def app(registry, config, logger):
    """Create test FastAPI app."""
    return create_app(registry=registry, config=config, logger=logger)


@pytest.fixture
async def client(app):
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
