"""Shared pytest configuration."""

import pytest
from dotenv import load_dotenv

load_dotenv()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Ensure HTTPX uses asyncio backend during tests."""
    return "asyncio"
