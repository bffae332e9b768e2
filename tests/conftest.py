"""
Pytest configuration and shared fixtures.

This conftest.py provides:
- Environment configuration fixtures
- Cache fixtures with an instrumented parser
- A fake metadata source that counts fetches per bean
"""

import threading
from collections import Counter
from pathlib import Path
from typing import Sequence

import pytest
from dotenv import load_dotenv

from beancache import AttributeInfo, MBeanPropertyCache, ObjectName, PropertyListParser

# Load test environment variables
TEST_ENV = Path(__file__).parent / ".env.test"
if TEST_ENV.exists():
    load_dotenv(TEST_ENV)


# ─── Pytest Configuration ────────────────────────────────────────────


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests (>1s execution time)")


# ─── Environment Fixtures ────────────────────────────────────────────


@pytest.fixture(scope="session")
def project_root_dir() -> Path:
    """Return the root directory of the project."""
    return Path(__file__).parents[1]


# ─── Cache Fixtures ──────────────────────────────────────────────────


class FakeMBeanServer:
    """Metadata source double: counts calls per name, optionally fails."""

    def __init__(self, attributes: Sequence[AttributeInfo] = ()):
        self.attributes = tuple(attributes)
        self.calls: Counter = Counter()
        self.failures_left = 0
        self._lock = threading.Lock()

    def __call__(self, name: ObjectName) -> list[AttributeInfo]:
        with self._lock:
            self.calls[name] += 1
            if self.failures_left > 0:
                self.failures_left -= 1
                raise ConnectionError(f"lost connection while fetching {name}")
        return list(self.attributes)


@pytest.fixture
def bean_server() -> FakeMBeanServer:
    return FakeMBeanServer(
        [
            AttributeInfo("HeapMemoryUsage", "javax.management.openmbean.CompositeData"),
            AttributeInfo("Verbose", "boolean", is_writable=True, is_is=True),
        ]
    )


@pytest.fixture
def counting_parser() -> PropertyListParser:
    return PropertyListParser()


@pytest.fixture
def cache(counting_parser) -> MBeanPropertyCache:
    """A cache with metadata caching disabled, as constructed by default."""
    return MBeanPropertyCache(parser=counting_parser)


@pytest.fixture
def caching_cache(counting_parser) -> MBeanPropertyCache:
    """A cache with metadata caching enabled."""
    return MBeanPropertyCache(cache_attribute_info=True, parser=counting_parser)
