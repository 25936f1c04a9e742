"""Root pytest configuration for randomfs tests."""
import pytest

from randomfs.cache import BlockCache
from randomfs.filesystem import RandomFS
from randomfs.settings import Settings
from randomfs.stats import StatsCounter
from randomfs.storage.fakes import FakeContentStore


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow (may take significant time)"
    )


@pytest.fixture(autouse=True)
def test_env(monkeypatch, tmp_path):
    """Keep tests away from a developer's real environment."""
    for key in (
        "RANDOMFS_IPFS_API",
        "RANDOMFS_CACHE_SIZE",
        "RANDOMFS_HTTP_TIMEOUT",
        "RANDOMFS_CONNECT_ATTEMPTS",
        "RANDOMFS_CACHE_ON_RETRIEVE",
        "RANDOMFS_EVICTION_POLICY",
        "RANDOMFS_PROVIDER",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("RANDOMFS_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def settings(tmp_path):
    """Standard test settings."""
    return Settings(data_dir=str(tmp_path / "data"), cache_size=16 * 1024 * 1024)


@pytest.fixture
def store():
    """Standard fake content store for testing."""
    return FakeContentStore()


@pytest.fixture
def stats():
    return StatsCounter()


@pytest.fixture
def fs(settings, store):
    """RandomFS instance over the fake store."""
    return RandomFS(settings, store)


@pytest.fixture
def small_cache(stats):
    """Cache bounded at 100 bytes."""
    return BlockCache(100, stats=stats)
