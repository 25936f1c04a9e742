"""
Tests for settings module.

Tests settings validation and environment variable loading.
"""
from __future__ import annotations

import pytest

from randomfs.errors import ConfigurationError
from randomfs.settings import DEFAULT_IPFS_API, Settings, create_settings_from_env


class TestSettings:
    """Test Settings dataclass validation."""

    def test_defaults(self):
        settings = Settings()
        assert settings.ipfs_api == DEFAULT_IPFS_API
        assert settings.data_dir == "./data"
        assert settings.cache_size == 500 * 1024 * 1024
        assert settings.http_timeout_s == 30.0
        assert settings.connect_attempts == 1
        assert settings.cache_on_retrieve is True
        assert settings.eviction_policy == "lru"

    def test_invalid_api_url_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid ipfs_api format"):
            Settings(ipfs_api="localhost:5001")

        with pytest.raises(ConfigurationError, match="Invalid ipfs_api format"):
            Settings(ipfs_api="not a url")

    def test_valid_api_urls(self):
        Settings(ipfs_api="http://127.0.0.1:5001")
        Settings(ipfs_api="https://ipfs.example.com")
        Settings(ipfs_api="http://ipfs:5001/prefix")

    def test_empty_api_raises(self):
        with pytest.raises(ConfigurationError, match="ipfs_api is required"):
            Settings(ipfs_api="")

    def test_non_positive_cache_size_raises(self):
        with pytest.raises(ConfigurationError, match="cache_size must be positive"):
            Settings(cache_size=0)

    def test_non_positive_timeout_raises(self):
        with pytest.raises(ConfigurationError, match="http_timeout_s must be positive"):
            Settings(http_timeout_s=0.0)

    def test_connect_attempts_below_one_raises(self):
        with pytest.raises(ConfigurationError, match="connect_attempts must be at least 1"):
            Settings(connect_attempts=0)

    def test_unknown_policy_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown eviction_policy"):
            Settings(eviction_policy="mru")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            Settings(cache_size=-1)


class TestCreateSettingsFromEnv:
    """Test environment variable loading."""

    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv("RANDOMFS_DATA_DIR", raising=False)
        settings = create_settings_from_env()
        assert settings == Settings()

    def test_reads_all_variables(self, monkeypatch):
        monkeypatch.setenv("RANDOMFS_IPFS_API", "http://ipfs:5001")
        monkeypatch.setenv("RANDOMFS_DATA_DIR", "/var/lib/randomfs")
        monkeypatch.setenv("RANDOMFS_CACHE_SIZE", "1048576")
        monkeypatch.setenv("RANDOMFS_HTTP_TIMEOUT", "12.5")
        monkeypatch.setenv("RANDOMFS_CONNECT_ATTEMPTS", "3")
        monkeypatch.setenv("RANDOMFS_CACHE_ON_RETRIEVE", "no")
        monkeypatch.setenv("RANDOMFS_EVICTION_POLICY", "FIFO")

        settings = create_settings_from_env()
        assert settings.ipfs_api == "http://ipfs:5001"
        assert settings.data_dir == "/var/lib/randomfs"
        assert settings.cache_size == 1048576
        assert settings.http_timeout_s == 12.5
        assert settings.connect_attempts == 3
        assert settings.cache_on_retrieve is False
        assert settings.eviction_policy == "fifo"

    @pytest.mark.parametrize("value", ["true", "1", "yes", "on", "TRUE"])
    def test_truthy_cache_on_retrieve(self, monkeypatch, value):
        monkeypatch.setenv("RANDOMFS_CACHE_ON_RETRIEVE", value)
        assert create_settings_from_env().cache_on_retrieve is True

    def test_malformed_int_raises(self, monkeypatch):
        monkeypatch.setenv("RANDOMFS_CACHE_SIZE", "lots")
        with pytest.raises(ConfigurationError, match="RANDOMFS_CACHE_SIZE must be an integer"):
            create_settings_from_env()

    def test_malformed_float_raises(self, monkeypatch):
        monkeypatch.setenv("RANDOMFS_HTTP_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="RANDOMFS_HTTP_TIMEOUT must be a number"):
            create_settings_from_env()

    def test_fresh_instance_each_call(self, monkeypatch):
        first = create_settings_from_env()
        monkeypatch.setenv("RANDOMFS_CACHE_SIZE", "2048")
        second = create_settings_from_env()
        assert first.cache_size != second.cache_size
