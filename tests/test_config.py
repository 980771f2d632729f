import pytest

from chrome_version_proxy.config_manager import ProxyConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("VERSION_OFFSET", "CACHE_TTL_SECONDS",
                 "CACHE_SWEEP_INTERVAL_SECONDS", "UPSTREAM_BASE_URL",
                 "UPSTREAM_TIMEOUT_SECONDS", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = ProxyConfig()
    assert config.default_offset == 10
    assert config.cache_ttl_seconds == 86400
    assert config.sweep_interval_seconds == 3600
    assert config.upstream_base_url == "https://versionhistory.googleapis.com/v1"
    assert config.upstream_timeout == 15.0
    assert config.port == 8080
    assert config.log_level == "INFO"


def test_version_offset_from_env(monkeypatch):
    monkeypatch.setenv("VERSION_OFFSET", "4")
    assert ProxyConfig().default_offset == 4


@pytest.mark.parametrize("raw", ["abc", "-1", "2.5"])
def test_invalid_version_offset_falls_back(monkeypatch, raw):
    monkeypatch.setenv("VERSION_OFFSET", raw)
    assert ProxyConfig().default_offset == 10


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("CACHE_TTL_SECONDS", "0")
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("UPSTREAM_BASE_URL", "http://localhost:9000/v1/")
    config = ProxyConfig()
    assert config.cache_ttl_seconds == 86400
    assert config.upstream_timeout == 15.0
    assert config.upstream_base_url == "http://localhost:9000/v1"
