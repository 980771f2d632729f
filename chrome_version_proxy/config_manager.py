import os
import logging

DEFAULT_VERSION_OFFSET = 10
VERSION_HISTORY_API = "https://versionhistory.googleapis.com/v1"


def env_int(name, default, minimum=0):
    raw = os.getenv(name, "")
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning(f"Invalid {name}={raw!r}; using {default}")
        return default
    if value < minimum:
        logging.warning(f"Invalid {name}={raw!r}; using {default}")
        return default
    return value


def env_float(name, default):
    raw = os.getenv(name, "")
    if raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logging.warning(f"Invalid {name}={raw!r}; using {default}")
        return default
    if value <= 0:
        logging.warning(f"Invalid {name}={raw!r}; using {default}")
        return default
    return value


class ProxyConfig:

    def __init__(self):
        self.default_offset = env_int("VERSION_OFFSET",
                                      DEFAULT_VERSION_OFFSET)
        self.cache_ttl_seconds = env_int("CACHE_TTL_SECONDS",
                                         24 * 60 * 60,
                                         minimum=1)
        self.sweep_interval_seconds = env_int("CACHE_SWEEP_INTERVAL_SECONDS",
                                              60 * 60,
                                              minimum=1)
        self.upstream_base_url = os.getenv("UPSTREAM_BASE_URL",
                                           VERSION_HISTORY_API).rstrip("/")
        self.upstream_timeout = env_float("UPSTREAM_TIMEOUT_SECONDS", 15.0)
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = env_int("PORT", 8080, minimum=1)
        self.log_level = os.getenv("LOG_LEVEL", "info").upper()
