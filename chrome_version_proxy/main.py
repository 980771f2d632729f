import logging
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .cache import CacheStore
from .config_manager import ProxyConfig
from .errors import ProxyError
from .health import HealthReporter
from .models import ErrorResponse, HealthReport, VersionResult
from .scheduler import CacheReaper, init_scheduler
from .upstream import VersionHistoryClient
from .version_service import VersionService, VersionSource


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(asctime)s][%(levelname)s][%(name)s] %(message)s")


def create_app(config: Optional[ProxyConfig] = None,
               store: Optional[CacheStore] = None,
               upstream: Optional[VersionSource] = None) -> FastAPI:
    config = config or ProxyConfig()
    store = store or CacheStore(
        ttl=timedelta(seconds=config.cache_ttl_seconds))
    upstream = upstream or VersionHistoryClient(config.upstream_base_url,
                                                timeout=config.upstream_timeout)

    app = FastAPI(title="Chrome Version Proxy")
    app.state.config = config
    app.state.store = store
    app.state.service = VersionService(store, upstream, config.default_offset)
    app.state.health = HealthReporter(store)
    app.state.reaper = CacheReaper(store)
    app.state.scheduler = None

    @app.on_event("startup")
    async def startup():
        configure_logging(config.log_level)
        app.state.scheduler = init_scheduler(app.state.reaper,
                                             config.sweep_interval_seconds)
        logging.info("Chrome Version Proxy started")
        logging.info("Endpoints:")
        logging.info("  - GET /api/chrome/version?platform=win64&offset=10")
        logging.info("  - GET /health")
        logging.info(f"VERSION_OFFSET={config.default_offset} (default: 10)")
        logging.info(
            "Use ?offset=N to override VERSION_OFFSET for a single request")
        logging.info(f"Cache TTL: {config.cache_ttl_seconds}s, "
                     f"sweep every {config.sweep_interval_seconds}s")

    @app.on_event("shutdown")
    async def shutdown():
        if app.state.scheduler is not None:
            app.state.scheduler.shutdown(wait=False)
            app.state.scheduler = None

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(ErrorResponse(error=str(exc)).model_dump(),
                            status_code=exc.status_code)

    @app.get("/api/chrome/version", response_model=VersionResult)
    async def get_chrome_version(platform: Optional[str] = None,
                                 offset: Optional[str] = None):
        return await app.state.service.get_versions(platform, offset)

    @app.get("/health", response_model=HealthReport)
    async def health():
        report = app.state.health.report()
        return JSONResponse(report.model_dump(exclude_none=True),
                            status_code=200 if report.healthy else 503)

    return app


app = create_app()


def run():
    config = app.state.config
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
