"""Serve the API with uvicorn, keeping its logs in line with structlog output."""

import copy
from typing import Any

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from uigen.app import App
from uigen.config import Config
from uigen.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def uvicorn_log_config(debug: bool) -> dict[str, Any]:
    """Uvicorn's logging config with short formats; access lines only in debug."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["loggers"]["uvicorn.access"]["level"] = "INFO" if debug else "WARNING"
    return log_config


def run_server(app: App, config: Config) -> None:
    """Build the FastAPI app and block serving it on the configured host and port."""
    fastapi_app = create_fastapi_app(app, config)
    logger.info("server_starting", host=config.host, port=config.port, environment=config.environment)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=uvicorn_log_config(config.debug),
        # Forwarded headers are trusted only in production
        proxy_headers=config.is_production,
    )
