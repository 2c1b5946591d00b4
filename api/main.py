#!/usr/bin/env python3
"""
main.py
--------------
Serve the employees API with uvicorn.

Usage:
    employees-api
    employees-api --port 8080

Reads .env from the working directory first; HOST/PORT/DATA_FILE and the
logging knobs come from the environment (see api.core.config).
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from dotenv import load_dotenv

from api.core.config import get_settings
from api.core.request_logging import configure_logging

logger = logging.getLogger(__name__)

UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _uvicorn_level(level: str) -> str:
    value = level.lower()
    return value if value in UVICORN_LEVELS else "info"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Employees CRUD API")
    parser.add_argument("--host", help="bind address (default: HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="bind port (default: PORT or 3000)")
    args = parser.parse_args(argv)

    load_dotenv()
    get_settings.cache_clear()
    settings = get_settings()
    configure_logging(settings)

    from api.app import create_app

    app = create_app(settings)
    # uvicorn turns SIGINT/SIGTERM into a lifespan shutdown and re-raises the
    # signal afterwards; the hook makes the second delivery a no-op save.
    app.state.shutdown_hook.install_signal_handlers()

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Server is running on http://%s:%d (%s)", host, port, settings.app_env)
    uvicorn.run(app, host=host, port=port, log_level=_uvicorn_level(settings.log_level), access_log=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
