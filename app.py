#!/usr/bin/env python3
"""
Main entry point for the shortlinks service.

Concurrency: one process, many connections via async I/O (FastAPI). The
registry serializes writes to the data file with its own lock, so the server
must not be run with multiple worker processes against the same file.

Usage:
    python app.py

Environment variables:
    DATA_FILE - Path of the JSON data file (default data/links.json)
    RESET_ON_CORRUPT - Reset a corrupt data file to empty (default true)
    BASE_URL - Base URL for short links
    HOST / PORT - Address to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlinks.registry import build_registry
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlinks service...")
    logger.info(f"Using data file {config.data_file}")

    registry = build_registry(config, logger)
    # Load eagerly so a broken data file shows up at startup
    count = await registry.reload()
    app.state.registry = registry

    logger.info(f"Service started with {count} links")

    yield

    logger.info("Shutting down shortlinks service...")
    app.state.registry = None
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlinks service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Registry is created in the lifespan
    app = create_app(registry=None, config=config, logger=logger.getChild("web"))
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Server running at http://{config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
