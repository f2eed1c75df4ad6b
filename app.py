#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: one process, one in-memory store. Request handlers are sync
functions run on Starlette's thread pool; the store's reader/writer lock
keeps concurrent lookups, creations and click updates consistent. Running
several worker processes would split the store, so there is no WORKERS knob.

Usage:
    python app.py

Environment variables:
    BASE_URL - Base URL for short links (default http://localhost:8080)
    PATH_PREFIX - Optional path segment between base URL and code
    HOST - Host to bind to
    PORT - Port to listen on
    ENTROPY_BYTES - Random bytes per short code
    MAX_COLLISION_RETRIES - Codes drawn per creation before giving up
    STRICT_URLS - Only accept http(s) URLs
    LOG_LEVEL - Logging level
    LOG_FILE - Optional log file
    LOG_JSON - JSON log lines
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store import URLStore
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the process-wide store on startup."""
    config = app.state.config
    logger = app.state.logger
    
    logger.info("Starting URL shortener service...")
    
    generator = ShortCodeGenerator(entropy_bytes=config.entropy_bytes)
    store = URLStore(
        generator=generator,
        max_attempts=config.max_collision_retries,
        logger=logger.getChild("store"),
    )
    app.state.service = URLShortenerService(
        store=store,
        logger=logger.getChild("service"),
        strict_urls=config.strict_urls,
    )
    
    logger.info(f"Issuing {generator.length}-character codes ({config.entropy_bytes} random bytes)")
    logger.info("Service started successfully")
    
    yield
    
    # Nothing to flush: the store lives and dies with the process
    logger.info(f"Service stopped, discarding {len(store)} short URLs")


def main():
    """Main entry point."""
    config = load_config()
    
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    
    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")
    
    app = create_app(service_instance=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs every request
    )
    
    server = uvicorn.Server(uvicorn_config)
    
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True
    
    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)
    
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
