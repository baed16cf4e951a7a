#!/usr/bin/env python3
"""
Park Master service entry point
Loads configuration, configures logging and serves the API with uvicorn
"""

import logging
from pathlib import Path
from typing import Optional

import uvicorn
from dotenv import load_dotenv

from .api_server import create_app
from .config import AppConfig, ConfigManager
from .exceptions import ParkMasterError
from .storage.record_store import RecordStore


def setup_logging(level: str = "INFO"):
    """Setup logging from configuration"""
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )


def build_app(config: AppConfig):
    """Create the store (and its data directory) and the API application"""
    store = RecordStore(config.data_dir)
    return create_app(config=config, store=store)


def main(config_file: Optional[str] = None) -> int:
    # Load environment variables from .env file for local development
    load_dotenv(Path.cwd() / ".env")

    try:
        config = ConfigManager(config_file).config
    except ParkMasterError as e:
        setup_logging()
        logging.error(f"[FAIL] Invalid configuration: {e}")
        return 1

    setup_logging(config.log_level)

    try:
        app = build_app(config)
    except ParkMasterError as e:
        logging.error(f"[FAIL] Failed to start server: {e}")
        return 1

    logging.info(f"[OK] Park Master running on {config.api.host}:{config.api.port}")
    logging.info(f"[OK] API endpoints available at http://localhost:{config.api.port}/api")
    logging.info(f"[OK] Data directory: {Path(config.data_dir).resolve()}")

    uvicorn.run(
        app,
        host=config.api.host,
        port=config.api.port,
        log_level=str(config.log_level).lower()
    )
    return 0
