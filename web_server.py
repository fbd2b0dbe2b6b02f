"""Web server entry point for the Taskboard API"""

import os
import socket
import sys
from pathlib import Path

import uvicorn

# Load environment variables from .env file BEFORE reading settings
from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent / ".env")

from taskboard.core.config import load_settings
from taskboard.utils.exceptions import ConfigError
from taskboard.utils.logger import get_logger, setup_logger
from taskboard_web.app import create_app

logger = get_logger(__name__)


def _port_in_use(host: str, port: int) -> bool:
    """Return True if the given port is already in use."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
            return False
        except OSError:
            return True


def main() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)

    setup_logger(log_level=settings.log_level, log_format=settings.log_format)

    host = os.getenv("WEB_HOST", "0.0.0.0")
    port = int(os.getenv("WEB_PORT", "5000"))
    if _port_in_use(host, port):
        logger.error("Port already in use", host=host, port=port)
        sys.exit(1)

    logger.info("Starting Taskboard web server", host=host, port=port, environment=settings.environment)
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
