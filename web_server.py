"""Web server entry point for the chatroom"""

import argparse
import sys

import uvicorn

# Load environment variables from .env file BEFORE importing anything else
from dotenv import load_dotenv
load_dotenv()

from chatroom.utils.config import load_settings
from chatroom.utils.exceptions import ConfigError
from chatroom.utils.logger import setup_logger, get_logger
from web.main import create_app

logger = get_logger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Chatroom server")
    parser.add_argument("--settings", type=str, default=None,
                        help="Path to settings.yaml (default: $CHATROOM_SETTINGS or built-in defaults)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.settings)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logger(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        file_path=settings.logging.file_path,
        max_bytes=settings.logging.max_bytes,
        backup_count=settings.logging.backup_count,
    )

    try:
        asgi_app = create_app(settings)
    except ConfigError as e:
        logger.error("Server failed to start", error=str(e))
        return 1

    try:
        uvicorn.run(
            asgi_app,
            host=settings.server.host,
            port=settings.server.port,
            log_config=None,
        )
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
