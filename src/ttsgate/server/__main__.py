"""Entry point for the ttsgate HTTP server."""

import logging
import sys

from ..config import load_config
from . import run_server

# Set up logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the server with configuration from the environment."""
    # Exits non-zero before binding when the API key is missing
    config = load_config()
    run_server(config)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except SystemExit:
        raise
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
