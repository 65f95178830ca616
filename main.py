# main.py

"""Entry point for the buyback_tracker crawler."""

import asyncio
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("buyback_tracker.main")


def main() -> None:
    """Run one full crawl of the option tree and exit."""
    log_file = setup_logging()
    logger.info("buyback_tracker starting (log file: %s)", log_file)

    from src.cli.runner import run_crawl

    try:
        exit_code = asyncio.run(run_crawl())
    except Exception:
        logger.critical("Fatal error during crawl", exc_info=True)
        raise
    finally:
        logger.info("buyback_tracker shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
