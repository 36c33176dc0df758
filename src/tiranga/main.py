"""
Main entry point for tiranga.

Opens the window and runs the animation until it is closed.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tiranga.animation.controller import AnimationController
from tiranga.config.settings import Settings, get_settings
from tiranga.simulator.window import FlagWindow, WindowConfig


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console logging, plus a file when one is given."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")


def build_window(settings: Settings) -> FlagWindow:
    """Wire the controller and window together over one event bus."""
    controller = AnimationController()
    return FlagWindow(
        controller=controller,
        config=WindowConfig.from_settings(settings),
    )


async def run(settings: Settings) -> None:
    """Run the animation until the window closes."""
    window = build_window(settings)
    await window.run()


def main() -> None:
    """Main entry point."""
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("tiranga starting...")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("tiranga stopped")


if __name__ == "__main__":
    main()
