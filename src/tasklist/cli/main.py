# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the saved list), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state
from .console import run_console_loop

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        console=settings.console_log,
    )

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        # Every mutation already saved; one more attempt covers a failed last write.
        if state.store.last_error is not None:
            state.store.save()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
