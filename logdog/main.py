"""
Logdog - Main Application
Detects the project in the current directory, installs a JSON logger into it
and browses the logs it writes.
"""
import logging
import sys

from .config.settings import config_manager
from .logger import setup_logging
from .models.context import ProjectContext
from .ui.app import LogdogApp

logger = logging.getLogger(__name__)


def main():
    """Run the interactive application against the current directory."""
    config = config_manager.config
    setup_logging(config.get_global_root())
    logger.info("Starting Logdog...")

    try:
        context = ProjectContext.from_directory(config=config)
        app = LogdogApp(context, retention_days=config.ui.retention_days)
        app.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return
    except Exception as e:
        logger.exception("Logdog failed to start")
        print(f"Error: {e}")
        sys.exit(1)

    if app.return_code:
        logger.error("Interface exited with status %s", app.return_code)
        sys.exit(1)
    logger.info("Logdog stopped")


if __name__ == "__main__":
    main()
