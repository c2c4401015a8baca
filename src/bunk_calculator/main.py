from __future__ import annotations

from loguru import logger

from bunk_calculator.config.logger import setup_logger
from bunk_calculator.config.settings import settings


def main() -> None:
    setup_logger(settings.log_level)
    logger.info(f"Starting with {settings!r}")

    from bunk_calculator.ui.app import BunkCalculatorApp

    app = BunkCalculatorApp()
    app.run()


if __name__ == "__main__":
    main()
