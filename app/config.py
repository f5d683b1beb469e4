# app/config.py
"""Settings loaded from the environment (and an optional .env file)."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    DATABASE_URL = os.getenv("LEDGER_DATABASE_URL", "sqlite:///db.sqlite")  # file in project root
    SQL_ECHO = os.getenv("LEDGER_SQL_ECHO", "0") == "1"
    LOG_LEVEL = os.getenv("LEDGER_LOG_LEVEL", "INFO").upper()

    EXPORT_VERSION = "1.0"


settings = Settings()


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
