import logging
import sys

from dividend_planner.utils.logging_redaction import install_redaction_filter


NOISY_LOGGERS = ("httpx", "sqlalchemy.engine", "yfinance")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure centralized application logging.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    install_redaction_filter()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
