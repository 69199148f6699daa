import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def setup_logging(root: str, level: str = "INFO", console: bool = True, retention: str = "14 days"):
    """Daily-rotated file log under <root>/YYYY/MM/DD/ingest.log plus optional stderr."""
    logdir = Path(root) / datetime.now().strftime("%Y/%m/%d")
    logdir.mkdir(parents=True, exist_ok=True)
    logfile = logdir / "ingest.log"
    logger.remove()
    logger.add(
        str(logfile),
        rotation="00:00",
        retention=retention,
        level=level,
        enqueue=True,
        backtrace=True,
        diagnose=False,  # no local variable dumps, rows hold patient data
    )
    if console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
    return logger
