"""
Centralized logging configuration for the campaign insights dashboard.

Usage:
    from insights_dashboard.logging_config import setup_logging

    setup_logging("INFO")
    logger = logging.getLogger(__name__)
    logger.info("Normal operation")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "insights_dashboard"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure the package logger with console and optional file output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files; no file output when None
        console_output: Whether to output to stdout (default: True)

    Returns:
        The configured package logger. Module loggers created with
        `logging.getLogger(__name__)` propagate into it.

    Log Files:
        Format: {log_dir}/dashboard_{date}.log
    """
    level = getattr(logging, log_level.upper())
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Prevent duplicate handlers on Streamlit reruns
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime("%Y-%m-%d")
        file_handler = logging.FileHandler(log_path / f"dashboard_{today}.log", encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
