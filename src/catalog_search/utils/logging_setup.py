"""Logging configuration."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(log_dir: str = "logs", level: int = logging.INFO, log_file: Optional[str] = None) -> Path:
    """Set up logging configuration.

    Args:
        log_dir: Directory to store log files
        level: Logging level
        log_file: Explicit log file name; a timestamped one is used otherwise

    Returns:
        Path of the log file in use
    """
    # Create logs directory
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # Create log filename with timestamp
    if not log_file:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = f"catalog_search_{timestamp}.log"
    log_target = log_path / log_file

    # Configure logging format
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    # Set up handlers
    handlers = [
        logging.FileHandler(log_target),
        logging.StreamHandler()  # Console output
    ]

    # Configure logging
    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
        force=True,
    )

    logging.info("Logging initialized")
    logging.info(f"Log file: {log_target}")
    return log_target


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as ``"WARNING"`` to its numeric value."""
    return getattr(logging, str(name).upper(), default)
