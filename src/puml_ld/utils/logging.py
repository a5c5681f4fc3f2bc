import logging
from pathlib import Path
from typing import Optional, Union


def setup_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up and configure logger with a console handler and, optionally, a file handler.

    Args:
        name: Name of the logger, typically the package name
        level: Logging level for the logger and its handlers
        log_dir: Directory for `puml_ld.log`; no file handler when None

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Add handlers to logger if they haven't been added already
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        if log_dir is not None:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_dir / "puml_ld.log")
            fh.setLevel(level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger
