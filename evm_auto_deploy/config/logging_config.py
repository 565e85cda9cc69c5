"""
Logging Configuration for evm-auto-deploy

Provides structured logging with:
- Timestamps
- Log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
- File rotation (1 file per day)
- Separate error log
- Per-run deployment audit log
"""

import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional
from datetime import datetime


# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _has_file_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h, logging.FileHandler) for h in logger.handlers)


def get_log_dir() -> Path:
    """Return the log directory (LOG_DIR env var, default ./logs), creating it."""
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
    console_level: Optional[int] = None,
) -> logging.Logger:
    """
    Setup a logger with console and file handlers.

    Args:
        name: Logger name (typically the package name)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to console (stderr)
        detailed: Whether to use detailed format (includes file/line)
        console_level: Console threshold (defaults to WARNING or `level` if higher)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("evm_auto_deploy", level=logging.DEBUG)
        >>> logger.info("Loaded 3 networks")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers; only file handlers mark a configured logger
    if _has_file_handler(logger):
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    # Console output stays on stderr; stdout carries the interactive UI
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        if console_level is None:
            console_level = max(level, logging.WARNING)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_dir = get_log_dir()
    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        log_dir / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    error_handler = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def setup_deploy_logger(run_name: str = "deploy") -> logging.Logger:
    """
    Setup logger for deployment outcomes.
    Logs every deployment attempt to a monthly file for audit trail.

    Args:
        run_name: Name used in the log file name

    Returns:
        Logger configured for deployment logging
    """
    logger_name = f"deployments_{run_name}"
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    if _has_file_handler(logger):
        return logger

    formatter = logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)

    # Never rotates, keep full history
    audit_path = get_log_dir() / f"deployments_{run_name}_{datetime.now().strftime('%Y%m')}.log"
    audit_handler = logging.FileHandler(audit_path, encoding="utf-8")
    audit_handler.setLevel(logging.INFO)
    audit_handler.setFormatter(formatter)
    logger.addHandler(audit_handler)

    return logger


def log_deployment(
    logger: logging.Logger,
    index: int,
    network: str,
    name: str,
    symbol: str,
    supply: str,
    address: Optional[str] = None,
    error: Optional[str] = None,
):
    """
    Log one deployment attempt in structured format.

    Args:
        logger: Deployment logger instance
        index: 1-based position in the batch
        network: Network display name
        name, symbol, supply: Token identifiers
        address: Contract address on success
        error: Error message on failure
    """
    status = "SUCCESS" if address else "FAILED"
    msg = f"{status} | #{index} | {network} | {name} | {symbol} | Supply: {supply}"
    if address:
        msg += f" | Address: {address}"
        logger.info(msg)
    else:
        msg += f" | Error: {error}"
        logger.error(msg)


def get_cli_logger(debug: bool = False) -> logging.Logger:
    """Get the package logger used by the CLI."""
    level = logging.DEBUG if debug else logging.INFO
    console_level = logging.DEBUG if debug else None
    return setup_logger("evm_auto_deploy", level=level, detailed=debug, console_level=console_level)
