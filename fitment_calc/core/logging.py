"""Structured logging configuration."""

import logging
import sys
from typing import Any


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger; module loggers propagate to it."""
    logger = logging.getLogger("fitment_calc")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    # Format: timestamp - level - module - message
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


logger = logging.getLogger("fitment_calc")


def log_request(method: str, path: str, **kwargs: Any) -> None:
    """Log an incoming request."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.info(f"REQUEST {method} {path} {extra}".strip())


def log_response(method: str, path: str, status: int, duration_ms: float) -> None:
    """Log an outgoing response."""
    logger.info(
        f"RESPONSE {method} {path} status={status} duration_ms={duration_ms:.2f}"
    )


def log_error(message: str, exc: Exception | None = None, **kwargs: Any) -> None:
    """Log an error with optional exception."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    if exc:
        logger.error(f"ERROR {message} {extra}".strip(), exc_info=exc)
    else:
        logger.error(f"ERROR {message} {extra}".strip())


def log_mismatch(setup_id: str, tire_rim_in: float, wheel_rim_in: float) -> None:
    """Log a tire whose rim size does not match the wheel it is mounted on."""
    logger.warning(
        f"MISMATCH setup={setup_id} tire_rim_in={tire_rim_in:g} wheel_rim_in={wheel_rim_in:g}"
    )
