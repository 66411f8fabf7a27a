"""
Logging configuration for sidvy-mcp.

Simple setup that adapters and tools can import.
hierarchy/ should NOT log (pure functions).

Logs go to stderr: stdout carries the MCP stdio transport.
"""

import logging
import sys

# Create logger for the package
logger = logging.getLogger("sidvy")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for sidvy-mcp.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(getattr(logging, level.upper()))

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


# NOTE: Call configure_logging() explicitly in server.py, cli.py or test setup.
# We don't auto-configure to avoid side effects on import.


def log_api_call(method: str, url: str, **params: object) -> None:
    """Log an outgoing request with its non-empty parameters."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logger.debug(f"API: {method} {url}" + (f" ({param_str})" if param_str else ""))


def log_api_result(method: str, url: str, status: int, result_count: int | None = None) -> None:
    """Log a response summary."""
    if result_count is not None:
        logger.debug(f"API: {method} {url} -> {status}, {result_count} items")
    else:
        logger.debug(f"API: {method} {url} -> {status}")
