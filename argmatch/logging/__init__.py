"""Structured logging for argmatch.

Exports:
    - configure_logging: Initialize logging (applications call this once)
    - get_logger: Get logger with name
    - get_module_logger: Get logger for calling module
"""

from argmatch.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
    _is_test_environment,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "_is_test_environment",
]
