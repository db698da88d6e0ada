"""
Structured logging for Backend RugCheck.

JSON logs with timestamp, mint, event_type. Use get_logger() in every module.
"""

from backend_rugcheck.rugcheck_logging.logger import bind_mint, get_logger

__all__ = ["bind_mint", "get_logger"]
