"""
Test that rugcheck_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from rugcheck_logging and use the logger."""
    from backend_rugcheck.rugcheck_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_bind_mint():
    """bind_mint keeps the module logger name and adds mint to every event."""
    import structlog

    from backend_rugcheck.rugcheck_logging import bind_mint

    mint = "So11111111111111111111111111111111111111112"
    logger = bind_mint(mint, "backend_rugcheck.risk_client.scheduler")
    assert structlog.get_context(logger) == {
        "logger": "backend_rugcheck.risk_client.scheduler",
        "mint": mint,
    }
    logger.info("test_mint_bound")
    assert structlog.get_context(bind_mint(mint))["logger"] == "backend_rugcheck"
