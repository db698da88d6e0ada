"""Exceptions surfaced to callers of the risk client."""

from __future__ import annotations


class RiskClientError(Exception):
    """Base for orchestration-level failures (never raised for plain 'no data')."""


class SchedulerClosedError(RiskClientError):
    def __init__(self, mint: str | None = None):
        msg = "Risk report scheduler is closed"
        if mint:
            msg = f"{msg}; request for {mint} was not processed"
        super().__init__(msg)
        self.mint = mint
