"""
Backend RugCheck — rate-limited, cache-backed client for token risk reports.

Fetches RugCheck risk reports for Solana token mints without hammering the
rate-limited upstream: fresh reports are served from an in-memory TTL cache,
misses go through a single throttled worker, and priority callers (e.g. a
token details screen) jump ahead of background lookups.
"""

__version__ = "0.1.0"
