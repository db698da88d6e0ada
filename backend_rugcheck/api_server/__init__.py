"""
API server package — HTTP interface over the risk client.

Exposes token risk reports, display summaries and verification submission.
Delegates all upstream access to the shared, throttled RiskReportClient.
"""
