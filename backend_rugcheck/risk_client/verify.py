"""
Token verification submission (POST /tokens/verify).

One-shot call, independent of the cache and the scheduler queue, and not
throttled. Requests are validated locally first; a request missing required
fields, or without both the data-integrity and terms acknowledgements, is
rejected without any network call.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from backend_rugcheck.risk_client.fetcher import RugCheckAPI, verify_url
from backend_rugcheck.risk_client.models import VerifyTokenParams
from backend_rugcheck.rugcheck_logging import get_logger

logger = get_logger(__name__)


def check_verify_params(params: VerifyTokenParams | Mapping[str, Any]) -> VerifyTokenParams | None:
    """Return validated params, or None (logged) when the request must not be sent."""
    if not isinstance(params, VerifyTokenParams):
        try:
            params = VerifyTokenParams.model_validate(params)
        except ValidationError as e:
            logger.warning("rugcheck_verify_rejected", reason="invalid_params", error=str(e))
            return None
    if not params.mint or not params.payer or not params.signature:
        logger.warning("rugcheck_verify_rejected", reason="missing_required_fields", mint=params.mint)
        return None
    if not params.data.data_integrity_accepted or not params.data.terms_accepted:
        logger.warning("rugcheck_verify_rejected", reason="terms_not_accepted", mint=params.mint)
        return None
    return params


async def verify_token(
    api: RugCheckAPI,
    params: VerifyTokenParams | Mapping[str, Any],
) -> dict[str, Any] | None:
    """
    Submit a token for verification on RugCheck.

    Returns the upstream body (e.g. {"ok": true}) or None when rejected locally
    or when the upstream call fails for any reason.
    """
    checked = check_verify_params(params)
    if checked is None:
        return None

    endpoint = verify_url(api.base_url)
    logger.info("rugcheck_verify_submitting", mint=checked.mint, endpoint=endpoint)
    try:
        resp = await api.http.post(endpoint, json=checked.to_wire(), headers=api.headers(json_body=True))
    except httpx.HTTPError as e:
        logger.warning("rugcheck_verify_transport_error", mint=checked.mint, error=str(e))
        return None
    if not resp.is_success:
        logger.warning(
            "rugcheck_verify_http_error",
            mint=checked.mint,
            status_code=resp.status_code,
            body=resp.text[:500],
        )
        return None
    try:
        data = resp.json()
    except ValueError as e:
        logger.warning("rugcheck_verify_malformed_body", mint=checked.mint, error=str(e))
        return None
    if not isinstance(data, dict):
        logger.warning("rugcheck_verify_malformed_body", mint=checked.mint, error="expected JSON object")
        return None
    logger.info("rugcheck_verify_submitted", mint=checked.mint, ok=data.get("ok"))
    return data
