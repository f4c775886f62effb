"""OAuth authorization-callback receiver.

GET /api/auth/callback: the redirect target after a merchant approves the
app.  The query string is verified BEFORE anything else looks at it:
  1. Reject a callback with no ``hmac`` (400)
  2. Recompute and compare the signature (401 on mismatch)
  3. Return the authenticated shop

A misconfigured secret is a deployment fault and surfaces as 500.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from authguard.config import Settings, get_settings
from authguard.core.exceptions import InvalidHmacError, KeyImportError
from authguard.core.hmac_validator import validate_hmac

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/callback", status_code=200)
async def receive_auth_callback(
    request: Request,
    config: Settings = Depends(get_settings),
) -> dict[str, str]:
    """Verify the signature of an authorization callback.

    Returns:
        {"status": "authenticated", "shop": <shop>} on success.

    Raises:
        HTTPException(400): if the callback carries no signature.
        HTTPException(401): if the signature does not match.
        HTTPException(500): if the shared secret is unusable.
    """
    query = dict(request.query_params)

    try:
        authentic = validate_hmac(query, config.secret_key)
    except InvalidHmacError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except KeyImportError as exc:
        logger.critical("Shared secret unusable, check API_SECRET_KEY: %s", exc)
        raise HTTPException(status_code=500, detail="Server misconfigured") from exc

    if not authentic:
        raise HTTPException(status_code=401, detail="HMAC validation failed")

    shop = query.get("shop", "")
    logger.info("Authorization callback verified", extra={"shop": shop})
    return {"status": "authenticated", "shop": shop}
