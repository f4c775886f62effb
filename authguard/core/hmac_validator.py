"""HMAC-SHA256 verification of OAuth authorization callbacks.

The signing party computes HMAC-SHA256 over the canonical query string of
``code``, ``timestamp``, ``state``, ``shop`` (and ``host`` when present),
keyed by the app's shared secret, and sends the lowercase hex digest as the
``hmac`` query parameter.  We recompute it and compare in constant time.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from collections.abc import Mapping

from authguard.config import get_settings
from authguard.core.exceptions import InvalidHmacError, KeyImportError
from authguard.core.query import HMAC_FIELD, signable_fields, stringify_query
from authguard.core.safe_compare import safe_compare

logger = logging.getLogger(__name__)


def _resolve_secret(secret: str | None) -> bytes:
    """Return the HMAC key bytes, borrowing the process-wide secret by default."""
    if secret is None:
        secret = get_settings().secret_key
    if not secret:
        raise KeyImportError(
            "Shared secret is empty, cannot import it as an HMAC key",
        )
    return secret.encode("utf-8")


def generate_local_hmac(
    query: Mapping[str, object],
    secret: str | None = None,
) -> str:
    """Compute the expected signature for *query*.

    Only the signed fields are used; ``hmac`` and any unrecognized
    parameters are ignored.

    Args:
        query: Callback query parameters.
        secret: Shared secret.  Defaults to ``Settings.api_secret_key``.

    Returns:
        64 lowercase hex characters.

    Raises:
        KeyImportError: If the shared secret is empty or unset.
    """
    key = _resolve_secret(secret)
    message = stringify_query(signable_fields(query))
    return hmac.new(
        key=key,
        msg=message.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).hexdigest()


def sign_query(
    query: Mapping[str, object],
    secret: str | None = None,
) -> dict[str, str]:
    """Return the signed fields of *query* with a freshly computed ``hmac``."""
    signed = {name: str(value) for name, value in signable_fields(query).items()}
    signed[HMAC_FIELD] = generate_local_hmac(signed, secret)
    return signed


def validate_hmac(
    query: Mapping[str, object],
    secret: str | None = None,
) -> bool:
    """Check the ``hmac`` parameter of *query* against the rest of its content.

    Returns:
        ``True`` if the request is authentic, ``False`` on signature mismatch.

    Raises:
        InvalidHmacError: If the query has no ``hmac`` value.
        KeyImportError: If the shared secret is unusable.
    """
    claimed = query.get(HMAC_FIELD)
    if not claimed:
        logger.warning("Callback rejected: query does not contain an HMAC value")
        raise InvalidHmacError("Query does not contain an HMAC value.")

    expected = generate_local_hmac(query, secret)

    if not safe_compare(str(claimed), expected):
        logger.warning(
            "Callback HMAC mismatch",
            extra={"shop": query.get("shop", "")},
        )
        return False
    return True
