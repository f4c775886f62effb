"""Domain-specific exceptions for callback verification.

A signature mismatch is NOT represented here: it is the ordinary ``False``
result of :func:`authguard.core.hmac_validator.validate_hmac`.
"""

from __future__ import annotations


class HmacValidationError(Exception):
    """Base exception for all HMAC verification failures."""


class InvalidHmacError(HmacValidationError):
    """The query carries no ``hmac`` value to verify."""


class KeyImportError(HmacValidationError):
    """The shared secret cannot be used as an HMAC key; check API_SECRET_KEY."""


class SafeCompareError(HmacValidationError):
    """Constant-time comparison was given operands that are not both strings."""

    def __init__(self, message: str, left_type: str = "", right_type: str = "") -> None:
        self.left_type = left_type
        self.right_type = right_type
        super().__init__(message)
