"""Constant-time string equality.

Length mismatch returns ``False`` straight away: signature length is fixed
and public.  Equal-length inputs go through ``hmac.compare_digest``, which
OR-accumulates byte differences over the whole input with no early exit.
"""

from __future__ import annotations

import hmac

from authguard.core.exceptions import SafeCompareError


def safe_compare(a: str, b: str) -> bool:
    """Return whether *a* and *b* are equal without leaking the mismatch position.

    Raises:
        SafeCompareError: If either operand is not a ``str``.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        raise SafeCompareError(
            "Mismatched data types provided: "
            f"{type(a).__name__} and {type(b).__name__}",
            left_type=type(a).__name__,
            right_type=type(b).__name__,
        )

    left = a.encode("utf-8")
    right = b.encode("utf-8")
    if len(left) != len(right):
        return False

    return hmac.compare_digest(left, right)
