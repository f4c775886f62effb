"""Canonical query-string construction for signed OAuth callbacks.

Both parties must sign identical bytes, so the serialization here matches
the WHATWG ``application/x-www-form-urlencoded`` serializer the signing
party uses: keys sorted by code point, each key and value percent-encoded,
pairs joined with ``&``.

A required field missing from the query is left out of the canonical form.
A JavaScript ``URLSearchParams`` signer would instead emit it as
``<field>=undefined``, so such a query will not verify against one.
"""

from __future__ import annotations

from collections.abc import Mapping
from operator import itemgetter
from urllib.parse import quote_plus

HMAC_FIELD = "hmac"

SIGNED_FIELDS: tuple[str, ...] = ("code", "timestamp", "state", "shop")
OPTIONAL_SIGNED_FIELDS: tuple[str, ...] = ("host",)


def _to_scalar_values(value: str) -> str:
    # Lone surrogates become U+FFFD; valid surrogate pairs are joined.
    return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


def _form_encode(value: str) -> str:
    # quote_plus always leaves "~" alone; the form serializer escapes it.
    return quote_plus(_to_scalar_values(value), safe="*").replace("~", "%7E")


def stringify_query(query: Mapping[str, object]) -> str:
    """Serialize *query* into its canonical ``key=value&...`` form.

    The ``hmac`` entry and any ``None`` values are dropped.  The result does
    not depend on the mapping's insertion order.
    """
    pairs = [
        (str(key), str(value))
        for key, value in query.items()
        if key != HMAC_FIELD and value is not None
    ]
    pairs.sort(key=itemgetter(0))
    return "&".join(f"{_form_encode(key)}={_form_encode(value)}" for key, value in pairs)


def signable_fields(query: Mapping[str, object]) -> dict[str, object]:
    """Pick the subset of *query* that participates in the signature.

    ``host`` is included only when it has a value.
    """
    fields: dict[str, object] = {
        name: query[name] for name in SIGNED_FIELDS if query.get(name) is not None
    }
    for name in OPTIONAL_SIGNED_FIELDS:
        if query.get(name):
            fields[name] = query[name]
    return fields
