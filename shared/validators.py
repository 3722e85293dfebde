"""
Ingestion-time input normalisation. Pure, framework-agnostic functions.

normalize_referrer() guarantees the invariant the analytics aggregator
relies on: a stored referrer is either "Direct" or an absolute URL with a
host. App referrers (``android-app://com.google.android.gm/``) are kept so
their attribution survives; web referrers must also pass ``validators.url``.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

import validators as _validators

from schemas.models.click import DIRECT_REFERRER

MAX_REFERRER_LENGTH = 2048
WEB_SCHEMES = ("http", "https")


def is_absolute_url(value: str) -> bool:
    """Return True if *value* has a scheme and a host part."""
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError:
        return False
    if not parts.scheme or not host:
        return False
    if parts.scheme.lower() in WEB_SCHEMES:
        return bool(_validators.url(value, simple_host=True, strict_query=False))
    return True


def normalize_referrer(raw: Optional[str]) -> str:
    """Map a raw ``Referer`` header to the stored referrer value.

    Missing, blank, over-long or non-URL values become "Direct".
    """
    if raw is None:
        return DIRECT_REFERRER
    value = raw.strip()
    if not value or value == DIRECT_REFERRER or len(value) > MAX_REFERRER_LENGTH:
        return DIRECT_REFERRER
    if not is_absolute_url(value):
        return DIRECT_REFERRER
    return value
