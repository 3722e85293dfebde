"""
Per-dimension click distributions (framework-agnostic).

aggregate_distributions() makes one linear pass over a link's clicks and
fills one Counter per dimension. Each click increments a dimension at most
once, and only when it carries a value for that dimension:

- country, device, browser, os, referrer: every click
- language, utm_source: when non-null and non-empty
- hour, day of week: when the derived field is set
- screen resolution: when set and not "Unknown"

Country and city are also accumulated separately as ranking input; city is
only counted when known.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional
from urllib.parse import urlsplit

from errors import MalformedReferrerError
from schemas.models.click import DIRECT_REFERRER, UNKNOWN, ClickDoc
from shared.logging import get_logger

log = get_logger(__name__)


@dataclass
class Distributions:
    """Counters produced by a single aggregation pass."""

    total: int = 0
    by_country: Counter = field(default_factory=Counter)
    by_device: Counter = field(default_factory=Counter)
    by_browser: Counter = field(default_factory=Counter)
    by_os: Counter = field(default_factory=Counter)
    by_language: Counter = field(default_factory=Counter)
    by_hour: Counter = field(default_factory=Counter)
    by_day_of_week: Counter = field(default_factory=Counter)
    by_screen_resolution: Counter = field(default_factory=Counter)
    by_referrer: Counter = field(default_factory=Counter)
    by_utm_source: Counter = field(default_factory=Counter)

    # Ranking input, not part of the public output
    country_counts: Counter = field(default_factory=Counter)
    city_counts: Counter = field(default_factory=Counter)


def referrer_host(referrer: Optional[str], *, strict: bool = False) -> str:
    """Reduce a stored referrer to the key it is grouped under.

    "Direct" (and a missing referrer) stays "Direct"; an absolute URL becomes
    its hostname. Anything else raises MalformedReferrerError when *strict*,
    and is grouped under "Direct" otherwise.
    """
    if not referrer or referrer == DIRECT_REFERRER:
        return DIRECT_REFERRER

    try:
        parts = urlsplit(referrer)
        host = parts.hostname
    except ValueError:
        host = None
        parts = None

    if parts is not None and parts.scheme and host:
        return host

    if strict:
        raise MalformedReferrerError(referrer)
    log.warning("malformed_referrer_coerced", referrer=referrer[:200])
    return DIRECT_REFERRER


def aggregate_distributions(
    clicks: Iterable[ClickDoc], *, strict_referrers: bool = False
) -> Distributions:
    dist = Distributions()

    for click in clicks:
        dist.total += 1

        dist.by_country[click.country] += 1
        dist.country_counts[click.country] += 1
        if click.city and click.city != UNKNOWN:
            dist.city_counts[click.city] += 1

        dist.by_device[click.device.value] += 1
        dist.by_browser[click.browser] += 1
        dist.by_os[click.os] += 1

        if click.language:
            dist.by_language[click.language] += 1

        if click.hour_of_day is not None:
            dist.by_hour[str(click.hour_of_day)] += 1

        weekday = click.weekday
        if weekday is not None:
            dist.by_day_of_week[weekday.label] += 1

        if click.screen_resolution and click.screen_resolution != UNKNOWN:
            dist.by_screen_resolution[click.screen_resolution] += 1

        dist.by_referrer[referrer_host(click.referrer, strict=strict_referrers)] += 1

        if click.utm_source:
            dist.by_utm_source[click.utm_source] += 1

    return dist
