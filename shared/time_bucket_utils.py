"""
Adaptive time bucketing for a link's clicks-over-time series.

The granularity is picked from the data itself rather than a requested range:

- every click on one calendar date → 24 hourly buckets for that date,
  hours without clicks filled with zero
- zero or several dates → one daily bucket per date that has clicks,
  ascending, with no gap filling between dates

Dates and hours are read from ``created_at`` under the UTC clock.
"""

from collections import Counter
from enum import Enum
from typing import Any, Dict, Iterable, List

from schemas.models.base import as_utc
from schemas.models.click import ClickDoc

HOURS_PER_DAY = 24
DATE_FORMAT = "%Y-%m-%d"


class BucketMode(Enum):
    """Granularity of a clicks-over-time series"""

    HOURLY = "hourly"
    DAILY = "daily"


def determine_bucket_mode(distinct_dates: int) -> BucketMode:
    """
    Pick the bucket mode from the number of distinct click dates.

    Exactly one date → HOURLY. Zero dates falls through to DAILY, which
    renders as an empty series.
    """
    if distinct_dates == 1:
        return BucketMode.HOURLY
    return BucketMode.DAILY


def format_hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


def bucket_clicks_over_time(clicks: Iterable[ClickDoc]) -> List[Dict[str, Any]]:
    """Build the clicks-over-time series for *clicks*."""
    series, _ = bucket_clicks_with_mode(clicks)
    return series


def bucket_clicks_with_mode(
    clicks: Iterable[ClickDoc],
) -> tuple[List[Dict[str, Any]], BucketMode]:
    """
    Build the clicks-over-time series and report which mode produced it.

    Returns:
        (series, mode) where series entries are ``{date, hour, count, label}``
        in HOURLY mode and ``{date, count}`` in DAILY mode.
    """
    per_date: Counter = Counter()
    per_date_hour: Counter = Counter()

    for click in clicks:
        created_at = as_utc(click.created_at)
        date = created_at.strftime(DATE_FORMAT)
        per_date[date] += 1
        per_date_hour[(date, created_at.hour)] += 1

    mode = determine_bucket_mode(len(per_date))

    if mode is BucketMode.HOURLY:
        (only_date,) = per_date
        series = [
            {
                "date": only_date,
                "hour": hour,
                "count": per_date_hour.get((only_date, hour), 0),
                "label": format_hour_label(hour),
            }
            for hour in range(HOURS_PER_DAY)
        ]
        return series, mode

    # ISO dates sort lexicographically in calendar order
    series = [{"date": date, "count": per_date[date]} for date in sorted(per_date)]
    return series, mode


def describe_bucket_mode(mode: BucketMode) -> str:
    """Human-readable description of a bucket mode"""
    descriptions = {
        BucketMode.HOURLY: "Hourly intervals for a single day",
        BucketMode.DAILY: "Daily totals for each date with clicks",
    }
    return descriptions.get(mode, "Unknown mode")
