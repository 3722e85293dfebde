"""Top-N rankings over count mappings."""

from __future__ import annotations

from typing import Mapping

DEFAULT_TOP_N = 10


def rank_top(counts: Mapping[str, int], limit: int = DEFAULT_TOP_N) -> list[dict]:
    """Return the *limit* highest-count entries as ``{"name", "count"}`` dicts.

    Sorted by descending count. ``sorted`` is stable, so ties keep the
    mapping's insertion order (the order keys were first seen).
    """
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{"name": name, "count": count} for name, count in ranked[:limit]]
