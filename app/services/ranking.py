"""
Ranking Engine - orders aggregated metrics and keeps the Top-N.

Sorting is descending by metric and stable: entries with equal metrics keep
the order they arrived in. There is no secondary tie-break.
"""

from typing import Any, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def _metric_of(item: Any) -> float:
    if isinstance(item, dict):
        return item["metric"]
    return item.metric


def top_n(
    items: Iterable[T],
    n: Optional[int] = None,
    key: Callable[[T], float] = _metric_of,
) -> List[T]:
    """
    Sort items by metric (highest first) and truncate.

    Args:
        items: entries to rank
        n: how many to keep; None keeps all
        key: extracts the metric, defaults to ``item["metric"]`` / ``item.metric``

    Returns:
        New list, ranked
    """
    # sorted() is stable, reverse=True preserves input order among ties
    ranked = sorted(items, key=key, reverse=True)
    if n is None:
        return ranked
    return ranked[:max(n, 0)]
