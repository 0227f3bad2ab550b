# backtest_viewer/chart/crosshair.py
"""
Crosshair resolver: legend values at one cursor time
"""
from typing import Optional

from ..data.models import (
    LegendEntry, LegendSnapshot, PricePoint, ScalarPoint, PRICE, VOLUME, EQUITY
)
from ..data.time_keys import to_time_key
from .registry import SeriesRegistry


def resolve_legend(time: Optional[str], registry: SeriesRegistry) -> Optional[LegendSnapshot]:
    """
    Build the legend snapshot for a cursor time.

    Args:
        time: TimeKey (or a full datetime string), None when there is no cursor
        registry: Current generation's registry

    Returns:
        None when there is no cursor, otherwise a snapshot holding only the
        series that have a sample exactly at that day
    """
    if time is None:
        return None

    key = to_time_key(time)
    if key is None:
        return None

    snapshot = LegendSnapshot(time=key)

    for handle in registry:
        sample = registry.sample_at(handle.identity, key)

        if isinstance(sample, PricePoint):
            if handle.identity == PRICE:
                snapshot.price = sample
        elif isinstance(sample, ScalarPoint):
            if handle.identity == VOLUME:
                snapshot.volume = sample.value
            elif handle.identity == EQUITY:
                snapshot.equity = sample.value
            else:
                snapshot.indicators[handle.identity] = LegendEntry(
                    handle.identity, sample.value, handle.color
                )
        # ABSENT: series has no sample that day

    return snapshot
