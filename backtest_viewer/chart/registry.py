# backtest_viewer/chart/registry.py
"""
Series registry: every renderable series of one payload generation.

A registry is built once per payload and sealed. A new payload always gets a
new registry; nothing is updated in place.
"""
import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..exceptions import SeriesRegistrationError
from ..data.models import (
    ABSENT, ChartData, LineSeries, Sample, Scale, SeriesHandle, SeriesKind,
    PRICE, VOLUME, EQUITY
)
from .colors import INDICATOR_PALETTE, assign_colors

logger = logging.getLogger(__name__)


class SeriesRegistry:
    """
    Owns SeriesHandle + LineSeries pairs keyed by identity.

    Iteration order is registration order, which is also legend order.
    """

    def __init__(self, generation: int = 0):
        self.generation = generation
        self._handles: Dict[str, SeriesHandle] = {}
        self._series: Dict[str, LineSeries] = {}
        self._sealed = False

    def register(self, identity: str, series: LineSeries, scale: Scale,
                 kind: Optional[SeriesKind] = None, color: Optional[str] = None) -> SeriesHandle:
        """
        Add a series under a unique identity.

        Raises:
            SeriesRegistrationError: identity already registered in this
                generation, or registry already sealed
        """
        if self._sealed:
            raise SeriesRegistrationError(
                f"Registry is sealed, cannot register '{identity}'",
                identity=identity, generation=self.generation
            )
        if identity in self._handles:
            raise SeriesRegistrationError(
                f"Series identity '{identity}' registered twice",
                identity=identity, generation=self.generation
            )

        handle = SeriesHandle(identity, scale, kind or series.kind, color)
        self._handles[identity] = handle
        self._series[identity] = series
        return handle

    def seal(self):
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def resolve(self, identity: str) -> Optional[SeriesHandle]:
        return self._handles.get(identity)

    def series(self, identity: str) -> Optional[LineSeries]:
        return self._series.get(identity)

    def all_identities(self) -> List[str]:
        return list(self._handles)

    def sample_at(self, identity: str, time: str) -> Sample:
        series = self._series.get(identity)
        if series is None:
            return ABSENT
        return series.sample_at(time)

    def time_extent(self) -> Optional[Tuple[str, str]]:
        """Earliest and latest TimeKey over all series"""
        times = [t for s in self._series.values() for t in s.times]
        if not times:
            return None
        return min(times), max(times)

    def __contains__(self, identity: str) -> bool:
        return identity in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[SeriesHandle]:
        return iter(self._handles.values())

    def __repr__(self) -> str:
        return f"SeriesRegistry(generation={self.generation}, series={self.all_identities()})"


def build_registry(chart_data: ChartData, generation: int = 0,
                   palette: Sequence[str] = INDICATOR_PALETTE) -> SeriesRegistry:
    """
    Populate and seal a registry from normalized chart data.

    'price' is always registered; 'volume' and 'equity' only when they have
    points. Indicator lines get palette colors in indicator order, then field
    discovery order.
    """
    registry = SeriesRegistry(generation)

    registry.register(PRICE, chart_data.price, Scale.PRIMARY)
    if chart_data.volume:
        registry.register(VOLUME, chart_data.volume, Scale.PRIMARY)
    if chart_data.equity:
        registry.register(EQUITY, chart_data.equity, Scale.SECONDARY)

    keys = [(name, field) for name, fields in chart_data.indicators.items() for field in fields]
    colors = assign_colors(keys, palette)

    for name, field in keys:
        series = chart_data.indicators[name][field]
        registry.register(series.identity, series, Scale.PRIMARY, color=colors[(name, field)])

    registry.seal()
    logger.info(f"Built series registry generation {generation} with {len(registry)} series")
    return registry
