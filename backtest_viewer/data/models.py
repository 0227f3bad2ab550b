# backtest_viewer/data/models.py
"""
Chart-specific data models
"""
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union, Any
from dataclasses import dataclass, field


# Calendar day, 'YYYY-MM-DD'
TimeKey = str

# Reserved identities for the three primary series
PRICE = 'price'
VOLUME = 'volume'
EQUITY = 'equity'


class Scale(Enum):
    """Price axis a series is bound to"""
    PRIMARY = 'primary'
    SECONDARY = 'secondary'


class SeriesKind(Enum):
    CANDLESTICK = 'candlestick'
    HISTOGRAM = 'histogram'
    LINE = 'line'


class TradeSide(Enum):
    BUY = 'buy'
    SELL = 'sell'


@dataclass(frozen=True)
class PricePoint:
    """Single OHLC candle body"""
    time: TimeKey
    open: float
    high: float
    low: float
    close: float

    @property
    def is_bullish(self) -> bool:
        return self.close >= self.open


@dataclass(frozen=True)
class ScalarPoint:
    """Single line or histogram sample"""
    time: TimeKey
    value: float


class _Absent:
    """No sample at the queried time"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'ABSENT'


ABSENT = _Absent()

# Result of a point lookup; consumers dispatch on the variant type
Sample = Union[PricePoint, ScalarPoint, _Absent]


@dataclass(frozen=True)
class LineSeries:
    """Ordered renderable points for one series identity"""
    identity: str
    kind: SeriesKind
    points: Tuple[Union[PricePoint, ScalarPoint], ...] = ()

    def __post_init__(self):
        # Later duplicates of a day win, like the rendering layer would
        object.__setattr__(self, '_by_time', {p.time: p for p in self.points})

    def __len__(self) -> int:
        return len(self.points)

    def __bool__(self) -> bool:
        return bool(self.points)

    @property
    def times(self) -> List[TimeKey]:
        return [p.time for p in self.points]

    def sample_at(self, time: TimeKey) -> Sample:
        return self._by_time.get(time, ABSENT)


@dataclass(frozen=True)
class SeriesHandle:
    """Registry entry: where and how a series is drawn"""
    identity: str
    scale: Scale
    kind: SeriesKind
    color: Optional[str] = None


@dataclass(frozen=True)
class TradeEvent:
    """Executed trade; data only, no committed rendering"""
    time: TimeKey
    side: TradeSide
    price: Optional[float] = None


@dataclass
class BacktestMetrics:
    final_value: float = 0.0
    initial_value: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    total_return: float = 0.0


@dataclass
class BacktestResult:
    """Parsed backend payload, records still raw"""
    success: bool
    strategy_name: str
    metrics: BacktestMetrics
    candles: List[Dict[str, Any]] = field(default_factory=list)
    equity: List[Dict[str, Any]] = field(default_factory=list)
    indicators: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    trades: List[Dict[str, Any]] = field(default_factory=list)
    chart_url: Optional[str] = None


@dataclass
class ChartData:
    """Normalized series for one payload generation"""
    price: LineSeries
    volume: LineSeries
    equity: LineSeries
    indicators: Dict[str, Dict[str, LineSeries]] = field(default_factory=dict)
    trades: List[TradeEvent] = field(default_factory=list)


@dataclass(frozen=True)
class LegendEntry:
    identity: str
    value: float
    color: Optional[str] = None


@dataclass
class LegendSnapshot:
    """Values of every series active at one cursor time"""
    time: TimeKey
    price: Optional[PricePoint] = None
    volume: Optional[float] = None
    equity: Optional[float] = None
    indicators: Dict[str, LegendEntry] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return (self.price is None and self.volume is None
                and self.equity is None and not self.indicators)
