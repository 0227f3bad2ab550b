# backtest_viewer/data/strategies.py
"""
Prebuilt strategies offered by the request form.

The strategy name must match the class name inside the strategy source; the
service instantiates it by name with the params mapping.
"""
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

STRATEGY_DIR = Path(__file__).parent.parent / 'strategies'

STOCK_SYMBOLS = sorted([
    'AAPL', 'GOOGL', 'MSFT', 'AMZN', 'TSLA', 'META', 'NVDA', 'JPM',
    'V', 'WMT', 'JNJ', 'PG', 'DIS', 'NFLX', 'INTC', 'AMD',
    'CSCO', 'PEP', 'KO', 'NKE', 'BA', 'IBM', 'GE', 'F', 'SPY'
])


@dataclass(frozen=True)
class StrategyPreset:
    id: str
    name: str
    description: str
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def code_path(self) -> Path:
        return STRATEGY_DIR / f"{self.id}.txt"

    def load_code(self) -> str:
        return self.code_path.read_text(encoding='utf-8')


STRATEGIES = (
    StrategyPreset('sma_crossover', 'SMACrossover', 'Moving average cross',
                   {'fast': 10, 'slow': 30}),
    StrategyPreset('bollinger_bands', 'BollingerMeanReversion', 'Mean reversion',
                   {'period': 20, 'devfactor': 2.0}),
    StrategyPreset('rsi_oversold', 'RSIOversold', 'RSI momentum',
                   {'period': 14, 'oversold': 30, 'overbought': 70}),
)


def find_strategy(strategy_id: str) -> Optional[StrategyPreset]:
    for preset in STRATEGIES:
        if preset.id == strategy_id:
            return preset
    return None
