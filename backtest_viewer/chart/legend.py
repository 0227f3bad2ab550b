# backtest_viewer/chart/legend.py
"""
Synchronized legend text for crosshair snapshots
"""
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSlot
from PyQt6.QtWidgets import QLabel, QWidget

from ..data.models import LegendSnapshot
from ..styles import ChartStyles, BaseStyles


def format_legend_html(snapshot: Optional[LegendSnapshot]) -> str:
    """Rich-text legend line; empty string when there is nothing to show"""
    if snapshot is None:
        return ""

    parts = [f"<b>{snapshot.time}</b>"]

    if snapshot.price is not None:
        p = snapshot.price
        color = ChartStyles.CANDLE_BULL_BODY if p.is_bullish else ChartStyles.CANDLE_BEAR_BODY
        parts.append(
            f"<span style='color:{color}'>O {p.open:.2f} H {p.high:.2f} "
            f"L {p.low:.2f} C {p.close:.2f}</span>"
        )

    if snapshot.volume is not None:
        parts.append(f"Vol {snapshot.volume:,.0f}")

    if snapshot.equity is not None:
        parts.append(f"<span style='color:{ChartStyles.EQUITY_COLOR}'>Equity ${snapshot.equity:,.2f}</span>")

    for entry in snapshot.indicators.values():
        color = entry.color or BaseStyles.TEXT_MUTED
        parts.append(f"<span style='color:{color}'>{entry.identity} {entry.value:.2f}</span>")

    return " &nbsp; ".join(parts)


class LegendLabel(QLabel):
    """Legend bar above the chart, hidden while there is no cursor"""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("chart_legend")
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setStyleSheet(ChartStyles.get_stylesheet())
        self.hide()

    @pyqtSlot(object)
    def update_snapshot(self, snapshot: Optional[LegendSnapshot]):
        text = format_legend_html(snapshot)
        if not text:
            self.clear()
            self.hide()
            return
        self.setText(text)
        self.show()
