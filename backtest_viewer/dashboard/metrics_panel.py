# backtest_viewer/dashboard/metrics_panel.py
"""
Results card: return, Sharpe, drawdown and a run summary
"""
from typing import Dict, Optional

from PyQt6.QtWidgets import QFrame, QGridLayout, QLabel, QVBoxLayout, QWidget

from ..data.models import BacktestMetrics
from ..data.payload import format_metrics, is_positive_return
from ..styles import BaseStyles


class MetricsPanel(QFrame):
    """Backtest metrics with positive/negative coloring"""

    METRICS = (
        ('total_return', 'Total Return'),
        ('sharpe_ratio', 'Sharpe Ratio'),
        ('max_drawdown', 'Max Drawdown'),
        ('final_value', 'Final Value'),
    )

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setObjectName("card")
        self.value_labels: Dict[str, QLabel] = {}
        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)

        header = QLabel("Results")
        header.setObjectName("field_label")
        layout.addWidget(header)

        grid = QGridLayout()
        for col, (key, title) in enumerate(self.METRICS):
            title_label = QLabel(title)
            title_label.setObjectName("field_label")
            value_label = QLabel("-")
            value_label.setStyleSheet(f"font-size: {BaseStyles.FONT_SIZE_XLARGE}; font-weight: bold;")
            grid.addWidget(title_label, 0, col)
            grid.addWidget(value_label, 1, col)
            self.value_labels[key] = value_label
        layout.addLayout(grid)

        self.summary_label = QLabel("Configure parameters and run backtest to see results")
        self.summary_label.setStyleSheet(f"color: {BaseStyles.TEXT_MUTED}; font-family: {BaseStyles.FONT_FAMILY_MONO};")
        layout.addWidget(self.summary_label)

    def set_metrics(self, metrics: BacktestMetrics, summary: str = ""):
        formatted = format_metrics(metrics)
        for key, label in self.value_labels.items():
            label.setText(formatted[key])

        return_color = BaseStyles.POSITIVE if is_positive_return(metrics) else BaseStyles.NEGATIVE
        self.value_labels['total_return'].setStyleSheet(
            f"font-size: {BaseStyles.FONT_SIZE_XLARGE}; font-weight: bold; color: {return_color};"
        )
        self.value_labels['max_drawdown'].setStyleSheet(
            f"font-size: {BaseStyles.FONT_SIZE_XLARGE}; font-weight: bold; color: {BaseStyles.NEGATIVE};"
        )
        self.summary_label.setText(summary)

    def set_status(self, message: str):
        for label in self.value_labels.values():
            label.setText("-")
        self.summary_label.setText(message)
