# backtest_viewer/dashboard/main_window.py
"""
Module: Backtest Viewer Window
Purpose: Submit a strategy backtest and render its result
UI Framework: PyQt6 with PyQtGraph
Features: Request form with validation, candlestick/volume/equity/indicator chart,
          crosshair legend, metrics card
"""
import logging
from typing import Optional

from PyQt6.QtCore import Qt, QDate, pyqtSlot
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QLineEdit, QComboBox, QDateEdit, QButtonGroup, QGridLayout
)

from ..config import ViewerConfig
from ..exceptions import SeriesRegistrationError
from ..chart import ChartView
from ..data.models import BacktestResult
from ..data.normalizers import normalize_result
from ..data.rest_client import BacktestClient, BacktestRequest, BacktestWorker
from ..data.strategies import STOCK_SYMBOLS, STRATEGIES, find_strategy
from ..styles import BaseStyles
from .metrics_panel import MetricsPanel
from .validators import parse_amount, max_allowed_date, is_date_allowed, is_range_valid

logger = logging.getLogger(__name__)


class BacktestViewerWindow(QMainWindow):
    """Request controls on top, chart and results below"""

    def __init__(self, config: Optional[ViewerConfig] = None, parent=None):
        super().__init__(parent)
        self.config = config or ViewerConfig()
        self.client: Optional[BacktestClient] = None
        self.worker: Optional[BacktestWorker] = None

        self.amount: Optional[str] = None
        self.amount_error: Optional[str] = None
        self.last_request: Optional[BacktestRequest] = None

        self.setWindowTitle("Backtesting Interface")
        self.resize(1280, 820)
        self.init_ui()
        self.setStyleSheet(BaseStyles.get_base_stylesheet())
        self.update_run_button()

    def init_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        header = QLabel("Backtesting Interface")
        header.setStyleSheet(f"font-size: {BaseStyles.FONT_SIZE_XLARGE}; font-weight: bold;")
        layout.addWidget(header)
        subtitle = QLabel("Test with prebuilt strategies. Market data ends two months before today.")
        subtitle.setStyleSheet(f"color: {BaseStyles.TEXT_MUTED};")
        layout.addWidget(subtitle)

        layout.addWidget(self.create_controls())

        self.error_banner = QLabel()
        self.error_banner.setObjectName("error_banner")
        self.error_banner.setWordWrap(True)
        self.error_banner.hide()
        layout.addWidget(self.error_banner)

        self.chart_view = ChartView(height=self.config.chart_height,
                                    volume_margin_top=self.config.volume_margin_top)
        layout.addWidget(self.chart_view, 1)

        self.metrics_panel = MetricsPanel()
        layout.addWidget(self.metrics_panel)

        self.setCentralWidget(central)

    def create_controls(self) -> QWidget:
        controls = QWidget()
        grid = QGridLayout(controls)
        grid.setContentsMargins(0, 5, 0, 5)

        def add_field(col: int, title: str, widget: QWidget):
            label = QLabel(title)
            label.setObjectName("field_label")
            grid.addWidget(label, 0, col)
            grid.addWidget(widget, 1, col)

        self.amount_input = QLineEdit()
        self.amount_input.setPlaceholderText("$ 10,000")
        self.amount_input.textEdited.connect(self.on_amount_edited)
        add_field(0, "Investment", self.amount_input)

        self.symbol_combo = QComboBox()
        self.symbol_combo.addItem("Select symbol", None)
        for symbol in STOCK_SYMBOLS:
            self.symbol_combo.addItem(symbol, symbol)
        self.symbol_combo.currentIndexChanged.connect(self.update_run_button)
        add_field(1, "Stock", self.symbol_combo)

        strategy_row = QWidget()
        strategy_layout = QHBoxLayout(strategy_row)
        strategy_layout.setContentsMargins(0, 0, 0, 0)
        self.strategy_group = QButtonGroup(self)
        self.strategy_group.setExclusive(True)
        for preset in STRATEGIES:
            button = QPushButton(f"{preset.name}\n{preset.description}")
            button.setCheckable(True)
            button.setProperty('strategy_id', preset.id)
            self.strategy_group.addButton(button)
            strategy_layout.addWidget(button)
        self.strategy_group.buttonClicked.connect(self.update_run_button)
        add_field(2, "Strategy", strategy_row)

        max_date = max_allowed_date()
        max_qdate = QDate(max_date.year, max_date.month, max_date.day)

        self.start_date = QDateEdit(max_qdate.addYears(-1))
        self.start_date.setCalendarPopup(True)
        self.start_date.setMaximumDate(max_qdate)
        self.start_date.dateChanged.connect(self.on_dates_changed)
        add_field(3, "Start Date", self.start_date)

        self.end_date = QDateEdit(max_qdate)
        self.end_date.setCalendarPopup(True)
        self.end_date.setMaximumDate(max_qdate)
        self.end_date.dateChanged.connect(self.on_dates_changed)
        add_field(4, "End Date", self.end_date)

        self.run_button = QPushButton("Complete all fields")
        self.run_button.setObjectName("run_button")
        self.run_button.clicked.connect(self.run_backtest)
        add_field(5, "", self.run_button)

        return controls

    def on_amount_edited(self, text: str):
        clean, display, error = parse_amount(text)
        self.amount_error = error
        if error is None:
            self.amount = clean
            if display != text:
                self.amount_input.setText(display)
        self.amount_input.setProperty('invalid', error is not None)
        self.amount_input.style().polish(self.amount_input)
        self.amount_input.setToolTip(error or "")
        self.update_run_button()

    def on_dates_changed(self):
        # End date can never be before start date
        self.end_date.setMinimumDate(self.start_date.date())
        self.update_run_button()

    def selected_strategy_id(self) -> Optional[str]:
        button = self.strategy_group.checkedButton()
        return button.property('strategy_id') if button else None

    def is_form_valid(self) -> bool:
        start = self.start_date.date().toPyDate()
        end = self.end_date.date().toPyDate()
        # Editor maximums are fixed at startup, the data window keeps moving
        return bool(
            self.amount
            and self.amount_error is None
            and self.symbol_combo.currentData()
            and self.selected_strategy_id()
            and is_range_valid(start, end)
            and is_date_allowed(end)
        )

    def update_run_button(self, *args):
        running = self.worker is not None and self.worker.isRunning()
        valid = self.is_form_valid()
        self.run_button.setEnabled(valid and not running)
        if running:
            self.run_button.setText("Running...")
        else:
            self.run_button.setText("Run Backtest" if valid else "Complete all fields")

    def build_request(self) -> BacktestRequest:
        preset = find_strategy(self.selected_strategy_id())
        return BacktestRequest(
            strategy_code=preset.load_code(),
            strategy_name=preset.name,
            strategy_params=preset.params,
            data_source=self.symbol_combo.currentData(),
            start_date=self.start_date.date().toString(Qt.DateFormat.ISODate),
            end_date=self.end_date.date().toString(Qt.DateFormat.ISODate),
            initial_cash=float(self.amount),
        )

    def run_backtest(self):
        if not self.is_form_valid():
            return

        try:
            request = self.build_request()
        except OSError as e:
            logger.error(f"Could not load strategy source: {e}")
            self.show_error(f"Could not load strategy source: {e}")
            return

        if self.client is None:
            self.client = BacktestClient(self.config.backtest_endpoint, self.config.request_timeout)

        self.hide_error()
        self.chart_view.clear()
        self.metrics_panel.set_status("Running backtest...")
        self.last_request = request

        self.worker = BacktestWorker(self.client, request, self)
        self.worker.result_ready.connect(self.load_result)
        self.worker.error_occurred.connect(self.on_error)
        self.worker.finished.connect(self.update_run_button)
        self.worker.start()
        self.update_run_button()

    @pyqtSlot(object)
    def load_result(self, result: BacktestResult):
        """Normalize the payload and rebuild the chart from scratch"""
        if not result.success:
            self.chart_view.clear()
            self.show_error(f"Backtest failed for {result.strategy_name or 'strategy'}")
            self.metrics_panel.set_status("Backtest failed")
            return

        try:
            chart_data = normalize_result(result)
            self.chart_view.set_chart_data(chart_data)
        except SeriesRegistrationError as e:
            logger.error(f"Chart rebuild aborted: {e}", exc_info=True)
            self.chart_view.clear()
            self.show_error(str(e))
            self.metrics_panel.set_status("Chart could not be built")
            return

        self.hide_error()
        self.metrics_panel.set_metrics(result.metrics, self.run_summary(result))

    def run_summary(self, result: BacktestResult) -> str:
        lines = [f"Strategy: {result.strategy_name}"]
        if self.last_request is not None:
            request = self.last_request
            lines += [
                f"Stock: {request.data_source}",
                f"Period: {request.start_date} to {request.end_date}",
                f"Initial Capital: ${request.initial_cash:,.2f}",
            ]
        return "\n".join(lines)

    @pyqtSlot(str)
    def on_error(self, message: str):
        self.show_error(message)
        self.metrics_panel.set_status("Configure parameters and run backtest to see results")

    def show_error(self, message: str):
        self.error_banner.setText(message)
        self.error_banner.show()

    def hide_error(self):
        self.error_banner.clear()
        self.error_banner.hide()

    def closeEvent(self, event):
        if self.worker is not None and self.worker.isRunning():
            self.worker.wait(2000)
        self.chart_view.clear()
        if self.client is not None:
            self.client.close()
        super().closeEvent(event)
