"""
Styles for chart component
"""

from .base_styles import BaseStyles

class ChartStyles:

    # Chart color scheme
    CHART_BACKGROUND = "#253248"
    CHART_GRID = "#334158"
    CHART_BORDER = "#485c7b"
    CHART_TEXT = "#e6e6e6"

    # Candlestick colors
    CANDLE_BULL_BODY = "#4bffb5"
    CANDLE_BEAR_BODY = "#ff4976"
    CANDLE_WICK = "#838ca1"

    # Series colors
    VOLUME_COLOR = "#182233"
    EQUITY_COLOR = "#2962FF"
    EQUITY_WIDTH = 2
    INDICATOR_WIDTH = 1.5

    CROSSHAIR_COLOR = "#9598a1"
    LEGEND_FILL = (37, 50, 72, 210)

    @staticmethod
    def get_stylesheet():
        return f"""
        /* Chart container */
        QWidget#chart_container {{
            background-color: {ChartStyles.CHART_BACKGROUND};
            border: 1px solid {ChartStyles.CHART_BORDER};
        }}

        /* Legend */
        QLabel#chart_legend {{
            background-color: {BaseStyles.BACKGROUND_SECONDARY};
            color: {ChartStyles.CHART_TEXT};
            font-family: {BaseStyles.FONT_FAMILY_MONO};
            font-size: {BaseStyles.FONT_SIZE_SMALL};
            padding: 4px 8px;
        }}
        """
