# backtest_viewer/styles/base_styles.py
"""
Base styles and common theme definitions
"""

class BaseStyles:
    # Dark theme color palette
    BACKGROUND_PRIMARY = "#1b2535"
    BACKGROUND_SECONDARY = "#253248"
    BACKGROUND_TERTIARY = "#2e3d57"

    BORDER_COLOR = "#485c7b"
    BORDER_LIGHT = "#5b7193"

    TEXT_PRIMARY = "#ffffff"
    TEXT_SECONDARY = "rgba(255, 255, 255, 0.9)"
    TEXT_MUTED = "#838ca1"

    ACCENT_PRIMARY = "#2962FF"
    ACCENT_HOVER = "#4b7bff"
    ACCENT_PRESSED = "#1f4fd1"

    # Status colors
    POSITIVE = "#4bffb5"
    NEGATIVE = "#ff4976"
    WARNING = "#ffa726"

    FONT_FAMILY = "Arial"
    FONT_FAMILY_MONO = "Consolas, 'Courier New', monospace"
    FONT_SIZE_SMALL = "11px"
    FONT_SIZE_NORMAL = "13px"
    FONT_SIZE_LARGE = "16px"
    FONT_SIZE_XLARGE = "20px"

    SPACING_SM = "8px"
    BORDER_RADIUS_SM = "4px"
    BORDER_RADIUS_MD = "6px"

    @staticmethod
    def get_base_stylesheet():
        return f"""
        QWidget {{
            background-color: {BaseStyles.BACKGROUND_PRIMARY};
            color: {BaseStyles.TEXT_PRIMARY};
            font-family: {BaseStyles.FONT_FAMILY};
            font-size: {BaseStyles.FONT_SIZE_NORMAL};
        }}

        QFrame#card {{
            background-color: {BaseStyles.BACKGROUND_SECONDARY};
            border: 1px solid {BaseStyles.BORDER_COLOR};
            border-radius: {BaseStyles.BORDER_RADIUS_MD};
        }}

        QLabel#field_label {{
            color: {BaseStyles.TEXT_MUTED};
            font-size: {BaseStyles.FONT_SIZE_SMALL};
            font-weight: bold;
        }}

        QPushButton {{
            background-color: {BaseStyles.BACKGROUND_TERTIARY};
            border: 1px solid {BaseStyles.BORDER_COLOR};
            padding: 8px 16px;
            border-radius: {BaseStyles.BORDER_RADIUS_SM};
            color: {BaseStyles.TEXT_PRIMARY};
        }}

        QPushButton:checked, QPushButton#run_button:enabled {{
            background-color: {BaseStyles.ACCENT_PRIMARY};
            font-weight: bold;
        }}

        QPushButton:hover {{
            background-color: {BaseStyles.ACCENT_HOVER};
        }}

        QPushButton:disabled {{
            color: {BaseStyles.TEXT_MUTED};
        }}

        QLineEdit, QComboBox, QDateEdit {{
            background-color: {BaseStyles.BACKGROUND_SECONDARY};
            border: 1px solid {BaseStyles.BORDER_COLOR};
            border-radius: {BaseStyles.BORDER_RADIUS_SM};
            padding: 6px;
        }}

        QLineEdit[invalid="true"] {{
            border: 1px solid {BaseStyles.NEGATIVE};
        }}

        QLabel#error_banner {{
            background-color: rgba(255, 73, 118, 0.15);
            border: 1px solid {BaseStyles.NEGATIVE};
            border-radius: {BaseStyles.BORDER_RADIUS_SM};
            color: {BaseStyles.NEGATIVE};
            padding: {BaseStyles.SPACING_SM};
        }}
        """
