# backtest_viewer/chart/colors.py
"""
Deterministic indicator line colors
"""
from typing import Dict, Iterable, Sequence, Tuple

# Cycled in order; reuse after exhaustion is deterministic
INDICATOR_PALETTE: Tuple[str, ...] = (
    '#f59e0b',
    '#a855f7',
    '#06b6d4',
    '#fde047',
    '#ec4899',
    '#84cc16',
    '#f97316',
    '#3b82f6',
)


def color_for_index(index: int, palette: Sequence[str] = INDICATOR_PALETTE) -> str:
    if not palette:
        raise ValueError("Palette must contain at least one color")
    return palette[index % len(palette)]


def assign_colors(keys: Iterable[Tuple[str, str]],
                  palette: Sequence[str] = INDICATOR_PALETTE) -> Dict[Tuple[str, str], str]:
    """
    Map ordered (indicator, line) keys to palette colors.

    The n-th distinct key gets palette[n % len(palette)]; a repeated key keeps
    its first color.
    """
    colors: Dict[Tuple[str, str], str] = {}
    for key in keys:
        if key not in colors:
            colors[key] = color_for_index(len(colors), palette)
    return colors
