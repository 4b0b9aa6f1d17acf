"""
文件路径：pdftextbox/processors/__init__.py

说明：
- layout.py：显式换行拆分、逐段贪心分行、基线坐标分配；
- engines/{reportlab.py, pymupdf.py, raster.py}：绘制与转换引擎。
"""

from .layout import (
    AscentMeasurer,
    LayoutConfig,
    PositionedLine,
    TextArea,
    TextLayout,
    WidthMeasurer,
    layout_text,
    place_single_line,
    split_explicit_lines,
    wrap_text_lines,
)

__all__ = [
    "AscentMeasurer",
    "LayoutConfig",
    "PositionedLine",
    "TextArea",
    "TextLayout",
    "WidthMeasurer",
    "layout_text",
    "place_single_line",
    "split_explicit_lines",
    "wrap_text_lines",
]
