"""
文件路径：pdftextbox/processors/layout.py

说明：文字区块排版。

流程：按显式换行符（CRLF / LF）拆分 -> 每段独立贪心分行（components.text.pack_segment）
-> 依次拼接 -> 为每行分配基线坐标 (box.x, origin_y - i * leading)。

度量函数由调用方注入（默认使用 ReportLab 字体度量），排版本身不计算字形宽度。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..components import (
    InvalidGeometryError,
    LayoutBox,
    baseline_offsets,
    get_logger,
    pack_segment,
)
from ..variables import (
    STYLE_FONT_NAME,
    STYLE_FONT_SIZE_DEFAULT,
    STYLE_LINE_SPACING,
    STYLE_CONSIDER_FONT_HEIGHT,
)


logger = get_logger(__name__)

# 宽度度量：(文本, 字体名, 字号) -> 宽度
WidthMeasurer = Callable[[str, str, float], float]
# 上升高度度量：(字体名, 字号) -> 高度
AscentMeasurer = Callable[[str, float], float]

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LayoutConfig:
    """排版配置。

    属性：
        font_name: 字体注册名（与度量函数、绘制引擎使用的名字一致）。
        font_size: 字号（pt）。
        line_spacing: 行间额外间距（pt）。
        consider_font_height: 为 True 时首行基线下移字体高度，避免字形顶部超出区块上边缘。
    """

    font_name: str = STYLE_FONT_NAME
    font_size: float = STYLE_FONT_SIZE_DEFAULT
    line_spacing: float = STYLE_LINE_SPACING
    consider_font_height: bool = STYLE_CONSIDER_FONT_HEIGHT

    @property
    def leading(self) -> float:
        """相邻两行基线的距离。"""
        return self.line_spacing + self.font_size


@dataclass(frozen=True)
class PositionedLine:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class TextLayout:
    """排版结果。

    属性：
        lines: 按顺序排列的行及其基线坐标。
        box: 调用方传入的区块（未被修改）。
        origin_y: 实际使用的首行基线 y（考虑字体高度时已下移）。
    """

    lines: Tuple[PositionedLine, ...]
    box: LayoutBox
    origin_y: float

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self.lines]

    @property
    def bottom_y(self) -> float:
        """最后一行基线 y；无行时为 origin_y。"""
        return self.lines[-1].y if self.lines else self.origin_y


@dataclass
class TextArea:
    """待绘制的文字区块，支持按宽度自动换行。

    属性：
        text: 待绘制文本内容。
        x, y: 文本第一行的基线起点（ReportLab 坐标，左下原点）。
        width: 最大行宽（pt）。
        page: 页码（0 基）。
        font_size / line_spacing / consider_font_height: None 表示沿用默认配置。
    """

    text: str
    x: float
    y: float
    width: float
    page: int = 0
    font_size: Optional[float] = None
    line_spacing: Optional[float] = None
    consider_font_height: Optional[bool] = None

    @property
    def box(self) -> LayoutBox:
        return LayoutBox(x=self.x, y=self.y, width=self.width)

    def resolve_config(self, default: LayoutConfig) -> LayoutConfig:
        """以区块自身设置覆盖默认配置。"""
        return LayoutConfig(
            font_name=default.font_name,
            font_size=self.font_size if self.font_size is not None else default.font_size,
            line_spacing=self.line_spacing if self.line_spacing is not None else default.line_spacing,
            consider_font_height=(
                self.consider_font_height if self.consider_font_height is not None else default.consider_font_height
            ),
        )


def split_explicit_lines(text: str) -> List[str]:
    """按显式换行符拆分，CRLF、LF（以及单独的 CR）都视为一次换行。

    末尾的空段会被丢弃（"ab\\n" 只有一行），中间的空行保留；
    空文本或全部为换行符时返回 [""]。
    """
    segments = _LINE_BREAK_RE.split(text)
    while len(segments) > 1 and not segments[-1]:
        segments.pop()
    return segments


def wrap_text_lines(
    text: Optional[str],
    max_width: Optional[float],
    measure: WidthMeasurer,
    font_name: str = STYLE_FONT_NAME,
    font_size: float = STYLE_FONT_SIZE_DEFAULT,
) -> List[str]:
    """按最大行宽将文本分行。

    - text 为 None 返回空列表；
    - max_width 为 None 时不自动换行，仅按显式换行符拆分；
    - max_width <= 0 抛出 InvalidGeometryError。
    """
    if text is None:
        return []
    segments = split_explicit_lines(str(text))
    if max_width is None:
        return segments

    def _measure(run: str) -> float:
        return measure(run, font_name, font_size)

    wrapped: List[str] = []
    for segment in segments:
        wrapped.extend(pack_segment(segment, max_width, _measure))
    return wrapped


def layout_text(
    text: str,
    box: LayoutBox,
    config: LayoutConfig,
    measure: WidthMeasurer,
    ascent: Optional[AscentMeasurer] = None,
) -> TextLayout:
    """将文本排入文字区块，返回每行文字与基线坐标。

    参数：
        text: 待排版文本，可包含显式换行符。
        box: 文字区块（第一行基线起点与行宽）。
        config: 字体、字号、行距与是否考虑字体高度。
        measure: 宽度度量函数。
        ascent: 字体高度度量函数；仅在 config.consider_font_height 为 True 时需要。

    异常：
        InvalidGeometryError: 行宽 <= 0，或需要字体高度却未提供 ascent。
        MeasurementError: 度量失败，整次排版中止，不返回部分结果。
    """
    if box.width <= 0:
        raise InvalidGeometryError(f"文字区块宽度必须为正数：{box.width}")

    # 首行基线如果设在区块最上方，就算在可视范围内，字形顶部仍可能超出
    origin_y = box.y
    if config.consider_font_height:
        if ascent is None:
            raise InvalidGeometryError("consider_font_height 需要提供字体高度度量函数")
        origin_y = box.y - ascent(config.font_name, config.font_size)

    texts = wrap_text_lines(text, box.width, measure, config.font_name, config.font_size)
    ys = baseline_offsets(origin_y, len(texts), config.leading)
    lines = tuple(PositionedLine(text=t, x=box.x, y=y) for t, y in zip(texts, ys))
    logger.debug("排版完成：%s 行，区块宽度 %.2f，首行基线 %.2f", len(lines), box.width, origin_y)
    return TextLayout(lines=lines, box=box, origin_y=origin_y)


def place_single_line(text: str, x: float, y: float) -> PositionedLine:
    """单行文字，不考虑换行与右边界。"""
    return PositionedLine(text=text, x=float(x), y=float(y))


__all__ = [
    "WidthMeasurer",
    "AscentMeasurer",
    "LayoutConfig",
    "PositionedLine",
    "TextLayout",
    "TextArea",
    "split_explicit_lines",
    "wrap_text_lines",
    "layout_text",
    "place_single_line",
]
