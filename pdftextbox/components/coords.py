"""
文件路径：pdftextbox/components/coords.py

说明：文字区块几何与基线坐标计算。

坐标系：PDF 用户空间（ReportLab 约定），左下角为原点，y 向上为正。
LayoutBox 的 (x, y) 为第一行基线的起点，width 为可用行宽。
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

# (x0, y0, x1, y1)，与 PDF MediaBox 一致
MediaBox = Tuple[float, float, float, float]


@dataclass(frozen=True)
class LayoutBox:
    """文字可以显示的范围区块（仅水平方向受限，向下可一直延展）。"""

    x: float
    y: float
    width: float

    @classmethod
    def from_media_box(cls, media_box: MediaBox) -> "LayoutBox":
        """以页面 MediaBox 作为宽度与起点：左上角开始，占满整页宽度。"""
        x0, _, x1, y1 = media_box
        return cls(x=float(x0), y=float(y1), width=float(x1) - float(x0))

    @classmethod
    def with_margin(cls, y: float, x_margin: float, media_box: MediaBox) -> "LayoutBox":
        """指定起点 y，左右各留 x_margin 的水平边距。

        参数：
            y: 第一行基线的 y 坐标。
            x_margin: 水平边距（左右相同）。
            media_box: 文字区块所在页面的 MediaBox。
        """
        x0, _, x1, _ = media_box
        return cls(x=float(x0) + x_margin, y=float(y), width=float(x1) - float(x0) - 2 * x_margin)

    @classmethod
    def between(cls, x: float, y: float, right_boundary: float) -> "LayoutBox":
        """指定起点 (x, y)，以右边界的 x 坐标决定行宽。"""
        return cls(x=float(x), y=float(y), width=float(right_boundary) - float(x))

    def shifted(self, dy: float) -> "LayoutBox":
        """返回 y 方向平移后的新区块（向上为正），原区块不变。"""
        return replace(self, y=self.y + dy)


def baseline_offsets(origin_y: float, count: int, leading: float) -> List[float]:
    """计算 count 行文字的基线 y：第 i 行为 origin_y - i * leading。"""
    return [origin_y - i * leading for i in range(count)]


def to_top_left_y(y: float, page_height: float) -> float:
    """将左下原点的 y 转为左上原点的 y（PyMuPDF 使用左上原点）。"""
    return page_height - y


__all__ = [
    "MediaBox",
    "LayoutBox",
    "baseline_offsets",
    "to_top_left_y",
]
