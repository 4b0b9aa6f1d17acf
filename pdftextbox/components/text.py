"""
文件路径：pdftextbox/components/text.py

说明：中英混排文本的断行判定与贪心分行。

- find_next_break：从指定位置向后扫描，返回下一个可断行位置；
- pack_segment：对一段不含换行符的文本按最大行宽贪心分行；
- estimate_text_width：不依赖字体文件的粗略宽度估算，可作为显式的度量函数使用。

断行规则：
1. 空白字符总是可断行（断行后行首/行尾空白会被裁掉）；
2. 非单字节字符（中文等）之前都可以断行；
3. 中英交替处可以断行（例如「I服了u」可断为 I | 服 | 了 | u）；
4. 连续的英文字母/数字之间不断行（空白除外）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..variables import CONST_BREAK_CHAR, CONST_NARROW_CHAR_ENCODING
from .errors import InvalidGeometryError, MeasurementError


logger = logging.getLogger(__name__)

# 已绑定字体与字号的度量函数：文本 -> 宽度（与行宽同一坐标单位）
TextMeasure = Callable[[str], float]


@dataclass(frozen=True)
class BreakState:
    """断行扫描状态：上一个被检查的字符是否为窄字符。

    每段文本分行时新建，随 find_next_break 的返回值向后传递，不在模块或实例上保存。
    """

    last_is_narrow: bool = True


def is_narrow_char(ch: str) -> bool:
    """判定字符是否为窄字符（拉丁字母、数字、半角标点）。

    注意：以编码后的字节数是否为 1 作为判定依据，并不严谨（只是“英文 vs 中文”的近似），
    但对中英混排足够有效。
    """
    return len(ch.encode(CONST_NARROW_CHAR_ENCODING, errors="replace")) == 1


def find_next_break(text: str, from_index: int, state: BreakState) -> Tuple[int, BreakState]:
    """从 from_index 开始向后扫描，返回 (下一个可断行位置, 新状态)。

    返回的位置是“断点”，即可断行字符的下标（该字符属于下一段）；
    扫描到末尾仍无断点时返回 len(text)。
    """
    last_is_narrow = state.last_is_narrow
    for i in range(from_index, len(text)):
        ch = text[i]
        if ch == CONST_BREAK_CHAR:
            return i, BreakState(last_is_narrow)

        current_is_narrow = is_narrow_char(ch)
        if current_is_narrow:
            # 是字母，但前一个不是字母
            if not last_is_narrow:
                return i, BreakState(True)
        else:
            return i, BreakState(False)
        last_is_narrow = current_is_narrow
    return len(text), BreakState(last_is_narrow)


def _measure(measure: TextMeasure, text: str) -> float:
    if not text:
        return 0.0
    try:
        return float(measure(text))
    except Exception as exc:  # noqa: BLE001
        raise MeasurementError(f"宽度度量失败：{text!r}：{exc}") from exc


def pack_segment(segment: str, max_width: float, measure: TextMeasure) -> List[str]:
    """按最大行宽将一段不含换行符的文本分行（贪心策略）。

    参数：
        segment: 单段文本（调用方已按换行符拆分）。
        max_width: 最大行宽，必须 > 0。
        measure: 度量函数，返回文本宽度。

    返回：
        行列表。空文本返回 [""]（保留空行）；单个断行单元超过行宽时独占一行（强制接受）。

    异常：
        InvalidGeometryError: max_width <= 0。
        MeasurementError: 度量函数抛出异常；本段已算出的行全部丢弃。
    """
    if max_width is None or max_width <= 0:
        raise InvalidGeometryError(f"行宽必须为正数：{max_width}")

    if not segment:
        # 如果这一行是空白，也至少要加上一个空白行
        return [""]

    lines: List[str] = []
    text = segment
    state = BreakState()
    last_position = -1  # 最近一次仍在行宽之内的断点
    scan_from = 0

    while text:
        # 找出下一个可以断行的地方
        break_index, state = find_next_break(text, scan_from, state)
        test_str = text[:break_index].strip()
        width = _measure(measure, test_str)
        logger.debug("候选 %r - %.2f / %.2f", test_str, width, max_width)

        if width > max_width:
            # 要断行；尚无合适断点时强制接受当前断点
            if last_position < 0:
                last_position = break_index
            lines.append(text[:last_position].strip())
            text = text[last_position:].strip()
            last_position = -1
            scan_from = 0
        elif break_index >= len(text):
            # 后面没有字了
            lines.append(text)
            break
        else:
            # 不需要断行，继续补字；空前缀（行首空白或行首中文之前）不能作为断点
            if test_str:
                last_position = break_index
            scan_from = break_index + 1

    return lines


def estimate_text_width(
    text: str,
    font_size: float,
    char_width_ratio: float = 0.6,
) -> float:
    """估算文本宽度（简化版）。

    - 宽字符按 font_size 计算；窄字符按 font_size * char_width_ratio。
    """
    if not text:
        return 0.0
    width = 0.0
    for char in text:
        if is_narrow_char(char):
            width += font_size * char_width_ratio
        else:
            width += font_size
    return width


__all__ = [
    "BreakState",
    "TextMeasure",
    "is_narrow_char",
    "find_next_break",
    "pack_segment",
    "estimate_text_width",
]
