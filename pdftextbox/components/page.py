"""
文件路径：pdftextbox/components/page.py

说明：页选择解析，供 PDF 转图片时挑选页面。
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..variables import CONST_PAGE_SELECTION_ALL, ERR_PAGE_INDEX_OUT_OF_RANGE


logger = logging.getLogger(__name__)


def parse_page_selection(selection: Optional[str], total_pages: int, one_based: bool = True) -> List[int]:
    """解析页选择字符串，返回去重且排序的 0 基页索引列表。

    支持的格式：
    - 空值或 "all"：全部页面
    - "1,3-5,8"：逗号分隔，支持闭区间范围与单页
    - "3-"：从第 3 页到最后一页

    越界与无法解析的片段会记录警告并忽略。
    """
    sel = (selection or "").strip().lower()
    if not sel or sel == CONST_PAGE_SELECTION_ALL:
        return list(range(total_pages))

    base = 1 if one_based else 0
    result: set[int] = set()

    def _add(number: int) -> None:
        idx = number - base
        if idx < 0 or idx >= total_pages:
            logger.warning("[%s] 页索引越界，已忽略：%s / total=%s", ERR_PAGE_INDEX_OUT_OF_RANGE, number, total_pages)
            return
        result.add(idx)

    for part in (p.strip() for p in sel.split(",")):
        if not part:
            continue
        try:
            if "-" in part:
                start_s, end_s = part.split("-", 1)
                start_i = int(start_s)
                end_i = int(end_s) if end_s.strip() else total_pages - 1 + base
                if start_i > end_i:
                    start_i, end_i = end_i, start_i
                for number in range(start_i, end_i + 1):
                    _add(number)
            else:
                _add(int(part))
        except ValueError:
            logger.warning("无法解析页选择片段：%s，已忽略", part)

    return sorted(result)


__all__ = ["parse_page_selection"]
