"""
pytest 全局配置：将项目根目录加入 sys.path，确保 `from pdftextbox...` 可被导入；
并提供与字体无关的度量函数，便于精确断言分行结果。
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


def _narrow_wide_width(text: str) -> float:
    # 窄字符宽 1，宽字符宽 2
    return float(sum(1 if ord(ch) < 128 else 2 for ch in text))


@pytest.fixture
def narrow_wide_measure() -> Callable[[str], float]:
    return _narrow_wide_width


@pytest.fixture
def char_count_measure() -> Callable[[str], float]:
    return lambda text: float(len(text))


@pytest.fixture
def font_measure() -> Callable[[str, str, float], float]:
    """(文本, 字体名, 字号) 形式的度量：窄字符 0.5 字号，宽字符 1 字号。"""

    def _measure(text: str, font_name: str, font_size: float) -> float:
        return _narrow_wide_width(text) * font_size / 2.0

    return _measure


@pytest.fixture
def recording_measure() -> Callable[[str], float]:
    """按字符数度量，并记录每次调用的文本。"""
    calls: List[str] = []

    def _measure(text: str) -> float:
        calls.append(text)
        return float(len(text))

    _measure.calls = calls  # type: ignore[attr-defined]
    return _measure
