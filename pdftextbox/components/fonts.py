"""
文件路径：pdftextbox/components/fonts.py

说明：字体探测、注册与度量（基于 ReportLab pdfmetrics）。

- measure_width / font_bbox_height 是排版核心所需的度量函数，签名与 processors.layout 约定一致；
- ensure_font_registered 按“显式字体文件 -> 自动探测 -> 内置 CJK 字体”的顺序注册中文字体。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFont

from ..variables import (
    PATH_CONFIG_DIR,
    PATH_FONT_FILE,
    STYLE_FONT_NAME,
    STYLE_FONT_NAME_CJK_FALLBACK,
    CONST_BUILTIN_FONT_BBOX,
    CONST_CANDIDATE_CJK_FONT_PATHS,
)


logger = logging.getLogger(__name__)

_FONT_SUFFIXES = {".ttf", ".otf"}
# 已注册字体缓存：字体文件路径（或内置名）-> 注册名
_REGISTERED: Dict[str, str] = {}


def probe_available_cjk_fonts(font_file: Optional[Path] = None) -> List[Path]:
    """探测可用的 CJK 字体文件（TTF/OTF），按优先级返回去重列表。

    优先级：
    1) 参数 font_file 或 `PATH_FONT_FILE`（若是 .ttf/.otf 且存在）
    2) `config/fonts/` 目录下的 .ttf/.otf 文件（按文件名排序）
    3) `CONST_CANDIDATE_CJK_FONT_PATHS` 列表中存在的 .ttf/.otf 文件
    """
    seen: set[str] = set()
    results: List[Path] = []

    def _add(p: Path) -> None:
        key = str(p.resolve())
        if key not in seen and p.exists() and p.suffix.lower() in _FONT_SUFFIXES:
            seen.add(key)
            results.append(p)

    for explicit in (font_file, PATH_FONT_FILE):
        if explicit:
            _add(Path(explicit))

    fonts_dir = PATH_CONFIG_DIR / "fonts"
    if fonts_dir.exists():
        for p in sorted(list(fonts_dir.glob("*.ttf")) + list(fonts_dir.glob("*.otf"))):
            _add(p)

    for s in CONST_CANDIDATE_CJK_FONT_PATHS:
        _add(Path(s))

    return results


def register_ttf(path: Path, face_name: Optional[str] = None) -> str:
    """注册 TTF/OTF 字体并返回注册名；同一文件重复调用直接返回缓存结果。"""
    key = str(Path(path).resolve())
    if key in _REGISTERED:
        return _REGISTERED[key]
    name = face_name or Path(path).stem
    pdfmetrics.registerFont(TTFont(name, str(path)))
    _REGISTERED[key] = name
    logger.info("已注册字体：%s -> %s", name, path)
    return name


def ensure_font_registered(font_file: Optional[Path] = None) -> Tuple[str, Optional[Path]]:
    """注册中文字体：优先使用可嵌入的 TTF/OTF，找不到时回退内置 CJK，再回退英文字体。

    返回：
        (字体注册名, 实际注册的字体文件)。使用内置字体时文件为 None，
        绘制时嵌入的字体与度量所用字体因此保持一致。
    """
    for candidate in probe_available_cjk_fonts(font_file):
        face_name = candidate.stem
        try:
            return register_ttf(candidate, face_name), candidate
        except Exception as exc:  # noqa: BLE001
            logger.warning("注册字体失败：%s -> %s，原因：%s", face_name, candidate, exc)

    fallback_name = STYLE_FONT_NAME_CJK_FALLBACK
    if fallback_name in _REGISTERED:
        return _REGISTERED[fallback_name], None
    try:
        pdfmetrics.registerFont(UnicodeCIDFont(fallback_name))
        _REGISTERED[fallback_name] = fallback_name
        logger.info("已启用 CJK 回退字体：%s（未嵌入）", fallback_name)
        return fallback_name, None
    except Exception as exc:  # noqa: BLE001
        logger.warning("CJK 回退字体注册失败，将使用英文字体（中文可能显示为方块）：%s", exc)
        return STYLE_FONT_NAME, None


def measure_width(text: str, font_name: str, font_size: float) -> float:
    """文本渲染宽度（pt）：ReportLab 字体度量 × 字号 / 1000。

    字体未注册时 pdfmetrics 抛出 KeyError，由调用方决定如何处理（排版核心会包装为 MeasurementError）。
    """
    return float(pdfmetrics.stringWidth(text, font_name, font_size))


def _font_bbox(font_name: str) -> Optional[Sequence[float]]:
    font = pdfmetrics.getFont(font_name)
    # TTF 与嵌入的 Type1 字体自带 bbox（已换算为 1000 单位）；内置字体查表
    bbox = getattr(font.face, "bbox", None)
    if bbox:
        return bbox
    return CONST_BUILTIN_FONT_BBOX.get(getattr(font.face, "name", font_name)) or CONST_BUILTIN_FONT_BBOX.get(font_name)


def font_bbox_height(font_name: str, font_size: float) -> float:
    """字体包围盒高度（pt）：FontBBox 的 (yMax - yMin) × 字号 / 1000。

    用于首行基线下移，避免字形顶部超出区块上边缘。
    未知字体没有包围盒数据时，退回上升高度减去下降高度。
    """
    bbox = _font_bbox(font_name)
    if bbox:
        return (float(bbox[3]) - float(bbox[1])) * font_size / 1000.0
    logger.debug("字体 %s 无包围盒数据，按上升/下降高度计算", font_name)
    ascent, descent = pdfmetrics.getAscentDescent(font_name, font_size)
    return float(ascent) - float(descent)


__all__ = [
    "probe_available_cjk_fonts",
    "register_ttf",
    "ensure_font_registered",
    "measure_width",
    "font_bbox_height",
]
