"""
文件路径：pdftextbox/processors/engines/pymupdf.py

说明：PyMuPDF 直接在原 PDF 页面上绘制文字区块；若没有可嵌入的 TTF/OTF 字体，
回退到 ReportLab 图层 + 合并路径。

宽度度量仍使用 ReportLab（与回退路径一致），因此两条路径的分行结果相同。
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import fitz  # PyMuPDF

from ...components import (
    FileHandler,
    LayoutError,
    font_bbox_height,
    get_logger,
    measure_width,
    to_top_left_y,
)
from ...variables import STYLE_TEXT_COLOR_RGB, ERR_PDF_WRITE_FAILED
from ..layout import LayoutConfig, TextArea, TextLayout, WidthMeasurer, layout_text
from .reportlab import fill_with_reportlab, group_areas_by_page, read_page_sizes


logger = get_logger(__name__)

_EMBEDDABLE_SUFFIXES = {".ttf", ".otf"}


def fill_with_pymupdf(
    base_pdf: Path,
    areas: Iterable[TextArea],
    output_pdf: Path,
    config: LayoutConfig,
    *,
    font_file: Optional[Path],
    temp_overlay_pdf: Path,
    clean_temp_on_exit: bool,
    measure: WidthMeasurer = measure_width,
    color_rgb: Tuple[int, int, int] = STYLE_TEXT_COLOR_RGB,
) -> Tuple[str, List[TextLayout]]:
    """在 PDF 上直接绘制文字区块；必要时回退 ReportLab 合成路径。

    返回 (engine_used, layouts)。
    """
    FileHandler.validate_readable_file(base_pdf)
    FileHandler.ensure_parent_writable(output_pdf)
    area_list = list(areas)

    embeddable = bool(font_file and font_file.exists() and font_file.suffix.lower() in _EMBEDDABLE_SUFFIXES)
    if not embeddable:
        logger.warning("无可内嵌字体文件（%s），回退到 ReportLab 图层路径", font_file)
        layouts = fill_with_reportlab(
            base_pdf,
            area_list,
            output_pdf,
            config,
            page_sizes=read_page_sizes(base_pdf),
            temp_overlay_pdf=temp_overlay_pdf,
            clean_temp_on_exit=clean_temp_on_exit,
            measure=measure,
            color_rgb=color_rgb,
        )
        return "reportlab", layouts

    color = tuple(v / 255.0 for v in color_rgb)
    plan = group_areas_by_page(area_list)
    layouts: List[TextLayout] = []

    doc = fitz.open(str(base_pdf))
    try:
        for page_index in range(len(doc)):
            page = doc[page_index]
            page_height = float(page.rect.height)
            for area in plan.get(page_index, []):
                area_config = area.resolve_config(config)
                layout = layout_text(area.text, area.box, area_config, measure, ascent=font_bbox_height)
                for line in layout.lines:
                    if not line.text:
                        continue
                    # PyMuPDF 原点在左上，point 为基线起点
                    page.insert_text(
                        (line.x, to_top_left_y(line.y, page_height)),
                        line.text,
                        fontsize=area_config.font_size,
                        fontname=area_config.font_name,
                        fontfile=str(font_file),
                        color=color,
                    )
                layouts.append(layout)
        doc.save(str(output_pdf), deflate=True, garbage=4)
    except LayoutError:
        raise
    except (ValueError, RuntimeError) as exc:
        raise RuntimeError(f"[{ERR_PDF_WRITE_FAILED}] 使用 PyMuPDF 写入失败: {exc}") from exc
    finally:
        doc.close()

    size_kb = Path(output_pdf).stat().st_size / 1024.0
    logger.info("PyMuPDF 输出完成：%s (%.1f KB)", output_pdf, size_kb)
    return "pymupdf", layouts


__all__ = ["fill_with_pymupdf"]
