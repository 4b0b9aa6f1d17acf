"""
文件路径：pdftextbox/processors/engines/reportlab.py

说明：ReportLab 绘制路径。

- draw_layout：把排版结果写入 canvas（文本对象 + 行距逐行下移）；
- render_text_pdf：新建单页 PDF，在左右留边距的文字区块中写入文本；
- build_text_layer / merge_pdfs：生成仅含文字的图层 PDF，再用 PyPDF2 覆盖合并到原 PDF。
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pdfplumber
from reportlab.pdfgen import canvas
from PyPDF2 import PdfReader, PdfWriter

from ...components import FileHandler, LayoutBox, font_bbox_height, get_logger, measure_width
from ...variables import (
    STYLE_TEXT_COLOR_RGB,
    STYLE_PAGE_SIZE_DEFAULT,
    STYLE_PAGE_MARGIN_DEFAULT,
    ERR_PDF_MERGE_FAILED,
    ERR_PDF_WRITE_FAILED,
)
from ..layout import (
    LayoutConfig,
    PositionedLine,
    TextArea,
    TextLayout,
    WidthMeasurer,
    layout_text,
)


logger = get_logger(__name__)


def read_page_sizes(pdf_path: Path) -> List[Tuple[float, float]]:
    """读取每页宽高（pt）。"""
    with pdfplumber.open(str(pdf_path)) as pdf:
        return [(float(p.width), float(p.height)) for p in pdf.pages]


def group_areas_by_page(areas: Iterable[TextArea]) -> Dict[int, List[TextArea]]:
    """按页码分组文字区块，保持原有顺序。"""
    plan: Dict[int, List[TextArea]] = {}
    for area in areas:
        plan.setdefault(int(area.page), []).append(area)
    return plan


def draw_layout(
    c: canvas.Canvas,
    layout: TextLayout,
    config: LayoutConfig,
    color_rgb: Tuple[int, int, int] = STYLE_TEXT_COLOR_RGB,
) -> None:
    """将排版结果写入 canvas 当前页。"""
    if not layout.lines:
        return
    text_obj = c.beginText(layout.box.x, layout.origin_y)
    text_obj.setFont(config.font_name, config.font_size, leading=config.leading)
    text_obj.setFillColorRGB(*(v / 255.0 for v in color_rgb))
    for line in layout.lines:
        text_obj.textLine(line.text)
    c.drawText(text_obj)


def draw_single_line(
    c: canvas.Canvas,
    line: PositionedLine,
    font_name: str,
    font_size: float,
) -> None:
    """单行文字，不考虑换行与右边界。"""
    c.setFont(font_name, font_size)
    c.drawString(line.x, line.y, line.text)


def render_text_pdf(
    text: str,
    output_pdf: Path,
    config: LayoutConfig,
    *,
    page_size: Tuple[float, float] = STYLE_PAGE_SIZE_DEFAULT,
    margin: float = STYLE_PAGE_MARGIN_DEFAULT,
    top: Optional[float] = None,
    measure: WidthMeasurer = measure_width,
    color_rgb: Tuple[int, int, int] = STYLE_TEXT_COLOR_RGB,
) -> TextLayout:
    """新建单页 PDF，在左右留 margin 的文字区块中写入文本。

    参数：
        top: 首行基线 y；None 表示页面高度减去 margin。

    返回：
        本次绘制使用的排版结果。
    """
    FileHandler.ensure_parent_writable(output_pdf)
    w, h = page_size
    box = LayoutBox.with_margin(top if top is not None else h - margin, margin, (0.0, 0.0, w, h))
    layout = layout_text(text, box, config, measure, ascent=font_bbox_height)

    try:
        c = canvas.Canvas(str(output_pdf), pagesize=(w, h))
        draw_layout(c, layout, config, color_rgb)
        c.showPage()
        c.save()
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"[{ERR_PDF_WRITE_FAILED}] PDF 写入失败: {exc}") from exc
    logger.info("已生成 PDF：%s（%s 行）", output_pdf, len(layout.lines))
    return layout


def build_text_layer(
    page_sizes: Sequence[Tuple[float, float]],
    areas: Iterable[TextArea],
    overlay_path: Path,
    config: LayoutConfig,
    *,
    measure: WidthMeasurer = measure_width,
    color_rgb: Tuple[int, int, int] = STYLE_TEXT_COLOR_RGB,
) -> List[TextLayout]:
    """使用 ReportLab 生成仅含文字的图层 PDF，页数与 page_sizes 一致。"""
    FileHandler.ensure_parent_writable(overlay_path)
    plan = group_areas_by_page(areas)
    layouts: List[TextLayout] = []

    c = canvas.Canvas(str(overlay_path))
    for page_index, (w, h) in enumerate(page_sizes):
        c.setPageSize((w, h))
        for area in plan.get(page_index, []):
            area_config = area.resolve_config(config)
            layout = layout_text(area.text, area.box, area_config, measure, ascent=font_bbox_height)
            draw_layout(c, layout, area_config, color_rgb)
            layouts.append(layout)
        c.showPage()
    c.save()

    skipped = sorted(p for p in plan if p < 0 or p >= len(page_sizes))
    if skipped:
        logger.warning("文字区块页码越界，已忽略：%s / total=%s", skipped, len(page_sizes))
    return layouts


def merge_pdfs(base_pdf: Path, overlay_pdf: Path, output_pdf: Path) -> None:
    """将 overlay 覆盖合并到 base 上，输出到 output_pdf。"""
    FileHandler.ensure_parent_writable(output_pdf)
    try:
        base_reader = PdfReader(str(base_pdf))
        overlay_reader = PdfReader(str(overlay_pdf))

        writer = PdfWriter()
        for i, page in enumerate(base_reader.pages):
            if i < len(overlay_reader.pages):
                page.merge_page(overlay_reader.pages[i])
            writer.add_page(page)

        with open(output_pdf, "wb") as f:  # noqa: P103
            writer.write(f)
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"[{ERR_PDF_MERGE_FAILED}] PDF 合并失败: {exc}") from exc


def fill_with_reportlab(
    base_pdf: Path,
    areas: Iterable[TextArea],
    output_pdf: Path,
    config: LayoutConfig,
    *,
    page_sizes: Optional[Sequence[Tuple[float, float]]] = None,
    temp_overlay_pdf: Path,
    clean_temp_on_exit: bool,
    measure: WidthMeasurer = measure_width,
    color_rgb: Tuple[int, int, int] = STYLE_TEXT_COLOR_RGB,
) -> List[TextLayout]:
    """图层 + 合并路径：在已有 PDF 上写入文字区块。"""
    FileHandler.validate_readable_file(base_pdf)
    layouts = build_text_layer(
        page_sizes if page_sizes is not None else read_page_sizes(base_pdf),
        areas,
        temp_overlay_pdf,
        config,
        measure=measure,
        color_rgb=color_rgb,
    )
    merge_pdfs(base_pdf, temp_overlay_pdf, output_pdf)
    if clean_temp_on_exit:
        temp_overlay_pdf.unlink(missing_ok=True)
    logger.info("ReportLab 输出完成：%s", output_pdf)
    return layouts


__all__ = [
    "read_page_sizes",
    "group_areas_by_page",
    "draw_layout",
    "draw_single_line",
    "render_text_pdf",
    "build_text_layer",
    "merge_pdfs",
    "fill_with_reportlab",
]
