"""
文件路径：pdftextbox/pdf_processor.py

模块职责：
- 门面类 TextBoxProcessor：注册字体、排版文字区块、写出 PDF、在已有 PDF 上绘制、PDF 转图片；
- 仅通过 `pdftextbox.components` 进行通用操作（日志、文件、度量），
  跨模块变量统一从 `pdftextbox.variables` 引用。

注意：
- 坐标系统一使用 PDF 用户空间（左下原点）；PyMuPDF 路径内部自行翻转 y。
- 排版只负责水平方向换行，文字超出页面底部时不会自动分页。
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .components import (
    FileHandler,
    LayoutBox,
    ensure_font_registered,
    estimate_text_width,
    font_bbox_height,
    get_logger,
    measure_width,
)
from .processors.engines import ENGINE_PYMUPDF, ENGINE_REPORTLAB
from .processors.engines.pymupdf import fill_with_pymupdf
from .processors.engines.raster import convert_pdf
from .processors.engines.reportlab import fill_with_reportlab, render_text_pdf
from .processors.layout import (
    LayoutConfig,
    PositionedLine,
    TextArea,
    TextLayout,
    WidthMeasurer,
    layout_text,
    place_single_line,
)
from .variables import (
    PATH_TEMP_OVERLAY_PDF,
    STYLE_FONT_SIZE_DEFAULT,
    STYLE_LINE_SPACING,
    STYLE_CONSIDER_FONT_HEIGHT,
    STYLE_TEXT_COLOR_RGB,
    STYLE_PAGE_SIZE_DEFAULT,
    STYLE_PAGE_MARGIN_DEFAULT,
    CONST_CLEAN_TEMP_ON_EXIT,
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_RASTER_DPI_DEFAULT,
)


logger = get_logger(__name__)


def _estimated_measure(text: str, font_name: str, font_size: float) -> float:
    return estimate_text_width(text, font_size)


class TextBoxProcessor:
    """文字区块处理器：字体注册、排版与输出。

    用法示例：
        processor = TextBoxProcessor(font_size=12)
        layout = processor.layout("中英混排 mixed text", LayoutBox(72, 720, 200))
        processor.render("中英混排 mixed text", Path("output/demo.pdf"))

    参数：
        font_file: 显式指定的 TTF/OTF 字体；None 时自动探测。
        estimate_widths: 为 True 时不读取字体度量，按“宽字符 = 字号、窄字符 = 0.6 字号”估算。
    """

    def __init__(
        self,
        font_file: Optional[Path] = None,
        font_size: float = STYLE_FONT_SIZE_DEFAULT,
        line_spacing: float = STYLE_LINE_SPACING,
        consider_font_height: bool = STYLE_CONSIDER_FONT_HEIGHT,
        color_rgb: Tuple[int, int, int] = STYLE_TEXT_COLOR_RGB,
        estimate_widths: bool = False,
    ) -> None:
        # font_file 为实际注册成功的字体文件；内置字体时为 None
        self.font_name, self.font_file = ensure_font_registered(font_file)
        self.config = LayoutConfig(
            font_name=self.font_name,
            font_size=font_size,
            line_spacing=line_spacing,
            consider_font_height=consider_font_height,
        )
        self.color_rgb = color_rgb
        self.measure: WidthMeasurer = _estimated_measure if estimate_widths else measure_width
        # 运行时信息：用于日志展示
        self.last_engine_used: Optional[str] = None

    # -----------------------------
    # 排版
    # -----------------------------
    def layout(self, text: str, box: LayoutBox) -> TextLayout:
        """将文本排入区块，返回每行文字与基线坐标。"""
        return layout_text(text, box, self.config, self.measure, ascent=font_bbox_height)

    def single_line(self, text: str, x: float, y: float) -> PositionedLine:
        """单行文字，不换行。"""
        return place_single_line(text, x, y)

    # -----------------------------
    # 输出
    # -----------------------------
    def render(
        self,
        text: str,
        output_path: Optional[Path] = None,
        page_size: Tuple[float, float] = STYLE_PAGE_SIZE_DEFAULT,
        margin: float = STYLE_PAGE_MARGIN_DEFAULT,
    ) -> Tuple[Path, TextLayout]:
        """新建单页 PDF 并写入文本，返回 (输出路径, 排版结果)。"""
        out = output_path or FileHandler.timestamped_output_path("textbox", CONST_DEFAULT_OUTPUT_SUFFIX)
        layout = render_text_pdf(
            text,
            out,
            self.config,
            page_size=page_size,
            margin=margin,
            measure=self.measure,
            color_rgb=self.color_rgb,
        )
        self.last_engine_used = ENGINE_REPORTLAB
        return out, layout

    def fill(
        self,
        pdf_path: Path,
        areas: Iterable[TextArea],
        output_path: Optional[Path] = None,
        engine: str = ENGINE_PYMUPDF,
    ) -> Tuple[Path, List[TextLayout]]:
        """在已有 PDF 上绘制文字区块，返回 (输出路径, 各区块排版结果)。"""
        FileHandler.validate_readable_file(pdf_path)
        out = output_path or FileHandler.timestamped_output_path(pdf_path.stem, CONST_DEFAULT_OUTPUT_SUFFIX)

        if engine == ENGINE_PYMUPDF:
            engine_used, layouts = fill_with_pymupdf(
                pdf_path,
                areas,
                out,
                self.config,
                font_file=self.font_file,
                temp_overlay_pdf=PATH_TEMP_OVERLAY_PDF,
                clean_temp_on_exit=CONST_CLEAN_TEMP_ON_EXIT,
                measure=self.measure,
                color_rgb=self.color_rgb,
            )
        elif engine == ENGINE_REPORTLAB:
            engine_used = ENGINE_REPORTLAB
            layouts = fill_with_reportlab(
                pdf_path,
                areas,
                out,
                self.config,
                temp_overlay_pdf=PATH_TEMP_OVERLAY_PDF,
                clean_temp_on_exit=CONST_CLEAN_TEMP_ON_EXIT,
                measure=self.measure,
                color_rgb=self.color_rgb,
            )
        else:
            raise ValueError(f"未知的绘制引擎：{engine}")

        self.last_engine_used = engine_used
        logger.info("文字区块绘制完成：engine=%s, areas=%s -> %s", engine_used, len(layouts), out)
        return out, layouts

    @staticmethod
    def convert(
        pdf_path: Path,
        output_dir: Path,
        image_format: str,
        dpi: float = CONST_RASTER_DPI_DEFAULT,
        pages: Optional[str] = None,
    ) -> List[Path]:
        """PDF 转图片，见 processors.engines.raster.convert_pdf。"""
        return convert_pdf(pdf_path, output_dir, image_format, dpi=dpi, pages=pages)


__all__ = ["TextBoxProcessor"]
