"""
文件路径：pdftextbox/processors/engines/raster.py

说明：将 PDF 转换成图片（PyMuPDF 渲染页面，Pillow 编码输出）。

输出命名（假设来源为 foobar.pdf、格式为 jpg）：
- 单页：foobar.jpg
- 多页：foobar-1.jpg、foobar-2.jpg、...（页码 1 基，与页选择无关）
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image

from ...components import FileHandler, get_logger, parse_page_selection, retry_on_exception
from ...variables import (
    CONST_IMAGE_FORMATS,
    CONST_RASTER_DPI_DEFAULT,
    CONST_PDF_POINTS_PER_INCH,
    ERR_INVALID_PDF,
    ERR_RENDER_FAILED,
)


logger = get_logger(__name__)

# 格式名 -> (Pillow 格式名, 扩展名)
IMAGE_FORMATS: Dict[str, Tuple[str, str]] = {name: (pil, ext) for name, pil, ext in CONST_IMAGE_FORMATS}


def _resolve_format(image_format: str) -> Tuple[str, str]:
    key = str(image_format).strip().lower().lstrip(".")
    if key == "jpeg":
        key = "jpg"
    if key not in IMAGE_FORMATS:
        raise ValueError(f"不支持的图片格式：{image_format}（可选：{', '.join(IMAGE_FORMATS)}）")
    return IMAGE_FORMATS[key]


def output_image_path(src_pdf: Path, output_dir: Path, extension: str, page_number: Optional[int]) -> Path:
    """输出文件路径；page_number 为 None 表示单页文档。"""
    stem = src_pdf.stem
    if page_number is None:
        return output_dir / f"{stem}{extension}"
    return output_dir / f"{stem}-{page_number}{extension}"


def render_page(page: "fitz.Page", dpi: float) -> Image.Image:
    """以指定 DPI 渲染单页为 RGB 图像。"""
    zoom = float(dpi) / CONST_PDF_POINTS_PER_INCH
    pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
    return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)


@retry_on_exception(exceptions=(OSError,))
def _save_image(img: Image.Image, target: Path, pil_format: str) -> None:
    img.save(str(target), format=pil_format)


def convert_pdf(
    src_pdf: Path,
    output_dir: Path,
    image_format: str,
    dpi: float = CONST_RASTER_DPI_DEFAULT,
    pages: Optional[str] = None,
) -> List[Path]:
    """将 PDF 转成图片，多页文档每页一张，统一放在 output_dir。

    参数：
        src_pdf: 来源 PDF。
        output_dir: 输出目录（不存在则创建）。
        image_format: bmp / jpg / png / gif。
        dpi: 渲染分辨率。
        pages: 页选择（如 "1,3-5"，1 基）；None 表示全部页面。

    返回：
        已写出的图片路径列表（按页顺序）。
    """
    FileHandler.validate_readable_file(src_pdf)
    pil_format, extension = _resolve_format(image_format)
    FileHandler.ensure_dir_writable(output_dir)

    try:
        doc = fitz.open(str(src_pdf))
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"[{ERR_INVALID_PDF}] 无法打开 PDF：{src_pdf}：{exc}") from exc

    outputs: List[Path] = []
    try:
        total = len(doc)
        single = total == 1
        for page_index in parse_page_selection(pages, total_pages=total, one_based=True):
            img = render_page(doc[page_index], dpi)
            target = output_image_path(src_pdf, output_dir, extension, None if single else page_index + 1)
            _save_image(img, target, pil_format)
            outputs.append(target)
    except (ValueError, RuntimeError) as exc:
        raise RuntimeError(f"[{ERR_RENDER_FAILED}] 页面光栅化失败：{src_pdf}：{exc}") from exc
    finally:
        doc.close()

    logger.info("PDF 转图片完成：%s -> %s 张 %s（%s dpi）", src_pdf, len(outputs), extension, dpi)
    return outputs


def to_jpg(src_pdf: Path, output_dir: Path) -> List[Path]:
    return convert_pdf(src_pdf, output_dir, "jpg")


def to_png(src_pdf: Path, output_dir: Path) -> List[Path]:
    return convert_pdf(src_pdf, output_dir, "png")


def to_gif(src_pdf: Path, output_dir: Path) -> List[Path]:
    return convert_pdf(src_pdf, output_dir, "gif")


def to_bmp(src_pdf: Path, output_dir: Path) -> List[Path]:
    return convert_pdf(src_pdf, output_dir, "bmp")


__all__ = [
    "IMAGE_FORMATS",
    "output_image_path",
    "render_page",
    "convert_pdf",
    "to_jpg",
    "to_png",
    "to_gif",
    "to_bmp",
]
