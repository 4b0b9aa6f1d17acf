"""
文件路径：main.py

命令行入口：
- layout：打印分行结果与每行基线坐标；
- render：新建单页 PDF 并写入文字区块；
- fill：按文字区块 JSON 在已有 PDF 上绘制文字；
- convert：PDF 转图片（bmp/jpg/png/gif）。

快速使用示例：
    python main.py layout --text "中英混排 mixed 文本" --width 120 --font-size 12
    python main.py render --text-file notes.txt --output output/notes.pdf --consider-font-height
    python main.py fill --input contract.pdf --areas-json areas.json --engine reportlab
    python main.py convert --input contract.pdf --format jpg --dpi 150 --pages 1-2
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from pdftextbox.components import InvalidGeometryError, LayoutBox, LayoutError, get_logger
from pdftextbox.data_handler import load_text_areas, read_text_file
from pdftextbox.pdf_processor import TextBoxProcessor
from pdftextbox.processors.engines import ENGINE_PYMUPDF, ENGINE_REPORTLAB
from pdftextbox.processors.engines.raster import IMAGE_FORMATS
from pdftextbox.variables import (
    PATH_OUTPUT_DIR,
    STYLE_FONT_SIZE_DEFAULT,
    STYLE_LINE_SPACING,
    STYLE_PAGE_SIZE_DEFAULT,
    STYLE_PAGE_MARGIN_DEFAULT,
    CONST_IMAGE_FORMAT_DEFAULT,
    CONST_RASTER_DPI_DEFAULT,
)


logger = get_logger(__name__)


def _add_text_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--text", type=str, default=None, help="待排版文本（可用 \\n 表示换行）")
    group.add_argument("--text-file", dest="text_file", type=Path, default=None, help="待排版文本文件（UTF-8）")


def _add_font_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--font-file", dest="font_file", type=Path, default=None, help="TTF/OTF 字体文件，默认自动探测")
    parser.add_argument("--font-size", dest="font_size", type=float, default=STYLE_FONT_SIZE_DEFAULT, help="字号（pt）")
    parser.add_argument("--line-spacing", dest="line_spacing", type=float, default=STYLE_LINE_SPACING, help="行间额外间距（pt）")
    parser.add_argument(
        "--consider-font-height",
        dest="consider_font_height",
        action="store_true",
        help="首行基线下移字体高度，避免字形顶部超出区块",
    )
    parser.add_argument(
        "--estimate-widths",
        dest="estimate_widths",
        action="store_true",
        help="不读取字体度量，按宽字符=字号、窄字符=0.6 字号估算宽度",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="中英混排文字区块排版工具（自动换行 + PDF 输出）")
    sub = parser.add_subparsers(dest="command", required=True)

    p_layout = sub.add_parser("layout", help="打印分行结果与基线坐标")
    _add_text_options(p_layout)
    _add_font_options(p_layout)
    p_layout.add_argument("--width", type=float, required=True, help="文字区块宽度（pt）")
    p_layout.add_argument("--x", type=float, default=0.0, help="首行基线起点 x")
    p_layout.add_argument("--y", type=float, default=0.0, help="首行基线起点 y")

    p_render = sub.add_parser("render", help="新建单页 PDF 并写入文字区块")
    _add_text_options(p_render)
    _add_font_options(p_render)
    p_render.add_argument("--output", type=Path, default=None, help="输出 PDF 路径（可省略，自动生成）")
    p_render.add_argument("--margin", type=float, default=STYLE_PAGE_MARGIN_DEFAULT, help="左右及顶部边距（pt）")
    p_render.add_argument("--page-width", dest="page_width", type=float, default=STYLE_PAGE_SIZE_DEFAULT[0])
    p_render.add_argument("--page-height", dest="page_height", type=float, default=STYLE_PAGE_SIZE_DEFAULT[1])

    p_fill = sub.add_parser("fill", help="按文字区块 JSON 在已有 PDF 上绘制文字")
    _add_font_options(p_fill)
    p_fill.add_argument("--input", type=Path, required=True, help="输入 PDF 路径")
    p_fill.add_argument("--areas-json", dest="areas_json", type=Path, required=True, help="文字区块 JSON")
    p_fill.add_argument("--output", type=Path, default=None, help="输出 PDF 路径（可省略，自动生成）")
    p_fill.add_argument(
        "--engine",
        type=str,
        choices=[ENGINE_PYMUPDF, ENGINE_REPORTLAB],
        default=ENGINE_PYMUPDF,
        help="绘制引擎：pymupdf/reportlab",
    )

    p_convert = sub.add_parser("convert", help="PDF 转图片")
    p_convert.add_argument("--input", type=Path, required=True, help="输入 PDF 路径")
    p_convert.add_argument("--output-dir", dest="output_dir", type=Path, default=PATH_OUTPUT_DIR, help="输出目录")
    p_convert.add_argument("--format", dest="image_format", choices=sorted(IMAGE_FORMATS), default=CONST_IMAGE_FORMAT_DEFAULT)
    p_convert.add_argument("--dpi", type=float, default=CONST_RASTER_DPI_DEFAULT, help="渲染分辨率")
    p_convert.add_argument("--pages", type=str, default=None, help="页选择：'all' 或 '1,3-5'（1 基）")

    return parser.parse_args(argv)


def _read_text(args: argparse.Namespace) -> str:
    if args.text_file is not None:
        return read_text_file(args.text_file)
    # 命令行里的 \n 按换行处理
    return str(args.text).replace("\\n", "\n")


def _build_processor(args: argparse.Namespace) -> TextBoxProcessor:
    return TextBoxProcessor(
        font_file=args.font_file,
        font_size=args.font_size,
        line_spacing=args.line_spacing,
        consider_font_height=args.consider_font_height,
        estimate_widths=args.estimate_widths,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        if args.command == "layout":
            processor = _build_processor(args)
            layout = processor.layout(_read_text(args), LayoutBox(args.x, args.y, args.width))
            for line in layout.lines:
                print(f"{line.x:8.2f} {line.y:8.2f}  {line.text}")
        elif args.command == "render":
            processor = _build_processor(args)
            out, layout = processor.render(
                _read_text(args),
                args.output,
                page_size=(args.page_width, args.page_height),
                margin=args.margin,
            )
            print(f"已生成：{out}（{len(layout.lines)} 行）")
        elif args.command == "fill":
            processor = _build_processor(args)
            areas = load_text_areas(args.areas_json)
            out, layouts = processor.fill(args.input, areas, args.output, engine=args.engine)
            print(f"绘制完成（{processor.last_engine_used}，{len(layouts)} 个区块），保存至：{out}")
        elif args.command == "convert":
            outputs = TextBoxProcessor.convert(
                args.input,
                args.output_dir,
                args.image_format,
                dpi=args.dpi,
                pages=args.pages,
            )
            print(f"转换完成，共 {len(outputs)} 张：")
            for p in outputs:
                print(f" - {p}")
    except InvalidGeometryError as exc:
        logger.error("区块设置错误：%s", exc)
        return 2
    except (LayoutError, FileNotFoundError, RuntimeError, ValueError) as exc:
        logger.error("处理失败：%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
