"""
文件路径：tests/test_engines_reportlab.py

用例目的：验证 ReportLab 路径写出的 PDF 中，文字按排版结果逐行出现；
并验证图层合并不改变原 PDF 页数。测试内自建输入 PDF，使用内置 Helvetica 字体。
"""

from __future__ import annotations

from pathlib import Path

import pdfplumber
import pytest
import reportlab
from reportlab.pdfbase import pdfmetrics

from pdftextbox.components import font_bbox_height, measure_width, register_ttf
from pdftextbox.processors.engines.pymupdf import fill_with_pymupdf
from pdftextbox.processors.engines.reportlab import (
    build_text_layer,
    draw_single_line,
    fill_with_reportlab,
    read_page_sizes,
    render_text_pdf,
)
from pdftextbox.processors.layout import LayoutConfig, TextArea, place_single_line


HELVETICA = LayoutConfig(font_name="Helvetica", font_size=12, line_spacing=2)
VERA_TTF = Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"


def _build_pdf(path: Path, pages: int = 2) -> None:
    from reportlab.pdfgen import canvas  # 延迟导入以加快测试收敛

    c = canvas.Canvas(str(path))
    c.setPageSize((595.28, 841.89))  # A4
    for i in range(pages):
        c.setFont("Helvetica", 12)
        c.drawString(72, 800, f"Page {i + 1}")
        c.showPage()
    c.save()


def _page_lines(pdf_path: Path, page_index: int = 0) -> list:
    with pdfplumber.open(str(pdf_path)) as pdf:
        text = pdf.pages[page_index].extract_text() or ""
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


class TestFontMetrics:
    def test_measure_width_helvetica(self):
        # h e l l o = 556+556+222+222+556 = 2112 -> 21.12 pt @ 10pt
        assert measure_width("hello", "Helvetica", 10) == pytest.approx(21.12)

    def test_bbox_height_helvetica(self):
        # FontBBox -166 -225 1000 931 -> (931 + 225) / 1000 * 10 = 11.56 pt
        assert font_bbox_height("Helvetica", 10) == pytest.approx(11.56)

    def test_bbox_height_cid_fallback(self):
        from reportlab.pdfbase.cidfonts import UnicodeCIDFont

        pdfmetrics.registerFont(UnicodeCIDFont("STSong-Light"))
        # FontBBox -25 -254 1000 880 -> 11.34 pt @ 10pt
        assert font_bbox_height("STSong-Light", 10) == pytest.approx(11.34)

    def test_bbox_height_ttf_uses_face_bbox(self):
        name = register_ttf(VERA_TTF)
        bbox = pdfmetrics.getFont(name).face.bbox
        assert font_bbox_height(name, 20) == pytest.approx((bbox[3] - bbox[1]) * 20 / 1000.0)


class TestRenderTextPdf:
    def test_lines_written_in_order(self, tmp_path: Path):
        out = tmp_path / "render.pdf"
        layout = render_text_pdf(
            "alpha beta gamma\ndelta",
            out,
            HELVETICA,
            page_size=(300.0, 400.0),
            margin=127.5,
        )
        # 区块宽 45pt，每行只放得下一个单词
        assert layout.box.width == pytest.approx(45.0)
        assert layout.texts == ["alpha", "beta", "gamma", "delta"]
        assert out.exists()
        assert _page_lines(out) == ["alpha", "beta", "gamma", "delta"]

    def test_consider_font_height_lowers_first_baseline(self, tmp_path: Path):
        config = LayoutConfig(font_name="Helvetica", font_size=10, consider_font_height=True)
        layout = render_text_pdf("text", tmp_path / "shift.pdf", config, page_size=(200.0, 200.0), margin=20)
        assert layout.box.y == 180
        assert layout.origin_y == pytest.approx(180 - 11.56)


class TestOverlayMerge:
    def test_fill_with_reportlab_keeps_pages(self, tmp_path: Path):
        base = tmp_path / "base.pdf"
        _build_pdf(base, pages=2)
        out = tmp_path / "filled.pdf"
        overlay = tmp_path / "overlay.pdf"
        areas = [
            TextArea(text="first second", x=72, y=700, width=60, page=1),
            TextArea(text="third", x=72, y=600, width=200, page=0),
        ]
        layouts = fill_with_reportlab(
            base,
            areas,
            out,
            HELVETICA,
            temp_overlay_pdf=overlay,
            clean_temp_on_exit=True,
            measure=measure_width,
        )
        assert [lay.texts for lay in layouts] == [["third"], ["first", "second"]]
        assert len(read_page_sizes(out)) == 2
        assert not overlay.exists()
        assert _page_lines(out, 0) == ["Page 1", "third"]
        assert _page_lines(out, 1) == ["Page 2", "first", "second"]

    def test_build_text_layer_ignores_out_of_range_pages(self, tmp_path: Path):
        overlay = tmp_path / "layer.pdf"
        layouts = build_text_layer(
            [(200.0, 200.0)],
            [TextArea(text="x", x=10, y=100, width=50, page=5)],
            overlay,
            HELVETICA,
        )
        assert layouts == []
        assert len(read_page_sizes(overlay)) == 1


class TestPyMuPDFFallback:
    def test_without_embeddable_font_falls_back_to_reportlab(self, tmp_path: Path):
        base = tmp_path / "base.pdf"
        _build_pdf(base, pages=1)
        engine, layouts = fill_with_pymupdf(
            base,
            [TextArea(text="hello", x=72, y=700, width=200)],
            tmp_path / "out.pdf",
            HELVETICA,
            font_file=None,
            temp_overlay_pdf=tmp_path / "overlay.pdf",
            clean_temp_on_exit=True,
        )
        assert engine == "reportlab"
        assert layouts[0].texts == ["hello"]
        assert (tmp_path / "out.pdf").exists()


def test_draw_single_line_does_not_wrap(tmp_path: Path):
    from reportlab.pdfgen import canvas

    out = tmp_path / "single.pdf"
    c = canvas.Canvas(str(out), pagesize=(100.0, 100.0))
    # 超出页面宽度也不换行
    draw_single_line(c, place_single_line("one long line of text", 10, 50), "Helvetica", 12)
    c.showPage()
    c.save()
    with pdfplumber.open(str(out)) as pdf:
        words = pdf.pages[0].extract_words()
    assert len({round(w["top"]) for w in words}) == 1
