from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from pdftextbox.processors.engines.raster import convert_pdf, output_image_path, to_png


def _build_pdf(path: Path, pages: int) -> None:
    from reportlab.pdfgen import canvas

    c = canvas.Canvas(str(path), pagesize=(144.0, 72.0))
    for i in range(pages):
        c.setFont("Helvetica", 12)
        c.drawString(10, 30, f"P{i + 1}")
        c.showPage()
    c.save()


class TestOutputNaming:
    def test_single_page_has_no_number(self):
        assert output_image_path(Path("foobar.pdf"), Path("out"), ".jpg", None) == Path("out/foobar.jpg")

    def test_multi_page_numbered_from_one(self):
        assert output_image_path(Path("foobar.pdf"), Path("out"), ".jpg", 2) == Path("out/foobar-2.jpg")


class TestConvertPdf:
    def test_single_page(self, tmp_path: Path):
        src = tmp_path / "single.pdf"
        _build_pdf(src, pages=1)
        outputs = convert_pdf(src, tmp_path / "img", "png", dpi=72)
        assert [p.name for p in outputs] == ["single.png"]
        with Image.open(outputs[0]) as img:
            assert img.size == (144, 72)

    def test_multi_page_with_dpi_scaling(self, tmp_path: Path):
        src = tmp_path / "multi.pdf"
        _build_pdf(src, pages=3)
        outputs = convert_pdf(src, tmp_path, "jpg", dpi=144)
        assert [p.name for p in outputs] == ["multi-1.jpg", "multi-2.jpg", "multi-3.jpg"]
        with Image.open(outputs[1]) as img:
            assert img.format == "JPEG"
            assert img.size == (288, 144)

    def test_page_selection_keeps_source_page_numbers(self, tmp_path: Path):
        src = tmp_path / "multi.pdf"
        _build_pdf(src, pages=3)
        outputs = convert_pdf(src, tmp_path, "bmp", dpi=36, pages="2-3")
        assert [p.name for p in outputs] == ["multi-2.bmp", "multi-3.bmp"]

    @pytest.mark.parametrize("fmt, expected", [("gif", "GIF"), ("JPEG", "JPEG")])
    def test_format_aliases(self, tmp_path: Path, fmt: str, expected: str):
        src = tmp_path / "one.pdf"
        _build_pdf(src, pages=1)
        outputs = convert_pdf(src, tmp_path, fmt, dpi=36)
        with Image.open(outputs[0]) as img:
            assert img.format == expected

    def test_unknown_format_rejected(self, tmp_path: Path):
        src = tmp_path / "one.pdf"
        _build_pdf(src, pages=1)
        with pytest.raises(ValueError):
            convert_pdf(src, tmp_path, "tiff")

    def test_missing_source(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            to_png(tmp_path / "missing.pdf", tmp_path)
