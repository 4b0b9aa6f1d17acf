"""
文件路径：pdftextbox/processors/engines/__init__.py

说明：绘制与转换引擎：`reportlab.py`（新建 PDF / 图层合并）、`pymupdf.py`（直接绘制）、`raster.py`（PDF 转图片）。
"""

from typing import List

ENGINE_PYMUPDF: str = "pymupdf"
ENGINE_REPORTLAB: str = "reportlab"

__all__: List[str] = ["ENGINE_PYMUPDF", "ENGINE_REPORTLAB"]
