"""
文件路径：pdftextbox/components/errors.py

说明：排版相关异常。异常信息统一使用 `[错误码] 描述` 格式（见 ErrorHandler.format_error）。
"""

from __future__ import annotations

from typing import List

from ..variables import ERR_INVALID_GEOMETRY, ERR_MEASUREMENT_FAILED


class LayoutError(RuntimeError):
    """排版失败的基类，携带数值错误码。"""

    err_code: int = 0

    def __init__(self, message: str, err_code: int | None = None) -> None:
        if err_code is not None:
            self.err_code = err_code
        super().__init__(f"[{self.err_code}] {message}")


class InvalidGeometryError(LayoutError, ValueError):
    """文字区块几何非法：宽度 <= 0，或缺少首行下移所需的字体上升度量。"""

    err_code = ERR_INVALID_GEOMETRY


class MeasurementError(LayoutError):
    """宽度度量函数失败（缺字、字体未注册等），不做回退估算，直接向上抛出。"""

    err_code = ERR_MEASUREMENT_FAILED


__all__: List[str] = ["LayoutError", "InvalidGeometryError", "MeasurementError"]
