"""
文件路径：pdftextbox/data_handler.py

模块职责：
- 读取待排版文本（文件或命令行参数），统一换行符之外不做任何修改；
- 加载文字区块配置 JSON，转换为 TextArea 列表，供绘制引擎使用。

文字区块 JSON 结构（数组，或包含 areas 数组的对象）：
    [
      {"page": 1, "x": 72, "y": 700, "width": 200, "text": "第一段\\nSecond line"},
      {"page": 1, "x": 72, "y": 500, "right": 540, "text": "...", "font_size": 12,
       "line_spacing": 2, "consider_font_height": true}
    ]
说明：page 为 1 基页码；width 与 right（右边界 x 坐标）二选一。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .components import FileHandler, LayoutBox, get_logger
from .processors.layout import TextArea
from .variables import CONST_ENCODING, ERR_CONFIG_LOAD_FAILED, ERR_DATA_INVALID


logger = get_logger(__name__)


def _json_loads_strip_bom(content: str):
    """解析 JSON 字符串，自动去除 UTF-8 BOM。"""
    if content.startswith("\ufeff"):
        content = content.lstrip("\ufeff")
    return json.loads(content)


def read_text_file(path: Path) -> str:
    """读取文本文件（UTF-8，自动去除 BOM）。"""
    FileHandler.validate_readable_file(path)
    content = path.read_text(encoding=CONST_ENCODING)
    return content.lstrip("\ufeff")


def _optional_float(item: Dict[str, Any], key: str) -> Optional[float]:
    value = item.get(key)
    return None if value is None else float(value)


def parse_text_area(item: Dict[str, Any]) -> TextArea:
    """将单个 JSON 对象转换为 TextArea。

    异常：
        ValueError: 缺少必填字段或字段类型错误。
    """
    if not isinstance(item, dict):
        raise ValueError(f"[{ERR_DATA_INVALID}] 文字区块必须是对象：{item!r}")
    try:
        x = float(item["x"])
        y = float(item["y"])
        if item.get("width") is not None:
            box = LayoutBox(x=x, y=y, width=float(item["width"]))
        elif item.get("right") is not None:
            box = LayoutBox.between(x, y, float(item["right"]))
        else:
            raise KeyError("width/right")
        page = int(item.get("page", 1)) - 1
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"[{ERR_DATA_INVALID}] 文字区块字段缺失或非法：{exc}") from exc

    consider = item.get("consider_font_height")
    return TextArea(
        text=str(item.get("text", "")),
        x=box.x,
        y=box.y,
        width=box.width,
        page=page,
        font_size=_optional_float(item, "font_size"),
        line_spacing=_optional_float(item, "line_spacing"),
        consider_font_height=None if consider is None else bool(consider),
    )


def load_text_areas(path: Path) -> List[TextArea]:
    """从 JSON 文件加载文字区块列表。

    支持两种结构：
    - 数组：[{...}, {...}]
    - 对象：{"areas": [ ... ]}
    """
    FileHandler.validate_readable_file(path)
    try:
        data = _json_loads_strip_bom(path.read_text(encoding=CONST_ENCODING))
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 文字区块配置加载失败: {exc}") from exc

    if isinstance(data, dict) and isinstance(data.get("areas"), list):
        items = data["areas"]
    elif isinstance(data, list):
        items = data
    else:
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 文字区块 JSON 结构需为数组或包含 areas 数组的对象")

    areas = [parse_text_area(item) for item in items]
    logger.info("已加载文字区块：%s 个（%s）", len(areas), path)
    return areas


__all__ = ["read_text_file", "parse_text_area", "load_text_areas"]
