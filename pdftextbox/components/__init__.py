"""
文件路径：pdftextbox/components/__init__.py

说明：
- 通用组件包入口：日志、文件与路径、重试机制，并聚合导出各子模块；
- 子模块按职责拆分：`text.py`（断行与分行）、`coords.py`（区块几何与基线）、
  `fonts.py`（字体注册与度量）、`page.py`（页选择解析）、`errors.py`（排版异常）；
- 业务模块与测试统一使用 `from pdftextbox.components import ...` 导入。
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, Type

from ..variables import (
    PATH_LOGS_DIR,
    PATH_OUTPUT_DIR,
    PATH_TEMP_DIR,
    PATH_LOG_FILE,
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_LOG_FORMAT,
    CONST_LOG_DATEFMT,
    CONST_MAX_RETRY,
    ERR_PATH_NOT_WRITABLE,
    ERR_FILE_NOT_FOUND,
)

# 聚合导出：拆分后的子模块
from .coords import LayoutBox, MediaBox, baseline_offsets, to_top_left_y
from .errors import InvalidGeometryError, LayoutError, MeasurementError
from .fonts import (
    ensure_font_registered,
    font_bbox_height,
    measure_width,
    probe_available_cjk_fonts,
    register_ttf,
)
from .page import parse_page_selection
from .text import (
    BreakState,
    TextMeasure,
    estimate_text_width,
    find_next_break,
    is_narrow_char,
    pack_segment,
)


# =============================
# 日志工具
# =============================
_LOGGER_CONFIGURED: bool = False


def get_logger(name: str) -> logging.Logger:
    """获取 logger，首次调用时配置文件与控制台双输出。

    参数：
        name: 日志记录器名称（一般使用 __name__）。

    返回：
        logging.Logger 对象。
    """
    global _LOGGER_CONFIGURED
    if not _LOGGER_CONFIGURED:
        # 确保日志目录存在
        PATH_LOGS_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(PATH_LOG_FILE, encoding="utf-8")
        console_handler = logging.StreamHandler()
        logging.basicConfig(
            level=logging.INFO,
            format=CONST_LOG_FORMAT,
            datefmt=CONST_LOG_DATEFMT,
            handlers=[file_handler, console_handler],
        )
        _LOGGER_CONFIGURED = True
    return logging.getLogger(name)


# =============================
# 文件操作
# =============================
class FileHandler:
    """文件与路径相关的通用处理器。"""

    @staticmethod
    def ensure_project_dirs() -> None:
        """确保项目运行所需目录存在：logs/output/temp。"""
        for d in (PATH_LOGS_DIR, PATH_OUTPUT_DIR, PATH_TEMP_DIR):
            d.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def validate_readable_file(path: Path) -> None:
        """校验文件可读。

        异常：
            FileNotFoundError: 文件不存在或不可读。
        """
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"[{ERR_FILE_NOT_FOUND}] 文件不存在或不可读: {path}")

    @staticmethod
    def ensure_parent_writable(target: Path) -> None:
        """确保目标文件的父目录可写，不存在则创建。

        异常：
            PermissionError: 目录不可写。
        """
        parent = target.parent
        parent.mkdir(parents=True, exist_ok=True)
        # Windows 上 os.access 可能不可靠，尝试创建临时文件验证
        probe = parent / f".__writable_probe_{int(time.time()*1000)}"
        try:
            with open(probe, "w", encoding="utf-8") as f:  # noqa: P103
                f.write("probe")
        except OSError as exc:
            raise PermissionError(f"[{ERR_PATH_NOT_WRITABLE}] 目录不可写: {parent}") from exc
        else:
            probe.unlink(missing_ok=True)

    @staticmethod
    def ensure_dir_writable(directory: Path) -> None:
        """确保输出目录存在且可写。"""
        FileHandler.ensure_parent_writable(directory / ".probe")

    @staticmethod
    def timestamped_output_path(
        stem: Optional[str] = None,
        suffix: str = CONST_DEFAULT_OUTPUT_SUFFIX,
    ) -> Path:
        """生成带时间戳的输出路径，位于 output 目录。

        返回：
            输出路径，例如 output/notes_20240101_120000_text.pdf
        """
        FileHandler.ensure_project_dirs()
        ts = time.strftime("%Y%m%d_%H%M%S")
        use_stem = (stem or "").strip() or "output"
        return PATH_OUTPUT_DIR / f"{use_stem}_{ts}{suffix}"


# =============================
# 重试机制
# =============================
def retry_on_exception(
    retries: int = CONST_MAX_RETRY,
    exceptions: Iterable[Type[BaseException]] = (Exception,),
    delay_s: float = 0.2,
    backoff: float = 2.0,
) -> Callable[[Callable[..., object]], Callable[..., object]]:
    """装饰器：异常自动重试，含指数退避。

    参数：
        retries: 重试次数（不含首次）。
        exceptions: 触发重试的异常类型集合。
        delay_s: 初始等待秒数。
        backoff: 每次重试的等待倍数。
    """
    exc_types = tuple(exceptions)

    def decorator(func: Callable[..., object]) -> Callable[..., object]:
        def wrapper(*args, **kwargs):
            wait = delay_s
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exc_types as exc:
                    if attempt >= retries:
                        raise
                    logger = get_logger(func.__module__)
                    logger.warning("操作失败，准备重试（第 %s 次）：%s", attempt + 1, exc)
                    time.sleep(wait)
                    wait *= backoff
                    attempt += 1

        return wrapper

    return decorator


# =============================
# 导出声明
# =============================
__all__ = [
    # 日志工具
    "get_logger",
    # 文件操作
    "FileHandler",
    # 重试
    "retry_on_exception",
    # 异常
    "LayoutError",
    "InvalidGeometryError",
    "MeasurementError",
    # 区块几何
    "LayoutBox",
    "MediaBox",
    "baseline_offsets",
    "to_top_left_y",
    # 字体
    "ensure_font_registered",
    "register_ttf",
    "measure_width",
    "font_bbox_height",
    "probe_available_cjk_fonts",
    # 页选择解析
    "parse_page_selection",
    # 断行与分行
    "BreakState",
    "TextMeasure",
    "is_narrow_char",
    "find_next_break",
    "pack_segment",
    "estimate_text_width",
]
