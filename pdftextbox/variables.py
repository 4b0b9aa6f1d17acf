"""
文件路径：pdftextbox/variables.py

模块职责：
- 统一管理全局跨模块变量，确保模块化、无冲突、可追溯，可复用。
- 变量命名规范：{分类前缀}_{描述性名称}（全大写+下划线）。
  - PATH_：路径相关
  - STYLE_：样式相关（字体、字号、行距）
  - CONST_：通用常量
  - ERR_：错误码

使用说明：
- 业务模块严禁定义新的全局变量，必须从本模块导入所需常量。
- 目录路径均使用 pathlib.Path 对象表示，使用时如需字符串请显式 str() 转换。
"""

from pathlib import Path
from typing import Dict, Optional, Tuple


# =============================
# 路径（PATH_）
# =============================
# 项目根目录：定位到当前文件（variables.py）的上两级目录
PATH_ROOT: Path = Path(__file__).resolve().parents[1]

# 各功能目录
PATH_CONFIG_DIR: Path = PATH_ROOT / "config"
PATH_TEMP_DIR: Path = PATH_ROOT / "temp"
PATH_OUTPUT_DIR: Path = PATH_ROOT / "output"
PATH_LOGS_DIR: Path = PATH_ROOT / "logs"

# 关键文件路径
PATH_TEMP_OVERLAY_PDF: Path = PATH_TEMP_DIR / "overlay_layer.pdf"  # 文字图层临时文件
PATH_LOG_FILE: Path = PATH_LOGS_DIR / "app.log"  # 应用运行日志

# 字体文件（优先使用可嵌入的 TTF/OTF，避免阅读器方块）
PATH_FONT_FILE: Optional[Path] = PATH_CONFIG_DIR / "fonts" / "simhei.ttf"


# =============================
# 样式（STYLE_）
# =============================
STYLE_FONT_NAME: str = "Helvetica"  # 默认英文字体
STYLE_FONT_NAME_CJK_FALLBACK: str = "STSong-Light"  # ReportLab 内置可用的 CJK 备用字体名
STYLE_FONT_SIZE_DEFAULT: float = 18.0  # 默认字体大小（pt）
STYLE_LINE_SPACING: float = 0.0  # 行间额外间距（pt），行距 leading = 行间距 + 字号
STYLE_CONSIDER_FONT_HEIGHT: bool = False  # 首行基线是否按字体上升高度下移
STYLE_TEXT_COLOR_RGB: Tuple[int, int, int] = (0, 0, 0)  # RGB 颜色，黑色
STYLE_PAGE_SIZE_DEFAULT: Tuple[float, float] = (612.0, 792.0)  # Letter（pt）
STYLE_PAGE_MARGIN_DEFAULT: float = 72.0  # 新建页面时文字区块的水平边距（pt）


# =============================
# 常量（CONST_）
# =============================
CONST_ENCODING: str = "utf-8"  # 文件读写默认编码
# 窄字符判定使用的编码：编码后恰为 1 个字节视为窄字符（拉丁字母/数字/标点）
CONST_NARROW_CHAR_ENCODING: str = "utf-8"
CONST_BREAK_CHAR: str = " "  # 总是可断行的字符
CONST_MAX_RETRY: int = 2  # 通用重试次数，用于 IO 等可重试操作
CONST_CLEAN_TEMP_ON_EXIT: bool = True  # 完成后是否清理临时文件
CONST_DEFAULT_OUTPUT_SUFFIX: str = "_text.pdf"  # 默认输出文件名后缀

# 光栅转换（PDF -> 图片）
CONST_RASTER_DPI_DEFAULT: float = 300.0
CONST_PDF_POINTS_PER_INCH: float = 72.0
# 支持的图片格式：格式名 -> (Pillow 格式名, 扩展名)
CONST_IMAGE_FORMATS: Tuple[Tuple[str, str, str], ...] = (
    ("bmp", "BMP", ".bmp"),
    ("jpg", "JPEG", ".jpg"),
    ("png", "PNG", ".png"),
    ("gif", "GIF", ".gif"),
)
CONST_IMAGE_FORMAT_DEFAULT: str = "png"

# 页选择关键字
CONST_PAGE_SELECTION_ALL: str = "all"

# 常见中文字体候选路径（用于自动探测，按顺序优先）
CONST_CANDIDATE_CJK_FONT_PATHS: Tuple[str, ...] = (
    # Windows 常见字体
    "C:/Windows/Fonts/simhei.ttf",  # 黑体
    "C:/Windows/Fonts/msyh.ttf",  # 微软雅黑
    # macOS 常见字体
    "/System/Library/Fonts/STSong.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/Library/Fonts/SimSun.ttf",
    # Linux 常见字体
    "/usr/share/fonts/truetype/droid/DroidSansFallbackFull.ttf",
    "/usr/share/fonts/truetype/arphic/uming.ttf",
)

# 内置字体的 FontBBox（1000 单位，取自 Adobe AFM 与 ReportLab CID 字体数据）：(xMin, yMin, xMax, yMax)
CONST_BUILTIN_FONT_BBOX: Dict[str, Tuple[int, int, int, int]] = {
    "Courier": (-23, -250, 715, 805),
    "Courier-Bold": (-113, -250, 749, 801),
    "Courier-Oblique": (-27, -250, 849, 805),
    "Courier-BoldOblique": (-57, -250, 869, 801),
    "Helvetica": (-166, -225, 1000, 931),
    "Helvetica-Bold": (-170, -228, 1003, 962),
    "Helvetica-Oblique": (-170, -225, 1116, 931),
    "Helvetica-BoldOblique": (-174, -228, 1114, 962),
    "Times-Roman": (-168, -218, 1000, 898),
    "Times-Bold": (-168, -218, 1000, 935),
    "Times-Italic": (-169, -217, 1010, 883),
    "Times-BoldItalic": (-200, -218, 996, 921),
    "Symbol": (-180, -293, 1090, 1010),
    "ZapfDingbats": (-1, -143, 981, 820),
    "STSong-Light": (-25, -254, 1000, 880),
}

# 日志格式（供 logging.basicConfig 使用）
CONST_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONST_LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"


# =============================
# 错误码（ERR_）
# =============================
# 1xxx：文件/路径相关
ERR_FILE_NOT_FOUND: int = 1001  # 输入文件不存在
ERR_INVALID_PDF: int = 1002  # 非法或损坏的 PDF 文件
ERR_PATH_NOT_WRITABLE: int = 1003  # 目标路径不可写

# 2xxx：排版相关
ERR_INVALID_GEOMETRY: int = 2001  # 文字区块宽度非法（<= 0）
ERR_MEASUREMENT_FAILED: int = 2002  # 宽度度量失败（如字体缺字、未注册）
ERR_PAGE_INDEX_OUT_OF_RANGE: int = 2003  # 页面索引越界

# 3xxx：写入/渲染相关
ERR_PDF_MERGE_FAILED: int = 3001  # PDF 合并失败
ERR_PDF_WRITE_FAILED: int = 3002  # PDF 写入失败
ERR_RENDER_FAILED: int = 3003  # 页面光栅化失败

# 4xxx：配置/数据相关
ERR_CONFIG_LOAD_FAILED: int = 4001  # 配置加载失败
ERR_DATA_INVALID: int = 4002  # 输入数据非法


# =============================
# 导出声明
# =============================
__all__ = [
    # PATH_
    "PATH_ROOT",
    "PATH_CONFIG_DIR",
    "PATH_TEMP_DIR",
    "PATH_OUTPUT_DIR",
    "PATH_LOGS_DIR",
    "PATH_TEMP_OVERLAY_PDF",
    "PATH_LOG_FILE",
    "PATH_FONT_FILE",
    # STYLE_
    "STYLE_FONT_NAME",
    "STYLE_FONT_NAME_CJK_FALLBACK",
    "STYLE_FONT_SIZE_DEFAULT",
    "STYLE_LINE_SPACING",
    "STYLE_CONSIDER_FONT_HEIGHT",
    "STYLE_TEXT_COLOR_RGB",
    "STYLE_PAGE_SIZE_DEFAULT",
    "STYLE_PAGE_MARGIN_DEFAULT",
    # CONST_
    "CONST_ENCODING",
    "CONST_NARROW_CHAR_ENCODING",
    "CONST_BREAK_CHAR",
    "CONST_MAX_RETRY",
    "CONST_CLEAN_TEMP_ON_EXIT",
    "CONST_DEFAULT_OUTPUT_SUFFIX",
    "CONST_RASTER_DPI_DEFAULT",
    "CONST_PDF_POINTS_PER_INCH",
    "CONST_IMAGE_FORMATS",
    "CONST_IMAGE_FORMAT_DEFAULT",
    "CONST_PAGE_SELECTION_ALL",
    "CONST_CANDIDATE_CJK_FONT_PATHS",
    "CONST_BUILTIN_FONT_BBOX",
    "CONST_LOG_FORMAT",
    "CONST_LOG_DATEFMT",
    # ERR_
    "ERR_FILE_NOT_FOUND",
    "ERR_INVALID_PDF",
    "ERR_PATH_NOT_WRITABLE",
    "ERR_INVALID_GEOMETRY",
    "ERR_MEASUREMENT_FAILED",
    "ERR_PAGE_INDEX_OUT_OF_RANGE",
    "ERR_PDF_MERGE_FAILED",
    "ERR_PDF_WRITE_FAILED",
    "ERR_RENDER_FAILED",
    "ERR_CONFIG_LOAD_FAILED",
    "ERR_DATA_INVALID",
]
