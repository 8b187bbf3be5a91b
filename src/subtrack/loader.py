"""字幕数据源"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from subtrack.parser import split_lines

DEFAULT_ENCODING = "utf-8-sig"


class SourceType(str, Enum):
    """字幕数据源类型"""

    FILE = "file"  # source 是文件路径
    TEXT = "text"  # source 是字幕文本内容


@dataclass
class SubtitleSource:
    """字幕数据源"""

    source: str
    type: SourceType = SourceType.FILE


def read_source_lines(data: SubtitleSource, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """
    读取数据源并切分为文本行

    Args:
        data: 字幕数据源
        encoding: 读取文件时使用的编码

    Returns:
        非空文本行列表

    Raises:
        FileNotFoundError: 文件不存在
        OSError: 文件读取失败
        UnicodeDecodeError: 编码不匹配
    """
    if data.type == SourceType.FILE:
        path = Path(data.source)
        if not path.exists():
            raise FileNotFoundError(f"字幕文件不存在: {data.source}")
        text = path.read_text(encoding=encoding)
    else:
        text = data.source

    return split_lines(text)
