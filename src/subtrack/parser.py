"""SRT 字幕文本解析器

按 3 行一块（序号 / 时间范围 / 内容）扫描文本行，遇到格式错误的块只跳过一行后重试，
不会因为个别脏数据导致整个文件解析失败。
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from subtrack.logger import logger

# 一个字幕块占用的行数
CLIP_LINES = 3

TIMERANGE_SEPARATOR = "-->"
TIME_SEPARATORS = (":", ",")

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
_TIME_SPLIT_RE = re.compile("|".join(re.escape(sep) for sep in TIME_SEPARATORS))


class ClipState(Enum):
    """字幕片段相对于播放时间的状态"""

    DELAYED = "delayed"  # 已经结束，应向后查找
    TIMELY = "timely"  # 正在显示
    PREMATURE = "premature"  # 尚未开始，应向前查找


@dataclass(frozen=True)
class SubtitleClip:
    """字幕片段"""

    index: int
    start_time: int  # 毫秒
    end_time: int  # 毫秒
    content: str

    def check_state(self, milliseconds: int) -> ClipState:
        """根据播放时间判断片段状态"""
        if milliseconds >= self.end_time:
            return ClipState.DELAYED
        if milliseconds < self.start_time:
            return ClipState.PREMATURE
        return ClipState.TIMELY


def split_lines(text: str) -> list[str]:
    """按 \\r\\n、\\r、\\n 切分文本，丢弃空片段"""
    if text.startswith("\ufeff"):
        text = text[1:]
    return [line for line in _NEWLINE_RE.split(text) if line]


def parse_time(time_text: str) -> int:
    """将 HH:MM:SS,mmm 格式转换为毫秒数

    毫秒部分可以省略，无法解析时按 0 处理。

    Args:
        time_text: 时间字符串，如 "00:01:23,456"

    Returns:
        int: 毫秒数

    Raises:
        ValueError: 时、分、秒不足或无法解析为整数
    """
    items = [item for item in _TIME_SPLIT_RE.split(time_text) if item]
    if len(items) < 3:
        raise ValueError(f"无效的时间格式: {time_text!r}")

    try:
        hours, minutes, seconds = (int(item) for item in items[:3])
    except ValueError as e:
        raise ValueError(f"无效的时间格式: {time_text!r}") from e

    milliseconds = 0
    if len(items) > 3:
        try:
            milliseconds = int(items[3])
        except ValueError:
            milliseconds = 0

    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + milliseconds


def parse_time_range(time_range: str) -> tuple[int, int]:
    """解析 "开始 --> 结束" 时间范围

    Returns:
        (start_time, end_time)，单位毫秒

    Raises:
        ValueError: 不是恰好两个时间，或任一时间无法解析
    """
    times = [item for item in time_range.split(TIMERANGE_SEPARATOR) if item]
    if len(times) != 2:
        raise ValueError(f"无效的时间范围: {time_range!r}")

    return parse_time(times[0]), parse_time(times[1])


def format_time(milliseconds: int) -> str:
    """将毫秒数转换为 HH:MM:SS,mmm 格式"""
    sign = "-" if milliseconds < 0 else ""
    seconds, ms = divmod(abs(milliseconds), 1000)
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d},{ms:03d}"


def parse_clip(index: str, time_range: str, content: str) -> SubtitleClip | None:
    """将一个字幕块的三行文本解析为字幕片段

    Args:
        index: 序号行
        time_range: 时间范围行
        content: 内容行（原样保留）

    Returns:
        SubtitleClip，解析失败时返回 None
    """
    if not index or not time_range:
        logger.warning("字幕块解析失败: 序号或时间范围为空")
        return None

    try:
        clip_index = int(index)
    except ValueError:
        logger.warning(f"字幕块解析失败: 序号 {index!r} 不是整数")
        return None

    try:
        start_time, end_time = parse_time_range(time_range)
    except ValueError as e:
        logger.warning(f"字幕块解析失败: {e}")
        return None

    if start_time >= end_time:
        logger.warning(f"字幕块解析失败: 开始时间 ({start_time}ms) >= 结束时间 ({end_time}ms)")
        return None

    return SubtitleClip(index=clip_index, start_time=start_time, end_time=end_time, content=content)


def parse_lines(lines: Sequence[str]) -> list[SubtitleClip]:
    """解析字幕文本行

    Args:
        lines: 已切分的文本行

    Returns:
        List[SubtitleClip]: 按输入顺序排列的字幕片段，可能为空
    """
    clips: list[SubtitleClip] = []
    pos = 0
    count = len(lines)

    while count - pos >= CLIP_LINES:
        # 跳过块之间的空行
        if not lines[pos] or not lines[pos].strip():
            pos += 1
            continue

        clip = parse_clip(lines[pos], lines[pos + 1], lines[pos + 2])
        if clip is None:
            # 只前进一行，尽快重新对齐到下一个有效块
            pos += 1
            continue

        clips.append(clip)
        pos += CLIP_LINES

    if pos < count:
        logger.debug(f"丢弃末尾不完整的 {count - pos} 行")

    return clips
