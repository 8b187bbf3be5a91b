"""字幕轨道：片段存储与按播放时间定位

每个 Subtitle 实例持有自己的片段列表和游标（上一次命中的片段位置），
连续播放时大多数查询只需一次状态判断；只有跳转或跨越空隙时才会扫描，
扫描距离取决于与上次位置的距离，而不是片段总数。

同一实例上的 refresh 和 get_caption 需要由调用方串行调用。
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from subtrack.loader import DEFAULT_ENCODING, SubtitleSource, read_source_lines
from subtrack.logger import logger
from subtrack.parser import CLIP_LINES, ClipState, SubtitleClip, parse_lines, split_lines
from subtrack.validator import ClipValidator


class Subtitle(ABC):
    """字幕轨道基类，与具体字幕格式无关"""

    def __init__(self):
        self._clips: tuple[SubtitleClip, ...] = ()
        self._cursor: int | None = None

    @property
    def clips(self) -> tuple[SubtitleClip, ...]:
        return self._clips

    @property
    def cursor(self) -> SubtitleClip | None:
        """上一次命中的片段"""
        if self._cursor is None:
            return None
        return self._clips[self._cursor]

    def clear(self) -> None:
        """清空片段和游标"""
        self._clips = ()
        self._cursor = None

    def load(self, clips: Sequence[SubtitleClip]) -> None:
        """整体替换片段列表并重置游标"""
        self._clips = tuple(clips)
        self._cursor = None

    @staticmethod
    def classify(clip: SubtitleClip, milliseconds: int) -> ClipState:
        """判断片段相对于播放时间的状态"""
        return clip.check_state(milliseconds)

    def check_in_range(self, milliseconds: int) -> bool:
        """播放时间是否落在 [首个片段开始, 最后片段结束) 之内"""
        if not self._clips:
            logger.debug("字幕中没有任何片段")
            return False

        if self._clips[0].start_time <= milliseconds < self._clips[-1].end_time:
            return True

        logger.debug(f"播放时间 {milliseconds}ms 超出字幕范围")
        return False

    def find_clip(self, milliseconds: int, start: int, end: int) -> int | None:
        """
        在 [start, end] 范围内顺序查找正在显示的片段

        Args:
            milliseconds: 播放时间
            start: 起始位置（会被限制在有效范围内）
            end: 结束位置（包含，会被限制在 [start, 末尾] 内）

        Returns:
            命中片段的位置；遇到尚未开始的片段（空隙）时返回 None
        """
        if not self._clips:
            return None

        last = len(self._clips) - 1
        start = min(max(start, 0), last)
        end = min(max(end, start), last)

        for i in range(start, end + 1):
            state = self.classify(self._clips[i], milliseconds)
            if state == ClipState.DELAYED:
                self._cursor = i
                continue
            if state == ClipState.TIMELY:
                self._cursor = i
                return i
            break

        return None

    def get_clip(self, milliseconds: int) -> SubtitleClip | None:
        """获取播放时间处正在显示的片段"""
        if not self.check_in_range(milliseconds):
            return None

        if self._cursor is None:
            self._cursor = max(len(self._clips) // 2 - 1, 0)

        current = self._cursor
        state = self.classify(self._clips[current], milliseconds)
        if state == ClipState.TIMELY:
            return self._clips[current]

        if state == ClipState.DELAYED:
            start, end = current + 1, len(self._clips) - 1
        else:
            start, end = 0, current - 1

        # 落在空隙时游标停在空隙之前最后一个已结束的片段
        found = self.find_clip(milliseconds, start, end)
        if found is None:
            return None
        return self._clips[found]

    def get_caption(self, milliseconds: int) -> str:
        """
        获取播放时间处的字幕内容

        Args:
            milliseconds: 播放时间（毫秒）

        Returns:
            字幕文本，超出范围或处于空隙时返回空字符串
        """
        clip = self.get_clip(milliseconds)
        return clip.content if clip is not None else ""

    @abstractmethod
    def refresh(self, source) -> bool:
        """
        根据数据源刷新字幕

        Returns:
            是否成功
        """


class SRTSubtitle(Subtitle):
    """SRT 格式字幕"""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        super().__init__()
        self.encoding = encoding

    def refresh(self, source: SubtitleSource | str | Sequence[str] | None) -> bool:
        """
        根据数据源刷新 SRT 字幕

        Args:
            source: SubtitleSource、字幕文本或已切分的文本行

        Returns:
            是否成功；失败时片段列表为空
        """
        self.clear()

        if isinstance(source, SubtitleSource):
            if not source.source:
                logger.error("刷新 SRT 字幕失败: 数据源不能为空")
                return False
            try:
                lines = read_source_lines(source, self.encoding)
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"刷新 SRT 字幕失败: {e}")
                return False
        elif isinstance(source, str):
            lines = split_lines(source)
        elif isinstance(source, Sequence) and not isinstance(source, (bytes, bytearray)):
            lines = source
        elif source is None:
            logger.error("刷新 SRT 字幕失败: 数据源不能为空")
            return False
        else:
            logger.error(f"刷新 SRT 字幕失败: 不支持的数据源类型 {type(source).__name__}")
            return False

        return self.refresh_lines(lines)

    def refresh_lines(self, lines: Sequence[str] | None) -> bool:
        """根据已切分的文本行刷新 SRT 字幕"""
        self.clear()

        if lines is None or len(lines) < CLIP_LINES:
            logger.error("刷新 SRT 字幕失败: 数据源内容为空或不完整")
            return False

        clips = parse_lines(lines)
        self.load(clips)
        logger.info(f"SRT 字幕加载完成，共 {len(clips)} 个片段")

        if clips:
            _, errors, warnings = ClipValidator(clips).validate()
            for issue in errors + warnings:
                logger.warning(issue.message)

        return True


# 字幕格式注册表，新增格式只需实现 Subtitle.refresh
SUBTITLE_FORMATS: dict[str, type[Subtitle]] = {"srt": SRTSubtitle}


def register_format(name: str, cls: type[Subtitle]) -> None:
    """注册字幕格式"""
    if not (isinstance(cls, type) and issubclass(cls, Subtitle)):
        raise ValueError(f"{cls!r} 不是 Subtitle 的子类")
    SUBTITLE_FORMATS[name.lower()] = cls


def create_subtitle(fmt: str = "srt", **kwargs) -> Subtitle:
    """按格式名创建字幕轨道"""
    try:
        cls = SUBTITLE_FORMATS[fmt.lower()]
    except KeyError as e:
        raise ValueError(f"不支持的字幕格式: {fmt}，可用: {', '.join(SUBTITLE_FORMATS)}") from e
    return cls(**kwargs)
