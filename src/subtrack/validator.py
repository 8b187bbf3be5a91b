"""字幕片段验证器

解析器信任输入顺序，不会修正乱序或重叠的片段；这里只负责把问题报告出来。
"""

from collections.abc import Sequence
from dataclasses import dataclass

from subtrack.parser import SubtitleClip, format_time


@dataclass
class ValidationIssue:
    """验证问题"""

    clip_index: int
    issue_type: str
    message: str
    is_warning: bool = False


class ClipValidator:
    """字幕片段验证器"""

    def __init__(self, clips: Sequence[SubtitleClip]):
        """
        初始化验证器

        Args:
            clips: 字幕片段列表（按存储顺序）
        """
        self.clips = list(clips)
        self.errors: list[ValidationIssue] = []
        self.warnings: list[ValidationIssue] = []

    def validate(self) -> tuple[bool, list[ValidationIssue], list[ValidationIssue]]:
        """
        验证字幕片段列表

        Returns:
            (is_valid, errors, warnings)
        """
        self.errors = []
        self.warnings = []

        self._check_empty()
        self._check_time_order()
        self._check_time_range()

        # 以下只产生警告
        self._check_sorted()
        self._check_overlap()
        self._check_index_sequence()
        self._check_content()

        is_valid = len(self.errors) == 0
        return is_valid, self.errors, self.warnings

    def _warn(self, i: int, issue_type: str, message: str):
        self.warnings.append(ValidationIssue(clip_index=i, issue_type=issue_type, message=message, is_warning=True))

    def _check_empty(self):
        """检查片段列表是否为空"""
        if not self.clips:
            self.errors.append(ValidationIssue(clip_index=-1, issue_type="empty", message="字幕片段列表为空"))

    def _check_time_order(self):
        """检查每个片段的开始时间早于结束时间"""
        for i, clip in enumerate(self.clips):
            if clip.start_time >= clip.end_time:
                self.errors.append(
                    ValidationIssue(
                        clip_index=i,
                        issue_type="time_order",
                        message=(
                            f"片段 {i + 1} 开始时间 ({format_time(clip.start_time)}) >= "
                            f"结束时间 ({format_time(clip.end_time)})"
                        ),
                    )
                )

    def _check_time_range(self):
        """检查时间不为负数"""
        for i, clip in enumerate(self.clips):
            if clip.start_time < 0:
                self.errors.append(
                    ValidationIssue(
                        clip_index=i,
                        issue_type="time_range",
                        message=f"片段 {i + 1} 开始时间 ({clip.start_time}ms) 不能为负数",
                    )
                )

    def _check_sorted(self):
        """检查片段按开始时间升序排列"""
        for i in range(len(self.clips) - 1):
            current = self.clips[i]
            next_clip = self.clips[i + 1]
            if next_clip.start_time < current.start_time:
                self._warn(
                    i + 1,
                    "unsorted",
                    f"片段 {i + 2} 开始于 {format_time(next_clip.start_time)}，"
                    f"早于前一个片段 {format_time(current.start_time)}，按时间查找可能出错",
                )

    def _check_overlap(self):
        """检查相邻片段时间重叠"""
        for i in range(len(self.clips) - 1):
            current = self.clips[i]
            next_clip = self.clips[i + 1]
            if current.start_time <= next_clip.start_time < current.end_time:
                self._warn(
                    i,
                    "time_overlap",
                    f"片段 {i + 1} 和片段 {i + 2} 时间重叠：片段 {i + 1} 结束于 "
                    f"{format_time(current.end_time)}，但片段 {i + 2} 开始于 {format_time(next_clip.start_time)}",
                )

    def _check_index_sequence(self):
        """检查序号是否逐一递增"""
        for i in range(len(self.clips) - 1):
            expected = self.clips[i].index + 1
            actual = self.clips[i + 1].index
            if actual != expected:
                self._warn(i + 1, "index_sequence", f"片段 {i + 2} 序号为 {actual}，预期为 {expected}")

    def _check_content(self):
        """检查空内容"""
        for i, clip in enumerate(self.clips):
            if not clip.content or not clip.content.strip():
                self._warn(i, "empty_content", f"片段 {i + 1} 内容为空")
