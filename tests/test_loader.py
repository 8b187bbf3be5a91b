"""测试字幕数据源读取"""

import pytest

from subtrack.loader import SourceType, SubtitleSource, read_source_lines


def test_read_text_source():
    """文本数据源直接切分"""
    source = SubtitleSource("1\r\n00:00:01,000 --> 00:00:02,000\r\nA\r\n", SourceType.TEXT)
    assert read_source_lines(source) == ["1", "00:00:01,000 --> 00:00:02,000", "A"]


def test_read_file_source(tmp_path):
    """文件数据源，默认编码会去掉 BOM"""
    srt_file = tmp_path / "bom.srt"
    srt_file.write_text("1\n00:00:01,000 --> 00:00:02,000\nA\n\n", encoding="utf-8-sig")

    assert read_source_lines(SubtitleSource(str(srt_file))) == ["1", "00:00:01,000 --> 00:00:02,000", "A"]


def test_default_type_is_file():
    assert SubtitleSource("x.srt").type == SourceType.FILE


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_source_lines(SubtitleSource(str(tmp_path / "missing.srt")))
