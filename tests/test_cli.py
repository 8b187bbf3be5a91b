"""测试命令行界面"""

import pytest
from typer.testing import CliRunner

from subtrack.cli import app, parse_time_arg
from subtrack.logger import set_level

runner = CliRunner()

SRT_CONTENT = """1
00:00:01,000 --> 00:00:03,000
Hello

2
00:00:04,000 --> 00:00:06,000
World
"""


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # CLI 会把日志输出到 CliRunner 的 stderr，测试结束后换回来
    set_level("INFO")


@pytest.fixture
def srt_file(tmp_path):
    path = tmp_path / "test.srt"
    path.write_text(SRT_CONTENT, encoding="utf-8")
    return path


def test_parse_time_arg():
    assert parse_time_arg("2500") == 2500
    assert parse_time_arg("00:00:02,500") == 2500


def test_clips(srt_file):
    result = runner.invoke(app, ["clips", str(srt_file)])

    assert result.exit_code == 0
    assert "Hello" in result.output
    assert "World" in result.output
    assert "共 2 个片段" in result.output


def test_clips_shows_warnings(tmp_path):
    path = tmp_path / "gap.srt"
    path.write_text("1\n00:00:01,000 --> 00:00:02,000\nA\n\n5\n00:00:02,000 --> 00:00:03,000\nB\n", encoding="utf-8")

    result = runner.invoke(app, ["clips", str(path)])

    assert result.exit_code == 0
    assert "1 个警告" in result.output


def test_caption(srt_file):
    result = runner.invoke(app, ["caption", str(srt_file), "2000", "00:00:03,500", "5000", "7000"])

    assert result.exit_code == 0
    lines = [line for line in result.output.splitlines() if line.startswith("00:")]
    assert len(lines) == 4
    assert lines[0].endswith("Hello")
    assert lines[1].endswith("(无字幕)")
    assert lines[2].endswith("World")
    assert lines[3].endswith("(无字幕)")


def test_caption_invalid_time(srt_file):
    result = runner.invoke(app, ["caption", str(srt_file), "soon"])

    assert result.exit_code != 0


def test_play(srt_file):
    result = runner.invoke(app, ["play", str(srt_file), "--step", "500"])

    assert result.exit_code == 0
    assert "字幕变化 4 次" in result.output


def test_play_uses_config_step(srt_file, tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("step_ms: 1000\nlog_level: error\n", encoding="utf-8")

    result = runner.invoke(app, ["play", str(srt_file), "--config", str(config_file), "--start", "00:00:04,000"])

    assert result.exit_code == 0
    assert "Hello" not in result.output
    assert "World" in result.output
    assert "字幕变化 2 次" in result.output


def test_play_invalid_step(srt_file):
    result = runner.invoke(app, ["play", str(srt_file), "--step", "0"])

    assert result.exit_code == 1


def test_missing_file(tmp_path):
    result = runner.invoke(app, ["clips", str(tmp_path / "missing.srt")])

    assert result.exit_code == 1
    assert "无法加载字幕文件" in result.output


def test_no_valid_clips(tmp_path):
    path = tmp_path / "bad.srt"
    path.write_text("x\ny\nz\n", encoding="utf-8")

    result = runner.invoke(app, ["clips", str(path)])

    assert result.exit_code == 1
    assert "没有有效的字幕片段" in result.output


def test_invalid_config(srt_file, tmp_path):
    result = runner.invoke(app, ["clips", str(srt_file), "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "配置错误" in result.output


def test_encoding_option(tmp_path):
    path = tmp_path / "gbk.srt"
    path.write_text("1\n00:00:01,000 --> 00:00:02,000\n你好\n", encoding="gbk")

    result = runner.invoke(app, ["caption", str(path), "1500", "--encoding", "gbk"])

    assert result.exit_code == 0
    assert "你好" in result.output


def test_config_with_non_string_encoding(srt_file, tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("encoding: 123\n", encoding="utf-8")

    result = runner.invoke(app, ["clips", str(srt_file), "--config", str(config_file)])

    assert result.exit_code == 1
    assert "配置错误" in result.output
