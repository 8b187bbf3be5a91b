"""测试播放配置"""

import pytest

from subtrack.config import ConfigLoader, PlayerConfig


def test_defaults():
    config = PlayerConfig()

    assert config.encoding == "utf-8-sig"
    assert config.log_level == "INFO"
    assert config.step_ms == 500
    assert config.format == "srt"


def test_invalid_values():
    with pytest.raises(ValueError, match="未知的编码"):
        PlayerConfig(encoding="no-such-codec")
    with pytest.raises(ValueError, match="无效的日志级别"):
        PlayerConfig(log_level="loud")
    with pytest.raises(ValueError, match="播放步长必须大于 0"):
        PlayerConfig(step_ms=0)


def test_log_level_normalized():
    assert PlayerConfig(log_level="debug").log_level == "DEBUG"


def test_load_from_yaml(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("encoding: gbk\nlog_level: warning\nstep_ms: '250'\n", encoding="utf-8")

    config = ConfigLoader.load_from_yaml(str(config_file))

    assert config.encoding == "gbk"
    assert config.log_level == "WARNING"
    assert config.step_ms == 250
    assert config.format == "srt"


def test_load_empty_yaml(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")

    assert ConfigLoader.load_from_yaml(str(config_file)) == PlayerConfig()


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader.load_from_yaml(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize(
    "content, message",
    [
        ("- a\n- b\n", "必须是一个字典"),
        ("colour: red\n", "未知字段"),
        ("step_ms: fast\n", "必须是整数"),
        ("encoding: [unclosed\n", "YAML 格式错误"),
        ("encoding: 123\n", "编码必须是字符串"),
    ],
)
def test_load_invalid_yaml(tmp_path, content, message):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        ConfigLoader.load_from_yaml(str(config_file))


def test_save_and_load(tmp_path):
    config_file = tmp_path / "saved.yaml"
    config = PlayerConfig(encoding="utf-8", log_level="DEBUG", step_ms=100)

    ConfigLoader.save_to_yaml(config, str(config_file))

    assert ConfigLoader.load_from_yaml(str(config_file)) == config


def test_from_env(monkeypatch):
    monkeypatch.setenv("SUBTRACK_ENCODING", "latin-1")
    monkeypatch.setenv("SUBTRACK_STEP_MS", "40")
    monkeypatch.delenv("SUBTRACK_LOG_LEVEL", raising=False)

    config = ConfigLoader.from_env()

    assert config.encoding == "latin-1"
    assert config.step_ms == 40
    assert config.log_level == "INFO"


def test_from_env_invalid_step(monkeypatch):
    monkeypatch.setenv("SUBTRACK_STEP_MS", "abc")

    with pytest.raises(ValueError, match="SUBTRACK_STEP_MS"):
        ConfigLoader.from_env()
