"""播放配置加载器"""

import codecs
import os
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

from subtrack.loader import DEFAULT_ENCODING
from subtrack.logger import LOG_LEVELS


@dataclass
class PlayerConfig:
    """播放配置"""

    encoding: str = DEFAULT_ENCODING  # 读取字幕文件的编码
    log_level: str = "INFO"
    step_ms: int = 500  # play 命令的播放步长（毫秒）
    format: str = "srt"

    def __post_init__(self):
        if not isinstance(self.encoding, str):
            raise ValueError(f"编码必须是字符串，当前值: {self.encoding!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"未知的编码: {self.encoding}") from e

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"无效的日志级别: {self.log_level}，可用: {', '.join(LOG_LEVELS)}")

        if not isinstance(self.step_ms, int) or isinstance(self.step_ms, bool):
            raise ValueError(f"播放步长必须是整数，当前值: {self.step_ms!r}")
        if self.step_ms <= 0:
            raise ValueError(f"播放步长必须大于 0，当前值: {self.step_ms}")


class ConfigLoader:
    """播放配置加载器"""

    @staticmethod
    def from_env() -> PlayerConfig:
        """从 SUBTRACK_* 环境变量读取配置，未设置的字段使用默认值"""
        try:
            step_ms = int(os.getenv("SUBTRACK_STEP_MS", "500"))
        except ValueError as e:
            raise ValueError(f"SUBTRACK_STEP_MS 必须是整数: {e}") from e

        return PlayerConfig(
            encoding=os.getenv("SUBTRACK_ENCODING", DEFAULT_ENCODING),
            log_level=os.getenv("SUBTRACK_LOG_LEVEL", "INFO"),
            step_ms=step_ms,
            format=os.getenv("SUBTRACK_FORMAT", "srt"),
        )

    @staticmethod
    def load_from_yaml(yaml_path: str) -> PlayerConfig:
        """
        从 YAML 文件加载播放配置

        Args:
            yaml_path: YAML 文件路径

        Returns:
            PlayerConfig

        Raises:
            FileNotFoundError: 文件不存在
            ValueError: 配置格式错误或验证失败
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"配置文件不存在: {yaml_path}")

        try:
            with open(yaml_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"YAML 格式错误: {e}") from e

        # 空文件视为全部使用默认值
        if config is None:
            return PlayerConfig()

        if not isinstance(config, dict):
            raise ValueError("配置文件必须是一个字典")

        unknown = set(config) - set(PlayerConfig.__dataclass_fields__)
        if unknown:
            raise ValueError(f"配置文件包含未知字段: {', '.join(sorted(unknown))}")

        if "step_ms" in config:
            try:
                config["step_ms"] = int(config["step_ms"])
            except (ValueError, TypeError) as e:
                raise ValueError(f"'step_ms' 必须是整数: {e}") from e

        return PlayerConfig(**config)

    @staticmethod
    def save_to_yaml(config: PlayerConfig, yaml_path: str) -> None:
        """
        保存播放配置到 YAML 文件

        Args:
            config: 播放配置
            yaml_path: 输出文件路径
        """
        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(asdict(config), f, allow_unicode=True, default_flow_style=False, sort_keys=False)
