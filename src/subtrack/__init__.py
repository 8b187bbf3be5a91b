"""subtrack - SRT 字幕解析与按播放时间定位字幕"""

__version__ = "0.1.0"
