"""命令行界面"""

from dataclasses import replace
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from subtrack import __version__
from subtrack.config import ConfigLoader, PlayerConfig
from subtrack.loader import SubtitleSource
from subtrack.logger import set_level
from subtrack.parser import format_time, parse_time
from subtrack.subtitle import Subtitle, create_subtitle
from subtrack.validator import ClipValidator

# 加载 .env 文件
load_dotenv()

app = typer.Typer(help="subtrack - SRT 字幕解析与按播放时间查询字幕")
console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="播放配置文件（YAML 格式）")
ENCODING_OPTION = typer.Option(None, "--encoding", "-e", help="字幕文件编码，覆盖配置文件")
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="日志级别，覆盖配置文件")


def parse_time_arg(value: str) -> int:
    """解析命令行时间参数（毫秒数或 HH:MM:SS,mmm）"""
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        return parse_time(value)
    except ValueError as e:
        raise typer.BadParameter(f"无效的时间: {value}（应为毫秒数或 HH:MM:SS,mmm）") from e


def _load_config(config_file: Path | None, encoding: str | None, log_level: str | None) -> PlayerConfig:
    """读取配置：配置文件优先于环境变量，命令行选项优先于两者"""
    try:
        config = ConfigLoader.load_from_yaml(str(config_file)) if config_file else ConfigLoader.from_env()
        if encoding:
            config = replace(config, encoding=encoding)
        if log_level:
            config = replace(config, log_level=log_level)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ 配置错误: {e}[/red]")
        raise typer.Exit(1) from e

    set_level(config.log_level)
    return config


def _load_subtitle(srt_file: Path, config: PlayerConfig) -> Subtitle:
    """加载字幕文件，失败或没有任何片段时退出"""
    try:
        subtitle = create_subtitle(config.format, encoding=config.encoding)
    except ValueError as e:
        console.print(f"[red]✗ 错误: {e}[/red]")
        raise typer.Exit(1) from e

    if not subtitle.refresh(SubtitleSource(str(srt_file))):
        console.print(f"[red]✗ 错误: 无法加载字幕文件 {srt_file}[/red]")
        raise typer.Exit(1)

    if not subtitle.clips:
        console.print("[red]✗ 错误: 字幕文件中没有有效的字幕片段[/red]")
        raise typer.Exit(1)

    return subtitle


@app.command()
def clips(
    srt_file: Path = typer.Argument(..., help="SRT 字幕文件路径"),
    config_file: Path | None = CONFIG_OPTION,
    encoding: str | None = ENCODING_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """列出解析出的字幕片段"""
    config = _load_config(config_file, encoding, log_level)
    subtitle = _load_subtitle(srt_file, config)

    table = Table(title=f"字幕片段 - {srt_file.name}")
    table.add_column("#", style="dim")
    table.add_column("序号", style="cyan")
    table.add_column("开始", style="magenta")
    table.add_column("结束", style="magenta")
    table.add_column("内容", style="green")

    for i, clip in enumerate(subtitle.clips, 1):
        table.add_row(
            str(i), str(clip.index), format_time(clip.start_time), format_time(clip.end_time), escape(clip.content)
        )

    console.print(table)
    console.print(f"[green]✓ 共 {len(subtitle.clips)} 个片段[/green]")

    _, _, warnings = ClipValidator(subtitle.clips).validate()
    if warnings:
        console.print(f"\n[yellow]⚠️  发现 {len(warnings)} 个警告：[/yellow]")
        for warning in warnings:
            console.print(f"[yellow]  - {warning.message}[/yellow]")


@app.command()
def caption(
    srt_file: Path = typer.Argument(..., help="SRT 字幕文件路径"),
    times: list[str] = typer.Argument(..., help="播放时间（毫秒数或 HH:MM:SS,mmm），可传多个"),
    config_file: Path | None = CONFIG_OPTION,
    encoding: str | None = ENCODING_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """查询指定播放时间的字幕"""
    milliseconds = [parse_time_arg(t) for t in times]
    config = _load_config(config_file, encoding, log_level)
    subtitle = _load_subtitle(srt_file, config)

    for ms in milliseconds:
        text = subtitle.get_caption(ms)
        console.print(f"[cyan]{format_time(ms)}[/cyan]  {escape(text) if text else '[dim](无字幕)[/dim]'}")


@app.command()
def play(
    srt_file: Path = typer.Argument(..., help="SRT 字幕文件路径"),
    start: str | None = typer.Option(None, "--start", "-s", help="起始时间，默认为第一个片段开始"),
    end: str | None = typer.Option(None, "--end", help="结束时间，默认为最后一个片段结束"),
    step: int | None = typer.Option(None, "--step", help="播放步长（毫秒），覆盖配置文件"),
    config_file: Path | None = CONFIG_OPTION,
    encoding: str | None = ENCODING_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
):
    """模拟顺序播放，输出每次字幕变化"""
    config = _load_config(config_file, encoding, log_level)
    if step is not None and step <= 0:
        console.print(f"[red]✗ 错误: 播放步长必须大于 0，当前值: {step}[/red]")
        raise typer.Exit(1)
    step_ms = step or config.step_ms

    subtitle = _load_subtitle(srt_file, config)
    start_ms = parse_time_arg(start) if start else subtitle.clips[0].start_time
    end_ms = parse_time_arg(end) if end else subtitle.clips[-1].end_time

    console.print(f"\n[bold]subtrack v{__version__}[/bold] - {format_time(start_ms)} → {format_time(end_ms)}\n")

    previous = None
    changes = 0
    for ms in range(start_ms, end_ms + 1, step_ms):
        text = subtitle.get_caption(ms)
        if text == previous:
            continue
        previous = text
        changes += 1
        console.print(f"[cyan]{format_time(ms)}[/cyan]  {escape(text) if text else '[dim](无字幕)[/dim]'}")

    console.print(f"\n[green]✓ 播放结束，字幕变化 {changes} 次[/green]")


if __name__ == "__main__":
    app()
