#!filepath: perf_timer/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.datetime_utils import DurationUtils, format_duration
from .observability.registry import TimerRegistry
from .config.app_config import AppConfig

# 默认全局 registry（测试请自行构造 TimerRegistry()）
registry = TimerRegistry()

__all__ = [
    "logs", "Logging", "init_logging",
    "DurationUtils", "format_duration",
    "TimerRegistry", "registry",
    "AppConfig",
]
