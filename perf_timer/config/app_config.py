#!filepath: perf_timer/config/app_config.py
import yaml
from pydantic import BaseModel
from dotenv import load_dotenv
import os

from .log_config import LogConfig
from .timer_config import TimerConfig
from perf_timer.utils.errors import ConfigError

TRUTHY = {"1", "true", "yes", "on"}


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    perf_timer/config/app_config.py → perf_timer/config → perf_timer → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    timer: TimerConfig = TimerConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 perf_timer/config/base.yml
        - PERF_TIMER_OFF=1 时关闭计时器
        """
        root = project_root()

        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(os.path.join(root, ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = os.path.join(os.path.dirname(__file__), "base.yml")

        if not os.path.exists(path):
            raise ConfigError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env 覆盖
        if os.getenv("PERF_TIMER_OFF", "").strip().lower() in TRUTHY:
            raw["timer"] = {**(raw.get("timer") or {}), "enabled": False}

        return cls(**raw)
