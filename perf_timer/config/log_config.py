#!filepath: perf_timer/config/log_config.py
from typing import Optional
from pydantic import BaseModel

class LogConfig(BaseModel):
    dir: Optional[str] = None
    rotation: str = "1 day"
    retention: str = "30 days"
    level: str = "INFO"
