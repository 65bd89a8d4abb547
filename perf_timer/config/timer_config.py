#!filepath: perf_timer/config/timer_config.py
from pydantic import BaseModel


class TimerConfig(BaseModel):
    # False 等价于启动后立即 disable()
    enabled: bool = True
