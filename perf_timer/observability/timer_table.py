#!filepath: perf_timer/observability/timer_table.py
import threading
import time
from typing import Dict, List, Optional

SEPARATOR = "___"
SECONDS_PER_MINUTE = 60.0


def base_name(key: str) -> str:
    """
    去掉消歧后缀，得到 bucket 名：
        "fetch___1"  -> "fetch"
        "fetch"      -> "fetch"
    """
    if SEPARATOR in key:
        return key.split(SEPARATOR, 1)[0]
    return key


class TimerTable:
    """
    活跃计时器表（key → 起始时刻）
    - start(key)            → 实际使用的 key（冲突时自动改名）
    - read_minutes(key)     → 已耗时分钟数，可选删除
    - read_minutes_unsafe() → 不加锁读取
    """

    def __init__(self):
        self._start: Dict[str, float] = {}
        self.lock = threading.Lock()

    def start(self, key: str) -> str:
        with self.lock:
            if key in self._start:
                key = self._free_key(key)
            self._start[key] = time.perf_counter()
        return key

    def _free_key(self, key: str) -> str:
        # 线性探测：最小可用的非负整数后缀（调用方持有锁）
        i = 0
        while f"{key}{SEPARATOR}{i}" in self._start:
            i += 1
        return f"{key}{SEPARATOR}{i}"

    def elapsed_unsafe(self, key: str) -> Optional[float]:
        """已耗时秒数（不加锁）；key 不存在时返回 None"""
        started = self._start.get(key)
        if started is None:
            return None
        return time.perf_counter() - started

    def read_minutes(self, key: str, delete: bool = True) -> float:
        with self.lock:
            if delete:
                started = self._start.pop(key, None)
            else:
                started = self._start.get(key)
        if started is None:
            return 0.0
        return (time.perf_counter() - started) / SECONDS_PER_MINUTE

    def read_minutes_unsafe(self, key: str) -> float:
        elapsed = self.elapsed_unsafe(key)
        if elapsed is None:
            return 0.0
        return elapsed / SECONDS_PER_MINUTE

    def pop_minutes(self, key: str) -> float:
        return self.read_minutes(key, delete=True)

    def keys(self) -> List[str]:
        with self.lock:
            return sorted(self._start)

    def __contains__(self, key: str) -> bool:
        with self.lock:
            return key in self._start

    def __len__(self) -> int:
        with self.lock:
            return len(self._start)
