#!filepath: perf_timer/observability/registry.py
from __future__ import annotations

from contextlib import contextmanager
from functools import wraps
from typing import Dict, List

from perf_timer.observability.timer_table import TimerTable, base_name
from perf_timer.observability.totals import TotalRecorder
from perf_timer.observability.totals_reporter import TotalsReporter
from perf_timer.utils.datetime_utils import format_duration
from perf_timer import logs


class TimerRegistry:
    """
    进程级命名计时器注册表。

    设计铁律：
    1. 计时器表与累计表各有一把锁，fold 时先释放计时器锁再拿累计锁
    2. disable() 是单向开关：关闭后普通入口直接返回（不加锁、不打日志）
    3. *_force 入口无视开关；print_totals_raw 永远执行
    4. key 不存在不是错误：读取返回 0.0，打印静默跳过
    """

    def __init__(self, enabled: bool = True):
        self.timers = TimerTable()
        self.totals_recorder = TotalRecorder()
        self._off = not enabled

    @classmethod
    def from_config(cls, cfg) -> "TimerRegistry":
        return cls(enabled=cfg.enabled)

    # ---------------------------------------------------------
    # Kill switch
    # ---------------------------------------------------------
    def disable(self) -> None:
        self._off = True

    @property
    def disabled(self) -> bool:
        return self._off

    # ---------------------------------------------------------
    # Start
    # ---------------------------------------------------------
    def start(self, key: str) -> str:
        """
        启动计时器，返回实际使用的 key。

        key 已存在时改名为 key___0, key___1, ...，后续读取必须使用返回值。
        关闭状态下原样返回 key，不创建任何条目。
        """
        if self._off:
            return key
        return self.start_force(key)

    def start_force(self, key: str) -> str:
        return self.timers.start(key)

    # ---------------------------------------------------------
    # Print
    # ---------------------------------------------------------
    def print_timer(self, key: str, comment: str) -> None:
        if self._off:
            return
        self.print_timer_force(key, comment)

    def print_timer_force(self, key: str, comment: str) -> None:
        with self.timers.lock:
            elapsed = self.timers.elapsed_unsafe(key)
            if elapsed is not None:
                logs.info(f"{key} took {format_duration(elapsed)} -> {comment}")

    def print_totals(self) -> None:
        if self._off:
            return
        self.print_totals_force()

    def print_totals_force(self) -> None:
        with self.totals_recorder.lock:
            TotalsReporter(self.totals_recorder.totals).print()

    def print_totals_raw(self) -> None:
        # 调试出口：不受 kill switch 控制
        with self.totals_recorder.lock:
            TotalsReporter(self.totals_recorder.totals).print_raw()

    # ---------------------------------------------------------
    # Read（分钟）
    # ---------------------------------------------------------
    def read_minutes(self, key: str) -> float:
        """读取并删除；不存在或已关闭时返回 0.0"""
        if self._off:
            return 0.0
        return self.read_minutes_force(key)

    def read_minutes_force(self, key: str) -> float:
        return self.timers.read_minutes(key, delete=True)

    def read_minutes_keep(self, key: str) -> float:
        """读取但保留条目"""
        if self._off:
            return 0.0
        return self.read_minutes_keep_force(key)

    def read_minutes_keep_force(self, key: str) -> float:
        return self.timers.read_minutes(key, delete=False)

    def read_minutes_unsafe(self, key: str) -> float:
        """
        不加锁读取（保留条目）。

        仅用于调用方已保证独占访问、或能容忍脏读的场景。
        """
        if self._off:
            return 0.0
        return self.read_minutes_unsafe_force(key)

    def read_minutes_unsafe_force(self, key: str) -> float:
        return self.timers.read_minutes_unsafe(key)

    # ---------------------------------------------------------
    # Fold → bucket
    # ---------------------------------------------------------
    def fold(self, key: str) -> None:
        if self._off:
            return
        self.fold_force(key)

    def fold_force(self, key: str) -> None:
        """
        读取并删除 key，把耗时累加进 base name 对应的 bucket。
        "fetch___0" / "fetch___1" 都累加到 "fetch"。
        """
        minutes = self.timers.pop_minutes(key)
        self.totals_recorder.add(base_name(key), minutes)

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------
    def totals(self) -> Dict[str, float]:
        return self.totals_recorder.snapshot()

    def active_keys(self) -> List[str]:
        return self.timers.keys()

    @contextmanager
    def timed(self, key: str, *, fold: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        key : str
            计时名称（冲突时 yield 出改名后的 key）
        fold : bool
            - True  : 退出时累加进 bucket
            - False : 退出时读取并删除，不累加
        """
        actual = self.start(key)
        try:
            yield actual
        finally:
            if fold:
                self.fold(actual)
            else:
                self.read_minutes(actual)

    def wrap(self, key: str, *, fold: bool = True):
        """把函数调用计入 key 对应的 bucket"""
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                with self.timed(key, fold=fold):
                    return func(*args, **kwargs)
            return wrapper
        return decorator
