# tests/conftest.py
from __future__ import annotations

from typing import List

import pytest
from loguru import logger

from perf_timer import TimerRegistry


@pytest.fixture(autouse=True)
def disable_stderr_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


@pytest.fixture
def reg() -> TimerRegistry:
    """每个 test 一个独立 registry，不碰全局实例"""
    return TimerRegistry()


@pytest.fixture
def log_lines() -> List[str]:
    """
    临时添加一个只输出 message 的 sink，
    返回捕获到的日志行（去掉换行）
    """
    captured: List[str] = []
    sink_id = logger.add(lambda msg: captured.append(str(msg).rstrip("\n")), format="{message}")
    yield captured
    logger.remove(sink_id)
