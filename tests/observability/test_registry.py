#!filepath: tests/observability/test_registry.py

import time

import pytest

from perf_timer import TimerRegistry
from perf_timer.config.timer_config import TimerConfig


def test_start_free_key_returns_key(reg):
    assert reg.start("load") == "load"
    assert reg.read_minutes("load") >= 0.0


def test_start_collision_renames(reg):
    assert reg.start("fetch") == "fetch"
    assert reg.start("fetch") == "fetch___0"
    assert reg.start("fetch") == "fetch___1"
    assert reg.active_keys() == ["fetch", "fetch___0", "fetch___1"]


def test_read_minutes_deletes(reg):
    reg.start("k")
    time.sleep(0.01)

    assert reg.read_minutes("k") > 0
    # 第二次读取：条目已删除
    assert reg.read_minutes("k") == 0.0


def test_read_minutes_keep_monotonic(reg):
    reg.start("k")
    first = reg.read_minutes_keep("k")
    time.sleep(0.01)
    second = reg.read_minutes_keep("k")

    assert second >= first
    assert reg.active_keys() == ["k"]


def test_read_minutes_unsafe(reg):
    reg.start("k")
    time.sleep(0.01)

    assert reg.read_minutes_unsafe("k") > 0
    assert reg.read_minutes_unsafe_force("k") > 0
    assert reg.active_keys() == ["k"]


def test_missing_key_reads_zero(reg):
    assert reg.read_minutes("missing") == 0.0
    assert reg.read_minutes_keep("missing") == 0.0
    assert reg.read_minutes_unsafe("missing") == 0.0


def test_print_timer_line(reg, log_lines):
    reg.start("load")
    reg.print_timer("load", "after parse")

    assert len(log_lines) == 1
    assert log_lines[0].startswith("load took ")
    assert log_lines[0].endswith(" -> after parse")
    # 打印不删除条目
    assert reg.active_keys() == ["load"]


def test_print_timer_missing_key_is_silent(reg, log_lines):
    reg.print_timer("missing", "nothing")
    reg.print_timer_force("missing", "nothing")
    assert log_lines == []


def test_fold_disambiguated_key_into_base_bucket(reg, log_lines):
    assert reg.start("fetch") == "fetch"
    assert reg.start("fetch") == "fetch___0"
    time.sleep(0.01)

    reg.fold("fetch___0")
    reg.print_totals()

    assert reg.totals()["fetch"] > 0
    assert log_lines[0].startswith("fetch:")
    # 未被 fold 的原始 key 仍在
    assert reg.active_keys() == ["fetch"]


def test_fold_siblings_share_bucket(reg):
    a = reg.start("fetch")
    b = reg.start("fetch")
    time.sleep(0.01)

    reg.fold(a)
    first = reg.totals()["fetch"]
    reg.fold(b)

    assert set(reg.totals()) == {"fetch"}
    assert reg.totals()["fetch"] > first
    assert reg.active_keys() == []


def test_fold_missing_key_creates_zero_bucket(reg):
    reg.fold("ghost___7")
    assert reg.totals() == {"ghost": 0.0}


def test_print_totals_sorted(reg, log_lines):
    for name in ["zeta", "alpha", "mu"]:
        reg.start(name)
        reg.fold(name)

    reg.print_totals()

    assert [line.split(":")[0] for line in log_lines] == ["alpha", "mu", "zeta"]
    assert all(line.endswith("0.00") for line in log_lines)


def test_print_totals_raw(reg, log_lines):
    reg.fold("a")
    reg.print_totals_raw()

    assert log_lines == ["{'a': 0.0}"]


def test_timed_folds_on_exit(reg):
    with reg.timed("step") as key:
        assert key == "step"
        time.sleep(0.01)

    assert reg.totals()["step"] > 0
    assert reg.active_keys() == []


def test_timed_collision_folds_into_base(reg):
    reg.start("step")
    with reg.timed("step") as key:
        assert key == "step___0"

    assert "step" in reg.totals()
    assert reg.active_keys() == ["step"]


def test_timed_without_fold(reg):
    with reg.timed("step", fold=False):
        pass

    assert reg.totals() == {}
    assert reg.active_keys() == []


def test_timed_exception_propagates_and_folds(reg):
    with pytest.raises(ValueError):
        with reg.timed("boom"):
            raise ValueError("fail")

    assert "boom" in reg.totals()
    assert reg.active_keys() == []


def test_wrap_decorator(reg):
    @reg.wrap("work")
    def work(x):
        return x * 2

    assert work(2) == 4
    assert work(3) == 6
    assert "work" in reg.totals()
    assert work.__name__ == "work"


def test_from_config():
    assert TimerRegistry.from_config(TimerConfig()).disabled is False
    assert TimerRegistry.from_config(TimerConfig(enabled=False)).disabled is True


def test_registries_are_isolated():
    a = TimerRegistry()
    b = TimerRegistry()
    a.start("x")
    a.fold("x")

    assert b.totals() == {}
    assert b.active_keys() == []
