#!filepath: perf_timer/observability/totals_reporter.py
from typing import Dict
from perf_timer import logs


class TotalsReporter:
    """
    累计耗时报告：
    - bucket → 分钟数
    调用方负责持有 totals 的锁
    """

    def __init__(self, totals: Dict[str, float]):
        self.totals = totals

    def print(self):
        # 按 bucket 名字典序输出，保证结果可复现
        for name in sorted(self.totals):
            logs.info(f"{name}:{self.totals[name]:.2f}")

    def print_raw(self):
        logs.info(str(self.totals))
