#!filepath: perf_timer/utils/datetime_utils.py
from __future__ import annotations


class DurationUtils:
    NS_PER_US = 1_000
    NS_PER_MS = 1_000_000
    NS_PER_S = 1_000_000_000

    # ================================================================
    # 秒（float）→ 可读时长字符串
    # ================================================================
    @classmethod
    def format(cls, seconds: float) -> str:
        """
        输出示例：
            0           -> "0s"
            0.00000042  -> "420ns"
            0.0000123   -> "12.3µs"
            0.25        -> "250ms"
            1.5         -> "1.5s"
            62.5        -> "1m2.5s"
            3600        -> "1h0m0s"
        """
        ns = int(round(seconds * cls.NS_PER_S))
        sign = "-" if ns < 0 else ""
        ns = abs(ns)

        if ns == 0:
            return "0s"
        if ns < cls.NS_PER_US:
            return f"{sign}{ns}ns"
        if ns < cls.NS_PER_MS:
            return f"{sign}{cls._fixed(ns, cls.NS_PER_US)}µs"
        if ns < cls.NS_PER_S:
            return f"{sign}{cls._fixed(ns, cls.NS_PER_MS)}ms"

        minutes, rem = divmod(ns, 60 * cls.NS_PER_S)
        hours, minutes = divmod(minutes, 60)
        secs = f"{cls._fixed(rem, cls.NS_PER_S)}s"

        if hours:
            return f"{sign}{hours}h{minutes}m{secs}"
        if minutes:
            return f"{sign}{minutes}m{secs}"
        return f"{sign}{secs}"

    @staticmethod
    def _fixed(value: int, unit: int) -> str:
        # 整数部分 + 去掉尾零的小数部分
        whole, rem = divmod(value, unit)
        if not rem:
            return str(whole)
        digits = len(str(unit)) - 1
        frac = str(rem).rjust(digits, "0").rstrip("0")
        return f"{whole}.{frac}"


format_duration = DurationUtils.format
