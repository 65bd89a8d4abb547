#!filepath: perf_timer/observability/totals.py
import threading
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class TotalRecorder:
    """bucket 名 → 累计分钟数"""

    totals: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        self.lock = threading.Lock()

    def add(self, bucket: str, minutes: float):
        with self.lock:
            self.totals[bucket] = self.totals.get(bucket, 0.0) + minutes

    def snapshot(self) -> Dict[str, float]:
        with self.lock:
            return dict(self.totals)

    def names(self) -> List[str]:
        with self.lock:
            return sorted(self.totals)
