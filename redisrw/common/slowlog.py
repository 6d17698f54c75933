"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""
import logging
import random
import threading
import time

from tabulate import tabulate

logger = logging.getLogger('RedisRW.root')
SLOW_LOG_TIME_THRESHOLD = 1


class InplaceAverage:
    def __init__(self):
        self.value = 0
        self.size = 0

    def add(self, value):
        self.value = (self.value * self.size + value) / (self.size + 1)
        self.size += 1


class SlowLog:
    """记录每个命令的平均执行时间，超过阈值的命令定期打印警告"""

    def __init__(self, threshold: float = SLOW_LOG_TIME_THRESHOLD):
        self.threshold = threshold
        self._time_averages: dict[str, InplaceAverage] = {}
        self._max_times: dict[str, float] = {}
        self._logged: dict[str, float] = {}
        self.log_interval = random.randint(60, 600)
        self._last_clean = time.time()
        self._lock = threading.Lock()

    def clear(self):
        with self._lock:
            self._time_averages.clear()
            self._max_times.clear()
            self._logged.clear()
            self._last_clean = time.time()

    def log(self, elapsed: float, name: str):
        # 每小时清理一次，防止InplaceAverage的数据越来越不准
        now = time.time()
        if now - self._last_clean > 3600:
            self.clear()
        with self._lock:
            if (time_avg := self._time_averages.get(name)) is None:
                time_avg = InplaceAverage()
                self._time_averages[name] = time_avg
            time_avg.add(elapsed)
            self._max_times[name] = max(self._max_times.get(name, 0), elapsed)
            if elapsed <= self.threshold:
                return
            if now - self._logged.get(name, 0) <= self.log_interval:
                return
            self._logged[name] = now
            avg = time_avg.value
        logger.warning(
            f"⚠️ [🐢慢日志] 命令 {name} 执行时间 {elapsed:.3f}秒，"
            f"平均时间 {avg:.3f}秒\n{self}")

    def average(self, name: str) -> float:
        with self._lock:
            avg = self._time_averages.get(name)
            return avg.value if avg else 0

    def __str__(self):
        with self._lock:
            slow20 = sorted(self._time_averages.items(), key=lambda x: x[1].value,
                            reverse=True)[:20]
            rows = [(name, avg.value, self._max_times[name], avg.size)
                    for name, avg in slow20]
        return tabulate(rows, headers=['命令', '平均时间', '最长时间', '调用次数'],
                        tablefmt='github', floatfmt=".3f")
