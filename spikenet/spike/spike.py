"""
Layer 0: SpikeTrain — 单个节点的发放记录

记录节点在哪些时间步 (tick) 发放, 用于发放率统计与 ISI 分析。
时间以 tick 为单位存储, 换算成毫秒需要调用方提供 dt。
"""

from collections import deque
from typing import List, Optional

import numpy as np


class SpikeTrain:
    """单个节点的脉冲序列记录

    Attributes:
        node_id: 所属节点索引
        capacity: 最大记录长度 (滑动窗口, 防止内存膨胀)
    """

    def __init__(self, node_id: int, capacity: int = 10000):
        self.node_id = node_id
        self.capacity = capacity
        self._ticks: deque = deque(maxlen=capacity)
        self._total: int = 0

    def record(self, tick: int) -> None:
        """记录一次发放"""
        self._ticks.append(tick)
        self._total += 1
        # deque(maxlen) 自动淘汰最旧记录

    @property
    def last_spike_tick(self) -> Optional[int]:
        """最近一次发放的 tick, 无记录时返回 None"""
        return self._ticks[-1] if self._ticks else None

    @property
    def count(self) -> int:
        """累计发放次数 (含已被窗口淘汰的记录)"""
        return self._total

    @property
    def ticks(self) -> List[int]:
        return list(self._ticks)

    def firing_rate(self, dt: float, n_ticks: int) -> float:
        """最近 n_ticks 个时间步内的平均发放率 (Hz)

        Args:
            dt: 时间步长 (ms)
            n_ticks: 统计窗口 (以最近一次记录为终点)

        Returns:
            发放率 (Hz). 无记录或窗口为空返回 0.0.
        """
        if not self._ticks or n_ticks <= 0:
            return 0.0
        latest = self._ticks[-1]
        window_start = latest - n_ticks
        if window_start < 0:
            # 窗口覆盖全部历史, 包括已被 deque 淘汰的记录
            count = self._total
        else:
            count = sum(1 for t in self._ticks if t > window_start)
        return count * 1000.0 / (n_ticks * dt)

    def interspike_intervals(self, dt: float) -> np.ndarray:
        """相邻发放的时间间隔 (ms)"""
        if len(self._ticks) < 2:
            return np.zeros(0)
        return np.diff(np.asarray(self._ticks, dtype=np.float64)) * dt

    def clear(self) -> None:
        self._ticks.clear()
        self._total = 0

    def __len__(self) -> int:
        return len(self._ticks)

    def __repr__(self) -> str:
        return (f"SpikeTrain(node={self.node_id}, count={self.count}, "
                f"last={self.last_spike_tick})")
