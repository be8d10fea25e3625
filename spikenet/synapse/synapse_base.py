"""
Layer 1: Synapse — 指数衰减突触后电流

突触把上游节点的一次发放转换成注入下游节点的衰减电流:

  fire():   counter ← 0 (激活; 已激活时从零重新开始衰减)
  step(dt):
    1. counter > dt·1000  → counter ← -1 (空闲复位)
    2. counter ≥ 0        → counter += dt,  返回 max_current · exp(-counter / time_factor)
    3. 否则                → 返回 0 (空闲, counter 不前进)

空闲复位的界限 dt·1000 与 time_factor 的单位并不一致, 这里按字面保留。

突触只保存下游节点的索引 (target), 不持有下游节点本身;
由网络循环在每次投递时把索引解析为节点。
"""

import math

from spikenet.errors import ConfigurationError


# 空闲复位界限 = dt * IDLE_RESET_STEPS
IDLE_RESET_STEPS = 1.0e3


class Synapse:
    """指数衰减突触

    Attributes:
        target: 下游节点索引 (非拥有引用)
        max_current: 峰值突触后电流
        time_factor: 衰减时间常数
        counter: 计时器 (负值=空闲, ≥0=激活并衰减中)
    """

    __slots__ = ('source', 'target', 'max_current', 'time_factor', 'counter')

    def __init__(self, target: int, max_current: float, time_factor: float,
                 source: int = -1):
        if not time_factor > 0.0:
            raise ConfigurationError(
                f"time_factor must be > 0, got {time_factor}",
                field="time_factor")
        if not math.isfinite(max_current):
            raise ConfigurationError(
                f"max_current must be finite, got {max_current}",
                field="max_current")
        self.source = source
        self.target = target
        self.max_current = float(max_current)
        self.time_factor = float(time_factor)
        self.counter: float = -1.0

    def fire(self) -> None:
        """上游发放: 激活突触"""
        self.counter = 0.0

    def step(self, dt: float) -> float:
        """推进一个时间步, 返回本步投递给下游的电流"""
        if self.counter > dt * IDLE_RESET_STEPS:
            self.counter = -1.0
        if self.counter >= 0.0:
            self.counter += dt
            return self.max_current * math.exp(-self.counter / self.time_factor)
        return 0.0

    def reset(self) -> None:
        """回到空闲状态"""
        self.counter = -1.0

    @property
    def is_active(self) -> bool:
        return self.counter >= 0.0

    def __repr__(self) -> str:
        return (
            f"Synapse({self.source}→{self.target}, "
            f"max={self.max_current}, tau={self.time_factor}, "
            f"t={self.counter:.2f})"
        )
