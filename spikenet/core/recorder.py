"""
TraceRecorder — 逐步时间序列记录器 (网络输出的消费者)

以 numpy 数组保存每个节点每个 tick 的 (膜电位, 输入电流, 恢复变量),
供绘图与统计使用。既可以注册为网络的观测钩子自动记录,
也可以由调用方在任意 tick 手动喂入; 从未喂入的位置保持 NaN。

使用示例:
    rec = TraceRecorder(n_nodes=len(net), capacity=4000)
    rec.attach(net)
    net.run(4000, 0.1)
    v = rec.potential[:, 0]
"""

from typing import Iterable

import numpy as np

from spikenet.core.network import Network, TickSample


class TraceRecorder:
    """预分配的 (tick, node) 轨迹数组

    Attributes:
        n_nodes: 节点数
        potential: float[T, N] 膜电位 (mV)
        current: float[T, N] 本步总输入电流
        recovery: float[T, N] 恢复变量 u
        fired: bool[T, N] 发放标记
    """

    def __init__(self, n_nodes: int, capacity: int = 4000):
        self.n_nodes = n_nodes
        capacity = max(1, capacity)
        self._potential = np.full((capacity, n_nodes), np.nan)
        self._current = np.full((capacity, n_nodes), np.nan)
        self._recovery = np.full((capacity, n_nodes), np.nan)
        self._fired = np.zeros((capacity, n_nodes), dtype=bool)
        self._n_ticks = 0

    def attach(self, network: Network) -> None:
        """注册为网络观测钩子"""
        network.add_observer(self.record)

    def record(self, sample: TickSample) -> None:
        """记录一个样本; 超出容量时容量翻倍"""
        tick = sample.tick
        if tick >= self._potential.shape[0]:
            self._grow(tick + 1)
        self._potential[tick, sample.node] = sample.membrane_potential
        self._current[tick, sample.node] = sample.current
        self._recovery[tick, sample.node] = sample.recovery
        self._fired[tick, sample.node] = sample.fired
        if tick >= self._n_ticks:
            self._n_ticks = tick + 1

    def record_all(self, samples: Iterable[TickSample]) -> None:
        """记录 Network.step() 返回的一整步样本"""
        for sample in samples:
            self.record(sample)

    def _grow(self, min_rows: int) -> None:
        rows = self._potential.shape[0]
        while rows < min_rows:
            rows *= 2
        extra = rows - self._potential.shape[0]
        pad = np.full((extra, self.n_nodes), np.nan)
        self._potential = np.vstack([self._potential, pad])
        self._current = np.vstack([self._current, pad])
        self._recovery = np.vstack([self._recovery, pad])
        self._fired = np.vstack(
            [self._fired, np.zeros((extra, self.n_nodes), dtype=bool)])

    # =========================================================================
    # 查询 (只返回已记录的行)
    # =========================================================================

    @property
    def n_ticks(self) -> int:
        return self._n_ticks

    @property
    def potential(self) -> np.ndarray:
        return self._potential[:self._n_ticks]

    @property
    def current(self) -> np.ndarray:
        return self._current[:self._n_ticks]

    @property
    def recovery(self) -> np.ndarray:
        return self._recovery[:self._n_ticks]

    @property
    def fired(self) -> np.ndarray:
        return self._fired[:self._n_ticks]

    def spike_counts(self) -> np.ndarray:
        """每个节点的发放次数"""
        return self.fired.sum(axis=0)

    def spike_ticks(self, node: int) -> np.ndarray:
        """指定节点的发放 tick 序列"""
        return np.nonzero(self.fired[:, node])[0]

    def time_axis(self, dt: float) -> np.ndarray:
        """时间轴 (ms)"""
        return np.arange(self._n_ticks) * dt

    def __repr__(self) -> str:
        return f"TraceRecorder(nodes={self.n_nodes}, ticks={self._n_ticks})"
