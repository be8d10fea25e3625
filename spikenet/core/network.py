"""
Layer 3: Node + Network — 节点图与逐步求值循环

节点 (Node) 绑定一个 NeuronEngine、它的 Listeners 和它独占的出向突触。
网络 (Network) 以列表 (arena) 保存全部节点, 节点通过索引寻址;
突触只保存下游索引, 因此突触图可以有环而不会形成所有权环。

每个时间步, 按固定的遍历顺序对每个节点:
  1. (fired, I) = engine.step(listeners, dt)
  2. 对每个出向突触 (按注册顺序):
       fired → synapse.fire()
       c = synapse.step(dt)
       nodes[synapse.target].engine.receive(c)   # 立即写入下游

投递时序依赖遍历顺序:
  - 下游节点在上游之后被访问 → 同一 tick 内就消耗该电流
  - 下游节点在上游之前被访问 → 下一个 tick 才消耗
这是顺序求值的字面行为, 按原样保留。

典型使用模式:
```python
net = Network()
n1 = net.add_node(NeuronEngine("phasic_spiking",
                               SpikeGenerator.delayed_constant(10.0)))
n2 = net.add_node(NeuronEngine("intrinsically_bursting"))
net.connect(n1, n2, max_current=30.0, time_factor=3.0)
net.add_listener(n1, lambda: print("fired n1"))

for _ in range(4000):
    samples = net.step(0.1)
```
"""

import logging
import operator
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from spikenet.config import validate_dt, validate_n_ticks
from spikenet.errors import ConfigurationError
from spikenet.neuron.engine import NeuronEngine
from spikenet.spike.listeners import Listener, Listeners
from spikenet.spike.spike import SpikeTrain
from spikenet.synapse.synapse_base import Synapse


logger = logging.getLogger(__name__)


# =============================================================================
# 每步输出样本
# =============================================================================

@dataclass(frozen=True)
class TickSample:
    """单个节点在单个 tick 的输出

    Attributes:
        tick: 时间步序号 (从 0 开始)
        node: 节点索引
        fired: 本步是否发放
        membrane_potential: 本步结束时的膜电位 (mV)
        current: 本步消耗的总输入电流 (更新前)
        recovery: 本步结束时的恢复变量 u
    """
    tick: int
    node: int
    fired: bool
    membrane_potential: float
    current: float
    recovery: float


TickObserver = Callable[[TickSample], None]


# =============================================================================
# Node
# =============================================================================

class Node:
    """网络中的一个节点

    Attributes:
        index: 在所属网络中的稳定索引
        name: 可读名称 (日志/绘图用)
        engine: 神经元引擎 (独占)
        listeners: 发放回调表 (独占)
        outgoing: 出向突触列表 (独占, 按注册顺序)
        spike_train: 发放记录
    """

    def __init__(self, index: int, engine: NeuronEngine,
                 name: Optional[str] = None):
        self.index = index
        self.name = name if name is not None else f"n{index}"
        self.engine = engine
        self.listeners = Listeners()
        self.outgoing: List[Synapse] = []
        self.spike_train = SpikeTrain(node_id=index)

        self._last_fired: bool = False
        self._last_current: float = 0.0

    def add_downstream(self, synapse: Synapse) -> None:
        """追加一个出向突触"""
        synapse.source = self.index
        self.outgoing.append(synapse)

    def get_potential(self) -> float:
        return self.engine.get_membrane_potential()

    @property
    def last_fired(self) -> bool:
        return self._last_fired

    @property
    def last_current(self) -> float:
        """最近一次 step 消耗的总输入电流"""
        return self._last_current

    def reset(self) -> None:
        """重置引擎、出向突触和发放记录 (保留拓扑与回调)"""
        self.engine.reset()
        for syn in self.outgoing:
            syn.reset()
        self.spike_train.clear()
        self._last_fired = False
        self._last_current = 0.0

    def __repr__(self) -> str:
        return (f"Node({self.index}, {self.name!r}, "
                f"v={self.get_potential():.2f}mV, "
                f"out={len(self.outgoing)}, listeners={len(self.listeners)})")


# =============================================================================
# Network
# =============================================================================

class Network:
    """静态拓扑、动态状态的节点网络"""

    def __init__(self):
        self._nodes: List[Node] = []
        self._order: Optional[List[int]] = None
        self._observers: List[TickObserver] = []
        self._tick: int = 0

    # =========================================================================
    # 构建
    # =========================================================================

    def add_node(self, engine: NeuronEngine, name: Optional[str] = None) -> int:
        """添加节点, 返回其稳定索引"""
        if not isinstance(engine, NeuronEngine):
            raise ConfigurationError(
                f"engine must be a NeuronEngine, got {type(engine).__name__}",
                field="engine")
        index = len(self._nodes)
        node = Node(index, engine, name)
        self._nodes.append(node)
        if self._order is not None:
            self._order.append(index)
        logger.debug("added node %d (%s): %r", index, node.name, engine)
        return index

    def connect(self, source: int, target: int, max_current: float,
                time_factor: float) -> Synapse:
        """从 source 到 target 建立一个突触 (允许自环与环路)"""
        src = self.node(source, field="source")
        dst = self.node(target, field="target")
        syn = Synapse(dst.index, max_current, time_factor)
        src.add_downstream(syn)
        logger.debug("connected %d -> %d (max=%g, tau=%g)",
                     source, target, max_current, time_factor)
        return syn

    def add_listener(self, index: int, listener: Listener) -> None:
        """为指定节点注册发放回调"""
        self.node(index).listeners.add(listener)

    def add_observer(self, observer: TickObserver) -> None:
        """注册逐节点逐步的观测钩子, 每个节点 step 后以 TickSample 调用"""
        self._observers.append(observer)

    def remove_observer(self, observer: TickObserver) -> None:
        self._observers.remove(observer)

    def set_order(self, order: Sequence[int]) -> None:
        """设置节点遍历顺序 (必须是全部索引的一个排列)"""
        order = [int(i) for i in order]
        if sorted(order) != list(range(len(self._nodes))):
            raise ConfigurationError(
                f"order must be a permutation of 0..{len(self._nodes) - 1}, "
                f"got {order}", field="order")
        self._order = order

    # =========================================================================
    # 仿真
    # =========================================================================

    def step(self, dt: float) -> List[TickSample]:
        """推进全部节点一个时间步

        Returns:
            按节点索引排列的 TickSample 列表

        Raises:
            NumericPreconditionError: dt 非正或非有限 (此时状态不变)
            Exception: 发放回调抛出的异常原样传播, 网络停在半更新状态,
                需要 reset() 后才能继续 (见 spikenet.spike.listeners)
        """
        dt = validate_dt(dt)
        nodes = self._nodes
        tick = self._tick
        samples: List[Optional[TickSample]] = [None] * len(nodes)

        for index in self.order:
            node = nodes[index]
            engine = node.engine
            fired, current = engine.step(node.listeners, dt)

            for syn in node.outgoing:
                if fired:
                    syn.fire()
                nodes[syn.target].engine.receive(syn.step(dt))

            node._last_fired = fired
            node._last_current = current
            if fired:
                node.spike_train.record(tick)
                logger.debug("tick %d: node %d (%s) fired", tick, index, node.name)

            sample = TickSample(
                tick=tick,
                node=index,
                fired=fired,
                membrane_potential=engine.get_membrane_potential(),
                current=current,
                recovery=engine.u,
            )
            samples[index] = sample
            for observer in self._observers:
                observer(sample)

        self._tick = tick + 1
        return samples

    def run(self, n_ticks: int, dt: float) -> int:
        """连续推进 n_ticks 步, 返回期间的总发放次数"""
        n_ticks = validate_n_ticks(n_ticks)
        dt = validate_dt(dt)
        logger.info("running %d ticks (dt=%g) over %d nodes",
                    n_ticks, dt, len(self._nodes))
        total = 0
        for _ in range(n_ticks):
            for sample in self.step(dt):
                if sample.fired:
                    total += 1
        logger.info("finished at tick %d: %d spikes", self._tick, total)
        return total

    def reset(self) -> None:
        """重置全部节点状态与 tick 计数 (保留拓扑、回调与观测钩子)"""
        for node in self._nodes:
            node.reset()
        self._tick = 0

    # =========================================================================
    # 查询
    # =========================================================================

    def node(self, index: int, field: str = "index") -> Node:
        """按索引取节点

        Raises:
            ConfigurationError: 索引不存在
        """
        try:
            position = operator.index(index)
        except TypeError:
            position = None
        if isinstance(index, bool) or position is None \
                or not 0 <= position < len(self._nodes):
            raise ConfigurationError(
                f"no node with {field}={index!r} "
                f"(network has {len(self._nodes)} nodes)", field=field)
        return self._nodes[position]

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes)

    @property
    def order(self) -> List[int]:
        """当前遍历顺序 (默认 = 插入顺序)"""
        if self._order is None:
            return list(range(len(self._nodes)))
        return list(self._order)

    @property
    def tick(self) -> int:
        """已完成的时间步数"""
        return self._tick

    @property
    def synapses(self) -> Iterable[Synapse]:
        for node in self._nodes:
            yield from node.outgoing

    def firing_rates(self, dt: float) -> Dict[int, float]:
        """各节点在整个已运行区间内的平均发放率 (Hz)"""
        dt = validate_dt(dt)
        return {node.index: node.spike_train.firing_rate(dt, self._tick)
                for node in self._nodes}

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        n_syn = sum(len(node.outgoing) for node in self._nodes)
        return (f"Network(nodes={len(self._nodes)}, synapses={n_syn}, "
                f"tick={self._tick})")
