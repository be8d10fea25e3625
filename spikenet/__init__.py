"""
spikenet — 小规模 Izhikevich 脉冲神经网络仿真

分层结构:
- spike/   (Layer 0): 信号枚举、背景电流发生器、发放回调、发放记录
- synapse/ (Layer 1): 指数衰减突触
- neuron/  (Layer 2): Izhikevich 参数预设与神经元引擎
- core/    (Layer 3): 节点图、逐步求值循环、轨迹记录
- io/:  NeuroML 参数读取
- viz:  绘图 (matplotlib / networkx)
"""

from spikenet.errors import (
    SpikenetError,
    ConfigurationError,
    NumericPreconditionError,
)
from spikenet.config import SimulationConfig
from spikenet.spike import GeneratorType, NeuronModel, SpikeGenerator, Listeners
from spikenet.neuron import NeuronEngine, NeuronParameters, get_preset, PRESETS
from spikenet.synapse import Synapse
from spikenet.core import Network, Node, TickSample, TraceRecorder

__version__ = "0.1.0"

__all__ = [
    "SpikenetError",
    "ConfigurationError",
    "NumericPreconditionError",
    "SimulationConfig",
    "GeneratorType",
    "NeuronModel",
    "SpikeGenerator",
    "Listeners",
    "NeuronEngine",
    "NeuronParameters",
    "get_preset",
    "PRESETS",
    "Synapse",
    "Network",
    "Node",
    "TickSample",
    "TraceRecorder",
]
