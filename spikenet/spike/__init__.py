"""
Layer 0: Spike — 信号原语

不依赖任何其他 spikenet 层。

主要组件:
- GeneratorType / NeuronModel: 封闭的模型变体枚举
- SpikeGenerator: 背景电流发生器
- Listeners: 发放事件回调表
- SpikeTrain: 发放记录
"""

from spikenet.spike.signal_types import GeneratorType, NeuronModel
from spikenet.spike.generators import SpikeGenerator
from spikenet.spike.listeners import Listeners, Listener
from spikenet.spike.spike import SpikeTrain

__all__ = [
    "GeneratorType",
    "NeuronModel",
    "SpikeGenerator",
    "Listeners",
    "Listener",
    "SpikeTrain",
]
