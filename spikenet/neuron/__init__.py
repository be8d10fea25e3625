"""
Layer 2: Neuron — Izhikevich 神经元

主要组件:
- NeuronEngine: 单神经元膜状态推进
- NeuronParameters: 参数记录
- 22 种经典发放模式预设 (PRESETS / get_preset)
"""

from spikenet.neuron.params import (
    NeuronParameters,
    SPIKE_THRESHOLD,
    PRESETS,
    get_preset,
    TONIC_SPIKING,
    PHASIC_SPIKING,
    TONIC_BURSTING,
    PHASIC_BURSTING,
    INTRINSICALLY_BURSTING,
    FAST_SPIKING,
)
from spikenet.neuron.engine import NeuronEngine

__all__ = [
    "NeuronEngine",
    "NeuronParameters",
    "SPIKE_THRESHOLD",
    "PRESETS",
    "get_preset",
    # 常用预设
    "TONIC_SPIKING",
    "PHASIC_SPIKING",
    "TONIC_BURSTING",
    "PHASIC_BURSTING",
    "INTRINSICALLY_BURSTING",
    "FAST_SPIKING",
]
