"""
Layer 1: Synapse — 突触

把上游发放转换成注入下游节点的指数衰减电流。
"""

from spikenet.synapse.synapse_base import Synapse, IDLE_RESET_STEPS

__all__ = [
    "Synapse",
    "IDLE_RESET_STEPS",
]
