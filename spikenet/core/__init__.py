"""
spikenet.core — 网络求值核心

提供 Node / Network (逐步求值循环) 与 TraceRecorder (轨迹记录)。
"""

from spikenet.core.network import Network, Node, TickSample
from spikenet.core.recorder import TraceRecorder

__all__ = [
    'Network',
    'Node',
    'TickSample',
    'TraceRecorder',
]
