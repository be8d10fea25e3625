"""
spikenet.io — 外部模型描述读取
"""

from spikenet.io.neuroml import load_izhikevich_cells, parse_quantity

__all__ = [
    'load_izhikevich_cells',
    'parse_quantity',
]
