"""
Layer 0: 信号类型枚举

定义 spikenet 中封闭的模型变体集合:
- GeneratorType: 背景电流发生器类型 (STOCHASTIC / DELAYED_CONSTANT / SINGLE_PULSE)
- NeuronModel:   神经元动力学模型 (目前只有 IZHIKEVICH)

变体集合是固定且已知的, 所以用枚举标签 + 分支, 而不是开放的子类继承。
这些是整个系统最底层的定义，不依赖任何其他模块。
"""

from enum import IntEnum


class GeneratorType(IntEnum):
    """背景电流发生器类型

    - STOCHASTIC:       每步以概率 p 发放 [0, scale) 均匀分布的电流
    - DELAYED_CONSTANT: 计时器超过 onset 后持续输出固定幅值
    - SINGLE_PULSE:     计时器落在 pos ± width*dt 窗口内时输出固定幅值
    """
    STOCHASTIC = 0
    DELAYED_CONSTANT = 1
    SINGLE_PULSE = 2

    @property
    def is_deterministic(self) -> bool:
        """相同 dt 序列下输出是否完全可复现"""
        return self != GeneratorType.STOCHASTIC


class NeuronModel(IntEnum):
    """神经元动力学模型

    只有 Izhikevich (2003) 二维模型是可用变体。
    """
    IZHIKEVICH = 0
