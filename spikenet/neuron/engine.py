"""
Layer 2: NeuronEngine — 单神经元膜状态推进

每个时间步:
  1. I = generator.step(dt) + input_current,  随即清零 input_current
  2. 前向 Euler (两个导数都用更新前的 v, u):
       dv = 0.04·v² + 5·v + 140 - u + I
       du = a·(b·v - u)
       v += dv·dt ;  u += du·dt
  3. v ≥ threshold → 先同步通知 Listeners, 再 v ← c, u ← u + d
  4. 返回 (fired, I), I 是更新前的总电流 (供诊断, 不属于状态)

状态所有权:
  - v, u 只能由本引擎自己的 step() 修改
  - input_current 是唯一可从外部写入的字段, 通过 receive() 累加

引擎内部不做任何错误检查; dt 的合法性由网络边界负责。
"""

from typing import Optional, Tuple, Union

from spikenet.errors import ConfigurationError
from spikenet.neuron.params import NeuronParameters, get_preset
from spikenet.spike.generators import SpikeGenerator
from spikenet.spike.listeners import Listeners
from spikenet.spike.signal_types import NeuronModel


class NeuronEngine:
    """Izhikevich 神经元引擎

    Attributes:
        params: 参数记录
        generator: 背景电流发生器 (每个引擎独占一个)
        model: 动力学模型 (封闭枚举, 目前只有 IZHIKEVICH)
    """

    __slots__ = (
        'params', 'generator', 'model',
        '_v', '_u', '_input_current',
        '_a', '_b', '_c', '_d', '_threshold',
    )

    def __init__(
        self,
        params: Union[NeuronParameters, str],
        generator: Optional[SpikeGenerator] = None,
        model: NeuronModel = NeuronModel.IZHIKEVICH,
    ):
        if isinstance(params, str):
            params = get_preset(params)
        elif not isinstance(params, NeuronParameters):
            raise ConfigurationError(
                f"params must be NeuronParameters or a preset name, "
                f"got {type(params).__name__}", field="params")
        try:
            self.model = NeuronModel(model)
        except ValueError:
            raise ConfigurationError(
                f"unsupported neuron model: {model!r}", field="model") from None

        self.params = params
        # 没有背景驱动时使用零幅值恒流发生器
        self.generator = (generator if generator is not None
                          else SpikeGenerator.delayed_constant(0.0))

        # 性能缓存: 避免每步属性链查找
        self._a = params.a
        self._b = params.b
        self._c = params.c
        self._d = params.d
        self._threshold = params.threshold

        self._v: float = params.v0
        self._u: float = params.u0
        self._input_current: float = 0.0

    # =========================================================================
    # 核心接口
    # =========================================================================

    def step(self, listeners: Optional[Listeners], dt: float) -> Tuple[bool, float]:
        """推进一个时间步

        Args:
            listeners: 发放时通知的回调表 (可为 None)
            dt: 时间步长, 由调用方保证为正

        Returns:
            (fired, I): 是否发放, 以及本步消耗的总输入电流
        """
        i = self.generator.step(dt) + self._input_current
        self._input_current = 0.0

        v = self._v
        u = self._u
        dv = (0.04 * (v * v)) + (5.0 * v) + 140.0 - u + i
        du = self._a * ((self._b * v) - u)
        self._v = v + dv * dt
        self._u = u + du * dt

        fired = False
        if self._v >= self._threshold:
            fired = True
            # 先通知, 再重置: 回调可以看到越阈值的 v
            if listeners is not None:
                listeners.inform()
            self._v = self._c
            self._u += self._d

        return fired, i

    def receive(self, current: float) -> None:
        """累加外部输入电流 (由突触调用), 下一次 step 时被消耗"""
        self._input_current += current

    def reset(self) -> None:
        """恢复初始状态: v0/u0, 清空输入, 发生器计时归零"""
        self._v = self.params.v0
        self._u = self.params.u0
        self._input_current = 0.0
        self.generator.reset()

    def get_membrane_potential(self) -> float:
        """当前膜电位 (模型原生单位 mV)"""
        return self._v

    # =========================================================================
    # 状态查询
    # =========================================================================

    @property
    def v(self) -> float:
        return self._v

    @property
    def u(self) -> float:
        return self._u

    @property
    def input_current(self) -> float:
        """尚未被消耗的累积输入"""
        return self._input_current

    def __repr__(self) -> str:
        return (
            f"NeuronEngine({self.model.name}, preset={self.params.name}, "
            f"v={self._v:.2f}mV, u={self._u:.2f}, "
            f"pending={self._input_current:.3f})"
        )
