"""
Layer 0: SpikeGenerator — 外源背景电流发生器

每个神经元拥有一个发生器, 每个时间步调用一次 step(dt) 得到注入电流。

三种变体 (GeneratorType):
  STOCHASTIC:       P(发放) = p,  I ~ U[0, scale)        否则 I = 0
  DELAYED_CONSTANT: I = magnitude  当 counter > onset   否则 I = 0
  SINGLE_PULSE:     I = magnitude  当 |counter - pos| < width * dt

注意 SINGLE_PULSE 的窗口宽度是 width * dt, 即窗口随 dt 缩放。
这是参考数值行为的一部分, 不要"修正"。

两个确定性变体的 counter 每次 step 都前进 dt, 与是否输出无关;
判定使用前进之前的 counter。
"""

import math
from typing import Optional

import numpy as np

from spikenet.errors import ConfigurationError
from spikenet.spike.signal_types import GeneratorType


# 参考实现中 DELAYED_CONSTANT 的默认起始阈值 (时间单位)
DEFAULT_ONSET = 0.01

# 参考实现中 STOCHASTIC 的默认电流尺度
DEFAULT_STOCHASTIC_SCALE = 1e-9


class SpikeGenerator:
    """背景电流发生器 (封闭变体, 以 kind 标签分派)

    推荐使用类方法构造:
        SpikeGenerator.stochastic(p=0.05, seed=42)
        SpikeGenerator.delayed_constant(10.0)
        SpikeGenerator.single_pulse(14.0, width=100.0, pos=10.0)

    Attributes:
        kind: 变体类型
        magnitude: 固定输出幅值 (确定性变体)
        counter: 已流逝时间
    """

    __slots__ = (
        'kind', 'magnitude', 'onset', 'width', 'pos',
        'probability', 'scale', 'counter', '_rng',
    )

    def __init__(
        self,
        kind: GeneratorType,
        magnitude: float = 0.0,
        onset: float = DEFAULT_ONSET,
        width: float = 0.0,
        pos: float = 0.0,
        probability: float = 0.0,
        scale: float = DEFAULT_STOCHASTIC_SCALE,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        try:
            self.kind = GeneratorType(kind)
        except ValueError:
            raise ConfigurationError(
                f"unknown generator kind: {kind!r}", field="kind") from None

        if self.kind == GeneratorType.STOCHASTIC:
            if not 0.0 <= probability <= 1.0:
                raise ConfigurationError(
                    f"probability must be in [0, 1], got {probability}",
                    field="probability")
            if not scale >= 0.0:
                raise ConfigurationError(
                    f"scale must be >= 0, got {scale}", field="scale")
        if self.kind == GeneratorType.SINGLE_PULSE and not width >= 0.0:
            raise ConfigurationError(
                f"width must be >= 0, got {width}", field="width")
        if not math.isfinite(magnitude):
            raise ConfigurationError(
                f"magnitude must be finite, got {magnitude}", field="magnitude")
        for name, value in (("onset", onset), ("width", width), ("pos", pos)):
            if not math.isfinite(value):
                raise ConfigurationError(
                    f"{name} must be finite, got {value}", field=name)

        self.magnitude = float(magnitude)
        self.onset = float(onset)
        self.width = float(width)
        self.pos = float(pos)
        self.probability = float(probability)
        self.scale = float(scale)
        self.counter: float = 0.0

        # 只有随机变体需要随机源; 可注入以便测试复现
        if self.kind == GeneratorType.STOCHASTIC:
            self._rng = rng if rng is not None else np.random.default_rng(seed)
        else:
            self._rng = None

    # =========================================================================
    # 构造快捷方式
    # =========================================================================

    @classmethod
    def stochastic(
        cls,
        probability: float,
        scale: float = DEFAULT_STOCHASTIC_SCALE,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ) -> 'SpikeGenerator':
        """随机背景: 每步以 probability 概率输出 U[0, scale)"""
        return cls(GeneratorType.STOCHASTIC, probability=probability,
                   scale=scale, rng=rng, seed=seed)

    @classmethod
    def delayed_constant(
        cls, magnitude: float, onset: float = DEFAULT_ONSET,
    ) -> 'SpikeGenerator':
        """延迟恒流: counter 超过 onset 后持续输出 magnitude"""
        return cls(GeneratorType.DELAYED_CONSTANT, magnitude=magnitude,
                   onset=onset)

    @classmethod
    def single_pulse(
        cls, magnitude: float, width: float, pos: float,
    ) -> 'SpikeGenerator':
        """单脉冲: counter 距 pos 小于 width*dt 时输出 magnitude"""
        return cls(GeneratorType.SINGLE_PULSE, magnitude=magnitude,
                   width=width, pos=pos)

    # =========================================================================
    # 核心接口
    # =========================================================================

    def step(self, dt: float) -> float:
        """推进一个时间步, 返回本步注入电流"""
        kind = self.kind

        if kind == GeneratorType.STOCHASTIC:
            rng = self._rng
            if rng.random() < self.probability:
                return float(rng.random()) * self.scale
            return 0.0

        i = 0.0
        if kind == GeneratorType.DELAYED_CONSTANT:
            if self.counter > self.onset:
                i = self.magnitude
        else:
            if abs(self.counter - self.pos) < self.width * dt:
                i = self.magnitude
        self.counter += dt
        return i

    def reset(self) -> None:
        """计时器归零 (随机源状态不回滚)"""
        self.counter = 0.0

    @property
    def is_deterministic(self) -> bool:
        return self.kind.is_deterministic

    def __repr__(self) -> str:
        if self.kind == GeneratorType.STOCHASTIC:
            detail = f"p={self.probability}, scale={self.scale:g}"
        elif self.kind == GeneratorType.DELAYED_CONSTANT:
            detail = f"mag={self.magnitude}, onset={self.onset}"
        else:
            detail = f"mag={self.magnitude}, width={self.width}, pos={self.pos}"
        return (f"SpikeGenerator({self.kind.name}, {detail}, "
                f"t={self.counter:.2f})")
