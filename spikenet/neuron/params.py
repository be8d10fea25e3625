"""
Layer 2: Izhikevich 神经元参数包与 22 种预设

Izhikevich (2003) 模型:
  dv/dt = 0.04·v² + 5·v + 140 - u + I
  du/dt = a·(b·v - u)
  v ≥ 30 mV → v ← c,  u ← u + d

参数含义:
  a: 恢复变量 u 的时间尺度 (越小恢复越慢)
  b: u 对 v 亚阈值波动的敏感度
  c: 发放后膜电位重置值 (mV)
  d: 发放后 u 的跳增量
  v0, u0: 初始状态. 默认 u0 = b·v0, 只有 accomodation 显式覆盖

未被预设覆盖的字段取默认值 a=0.02, b=0.2, c=-80, v0=-70。
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from spikenet.errors import ConfigurationError


# 支持的模型变体的发放阈值 (mV)
SPIKE_THRESHOLD = 30.0


@dataclass(frozen=True)
class NeuronParameters:
    """Izhikevich 参数记录 (不可变)

    u0 缺省时由 __post_init__ 填为 b·v0。
    """
    a: float
    b: float
    c: float
    d: float
    v0: float = -70.0
    u0: Optional[float] = None
    threshold: float = SPIKE_THRESHOLD
    name: str = field(default="custom", compare=False)

    def __post_init__(self):
        if self.u0 is None:
            object.__setattr__(self, "u0", self.b * self.v0)


def _preset(name: str, a: float = 0.02, b: float = 0.2, c: float = -80.0,
            d: float = -8.0, v0: float = -70.0,
            u0: Optional[float] = None) -> NeuronParameters:
    return NeuronParameters(a=a, b=b, c=c, d=d, v0=v0, u0=u0, name=name)


# =============================================================================
# 22 种经典发放模式预设
# =============================================================================

TONIC_SPIKING = _preset("tonic_spiking", c=-65.0, d=6.0)
PHASIC_SPIKING = _preset("phasic_spiking", b=0.25, c=-65.0, d=6.0, v0=-64.0)
TONIC_BURSTING = _preset("tonic_bursting", c=-50.0, d=2.0)
PHASIC_BURSTING = _preset("phasic_bursting", b=0.25, c=-55.0, d=0.05)
MIXED_MODE = _preset("mixed_mode", c=-55.0, d=4.0)
SPIKE_FREQ_ADAPT = _preset("spike_freq_adapt", a=0.01, d=8.0, v0=-65.0)
CLASS_1_EXCIT = _preset("class_1_excit", b=-0.1, c=-55.0, d=6.0, v0=-60.0)
CLASS_2_EXCIT = _preset("class_2_excit", a=0.2, b=-0.26, c=-65.0, d=0.0,
                        v0=-64.0)
SPIKE_LATENCY = _preset("spike_latency", c=-65.0, d=6.0)
SUBTHRESHOLD_OSC = _preset("subthreshold_osc", a=0.05, b=0.26, c=-60.0,
                           d=0.0, v0=-62.0)
RESONATOR = _preset("resonator", a=0.1, b=0.26, c=-60.0, d=-1.0, v0=-62.0)
INTEGRATOR = _preset("integrator", a=0.02, b=-0.1, c=-55.0, d=6.0, v0=-60.0)
REBOUND_SPIKE = _preset("rebound_spike", a=0.03, b=0.25, c=-60.0, d=4.0,
                        v0=-64.0)
REBOUND_BURST = _preset("rebound_burst", a=0.03, b=0.25, c=-52.0, d=0.0,
                        v0=-64.0)
THRESH_VARIABILITY = _preset("thresh_variability", a=0.03, b=0.25, c=-60.0,
                             d=4.0, v0=-64.0)
BISTABILITY = _preset("bistability", a=0.1, b=0.26, c=-60.0, d=0.0, v0=-61.0)
DAP = _preset("dap", a=1.0, b=0.2, c=-60.0, d=-21.0)
ACCOMODATION = _preset("accomodation", a=0.02, b=1.0, c=-55.0, d=4.0,
                       v0=-65.0, u0=-16.0)
INH_INDUCED_SP = _preset("inh_induced_sp", a=0.02, b=-1.0, c=-60.0, d=8.0,
                         v0=-63.8)
INH_INDUCED_BRST = _preset("inh_induced_brst", a=0.026, b=-1.0, c=-45.0,
                           d=-2.0, v0=-63.8)
INTRINSICALLY_BURSTING = _preset("intrinsically_bursting", a=0.1, c=-55.0,
                                 d=4.0)
FAST_SPIKING = _preset("fast_spiking", a=0.1, b=0.3, c=-65.0, d=2.0, v0=-65.0)


PRESETS: Dict[str, NeuronParameters] = {
    p.name: p for p in (
        TONIC_SPIKING, PHASIC_SPIKING, TONIC_BURSTING, PHASIC_BURSTING,
        MIXED_MODE, SPIKE_FREQ_ADAPT, CLASS_1_EXCIT, CLASS_2_EXCIT,
        SPIKE_LATENCY, SUBTHRESHOLD_OSC, RESONATOR, INTEGRATOR,
        REBOUND_SPIKE, REBOUND_BURST, THRESH_VARIABILITY, BISTABILITY,
        DAP, ACCOMODATION, INH_INDUCED_SP, INH_INDUCED_BRST,
        INTRINSICALLY_BURSTING, FAST_SPIKING,
    )
}


def get_preset(name: str) -> NeuronParameters:
    """按名称查找预设 (大小写不敏感, 接受 'Class_1_excit' / 'DAP' 等写法)

    Raises:
        ConfigurationError: 未知预设名
    """
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return PRESETS[key]
    except KeyError:
        raise ConfigurationError(
            f"unknown neuron preset: {name!r} "
            f"(known: {', '.join(sorted(PRESETS))})",
            field="preset",
        ) from None
