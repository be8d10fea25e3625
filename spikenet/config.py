"""
仿真运行配置

SimulationConfig 是一次仿真运行的参数包 (时间步长、步数、随机种子)。
参数在构造时校验, 非法值立即失败, 不会进入仿真循环。

参考值: dt = 0.1 (ms), n_ticks = 4000。
"""

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from spikenet.errors import ConfigurationError, NumericPreconditionError


DEFAULT_DT = 0.1
DEFAULT_N_TICKS = 4000


def validate_dt(dt: float) -> float:
    """检查时间步长为正且有限

    Raises:
        NumericPreconditionError: dt 非数值、非正或非有限
    """
    try:
        value = float(dt)
    except (TypeError, ValueError):
        raise NumericPreconditionError(f"dt must be a number, got {dt!r}") from None
    if not math.isfinite(value) or value <= 0.0:
        raise NumericPreconditionError(f"dt must be positive and finite, got {dt}")
    return value


def validate_n_ticks(n_ticks: int) -> int:
    """检查步数为非负整数"""
    if isinstance(n_ticks, bool) or not isinstance(n_ticks, int):
        raise NumericPreconditionError(
            f"n_ticks must be an int, got {type(n_ticks).__name__}")
    if n_ticks < 0:
        raise NumericPreconditionError(f"n_ticks must be >= 0, got {n_ticks}")
    return n_ticks


@dataclass
class SimulationConfig:
    """仿真运行参数

    Attributes:
        dt: 时间步长 (ms)
        n_ticks: 仿真步数
        seed: 随机发生器种子 (None = 不固定)
    """
    dt: float = DEFAULT_DT
    n_ticks: int = DEFAULT_N_TICKS
    seed: Optional[int] = None

    def __post_init__(self):
        self.dt = validate_dt(self.dt)
        self.n_ticks = validate_n_ticks(self.n_ticks)

    @property
    def duration(self) -> float:
        """总仿真时长 (ms)"""
        return self.dt * self.n_ticks

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SimulationConfig':
        """从映射构造, 拒绝未知键

        Raises:
            ConfigurationError: 出现未知字段
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigurationError(
                    f"unknown simulation config field: {key!r}", field=key)
        return cls(**dict(data))
