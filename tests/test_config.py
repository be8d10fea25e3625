"""
SimulationConfig 验证测试
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from spikenet.config import SimulationConfig, validate_dt
from spikenet.errors import ConfigurationError, NumericPreconditionError


def test_case_1_defaults():
    """参考值: dt=0.1, 4000 步"""
    cfg = SimulationConfig()
    assert cfg.dt == 0.1 and cfg.n_ticks == 4000 and cfg.seed is None
    assert cfg.duration == pytest.approx(400.0)


def test_case_2_from_dict():
    cfg = SimulationConfig.from_dict({"dt": 0.05, "n_ticks": 100, "seed": 3})
    assert (cfg.dt, cfg.n_ticks, cfg.seed) == (0.05, 100, 3)

    with pytest.raises(ConfigurationError) as exc_info:
        SimulationConfig.from_dict({"dt": 0.1, "steps": 10})
    assert exc_info.value.field == "steps"


@pytest.mark.parametrize("kwargs", [
    {"dt": 0.0},
    {"dt": -1.0},
    {"dt": float("nan")},
    {"dt": "fast"},
    {"n_ticks": -5},
    {"n_ticks": 2.5},
])
def test_case_3_invalid_values(kwargs):
    """非法 dt / n_ticks 在构造时失败"""
    with pytest.raises(NumericPreconditionError):
        SimulationConfig(**kwargs)


def test_case_4_validate_dt():
    assert validate_dt(1) == 1.0
    with pytest.raises(ValueError):
        validate_dt(0)
