"""
Izhikevich 神经元引擎验证测试

Case 1: 预设参数 — 22 种预设, u0 = b·v0 (accomodation 除外)
Case 2: 单步 Euler 更新与输入电流消耗
Case 3: 阈值穿越 — tonic_spiking + 强恒流 1000 步内必定发放
Case 4: 重置不变量 — 发放后 v = c, u = u_euler + d
Case 5: 无输入静息 — 4000 步不发散, 不产生 NaN
Case 6: 确定性 — 相同参数与 dt 序列, 轨迹逐位相同
Case 7: 发放回调在重置之前调用
Case 8: reset() 恢复初始状态
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import math

import numpy as np
import pytest

from spikenet.errors import ConfigurationError
from spikenet.neuron import NeuronEngine, NeuronParameters, PRESETS, get_preset
from spikenet.neuron.params import ACCOMODATION, TONIC_SPIKING
from spikenet.spike import Listeners, SpikeGenerator


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def run_engine(engine: NeuronEngine, n_ticks: int, dt: float = 0.1,
               listeners: Listeners = None):
    """运行单个引擎, 返回 (v 轨迹, u 轨迹, 发放 tick 列表)"""
    vs, us, spikes = [], [], []
    for t in range(n_ticks):
        fired, _ = engine.step(listeners, dt)
        vs.append(engine.v)
        us.append(engine.u)
        if fired:
            spikes.append(t)
    return np.array(vs), np.array(us), spikes


# =============================================================================
# Case 1: 预设
# =============================================================================

def test_case_1_presets():
    """22 种预设齐全, 初始恢复变量满足 u0 = b·v0"""
    print_header("Case 1: 预设参数")

    assert len(PRESETS) == 22, f"期望 22 种预设, 得到 {len(PRESETS)}"
    for name, p in PRESETS.items():
        if p is ACCOMODATION:
            continue
        assert p.u0 == p.b * p.v0, f"{name}: u0={p.u0} != b*v0={p.b * p.v0}"
        assert p.threshold == 30.0

    assert ACCOMODATION.u0 == -16.0, "accomodation 的 u0 应被显式覆盖为 -16"

    tonic = get_preset("tonic_spiking")
    assert (tonic.a, tonic.b, tonic.c, tonic.d, tonic.v0) == \
        (0.02, 0.2, -65.0, 6.0, -70.0)

    # 原始写法也能查到
    assert get_preset("Class_1_excit") is get_preset("class_1_excit")
    assert get_preset("DAP").a == 1.0
    print(f"  ✅ PASS: {len(PRESETS)} 种预设")


def test_case_1b_unknown_preset():
    """未知预设名在构造时失败, 错误带字段名"""
    with pytest.raises(ConfigurationError) as exc_info:
        NeuronEngine("no_such_pattern")
    assert exc_info.value.field == "preset"
    assert "no_such_pattern" in str(exc_info.value)

    with pytest.raises(ConfigurationError):
        NeuronEngine(42)


# =============================================================================
# Case 2: 单步更新
# =============================================================================

def test_case_2_single_euler_step():
    """一步前向 Euler, 两个导数都用更新前的状态; input_current 被清零"""
    print_header("Case 2: 单步 Euler 更新")

    p = get_preset("tonic_spiking")
    engine = NeuronEngine(p, SpikeGenerator.delayed_constant(0.0))
    engine.receive(2.0)
    engine.receive(1.5)
    assert engine.input_current == 3.5

    dt = 0.1
    v, u, i = p.v0, p.u0, 3.5
    dv = 0.04 * (v * v) + 5.0 * v + 140.0 - u + i
    du = p.a * (p.b * v - u)

    fired, current = engine.step(None, dt)
    print(f"  v: {v} → {engine.v}, u: {u} → {engine.u}, I={current}")

    assert not fired
    assert current == 3.5, f"返回的电流应为更新前总电流 3.5, 得到 {current}"
    assert engine.v == pytest.approx(v + dv * dt, rel=1e-12)
    assert engine.u == pytest.approx(u + du * dt, rel=1e-12)
    assert engine.input_current == 0.0, "step 后 input_current 应清零"
    assert engine.get_membrane_potential() == engine.v


# =============================================================================
# Case 3: 阈值穿越
# =============================================================================

def test_case_3_threshold_crossing():
    """tonic_spiking + 恒流 14 → 1000 步 (dt=0.1) 内至少发放一次"""
    print_header("Case 3: 阈值穿越")

    engine = NeuronEngine(TONIC_SPIKING, SpikeGenerator.delayed_constant(14.0))
    _, _, spikes = run_engine(engine, 1000, dt=0.1)
    print(f"  发放 {len(spikes)} 次, 首次 tick={spikes[0] if spikes else None}")
    assert len(spikes) >= 1, "强恒流驱动下应至少发放一次"


# =============================================================================
# Case 4: 重置不变量
# =============================================================================

def test_case_4_reset_invariant():
    """每次发放后 v = c, u = (Euler 更新后的 u) + d"""
    print_header("Case 4: 重置不变量")

    p = get_preset("tonic_spiking")
    engine = NeuronEngine(p, SpikeGenerator.delayed_constant(14.0))
    dt = 0.1
    n_spikes = 0

    for _ in range(3000):
        v, u = engine.v, engine.u
        fired, _ = engine.step(None, dt)
        if fired:
            n_spikes += 1
            u_euler = u + p.a * ((p.b * v) - u) * dt
            assert engine.v == p.c, f"发放后 v 应为 c={p.c}, 得到 {engine.v}"
            assert engine.u == pytest.approx(u_euler + p.d, rel=1e-12), \
                f"发放后 u 应为 {u_euler + p.d}, 得到 {engine.u}"

    print(f"  检查了 {n_spikes} 次发放")
    assert n_spikes > 5, "应产生多次发放以覆盖不变量"


# =============================================================================
# Case 5: 无输入静息
# =============================================================================

@pytest.mark.parametrize("preset", ["tonic_spiking", "phasic_spiking",
                                    "spike_latency"])
def test_case_5_quiescence(preset):
    """零输入 4000 步: 有界、无 NaN、不发放, 停在静息不动点附近"""
    print_header(f"Case 5: 无输入静息 ({preset})")

    engine = NeuronEngine(preset, SpikeGenerator.delayed_constant(0.0))
    vs, us, spikes = run_engine(engine, 4000, dt=0.1)

    assert np.all(np.isfinite(vs)) and np.all(np.isfinite(us)), "出现 NaN/inf"
    assert not spikes, f"零输入不应发放, 得到 {len(spikes)} 次"
    assert vs.max() < 30.0 and vs.min() > -100.0, \
        f"v 越界: [{vs.min():.2f}, {vs.max():.2f}]"

    # 最后 1000 步几乎不再变化
    drift = np.abs(np.diff(vs[-1000:])).max()
    print(f"  final v={vs[-1]:.3f} mV, 尾段最大漂移={drift:.2e}")
    assert drift < 1e-3, f"尾段仍在漂移: {drift}"


# =============================================================================
# Case 6: 确定性
# =============================================================================

@pytest.mark.parametrize("make_generator", [
    lambda: SpikeGenerator.delayed_constant(10.0),
    lambda: SpikeGenerator.single_pulse(14.0, width=100.0, pos=10.0),
])
def test_case_6_determinism(make_generator):
    """相同参数 + 相同 dt 序列 → 轨迹逐位相同"""
    print_header("Case 6: 确定性")

    dts = [0.1] * 1500 + [0.05] * 500 + [0.2] * 500
    a = NeuronEngine("phasic_spiking", make_generator())
    b = NeuronEngine("phasic_spiking", make_generator())
    for dt in dts:
        fa, ia = a.step(None, dt)
        fb, ib = b.step(None, dt)
        assert (fa, ia) == (fb, ib)
        assert a.v == b.v and a.u == b.u, "轨迹应逐位相同"
    print(f"  {len(dts)} 步轨迹完全一致")


# =============================================================================
# Case 7: 回调时机
# =============================================================================

def test_case_7_listeners_before_reset():
    """发放回调在 reset 之前同步调用, 能看到越阈值的 v"""
    print_header("Case 7: 回调在重置之前")

    engine = NeuronEngine(TONIC_SPIKING, SpikeGenerator.delayed_constant(14.0))
    seen = []
    listeners = Listeners()
    listeners.add(lambda: seen.append(engine.v))

    _, _, spikes = run_engine(engine, 1000, listeners=listeners)

    assert len(seen) == len(spikes), "每次发放恰好通知一次"
    assert all(v >= 30.0 for v in seen), f"回调应看到 v ≥ 30, 得到 {seen[:3]}"
    print(f"  {len(seen)} 次通知, 首次 v={seen[0]:.2f}")


# =============================================================================
# Case 8: reset()
# =============================================================================

def test_case_8_engine_reset():
    """reset() 恢复 v0/u0, 清空输入, 发生器计时归零"""
    p = NeuronParameters(a=0.02, b=0.2, c=-65.0, d=6.0, v0=-70.0)
    engine = NeuronEngine(p, SpikeGenerator.delayed_constant(14.0))
    run_engine(engine, 500)
    engine.receive(5.0)
    engine.reset()

    assert engine.v == -70.0
    assert engine.u == pytest.approx(-14.0)
    assert engine.input_current == 0.0
    assert engine.generator.counter == 0.0

    # 重置后的轨迹与全新引擎一致
    fresh = NeuronEngine(p, SpikeGenerator.delayed_constant(14.0))
    for _ in range(200):
        engine.step(None, 0.1)
        fresh.step(None, 0.1)
    assert engine.v == fresh.v and engine.u == fresh.u
    assert math.isfinite(engine.v)


if __name__ == "__main__":
    test_case_1_presets()
    test_case_1b_unknown_preset()
    test_case_2_single_euler_step()
    test_case_3_threshold_crossing()
    test_case_4_reset_invariant()
    test_case_5_quiescence("tonic_spiking")
    test_case_6_determinism(lambda: SpikeGenerator.delayed_constant(10.0))
    test_case_7_listeners_before_reset()
    test_case_8_engine_reset()
    print("\n🎉 所有测试通过!")
