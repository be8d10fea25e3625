"""
SpikeTrain 验证测试

Case 1: 计数与滑动窗口 — count 为累计值, 窗口只保留最近 capacity 条
Case 2: 发放率 — 窗口覆盖全部历史时使用累计计数
Case 3: ISI — 相邻发放间隔按 dt 换算为 ms
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest

from spikenet.spike import SpikeTrain


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def test_case_1_count_and_window():
    """超出 capacity 后旧记录被淘汰, count 仍为累计值"""
    st = SpikeTrain(node_id=3, capacity=10)
    assert st.last_spike_tick is None
    for t in range(100):
        st.record(t)

    assert st.count == 100
    assert len(st) == 10
    assert st.ticks == list(range(90, 100))
    assert st.last_spike_tick == 99

    st.clear()
    assert st.count == 0 and st.last_spike_tick is None


def test_case_2_rate_over_full_history():
    """窗口覆盖全部历史 → 用累计计数, 不受 capacity 截断影响"""
    print_header("Case 2: 全程发放率")

    st = SpikeTrain(node_id=0, capacity=10)
    for t in range(100):
        st.record(t)

    rate = st.firing_rate(1.0, 100)
    print(f"  100 次发放 / 100 ms → {rate:.1f} Hz")
    assert rate == pytest.approx(100 * 1000.0 / 100)
    assert st.firing_rate(1.0, 1000) == pytest.approx(100 * 1000.0 / 1000)

    # 窗口落在保留区间内: 只统计窗口内的记录
    assert st.firing_rate(1.0, 5) == pytest.approx(5 * 1000.0 / 5)
    assert st.firing_rate(1.0, 0) == 0.0


def test_case_3_interspike_intervals():
    """ISI = diff(ticks) · dt"""
    st = SpikeTrain(node_id=0)
    assert st.interspike_intervals(0.1).size == 0

    for t in (3, 10, 30, 31):
        st.record(t)
    isi = st.interspike_intervals(0.1)
    assert np.allclose(isi, [0.7, 2.0, 0.1])
