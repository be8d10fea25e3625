"""
双神经元演示实验

  n1: phasic_spiking,         延迟恒流驱动 (默认 10.0)
  n2: intrinsically_bursting, 无背景驱动, 只接收 n1 → n2 突触 (30.0, τ=3.0)
  n3: tonic_spiking,          无驱动, 不连接 (静息对照)

运行 4000 步 (dt=0.1), 记录膜电位/输入电流轨迹, 输出各节点发放统计,
可选保存轨迹图、n1 相图和连接图。

运行方式: python experiments/two_neuron_demo.py --save traces.png
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from spikenet import (
    Network,
    NeuronEngine,
    SimulationConfig,
    SpikeGenerator,
    TraceRecorder,
    get_preset,
)


logger = logging.getLogger(__name__)


def build_network(drive: float = 10.0, preset: str = "phasic_spiking",
                  background_p: float = 0.0, seed=None) -> Network:
    """构建演示网络"""
    if background_p > 0.0:
        sg = SpikeGenerator.stochastic(background_p, seed=seed)
    else:
        sg = SpikeGenerator.delayed_constant(drive)

    net = Network()
    n1 = net.add_node(NeuronEngine(get_preset(preset), sg), name="n1")
    n2 = net.add_node(
        NeuronEngine("intrinsically_bursting",
                     SpikeGenerator.delayed_constant(0.0)), name="n2")
    net.add_node(
        NeuronEngine("tonic_spiking",
                     SpikeGenerator.delayed_constant(0.0)), name="n3")

    net.connect(n1, n2, max_current=30.0, time_factor=3.0)
    net.add_listener(n1, lambda: logger.debug("fired n1"))
    net.add_listener(n2, lambda: logger.debug("fired n2"))
    return net


def run_demo(config: SimulationConfig, drive: float = 10.0,
             preset: str = "phasic_spiking", background_p: float = 0.0,
             save_path=None):
    """运行演示并返回 (network, recorder)"""
    net = build_network(drive, preset, background_p, config.seed)
    rec = TraceRecorder(n_nodes=len(net), capacity=config.n_ticks)
    rec.attach(net)

    total = net.run(config.n_ticks, config.dt)

    print(f"\n{'=' * 60}")
    print(f"  {preset} → intrinsically_bursting, "
          f"{config.n_ticks} ticks @ dt={config.dt}")
    print(f"{'=' * 60}")
    rates = net.firing_rates(config.dt)
    for node in net.nodes:
        print(f"  {node.name}: {node.spike_train.count:4d} spikes, "
              f"{rates[node.index]:6.1f} Hz, "
              f"final v={node.get_potential():7.2f} mV")
    print(f"  total spikes: {total}")

    if save_path:
        from spikenet import viz
        root, ext = os.path.splitext(save_path)
        viz.plot_traces(rec, config.dt, names=[n.name for n in net.nodes],
                        save_path=save_path)
        viz.plot_phase(rec, node=0, save_path=f"{root}_phase{ext or '.png'}")
        viz.plot_connectivity(net, save_path=f"{root}_graph{ext or '.png'}")

    return net, rec


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description='双神经元演示实验')
    parser.add_argument('--ticks', type=int, default=4000, help='仿真步数')
    parser.add_argument('--dt', type=float, default=0.1, help='时间步长 (ms)')
    parser.add_argument('--preset', default='phasic_spiking',
                        help='n1 的 Izhikevich 预设')
    parser.add_argument('--drive', type=float, default=10.0,
                        help='n1 延迟恒流幅值')
    parser.add_argument('--background-p', type=float, default=0.0,
                        help='>0 时改用随机背景电流 (每步发放概率)')
    parser.add_argument('--seed', type=int, default=None, help='随机种子')
    parser.add_argument('--save', default=None, help='轨迹图输出路径')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='输出每次发放的 DEBUG 日志')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    run_demo(
        SimulationConfig(dt=args.dt, n_ticks=args.ticks, seed=args.seed),
        drive=args.drive,
        preset=args.preset,
        background_p=args.background_p,
        save_path=args.save,
    )
