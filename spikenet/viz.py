"""
spikenet Visualization Tools

Membrane-potential traces, v-u phase portraits and network connectivity
graphs for recorded simulations.
"""

import logging

import numpy as np
import matplotlib.pyplot as plt
import networkx as nx


logger = logging.getLogger(__name__)


# =============================================================================
# Membrane potential / input current traces
# =============================================================================
def plot_traces(recorder, dt, names=None, nodes=None, figsize=(14, 5),
                save_path=None):
    """
    Plot membrane potential (left axis) and input current (right axis)
    for each node, one panel per node.

    Args:
        recorder: TraceRecorder with recorded ticks
        dt: time step (ms), used for the x-axis
        names: optional list of panel titles, indexed by node
        nodes: node indices to plot (default: all)
        figsize: figure size
        save_path: if provided, save figure to this path
    """
    if nodes is None:
        nodes = list(range(recorder.n_nodes))
    t = recorder.time_axis(dt)

    fig, axes = plt.subplots(1, len(nodes), figsize=figsize, squeeze=False)
    for ax, node in zip(axes[0], nodes):
        title = names[node] if names is not None else f'n{node}'
        ax.plot(t, recorder.potential[:, node], color='red', lw=0.8,
                label='membrane potential')
        ax.set_ylim(-110, 50)
        ax.set_xlabel('ms')
        ax.set_ylabel('potential (mV)')
        ax.set_title(title)

        ax2 = ax.twinx()
        ax2.plot(t, recorder.current[:, node], color='blue', lw=0.6,
                 label='incoming current')
        ax2.set_ylim(-100, 100)

        lines = ax.get_lines() + ax2.get_lines()
        ax.legend(lines, [ln.get_label() for ln in lines],
                  loc='upper right', fontsize=7)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info('Saved: %s', save_path)
    return fig


# =============================================================================
# v-u phase portrait
# =============================================================================
def plot_phase(recorder, node=0, figsize=(6, 5), save_path=None):
    """
    Plot the v-u phase trajectory of a single node.
    """
    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(recorder.potential[:, node], recorder.recovery[:, node],
            color='red', lw=0.8, label='v, u phase')
    ax.set_xlabel('v')
    ax.set_ylabel('u')
    ax.legend(loc='upper right', fontsize=7)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info('Saved: %s', save_path)
    return fig


# =============================================================================
# Network connectivity graph
# =============================================================================
def network_graph(network):
    """
    Build a networkx DiGraph from a Network. Node attributes: name, preset,
    spikes. Edge attributes: max_current, time_factor.
    """
    G = nx.DiGraph()
    for node in network.nodes:
        G.add_node(node.index, name=node.name,
                   preset=node.engine.params.name,
                   spikes=node.spike_train.count)
    for syn in network.synapses:
        G.add_edge(syn.source, syn.target, max_current=syn.max_current,
                   time_factor=syn.time_factor)
    return G


def plot_connectivity(network, figsize=(8, 6), save_path=None):
    """
    Draw the synapse graph. Node size scales with spike count, edge width
    with peak synaptic current.
    """
    G = network_graph(network)
    fig, ax = plt.subplots(figsize=figsize)

    pos = nx.circular_layout(G) if len(G) else {}
    spikes = np.array([G.nodes[n]['spikes'] for n in G.nodes], dtype=float)
    sizes = 300 + 30 * np.sqrt(spikes) if len(spikes) else []
    widths = [0.5 + abs(d['max_current']) / 15.0
              for _, _, d in G.edges(data=True)]

    nx.draw_networkx_nodes(G, pos, ax=ax, node_size=sizes,
                           node_color='#2196F3', alpha=0.85)
    nx.draw_networkx_edges(G, pos, ax=ax, width=widths, arrows=True,
                           edge_color='#555555', connectionstyle='arc3,rad=0.1')
    nx.draw_networkx_labels(G, pos, ax=ax, font_size=8,
                            labels={n: G.nodes[n]['name'] for n in G.nodes})
    ax.set_axis_off()
    ax.set_title('spikenet connectivity')

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info('Saved: %s', save_path)
    return fig
