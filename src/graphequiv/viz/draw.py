from __future__ import annotations

from typing import Optional

import networkx as nx
import matplotlib.pyplot as plt

from graphequiv.graph.attributed import AttributedGraph
from graphequiv.io.nxconvert import to_networkx
from graphequiv.search.isomorphism import ComparisonResult, compare
from .layouts import base_layout, mapped_layout


def draw_mapping(
    graph_a: AttributedGraph,
    graph_b: AttributedGraph,
    result: Optional[ComparisonResult] = None,
    *,
    seed: int = 7,
    node_size: int = 300,
    edge_width: float = 1.2,
    with_labels: bool = True,
    cmap: str = "tab20",
    save_path: Optional[str] = None,
) -> ComparisonResult:
    """
    Draw A and B side by side.

    If the graphs are equivalent, B is drawn in A's layout transported
    through the mapping and each mapped pair shares a color. Otherwise
    both graphs get independent layouts and are colored by attribute.

    If save_path is set, the figure is written there as PNG and closed;
    otherwise plt.show() is called.
    """
    if result is None:
        result = compare(graph_a, graph_b)

    GA = to_networkx(graph_a)
    GB = to_networkx(graph_b)

    pos_a = base_layout(GA, seed=seed)
    if result.equivalent:
        pos_b = mapped_layout(pos_a, result.mapping)
        colors_a = list(graph_a.vertices())
        inv = result.inverse()
        colors_b = [inv[w] for w in graph_b.vertices()]
    else:
        pos_b = base_layout(GB, seed=seed)
        palette = {}
        for attr in list(graph_a.attributes) + list(graph_b.attributes):
            palette.setdefault(attr, len(palette))
        colors_a = [palette[a] for a in graph_a.attributes]
        colors_b = [palette[a] for a in graph_b.attributes]

    fig, axes = plt.subplots(1, 2, figsize=(12, 6))
    axA, axB = axes

    verdict = "equivalent" if result.equivalent else f"not equivalent ({result.reason})"
    axA.set_title(f"A   |V|={graph_a.n}  |E|={graph_a.number_of_edges()}")
    axB.set_title(f"B   |V|={graph_b.n}  |E|={graph_b.number_of_edges()}   [{verdict}]")

    for ax in axes:
        ax.set_axis_off()

    for G, pos, colors, ax in ((GA, pos_a, colors_a, axA), (GB, pos_b, colors_b, axB)):
        if G.number_of_nodes() == 0:
            continue
        nx.draw_networkx(
            G,
            pos=pos,
            ax=ax,
            nodelist=list(range(G.number_of_nodes())),
            node_color=colors,
            cmap=plt.get_cmap(cmap),
            with_labels=with_labels,
            node_size=node_size,
            width=edge_width,
        )

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=200)
        plt.close(fig)
    else:
        plt.show()

    return result
