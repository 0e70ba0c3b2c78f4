from __future__ import annotations

from typing import Dict, Sequence

import networkx as nx


def base_layout(G: nx.Graph, seed: int = 7) -> Dict:
    """
    Choose a reasonable base layout:
      - planar_layout if planar
      - otherwise spring_layout
    """
    if G.number_of_nodes() == 0:
        return {}
    is_planar, _ = nx.check_planarity(G)
    if is_planar:
        return nx.planar_layout(G)
    return nx.spring_layout(G, seed=seed, iterations=300)


def mapped_layout(pos_a: Dict, mapping: Sequence[int]) -> Dict:
    """
    Transport the layout of A onto B through *mapping*, so that mapped
    vertices sit at the same coordinates in both drawings.
    """
    return {mapping[v]: xy for v, xy in pos_a.items()}
