"""
Graph view of dyno node handles.
"""

from __future__ import annotations

from typing import List

import networkx as nx

from .nodes import DynoBlock, DynoOutput, DynoValue


def _owner(node: DynoValue) -> DynoValue:
    return node.block if isinstance(node, DynoOutput) else node


def to_networkx(root: DynoValue) -> nx.DiGraph:
    """Collect every node reachable from ``root`` into a DiGraph.

    Outputs are folded into their owning block; edges run from producer to
    consumer and carry the consuming ``port`` plus the producer ``channel``
    (``None`` for leaves).
    """
    graph = nx.DiGraph()
    pending: List[DynoValue] = [_owner(root)]
    while pending:
        node = pending.pop()
        if node.id in graph and graph.nodes[node.id].get("visited"):
            continue
        graph.add_node(node.id, node=node, visited=True)
        if not isinstance(node, DynoBlock):
            continue
        for port, source in node.inputs.items():
            producer = _owner(source)
            channel = source.key if isinstance(source, DynoOutput) else None
            if producer.id not in graph:
                graph.add_node(producer.id, node=producer, visited=False)
            graph.add_edge(producer.id, node.id, port=port, channel=channel)
            pending.append(producer)
    return graph


def evaluation_order(root: DynoValue) -> List[DynoValue]:
    graph = to_networkx(root)
    return [graph.nodes[node_id]["node"] for node_id in nx.topological_sort(graph)]


__all__ = ["to_networkx", "evaluation_order"]
