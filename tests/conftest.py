"""Shared fixtures for NodeRank tests."""

import pytest
import torch
from torch_geometric.data import HeteroData

from noderank.graph import Node, PropertyGraph
from noderank.module import build_walk_engine
from noderank.walk import WalkConfig, WalkEngine


@pytest.fixture
def chain_graph() -> tuple[PropertyGraph, Node, Node, Node]:
    """Create the three-node chain A -> B -> C.

    C has no outgoing relationships, so a walk reaching it dead-ends.
    """
    graph = PropertyGraph()
    a = graph.add_node()
    b = graph.add_node()
    c = graph.add_node()
    graph.add_relationship(a, b, "next")
    graph.add_relationship(b, c, "next")
    return graph, a, b, c


@pytest.fixture
def cycle_graph() -> PropertyGraph:
    """Create a directed 4-cycle 0 -> 1 -> 2 -> 3 -> 0 with no dead ends."""
    graph = PropertyGraph()
    nodes = [graph.add_node() for _ in range(4)]
    for i, node in enumerate(nodes):
        graph.add_relationship(node, nodes[(i + 1) % len(nodes)], "next")
    return graph


@pytest.fixture
def complete_graph() -> PropertyGraph:
    """Create a complete directed graph on 5 nodes (no self-loops)."""
    graph = PropertyGraph()
    nodes = [graph.add_node() for _ in range(5)]
    for src in nodes:
        for dst in nodes:
            if src != dst:
                graph.add_relationship(src, dst, "link")
    return graph


@pytest.fixture
def simple_hetero_data() -> HeteroData:
    """Create a small synthetic heterogeneous graph.

    Graph structure (5 persons, 3 cities):

    Person -[lives_in]-> City:
        0 -> 0, 0 -> 1, 1 -> 1, 2 -> 2, 3 -> 0, 4 -> 2

    Person -[knows]-> Person:
        0 -> 1, 1 -> 2, 2 -> 3, 3 -> 4, 4 -> 0

    City -[near]-> City:
        0 -> 1, 1 -> 2, 2 -> 0
    """
    data = HeteroData()
    data["person"].num_nodes = 5
    data["city"].num_nodes = 3

    data["person", "lives_in", "city"].edge_index = torch.tensor(
        [[0, 0, 1, 2, 3, 4], [0, 1, 1, 2, 0, 2]], dtype=torch.long
    )
    data["person", "knows", "person"].edge_index = torch.tensor(
        [[0, 1, 2, 3, 4], [1, 2, 3, 4, 0]], dtype=torch.long
    )
    data["city", "near", "city"].edge_index = torch.tensor(
        [[0, 1, 2], [1, 2, 0]], dtype=torch.long
    )
    return data


@pytest.fixture
def simple_graph(simple_hetero_data: HeteroData) -> PropertyGraph:
    """Create a PropertyGraph from the simple synthetic data."""
    return PropertyGraph.from_hetero_data(simple_hetero_data)


@pytest.fixture
def engine() -> WalkEngine:
    """Create a seeded engine that includes every node and relationship."""
    return build_walk_engine(WalkConfig(seed=0))
