"""Shared fixtures for the NodeRank benchmark suite.

Synthetic graph topology
------------------------
2 node types: page, tag — each with ``nodes_per_type`` nodes.
3 relationship types:

    (page, links_to, page)
    (page, tagged, tag)
    (tag, lists, page)     keeps walks from dead-ending on tags

All relationships are random (uniform src/dst sampling) with a fixed seed
for reproducibility.
"""

import pytest
import torch
from torch_geometric.data import HeteroData

from noderank.graph import PropertyGraph

GRAPH_PROFILES = {
    "small": {"nodes_per_type": 500, "avg_degree": 10, "seed": 0},
    "medium": {"nodes_per_type": 5_000, "avg_degree": 10, "seed": 0},
}

EDGE_TYPES = [
    ("page", "links_to", "page"),
    ("page", "tagged", "tag"),
    ("tag", "lists", "page"),
]


def make_synthetic_hetero_data(
    nodes_per_type: int,
    avg_degree: int,
    seed: int,
) -> HeteroData:
    """Create a random HeteroData with 2 node types and 3 edge types.

    Parameters
    ----------
    nodes_per_type : int
        Number of nodes for each node type.
    avg_degree : int
        Average out-degree per node per edge type.
    seed : int
        Random seed for reproducibility.

    Returns
    -------
    HeteroData
        A PyG HeteroData object ready for PropertyGraph conversion.
    """
    gen = torch.Generator().manual_seed(seed)
    n = nodes_per_type
    data = HeteroData()
    for node_type in ("page", "tag"):
        data[node_type].num_nodes = n
    for src, rel, dst in EDGE_TYPES:
        n_edges = n * avg_degree
        src_idx = torch.randint(0, n, (n_edges,), generator=gen)
        dst_idx = torch.randint(0, n, (n_edges,), generator=gen)
        data[src, rel, dst].edge_index = torch.stack([src_idx, dst_idx])
    return data


@pytest.fixture(scope="session", params=["small", "medium"])
def graph(request) -> PropertyGraph:
    """Session-scoped PropertyGraph parametrised by size (small/medium)."""
    return PropertyGraph.from_hetero_data(make_synthetic_hetero_data(**GRAPH_PROFILES[request.param]))


@pytest.fixture(scope="session")
def small_hetero_data() -> HeteroData:
    """Session-scoped small HeteroData (500 nodes/type)."""
    return make_synthetic_hetero_data(**GRAPH_PROFILES["small"])
