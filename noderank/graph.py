"""Graph store contract and a thread-safe in-memory property graph."""

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, Self

import torch
from torch import Tensor
from torch_geometric.data import HeteroData

from ._logging import get_logger
from .exceptions import NodeNotFoundError, RelationshipNotFoundError

logger = get_logger(__name__)

DEFAULT_NODE_TYPE: str = "node"


@dataclass(frozen=True, slots=True)
class Node:
    """A node reference handed out by a graph store.

    Parameters
    ----------
    node_id : int
        Store-wide unique identifier.
    node_type : str
        Label of the node, used by type-based inclusion filters.
    """

    node_id: int
    node_type: str = DEFAULT_NODE_TYPE


@dataclass(frozen=True, slots=True)
class Relationship:
    """A directed relationship between two nodes.

    Parameters
    ----------
    rel_id : int
        Store-wide unique identifier.
    start_id : int
        Id of the node the relationship leaves.
    end_id : int
        Id of the node the relationship points to.
    rel_type : str
        Relationship type.
    """

    rel_id: int
    start_id: int
    end_id: int
    rel_type: str

    def other_node_id(self, node_id: int) -> int:
        """Return the endpoint opposite to ``node_id``.

        Raises
        ------
        ValueError
            If ``node_id`` is not an endpoint of this relationship.
        """
        if node_id == self.start_id:
            return self.end_id
        if node_id == self.end_id:
            return self.start_id
        raise ValueError(f"Node {node_id} is not an endpoint of relationship {self.rel_id}")


class GraphStore(Protocol):
    """Operations the walk engine and selectors need from a graph store.

    Implementations must tolerate concurrent callers. ``increment_rank``
    in particular must be atomic per node.
    """

    def get_node(self, node_id: int) -> Node:
        """Return the node with ``node_id`` or raise ``NodeNotFoundError``."""
        ...

    def all_nodes(self) -> Sequence[Node]:
        """Return a snapshot of every node in the store."""
        ...

    def outgoing_relationships(self, node: Node) -> Sequence[Relationship]:
        """Return a snapshot of relationships starting at ``node``."""
        ...

    def get_rank(self, node: Node) -> int:
        """Return the rank counter of ``node``, ``0`` if never incremented."""
        ...

    def increment_rank(self, node: Node) -> int:
        """Atomically add one to the rank of ``node`` and return the new value."""
        ...


class PropertyGraph:
    """In-memory directed multigraph with a rank counter per node.

    All reads and writes go through one re-entrant lock, so enumeration
    returns consistent snapshots and rank increments never lose updates
    when several walkers share the graph. Self-loops and parallel
    relationships are allowed.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._nodes: dict[int, Node] = {}
        self._relationships: dict[int, Relationship] = {}
        self._outgoing: dict[int, dict[int, Relationship]] = {}
        self._incoming: dict[int, dict[int, Relationship]] = {}
        self._ranks: dict[int, int] = {}
        self._next_node_id = 0
        self._next_rel_id = 0

    @classmethod
    def from_hetero_data(cls, data: HeteroData) -> Self:
        """Build a graph from a PyG heterogeneous graph.

        Every ``(node_type, index)`` pair becomes one node and every column
        of an ``edge_index`` becomes one relationship whose type is the
        relation name of the edge type. Graphs without edges are accepted.

        Parameters
        ----------
        data : HeteroData
            Source graph.

        Returns
        -------
        PropertyGraph
            A new graph holding the same topology, all ranks at zero.

        Raises
        ------
        ValueError
            If an edge type refers to a node type without ``num_nodes``,
            an ``edge_index`` is not of shape ``[2, N]``, or it holds an
            index outside ``[0, num_nodes)``.
        """
        node_counts = {
            node_type: int(data[node_type].num_nodes or 0)
            for node_type in data.node_types
        }
        for edge_type in data.edge_types:
            _validate_edge_index(edge_type, data[edge_type].edge_index, node_counts)

        graph = cls()
        id_maps: dict[str, list[int]] = {
            node_type: [graph.add_node(node_type).node_id for _ in range(num_nodes)]
            for node_type, num_nodes in node_counts.items()
        }

        for src_type, relation, dst_type in data.edge_types:
            edge_index: Tensor = data[src_type, relation, dst_type].edge_index
            src_ids = id_maps[src_type]
            dst_ids = id_maps[dst_type]
            for src, dst in edge_index.t().tolist():
                graph.add_relationship(src_ids[src], dst_ids[dst], relation)

        logger.debug(
            "Built PropertyGraph from HeteroData: %d nodes, %d relationships",
            graph.node_count,
            graph.relationship_count,
        )
        return graph

    # ---- mutation ----

    def add_node(self, node_type: str = DEFAULT_NODE_TYPE) -> Node:
        """Create a node with a fresh id and no rank."""
        with self._lock:
            node = Node(node_id=self._next_node_id, node_type=node_type)
            self._next_node_id += 1
            self._nodes[node.node_id] = node
            self._outgoing[node.node_id] = {}
            self._incoming[node.node_id] = {}
            return node

    def add_relationship(self, start: Node | int, end: Node | int, rel_type: str) -> Relationship:
        """Create a relationship from ``start`` to ``end``.

        Parameters
        ----------
        start : Node | int
            Start node or its id.
        end : Node | int
            End node or its id.
        rel_type : str
            Relationship type.

        Returns
        -------
        Relationship
            The new relationship.

        Raises
        ------
        NodeNotFoundError
            If either endpoint does not exist.
        """
        start_id = _node_id(start)
        end_id = _node_id(end)
        with self._lock:
            for node_id in (start_id, end_id):
                if node_id not in self._nodes:
                    raise NodeNotFoundError(node_id)
            rel = Relationship(
                rel_id=self._next_rel_id,
                start_id=start_id,
                end_id=end_id,
                rel_type=rel_type,
            )
            self._next_rel_id += 1
            self._relationships[rel.rel_id] = rel
            self._outgoing[start_id][rel.rel_id] = rel
            self._incoming[end_id][rel.rel_id] = rel
            return rel

    def delete_node(self, node: Node | int) -> None:
        """Delete a node together with its rank and attached relationships.

        Raises
        ------
        NodeNotFoundError
            If the node does not exist.
        """
        node_id = _node_id(node)
        with self._lock:
            if node_id not in self._nodes:
                raise NodeNotFoundError(node_id)
            attached = [*self._outgoing[node_id].values(), *self._incoming[node_id].values()]
            for rel in attached:
                self._detach(rel)
            del self._nodes[node_id]
            del self._outgoing[node_id]
            del self._incoming[node_id]
            self._ranks.pop(node_id, None)

    def delete_relationship(self, rel: Relationship | int) -> None:
        """Delete a single relationship.

        Raises
        ------
        RelationshipNotFoundError
            If the relationship does not exist.
        """
        rel_id = rel if isinstance(rel, int) else rel.rel_id
        with self._lock:
            stored = self._relationships.get(rel_id)
            if stored is None:
                raise RelationshipNotFoundError(rel_id)
            self._detach(stored)

    def _detach(self, rel: Relationship) -> None:
        self._relationships.pop(rel.rel_id, None)
        self._outgoing.get(rel.start_id, {}).pop(rel.rel_id, None)
        self._incoming.get(rel.end_id, {}).pop(rel.rel_id, None)

    # ---- GraphStore ----

    def get_node(self, node_id: int) -> Node:
        """Return the node with ``node_id``.

        Raises
        ------
        NodeNotFoundError
            If the node does not exist (for example, it was deleted).
        """
        with self._lock:
            node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def all_nodes(self) -> tuple[Node, ...]:
        with self._lock:
            return tuple(self._nodes.values())

    def outgoing_relationships(self, node: Node) -> tuple[Relationship, ...]:
        """Return relationships starting at ``node``; empty if it is gone."""
        with self._lock:
            return tuple(self._outgoing.get(node.node_id, {}).values())

    def get_rank(self, node: Node) -> int:
        with self._lock:
            if node.node_id not in self._nodes:
                raise NodeNotFoundError(node.node_id)
            return self._ranks.get(node.node_id, 0)

    def increment_rank(self, node: Node) -> int:
        """Atomically add one to the rank of ``node``.

        Returns
        -------
        int
            The rank after the increment.

        Raises
        ------
        NodeNotFoundError
            If the node was deleted.
        """
        with self._lock:
            if node.node_id not in self._nodes:
                raise NodeNotFoundError(node.node_id)
            rank = self._ranks.get(node.node_id, 0) + 1
            self._ranks[node.node_id] = rank
            return rank

    # ---- reporting ----

    @property
    def node_count(self) -> int:
        with self._lock:
            return len(self._nodes)

    @property
    def relationship_count(self) -> int:
        with self._lock:
            return len(self._relationships)

    def ranks(self) -> dict[int, int]:
        """Return a snapshot mapping every node id to its rank."""
        with self._lock:
            return {node_id: self._ranks.get(node_id, 0) for node_id in self._nodes}

    def total_rank(self) -> int:
        """Return the sum of all node ranks."""
        with self._lock:
            return sum(self._ranks.values())

    def top_ranked(self, k: int) -> list[tuple[Node, int]]:
        """Return up to ``k`` nodes with the highest rank, best first.

        Parameters
        ----------
        k : int
            Number of nodes to return. Must be positive.

        Returns
        -------
        list[tuple[Node, int]]
            ``(node, rank)`` pairs sorted by rank descending. Order among
            equal ranks is unspecified.

        Raises
        ------
        ValueError
            If ``k`` is not positive.
        """
        if k < 1:
            raise ValueError(f"k must be positive, got {k}")
        with self._lock:
            nodes = list(self._nodes.values())
            ranks = torch.tensor(
                [self._ranks.get(n.node_id, 0) for n in nodes], dtype=torch.long
            )
        if not nodes:
            return []
        values, indices = torch.topk(ranks, min(k, len(nodes)))
        return [
            (nodes[idx], rank)
            for idx, rank in zip(indices.tolist(), values.tolist(), strict=True)
        ]


def _validate_edge_index(
    edge_type: tuple[str, str, str],
    edge_index: Tensor,
    node_counts: dict[str, int],
) -> None:
    """Check that ``edge_index`` only names existing nodes of its edge type."""
    src_type, _, dst_type = edge_type
    for node_type in (src_type, dst_type):
        if node_type not in node_counts:
            raise ValueError(
                f"Edge type {edge_type!r} refers to node type {node_type!r} "
                "which has no num_nodes"
            )
    if edge_index.dim() != 2 or edge_index.size(0) != 2:
        raise ValueError(
            f"edge_index of {edge_type!r} must have shape [2, N], "
            f"got {list(edge_index.shape)}"
        )
    if edge_index.size(1) == 0:
        return
    for row, node_type in ((0, src_type), (1, dst_type)):
        indices = edge_index[row]
        low = int(indices.min().item())
        high = int(indices.max().item())
        if low < 0 or high >= node_counts[node_type]:
            raise ValueError(
                f"edge_index of {edge_type!r} has {node_type!r} indices in "
                f"[{low}, {high}], expected [0, {node_counts[node_type]})"
            )


def _node_id(node: Node | int) -> int:
    return node if isinstance(node, int) else node.node_id
