"""Configuration and selector interfaces for the walk engine."""

from dataclasses import dataclass, field

import torch

from ..exceptions import NodeNotFoundError
from ..filters import (
    IncludeAllNodes,
    IncludeAllRelationships,
    NodeInclusionFilter,
    RelationshipInclusionFilter,
)
from ..graph import GraphStore, Node, Relationship

DEFAULT_RANDOM_SEED: int = 42


@dataclass(frozen=True, slots=True)
class WalkConfig:
    """Configuration for the node rank walk.

    Parameters
    ----------
    node_filter : NodeInclusionFilter
        Decides which nodes may start a walk or be walked into.
    relationship_filter : RelationshipInclusionFilter
        Decides which relationships may be followed.
    seed : int
        Random seed for reproducibility.

    Raises
    ------
    ValueError
        If ``seed`` is negative.
    """

    node_filter: NodeInclusionFilter = field(default_factory=IncludeAllNodes)
    relationship_filter: RelationshipInclusionFilter = field(
        default_factory=IncludeAllRelationships
    )
    seed: int = DEFAULT_RANDOM_SEED

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")


class NodeSelector:
    """Base class for strategies choosing a node to (re)start a walk from."""

    def __init__(self, node_filter: NodeInclusionFilter, generator: torch.Generator) -> None:
        self._node_filter = node_filter
        self._generator = generator

    def candidates(self, graph: GraphStore) -> list[Node]:
        """Return every node the filter includes, in store order."""
        return [node for node in graph.all_nodes() if self._node_filter.includes(node)]

    def select_node(self, graph: GraphStore) -> Node | None:
        """Select a node from the graph. Implemented by subclasses."""
        raise NotImplementedError


class RelationshipSelector:
    """Base class for strategies choosing the relationship a walk follows."""

    def __init__(
        self,
        relationship_filter: RelationshipInclusionFilter,
        node_filter: NodeInclusionFilter,
        generator: torch.Generator,
    ) -> None:
        self._relationship_filter = relationship_filter
        self._node_filter = node_filter
        self._generator = generator

    def candidates(self, graph: GraphStore, node: Node) -> list[Relationship]:
        """Return outgoing relationships of ``node`` that a walk may follow.

        A relationship qualifies when the relationship filter includes it
        and its end node still exists and is included by the node filter.
        """
        eligible: list[Relationship] = []
        for rel in graph.outgoing_relationships(node):
            if rel.start_id != node.node_id:
                continue
            if not self._relationship_filter.includes(rel):
                continue
            target = _find_node(graph, rel.other_node_id(node.node_id))
            if target is None or not self._node_filter.includes(target):
                continue
            eligible.append(rel)
        return eligible

    def select_relationship(self, graph: GraphStore, node: Node) -> Relationship | None:
        """Select an outgoing relationship of ``node``. Implemented by subclasses."""
        raise NotImplementedError


def _find_node(graph: GraphStore, node_id: int) -> Node | None:
    try:
        return graph.get_node(node_id)
    except NodeNotFoundError:
        return None
