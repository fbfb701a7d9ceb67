import torch

from ..graph import GraphStore, Node, Relationship
from .base import NodeSelector, RelationshipSelector


def _uniform_index(size: int, generator: torch.Generator) -> int:
    return int(torch.randint(0, size, (1,), generator=generator).item())


class RandomNodeSelector(NodeSelector):
    """Select an eligible node uniformly at random."""

    def select_node(self, graph: GraphStore) -> Node | None:
        candidates = self.candidates(graph)
        if not candidates:
            return None
        return candidates[_uniform_index(len(candidates), self._generator)]


class RandomRelationshipSelector(RelationshipSelector):
    """Select an eligible outgoing relationship uniformly at random."""

    def select_relationship(self, graph: GraphStore, node: Node) -> Relationship | None:
        candidates = self.candidates(graph, node)
        if not candidates:
            return None
        return candidates[_uniform_index(len(candidates), self._generator)]
