"""Resumable cursor of a single walk."""

from dataclasses import dataclass
from typing import Self

from ..graph import GraphStore, Node


@dataclass(frozen=True, slots=True)
class WalkState:
    """The last node a walk visited, held by the host between ticks.

    Only the node id is kept, so the state is a weak reference into the
    graph store: a node deleted after the state was produced is detected
    when the state is resolved, never before.

    Parameters
    ----------
    node_id : int
        Id of the last visited node.
    """

    node_id: int

    @classmethod
    def of(cls, node: Node) -> Self:
        """Create a state pointing at ``node``."""
        return cls(node_id=node.node_id)

    def resolve(self, graph: GraphStore) -> Node:
        """Look up the referenced node.

        Raises
        ------
        NodeNotFoundError
            If the node no longer exists in ``graph``.
        """
        return graph.get_node(self.node_id)
