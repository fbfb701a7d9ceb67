"""Custom exceptions for the NodeRank graph walker."""


class NodeRankError(Exception):
    """Base exception for all NodeRank errors."""


class NodeNotFoundError(NodeRankError):
    """Raised when a node id cannot be resolved in the graph store.

    The walk engine treats this as a stale resume point and recovers
    from it; it only reaches callers that use the store directly.
    """

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Node {node_id} not found")
        self.node_id = node_id


class RelationshipNotFoundError(NodeRankError):
    """Raised when a relationship id cannot be resolved in the graph store."""

    def __init__(self, rel_id: int) -> None:
        super().__init__(f"Relationship {rel_id} not found")
        self.rel_id = rel_id
