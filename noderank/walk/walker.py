"""Per-tick walk engine that accumulates node rank."""

from .._logging import get_logger
from ..enums import WalkCondition
from ..exceptions import NodeNotFoundError
from ..graph import GraphStore, Node
from .base import NodeSelector, RelationshipSelector
from .state import WalkState

logger = get_logger(__name__)


class WalkEngine:
    """Advances a random walk one step per tick, counting node visits.

    Every step follows one eligible outgoing relationship from the last
    visited node and increments the rank of the node it arrives at.
    Over time the ranks approach (unnormalized) PageRank values.

    No walk state is kept on the engine: each call takes the previous
    :class:`WalkState` and returns the next one, or ``None`` when the
    tick made no progress. Dead ends, empty candidate sets and deleted
    resume points are logged and recovered from, never raised.

    Parameters
    ----------
    node_selector : NodeSelector
        Picks the node a walk (re)starts from.
    relationship_selector : RelationshipSelector
        Picks the relationship a walk follows from its current node.
    """

    def __init__(
        self,
        node_selector: NodeSelector,
        relationship_selector: RelationshipSelector,
    ) -> None:
        self._node_selector = node_selector
        self._relationship_selector = relationship_selector

    def initialize(self, graph: GraphStore) -> WalkState | None:
        """Pick a random start node without touching any rank.

        Parameters
        ----------
        graph : GraphStore
            The graph to walk on.

        Returns
        -------
        WalkState | None
            State pointing at the start node, or ``None`` if no node
            matches the node filter.
        """
        node = self._node_selector.select_node(graph)
        if node is None:
            logger.warning(
                "[%s] No node to start the walk from; no nodes match the node filter",
                WalkCondition.NO_ELIGIBLE_NODE,
            )
            return None

        logger.info("Starting node rank walk from random start node %d", node.node_id)
        return WalkState.of(node)

    def step(self, previous: WalkState | None, graph: GraphStore) -> WalkState | None:
        """Advance the walk by one step and increment the arrived-at node.

        Parameters
        ----------
        previous : WalkState | None
            State returned by the previous tick. ``None``, or a state whose
            node was deleted, makes the walk restart from a random node,
            which is still incremented in this tick.
        graph : GraphStore
            The graph to walk on.

        Returns
        -------
        WalkState | None
            State pointing at the node that was incremented, or ``None`` if
            nothing was incremented (no eligible node or a dead end).
        """
        current = self._determine_last_node(previous, graph)
        next_node = self._determine_next_node(current, graph)
        if next_node is None:
            return None

        try:
            rank = graph.increment_rank(next_node)
        except NodeNotFoundError:
            logger.warning(
                "[%s] Node %d was deleted before its rank could be incremented",
                WalkCondition.STALE_REFERENCE,
                next_node.node_id,
            )
            return None

        logger.debug("Walked to node %d, rank is now %d", next_node.node_id, rank)
        return WalkState.of(next_node)

    def shutdown(self) -> None:
        """Release held resources. The engine holds none."""
        logger.debug("Node rank walk engine shut down")

    def _determine_last_node(
        self, previous: WalkState | None, graph: GraphStore
    ) -> Node | None:
        if previous is None:
            logger.debug("No previous walk state; will start from a random node")
            return None

        try:
            return previous.resolve(graph)
        except NodeNotFoundError:
            logger.warning(
                "[%s] Node %d referenced by the previous walk state was not found; "
                "will start from a random node",
                WalkCondition.STALE_REFERENCE,
                previous.node_id,
            )
            return None

    def _determine_next_node(self, current: Node | None, graph: GraphStore) -> Node | None:
        if current is None:
            node = self._node_selector.select_node(graph)
            if node is None:
                logger.warning(
                    "[%s] No node to restart the walk from; no nodes match the node filter",
                    WalkCondition.NO_ELIGIBLE_NODE,
                )
            return node

        relationship = self._relationship_selector.select_relationship(graph, current)
        if relationship is None:
            logger.warning(
                "[%s] No relationship to follow from node %d; "
                "the walk will restart from a random node",
                WalkCondition.NO_ELIGIBLE_RELATIONSHIP,
                current.node_id,
            )
            return None

        try:
            return graph.get_node(relationship.other_node_id(current.node_id))
        except NodeNotFoundError:
            logger.warning(
                "[%s] Node at the end of relationship %d was deleted",
                WalkCondition.STALE_REFERENCE,
                relationship.rel_id,
            )
            return None
