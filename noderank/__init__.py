"""NodeRank: perpetual random walks that approximate PageRank.

A walker repeatedly follows a random eligible outgoing relationship and
increments a ``rank`` counter on every node it arrives at. Given enough
ticks the counters converge towards (unnormalized) PageRank scores.

Walk Cycle
----------
1. **Start** --- :meth:`WalkEngine.initialize` picks a uniformly random
   eligible node and returns a :class:`WalkState` pointing at it.

2. **Resume** --- :meth:`WalkEngine.step` resolves the previous state. A
   deleted node (or no state at all) makes the walk restart from a
   random node within the same tick.

3. **Advance** --- :class:`RandomRelationshipSelector` picks a random
   outgoing relationship that passes the inclusion filters. A node
   without one is a dead end: the tick returns ``None``.

4. **Increment** --- the arrived-at node's rank is atomically increased
   by one and a new :class:`WalkState` is returned.

Module Layout
-------------
``graph``
    :class:`GraphStore` protocol and the thread-safe in-memory
    :class:`PropertyGraph`, buildable from PyG ``HeteroData``.
``filters``
    Node and relationship inclusion filters.
``walk``
    :class:`WalkEngine`, :class:`WalkState`, :class:`WalkConfig` and the
    uniform selectors.
``module``
    :class:`NodeRankModule`, a tick driver for hosts, and
    :class:`NodeRankConfig`.
"""

from .enums import WalkCondition
from .exceptions import NodeNotFoundError, NodeRankError, RelationshipNotFoundError
from .filters import (
    IncludeAllNodes,
    IncludeAllRelationships,
    NodeInclusionFilter,
    NodeTypeFilter,
    RelationshipInclusionFilter,
    RelationshipTypeFilter,
)
from .graph import GraphStore, Node, PropertyGraph, Relationship
from .module import NodeRankConfig, NodeRankModule, build_walk_engine
from .walk import (
    NodeSelector,
    RandomNodeSelector,
    RandomRelationshipSelector,
    RelationshipSelector,
    WalkConfig,
    WalkEngine,
    WalkState,
)

__all__ = [
    "GraphStore",
    "IncludeAllNodes",
    "IncludeAllRelationships",
    "Node",
    "NodeInclusionFilter",
    "NodeNotFoundError",
    "NodeRankConfig",
    "NodeRankError",
    "NodeRankModule",
    "NodeSelector",
    "NodeTypeFilter",
    "PropertyGraph",
    "RandomNodeSelector",
    "RandomRelationshipSelector",
    "Relationship",
    "RelationshipInclusionFilter",
    "RelationshipNotFoundError",
    "RelationshipSelector",
    "RelationshipTypeFilter",
    "WalkCondition",
    "WalkConfig",
    "WalkEngine",
    "WalkState",
    "build_walk_engine",
]
