"""Random walk submodule for NodeRank."""

from .base import NodeSelector, RelationshipSelector, WalkConfig
from .state import WalkState
from .uniform_selector import RandomNodeSelector, RandomRelationshipSelector
from .walker import WalkEngine

__all__ = [
    "NodeSelector",
    "RandomNodeSelector",
    "RandomRelationshipSelector",
    "RelationshipSelector",
    "WalkConfig",
    "WalkEngine",
    "WalkState",
]
