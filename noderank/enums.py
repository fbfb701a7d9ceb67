"""Enumerations for recoverable walk conditions."""

from enum import StrEnum


class WalkCondition(StrEnum):
    """Expected, recoverable conditions reported by the walk engine.

    None of these are raised. The engine logs them and either returns
    ``None`` for the tick or restarts from a fresh random node.

    Attributes
    ----------
    NO_ELIGIBLE_NODE : str
        The node filter leaves no candidate to start a walk from.
    NO_ELIGIBLE_RELATIONSHIP : str
        The current node is a dead end: no outgoing relationship passes
        the relationship and node filters.
    STALE_REFERENCE : str
        The node referenced by the previous walk state no longer exists.
    """

    NO_ELIGIBLE_NODE = "no_eligible_node"
    NO_ELIGIBLE_RELATIONSHIP = "no_eligible_relationship"
    STALE_REFERENCE = "stale_reference"
