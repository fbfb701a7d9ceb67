"""Inclusion filters deciding which nodes and relationships a walk may use."""

from collections.abc import Iterable
from typing import Protocol

from .graph import Node, Relationship


class NodeInclusionFilter(Protocol):
    """Predicate deciding whether a node is eligible for selection."""

    def includes(self, node: Node) -> bool: ...


class RelationshipInclusionFilter(Protocol):
    """Predicate deciding whether a relationship may be followed."""

    def includes(self, relationship: Relationship) -> bool: ...


class IncludeAllNodes:
    """Default node filter: every node is eligible."""

    def includes(self, node: Node) -> bool:
        return True


class IncludeAllRelationships:
    """Default relationship filter: every relationship is eligible."""

    def includes(self, relationship: Relationship) -> bool:
        return True


class NodeTypeFilter:
    """Include only nodes whose type is one of ``node_types``.

    Parameters
    ----------
    node_types : Iterable[str]
        Accepted node types.

    Raises
    ------
    ValueError
        If ``node_types`` is empty or a bare string.
    """

    def __init__(self, node_types: Iterable[str]) -> None:
        if isinstance(node_types, str):
            raise ValueError(f"node_types must be an iterable of strings, got {node_types!r}")
        self._node_types = frozenset(node_types)
        if not self._node_types:
            raise ValueError("node_types must not be empty")

    def includes(self, node: Node) -> bool:
        return node.node_type in self._node_types

    def __repr__(self) -> str:
        return f"NodeTypeFilter({sorted(self._node_types)!r})"


class RelationshipTypeFilter:
    """Include only relationships whose type is one of ``rel_types``.

    Parameters
    ----------
    rel_types : Iterable[str]
        Accepted relationship types.

    Raises
    ------
    ValueError
        If ``rel_types`` is empty or a bare string.
    """

    def __init__(self, rel_types: Iterable[str]) -> None:
        if isinstance(rel_types, str):
            raise ValueError(f"rel_types must be an iterable of strings, got {rel_types!r}")
        self._rel_types = frozenset(rel_types)
        if not self._rel_types:
            raise ValueError("rel_types must not be empty")

    def includes(self, relationship: Relationship) -> bool:
        return relationship.rel_type in self._rel_types

    def __repr__(self) -> str:
        return f"RelationshipTypeFilter({sorted(self._rel_types)!r})"
