"""Host-facing node rank module: configuration, wiring and a tick driver."""

from dataclasses import dataclass

import torch
from tqdm import tqdm

from ._logging import get_logger
from .filters import (
    IncludeAllNodes,
    IncludeAllRelationships,
    NodeInclusionFilter,
    NodeTypeFilter,
    RelationshipInclusionFilter,
    RelationshipTypeFilter,
)
from .graph import GraphStore
from .walk import (
    RandomNodeSelector,
    RandomRelationshipSelector,
    WalkConfig,
    WalkEngine,
    WalkState,
)
from .walk.base import DEFAULT_RANDOM_SEED

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NodeRankConfig:
    """Configuration for the node rank module.

    Parameters
    ----------
    node_types : tuple[str, ...] | None
        When set, only nodes of these types are started from or walked
        into. When ``None`` (default), all nodes are eligible.
    relationship_types : tuple[str, ...] | None
        When set, only relationships of these types are followed.
        When ``None`` (default), all relationships are eligible.
    seed : int
        Random seed for reproducibility.

    Raises
    ------
    ValueError
        If a type restriction is not a non-empty tuple of strings or
        ``seed`` is negative.
    """

    node_types: tuple[str, ...] | None = None
    relationship_types: tuple[str, ...] | None = None
    seed: int = DEFAULT_RANDOM_SEED

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for name, types in (
            ("node_types", self.node_types),
            ("relationship_types", self.relationship_types),
        ):
            if types is None:
                continue
            if not isinstance(types, tuple) or not all(isinstance(t, str) for t in types):
                raise ValueError(f"{name} must be a tuple of strings, got {types!r}")
            if not types:
                raise ValueError(f"{name} must be None or non-empty")
        if self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")

    def to_walk_config(self) -> WalkConfig:
        """Translate type restrictions into inclusion filters."""
        node_filter: NodeInclusionFilter = (
            IncludeAllNodes() if self.node_types is None else NodeTypeFilter(self.node_types)
        )
        relationship_filter: RelationshipInclusionFilter = (
            IncludeAllRelationships()
            if self.relationship_types is None
            else RelationshipTypeFilter(self.relationship_types)
        )
        return WalkConfig(
            node_filter=node_filter,
            relationship_filter=relationship_filter,
            seed=self.seed,
        )


def build_walk_engine(config: WalkConfig) -> WalkEngine:
    """Build a WalkEngine with uniform node and relationship selectors.

    Both selectors share one seeded generator so that a given seed
    reproduces the whole walk.

    Parameters
    ----------
    config : WalkConfig
        Walk configuration.

    Returns
    -------
    WalkEngine
        A walk engine instance.
    """
    generator = torch.Generator().manual_seed(config.seed)
    node_selector = RandomNodeSelector(config.node_filter, generator)
    relationship_selector = RandomRelationshipSelector(
        config.relationship_filter, config.node_filter, generator
    )
    return WalkEngine(node_selector, relationship_selector)


class NodeRankModule:
    """Drives one walker over a graph, one step per tick.

    Stands in for the host scheduler: it keeps the last
    :class:`WalkState` between ticks and feeds it back to the engine.
    When a tick produces no state (dead end, nothing eligible), the next
    tick re-seeds the walk through ``initialize``.

    Parameters
    ----------
    graph : GraphStore
        The graph to walk on. Other modules may share it concurrently.
    config : NodeRankConfig | None
        Module configuration. Defaults to ``NodeRankConfig()``.

    Attributes
    ----------
    state : WalkState | None
        The state produced by the last tick.
    ticks : int
        Number of ticks executed so far.

    Examples
    --------
    >>> graph = PropertyGraph.from_hetero_data(data)
    >>> module = NodeRankModule(graph, NodeRankConfig(seed=0))
    >>> module.run(10_000)
    >>> graph.top_ranked(5)
    """

    def __init__(self, graph: GraphStore, config: NodeRankConfig | None = None) -> None:
        self.config = config or NodeRankConfig()
        self.graph = graph
        self.engine = build_walk_engine(self.config.to_walk_config())

        self.state: WalkState | None = None
        self.ticks = 0

    def initialize(self) -> WalkState | None:
        """Choose a random start node for the walk."""
        self.state = self.engine.initialize(self.graph)
        return self.state

    def tick(self) -> WalkState | None:
        """Run one scheduled unit of work.

        Returns
        -------
        WalkState | None
            The state after this tick.
        """
        self.ticks += 1
        if self.state is None:
            return self.initialize()
        self.state = self.engine.step(self.state, self.graph)
        return self.state

    def run(self, num_ticks: int, *, show_progress: bool = False) -> WalkState | None:
        """Run ``num_ticks`` consecutive ticks.

        Parameters
        ----------
        num_ticks : int
            Number of ticks to run. Must be positive.
        show_progress : bool
            Display a progress bar.

        Returns
        -------
        WalkState | None
            The state after the last tick.

        Raises
        ------
        ValueError
            If ``num_ticks`` is not positive.
        """
        if num_ticks < 1:
            raise ValueError(f"num_ticks must be positive, got {num_ticks}")

        idle = 0
        for _ in tqdm(range(num_ticks), desc="Walking", disable=not show_progress):
            if self.tick() is None:
                idle += 1

        logger.info("Finished. Ticks: %d | Idle ticks: %d", num_ticks, idle)
        return self.state

    def shutdown(self) -> None:
        """Stop the walk and release the engine."""
        self.engine.shutdown()
