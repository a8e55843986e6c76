"""Published graph slot with build-then-swap refreshes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph.builder import build_graph

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from contract.descriptors import ComponentDescriptor
    from contract.models import MapGraph
    from rules.config import InclusionConfig

logger = logging.getLogger(__name__)


class MapCache:
    """Holds the current graph for readers such as tree views and exporters.

    A refresh builds a whole new graph before replacing the published one, so
    readers never observe a half-built graph. If the build fails the previous
    graph stays published and the error propagates.
    """

    def __init__(
        self,
        source: Callable[[], Iterable[ComponentDescriptor | None]],
        policy: InclusionConfig | None = None,
    ) -> None:
        self._source = source
        self._policy = policy
        self._graph: MapGraph | None = None

    @property
    def is_built(self) -> bool:
        return self._graph is not None

    @property
    def graph(self) -> MapGraph:
        if self._graph is None:
            return self.refresh()
        return self._graph

    def refresh(self) -> MapGraph:
        graph = build_graph(self._source(), self._policy)
        self._graph = graph
        logger.debug("Published refreshed system map")
        return graph
