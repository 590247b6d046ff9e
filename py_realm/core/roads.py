"""
Road graph.

Roads are undirected and join two distinct towns at most once. Each road is
kept twice: in the adjacency list of both ends (for traversal) and once in
``roads`` as a canonical pair with the smaller identifier first (for
enumeration).
"""

from typing import Dict, List, Tuple

import structlog

from .towns import NO_TOWNID, TownID, TownStore

logger = structlog.get_logger()

Road = Tuple[TownID, TownID]


def canonical(a: TownID, b: TownID) -> Road:
    return (a, b) if a < b else (b, a)


class RoadGraph:
    """Adjacency relation between the towns of a store."""

    def __init__(self, store: TownStore):
        self.store = store
        self.adjacency: Dict[TownID, List[TownID]] = {}
        self.roads: List[Road] = []

    def add_edge(self, a: TownID, b: TownID) -> bool:
        if a not in self.store or b not in self.store:
            logger.debug("Road not added", town1=a, town2=b, reason="unknown town")
            return False
        if a == b:
            logger.debug("Road not added", town1=a, town2=b, reason="self loop")
            return False
        if b in self.adjacency.get(a, []):
            logger.debug("Road not added", town1=a, town2=b, reason="duplicate road")
            return False

        self.adjacency.setdefault(a, []).append(b)
        self.adjacency.setdefault(b, []).append(a)
        self.roads.append(canonical(a, b))
        logger.debug("Road added", town1=a, town2=b)
        return True

    def remove_edge(self, a: TownID, b: TownID) -> bool:
        """Remove the road between ``a`` and ``b``; report whether it existed."""
        if a not in self.store or b not in self.store:
            return False

        found = self._unlink(a, b)
        self._unlink(b, a)
        self.roads = [road for road in self.roads if road not in ((a, b), (b, a))]

        if found:
            logger.debug("Road removed", town1=a, town2=b)
        return found

    def _unlink(self, a: TownID, b: TownID) -> bool:
        neighbours = self.adjacency.get(a)
        if not neighbours or b not in neighbours:
            return False
        neighbours.remove(b)
        if not neighbours:
            del self.adjacency[a]
        return True

    def neighbors_of(self, town_id: TownID) -> List[TownID]:
        if town_id not in self.store:
            return [NO_TOWNID]
        return list(self.adjacency.get(town_id, []))

    def enumerate_edges(self) -> List[Road]:
        return list(self.roads)

    def detach(self, town_id: TownID) -> int:
        """Remove every road touching a town; returns how many were removed."""
        neighbours = list(self.adjacency.get(town_id, []))
        for other in neighbours:
            self.remove_edge(town_id, other)
        return len(neighbours)

    def clear(self) -> None:
        self.adjacency.clear()
        self.roads.clear()
