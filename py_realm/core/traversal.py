"""
Route searches over the road graph.

Every search allocates its own scratch state (visit marks, predecessors and
costs keyed by town id), so calls never see each other's leftovers and the
town records carry no traversal fields.

Searches:
1. least_towns_route() - breadth-first search, fewest roads
2. road_cycle_route() - depth-first search for a route that revisits a town
3. shortest_route() - A* over truncated Euclidean road lengths
4. trim_road_network() - Kruskal minimum spanning forest of the roads
"""

import heapq
import itertools
import math

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

import structlog

from ..utils.geometry import distance_between
from .roads import RoadGraph, canonical
from .towns import NO_DISTANCE, NO_TOWNID, TownID, TownStore

logger = structlog.get_logger()


class Mark(Enum):
    """Visit state of a town during one search."""

    UNVISITED = 0
    IN_PROGRESS = 1
    FINISHED = 2


@dataclass
class SearchState:
    """Per-call working memory, reset by constructing a new instance."""

    marks: Dict[TownID, Mark] = field(default_factory=dict)
    previous: Dict[TownID, Optional[TownID]] = field(default_factory=dict)
    cost: Dict[TownID, float] = field(default_factory=dict)
    estimate: Dict[TownID, float] = field(default_factory=dict)

    @classmethod
    def for_store(cls, store: TownStore) -> "SearchState":
        state = cls()
        for town in store:
            state.marks[town.id] = Mark.UNVISITED
            state.previous[town.id] = None
            state.cost[town.id] = math.inf
            state.estimate[town.id] = math.inf
        return state

    def path_to(self, town_id: TownID) -> List[TownID]:
        """Follow predecessors back to the search start, returned start first."""
        path = []
        current: Optional[TownID] = town_id
        while current is not None:
            path.append(current)
            current = self.previous[current]
        path.reverse()
        return path


def road_length(store: TownStore, a: TownID, b: TownID) -> int:
    return distance_between(store.coord_of(a), store.coord_of(b))


def least_towns_route(
    store: TownStore, graph: RoadGraph, from_id: TownID, to_id: TownID
) -> List[TownID]:
    """Route with the fewest roads; empty if the towns are not connected."""
    if from_id not in store or to_id not in store:
        return [NO_TOWNID]

    state = SearchState.for_store(store)
    state.marks[from_id] = Mark.IN_PROGRESS
    queue = deque([from_id])

    while queue:
        current = queue.popleft()
        for neighbour in graph.adjacency.get(current, []):
            if state.marks[neighbour] is Mark.UNVISITED:
                state.marks[neighbour] = Mark.IN_PROGRESS
                state.previous[neighbour] = current
                queue.append(neighbour)
        state.marks[current] = Mark.FINISHED

    if state.marks[to_id] is Mark.UNVISITED:
        return []
    return state.path_to(to_id)


def road_cycle_route(
    store: TownStore, graph: RoadGraph, start_id: TownID
) -> List[TownID]:
    """
    Route from ``start_id`` that ends in a town already on the route.

    Depth-first search with an explicit stack. A town is pushed back on the
    stack when expanded, so popping it a second time marks it finished and
    the in-progress towns are always the current route. Meeting an
    in-progress neighbour other than the town we came from closes a cycle.

    Returns:
        The route start first, its last town repeating an earlier one, or an
        empty list when no cycle is reachable.
    """
    if start_id not in store:
        return [NO_TOWNID]

    state = SearchState.for_store(store)
    stack = [(start_id, None)]

    while stack:
        current, came_from = stack.pop()
        mark = state.marks[current]

        if mark is Mark.IN_PROGRESS:
            state.marks[current] = Mark.FINISHED
            continue
        if mark is Mark.FINISHED:
            continue

        state.marks[current] = Mark.IN_PROGRESS
        state.previous[current] = came_from
        stack.append((current, came_from))

        for neighbour in graph.adjacency.get(current, []):
            neighbour_mark = state.marks[neighbour]
            if neighbour_mark is Mark.UNVISITED:
                stack.append((neighbour, current))
            elif neighbour_mark is Mark.IN_PROGRESS and neighbour != came_from:
                route = state.path_to(current)
                route.append(neighbour)
                logger.debug("Road cycle found", start_id=start_id, length=len(route))
                return route

    return []


def straight_line_heuristic(store: TownStore, goal_id: TownID) -> Callable[[TownID], int]:
    goal = store.coord_of(goal_id)
    return lambda town_id: distance_between(store.coord_of(town_id), goal)


def zero_heuristic(store: TownStore, goal_id: TownID) -> Callable[[TownID], int]:
    return lambda town_id: 0


HEURISTICS = {
    "euclidean": straight_line_heuristic,
    "zero": zero_heuristic,
}


def shortest_route(
    store: TownStore,
    graph: RoadGraph,
    from_id: TownID,
    to_id: TownID,
    heuristic: str = "euclidean",
) -> List[TownID]:
    """
    Route with the smallest total road length.

    A* search; each road is as long as the truncated straight line between
    its towns. With the "euclidean" heuristic the result is a best-effort
    approximation because truncation can make the estimate exceed the true
    remaining length. The "zero" heuristic turns the search into Dijkstra.
    """
    if from_id not in store or to_id not in store:
        return [NO_TOWNID]

    estimate_to_goal = HEURISTICS[heuristic](store, to_id)
    state = SearchState.for_store(store)
    order = itertools.count()

    state.cost[from_id] = 0
    state.estimate[from_id] = estimate_to_goal(from_id)
    state.marks[from_id] = Mark.IN_PROGRESS
    heap = [(state.estimate[from_id], next(order), from_id)]

    while heap:
        _, _, current = heapq.heappop(heap)

        # Stale duplicate entry
        if state.marks[current] is Mark.FINISHED:
            continue
        if current == to_id:
            return state.path_to(to_id)

        for neighbour in graph.adjacency.get(current, []):
            if state.marks[neighbour] is Mark.FINISHED:
                continue
            new_cost = state.cost[current] + road_length(store, current, neighbour)
            if new_cost < state.cost[neighbour]:
                state.cost[neighbour] = new_cost
                state.estimate[neighbour] = new_cost + estimate_to_goal(neighbour)
                state.previous[neighbour] = current
                state.marks[neighbour] = Mark.IN_PROGRESS
                heapq.heappush(heap, (state.estimate[neighbour], next(order), neighbour))

        state.marks[current] = Mark.FINISHED

    return []


def route_distance(store: TownStore, graph: RoadGraph, route: List[TownID]) -> int:
    """Total road length along ``route``, or NO_DISTANCE if a hop is not a road."""
    if not route or any(town_id not in store for town_id in route):
        return NO_DISTANCE

    total = 0
    for a, b in zip(route, route[1:]):
        if b not in graph.adjacency.get(a, []):
            return NO_DISTANCE
        total += road_length(store, a, b)
    return total


def trim_road_network(store: TownStore, graph: RoadGraph) -> int:
    """
    Keep only a minimum spanning forest of the roads.

    Towns connected before the trim stay connected, using the smallest
    possible total road length. Every other road is removed.

    Returns:
        Total length of the remaining roads
    """
    parent: Dict[TownID, TownID] = {}

    def find(town_id: TownID) -> TownID:
        root = town_id
        while parent.setdefault(root, root) != root:
            root = parent[root]
        # Path compression
        while parent[town_id] != root:
            parent[town_id], town_id = root, parent[town_id]
        return root

    candidates = sorted(
        graph.enumerate_edges(),
        key=lambda road: (road_length(store, *road), road),
    )

    kept = set()
    total = 0
    for a, b in candidates:
        root_a, root_b = find(a), find(b)
        if root_a == root_b:
            continue
        parent[root_a] = root_b
        kept.add(canonical(a, b))
        total += road_length(store, a, b)

    removed = 0
    for a, b in graph.enumerate_edges():
        if canonical(a, b) not in kept:
            graph.remove_edge(a, b)
            removed += 1

    logger.info("Road network trimmed", kept=len(kept), removed=removed, total_length=total)
    return total
