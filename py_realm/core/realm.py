"""
The realm: towns joined by roads and bound by vassalage.

A single Realm owns the town store and the two relations laid over it. All
mutations validate their preconditions before changing anything, and a town
removal unlinks it from both relations before the store entry is erased.

Missing towns are reported with sentinel values (NO_TOWNID, NO_NAME,
NO_VALUE, NO_COORD, NO_DISTANCE) rather than exceptions.
"""

from typing import List, Optional, Tuple

import structlog

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import Settings
from . import traversal
from .roads import RoadGraph
from .towns import Coord, TownID, TownStore
from .vassalage import VassalageForest

logger = structlog.get_logger()


class RealmOptions(BaseModel):
    """Behaviour switches for a Realm."""

    model_config = ConfigDict(frozen=True)

    vassal_cycle_guard: bool = Field(
        default=True, description="Reject vassalships that would form a cycle"
    )
    route_heuristic: str = Field(
        default="euclidean", description="Shortest route heuristic (euclidean or zero)"
    )
    tax_share: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Share of tax passed to the master"
    )

    @field_validator("route_heuristic")
    @classmethod
    def check_route_heuristic(cls, value: str) -> str:
        if value not in traversal.HEURISTICS:
            raise ValueError(
                f"route_heuristic must be one of {sorted(traversal.HEURISTICS)}"
            )
        return value

    @classmethod
    def from_settings(cls, settings: Settings) -> "RealmOptions":
        return cls(
            vassal_cycle_guard=settings.vassal_cycle_guard,
            route_heuristic=settings.route_heuristic,
            tax_share=settings.tax_share,
        )


class Realm:
    """Towns, roads and vassalage over one shared set of towns."""

    def __init__(self, options: Optional[RealmOptions] = None) -> None:
        self.options = options or RealmOptions()
        self.store = TownStore()
        self.forest = VassalageForest(
            self.store,
            cycle_guard=self.options.vassal_cycle_guard,
            tax_share=self.options.tax_share,
        )
        self.roads = RoadGraph(self.store)

    # Towns

    def town_count(self) -> int:
        return len(self.store)

    def clear_all(self) -> None:
        """Remove every road, vassalship and town."""
        self.roads.clear()
        self.forest.clear()
        self.store.clear()
        logger.info("Realm cleared")

    def add_town(self, town_id: TownID, name: str, coord: Tuple[int, int], tax: int) -> bool:
        return self.store.create(town_id, name, coord, tax)

    def get_town_name(self, town_id: TownID) -> str:
        return self.store.name_of(town_id)

    def get_town_coordinates(self, town_id: TownID) -> Coord:
        return self.store.coord_of(town_id)

    def get_town_tax(self, town_id: TownID) -> int:
        return self.store.tax_of(town_id)

    def all_towns(self) -> List[TownID]:
        return self.store.ids()

    def find_towns(self, name: str) -> List[TownID]:
        return self.store.find_by_name(name)

    def change_town_name(self, town_id: TownID, new_name: str) -> bool:
        return self.store.rename(town_id, new_name)

    def towns_alphabetically(self) -> List[TownID]:
        return self.store.ids_by_name()

    def towns_distance_increasing(self) -> List[TownID]:
        return self.store.ids_by_distance()

    def towns_nearest(self, coord: Tuple[int, int]) -> List[TownID]:
        return self.store.ids_by_distance(coord)

    def min_distance(self) -> TownID:
        return self.store.nearest_to_origin()

    def max_distance(self) -> TownID:
        return self.store.furthest_from_origin()

    def remove_town(self, town_id: TownID) -> bool:
        """Remove a town, promoting its vassals and dropping its roads."""
        if town_id not in self.store:
            return False

        self.forest.detach(town_id)
        dropped_roads = self.roads.detach(town_id)
        self.store.erase(town_id)
        logger.debug("Town removed", town_id=town_id, dropped_roads=dropped_roads)
        return True

    # Vassalage

    def add_vassalship(self, vassal_id: TownID, master_id: TownID) -> bool:
        return self.forest.attach(vassal_id, master_id)

    def get_town_vassals(self, town_id: TownID) -> List[TownID]:
        return self.forest.children_of(town_id)

    def taxer_path(self, town_id: TownID) -> List[TownID]:
        return self.forest.ancestor_chain(town_id)

    def longest_vassal_path(self, town_id: TownID) -> List[TownID]:
        return self.forest.deepest_chain(town_id)

    def total_net_tax(self, town_id: TownID) -> int:
        return self.forest.aggregate_tax(town_id)

    # Roads

    def clear_roads(self) -> None:
        self.roads.clear()
        logger.info("Roads cleared")

    def all_roads(self) -> List[Tuple[TownID, TownID]]:
        return self.roads.enumerate_edges()

    def add_road(self, town1: TownID, town2: TownID) -> bool:
        return self.roads.add_edge(town1, town2)

    def remove_road(self, town1: TownID, town2: TownID) -> bool:
        return self.roads.remove_edge(town1, town2)

    def get_roads_from(self, town_id: TownID) -> List[TownID]:
        return self.roads.neighbors_of(town_id)

    # Routes

    def any_route(self, from_id: TownID, to_id: TownID) -> List[TownID]:
        return self.least_towns_route(from_id, to_id)

    def least_towns_route(self, from_id: TownID, to_id: TownID) -> List[TownID]:
        return traversal.least_towns_route(self.store, self.roads, from_id, to_id)

    def road_cycle_route(self, start_id: TownID) -> List[TownID]:
        return traversal.road_cycle_route(self.store, self.roads, start_id)

    def shortest_route(self, from_id: TownID, to_id: TownID) -> List[TownID]:
        return traversal.shortest_route(
            self.store,
            self.roads,
            from_id,
            to_id,
            heuristic=self.options.route_heuristic,
        )

    def route_distance(self, route: List[TownID]) -> int:
        return traversal.route_distance(self.store, self.roads, route)

    def trim_road_network(self) -> int:
        return traversal.trim_road_network(self.store, self.roads)
