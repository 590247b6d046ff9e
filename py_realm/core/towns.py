"""
Town records and the store that owns them.

The store is the single source of truth for which towns exist. The
vassalage forest and the road graph only ever refer to towns by their
identifier, so adding or removing towns never leaves a dangling reference
as long as the relations are cleaned up before the store entry goes away.
"""

from typing import Dict, Iterator, List, NamedTuple, Optional

import numpy as np
import structlog

from pydantic import BaseModel, ConfigDict, Field

from ..utils.geometry import distances_to

logger = structlog.get_logger()


TownID = str

# Sentinels returned instead of raising for ordinary "not found" results
NO_TOWNID: TownID = "----------"
NO_VALUE: int = -(2**31)
NO_NAME: str = "!!NO_NAME!!"
NO_DISTANCE: int = NO_VALUE


class Coord(NamedTuple):
    """Integer map coordinate."""

    x: int
    y: int


NO_COORD = Coord(NO_VALUE, NO_VALUE)


class Town(BaseModel):
    """Data structure for a town."""

    model_config = ConfigDict(validate_assignment=True)

    id: TownID = Field(description="Unique town identifier")
    name: str = Field(description="Display name")
    x: int = Field(description="X coordinate")
    y: int = Field(description="Y coordinate")
    tax: int = Field(description="Tax the town raises on its own")

    @property
    def coord(self) -> Coord:
        return Coord(self.x, self.y)


class TownStore:
    """Owns every Town record, keyed by identifier."""

    def __init__(self) -> None:
        self.towns: Dict[TownID, Town] = {}

    def __contains__(self, town_id: TownID) -> bool:
        return town_id in self.towns

    def __len__(self) -> int:
        return len(self.towns)

    def __iter__(self) -> Iterator[Town]:
        return iter(self.towns.values())

    def get(self, town_id: TownID) -> Optional[Town]:
        return self.towns.get(town_id)

    def create(self, town_id: TownID, name: str, coord, tax: int) -> bool:
        """Add a town. Fails without mutation if the id is taken."""
        if town_id in self.towns:
            logger.debug("Town not added", town_id=town_id, reason="duplicate id")
            return False

        x, y = coord
        self.towns[town_id] = Town(id=town_id, name=name, x=x, y=y, tax=tax)
        logger.debug("Town added", town_id=town_id, name=name)
        return True

    def erase(self, town_id: TownID) -> bool:
        """Drop the store entry. Relations must already be severed."""
        return self.towns.pop(town_id, None) is not None

    def clear(self) -> None:
        self.towns.clear()

    def name_of(self, town_id: TownID) -> str:
        town = self.towns.get(town_id)
        return town.name if town is not None else NO_NAME

    def coord_of(self, town_id: TownID) -> Coord:
        town = self.towns.get(town_id)
        return town.coord if town is not None else NO_COORD

    def tax_of(self, town_id: TownID) -> int:
        town = self.towns.get(town_id)
        return town.tax if town is not None else NO_VALUE

    def rename(self, town_id: TownID, new_name: str) -> bool:
        town = self.towns.get(town_id)
        if town is None:
            return False
        town.name = new_name
        return True

    def ids(self) -> List[TownID]:
        return list(self.towns)

    def find_by_name(self, name: str) -> List[TownID]:
        return [town.id for town in self.towns.values() if town.name == name]

    def ids_by_name(self) -> List[TownID]:
        return [
            town.id for town in sorted(self.towns.values(), key=lambda t: t.name)
        ]

    def ids_by_distance(self, origin=(0, 0)) -> List[TownID]:
        """Ids ordered by non-decreasing truncated distance to ``origin``."""
        ids = self.ids()
        distances = distances_to([self.towns[i].coord for i in ids], origin)
        order = np.argsort(distances, kind="stable")
        return [ids[i] for i in order]

    def nearest_to_origin(self) -> TownID:
        return self._extreme_by_distance(np.argmin)

    def furthest_from_origin(self) -> TownID:
        return self._extreme_by_distance(np.argmax)

    def _extreme_by_distance(self, pick) -> TownID:
        if not self.towns:
            return NO_TOWNID
        ids = self.ids()
        distances = distances_to([self.towns[i].coord for i in ids])
        # argmin/argmax return the first index among equal values
        return ids[int(pick(distances))]
