"""
Core realm functionality: towns, vassalage, roads and route searches.
"""

from .towns import (
    NO_COORD,
    NO_DISTANCE,
    NO_NAME,
    NO_TOWNID,
    NO_VALUE,
    Coord,
    Town,
    TownStore,
)
from .vassalage import VassalageForest
from .roads import RoadGraph
from .realm import Realm, RealmOptions

__all__ = ['NO_COORD', 'NO_DISTANCE', 'NO_NAME', 'NO_TOWNID', 'NO_VALUE',
           'Coord', 'Town', 'TownStore', 'VassalageForest', 'RoadGraph',
           'Realm', 'RealmOptions']
