"""
py_realm - towns joined by roads and bound by vassalage.
"""

__version__ = "0.1.0"

from .core import (
    NO_COORD,
    NO_DISTANCE,
    NO_NAME,
    NO_TOWNID,
    NO_VALUE,
    Coord,
    Realm,
    RealmOptions,
)
from .exceptions import CommandError, RealmError, VassalageCycleError

__all__ = ['NO_COORD', 'NO_DISTANCE', 'NO_NAME', 'NO_TOWNID', 'NO_VALUE',
           'Coord', 'Realm', 'RealmOptions', 'RealmError', 'VassalageCycleError',
           'CommandError']
