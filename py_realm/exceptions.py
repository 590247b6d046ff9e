"""
Exception types for the realm.

Ordinary "not found" and rejected mutations are reported through sentinel
values and boolean results. Exceptions are reserved for broken invariants
and for malformed input to the command runner.
"""


class RealmError(Exception):
    """Base class for realm errors."""


class VassalageCycleError(RealmError):
    """A vassal hierarchy walk reached a town that is its own ancestor."""

    def __init__(self, town_id: str):
        self.town_id = town_id
        super().__init__(f"Vassalage cycle detected at town {town_id!r}")


class CommandError(RealmError):
    """A command script line could not be parsed or dispatched."""
