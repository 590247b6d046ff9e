"""Tests for town records and the town store."""

import pytest
from pydantic import ValidationError

from py_realm.core.towns import (
    NO_COORD,
    NO_NAME,
    NO_TOWNID,
    NO_VALUE,
    Coord,
    Town,
    TownStore,
)


class TestTownData:
    """Test the town data structure."""

    def test_town_creation(self):
        """Test town initialization."""
        town = Town(id="hki", name="Helsinki", x=10, y=-4, tax=30)
        assert town.id == "hki"
        assert town.name == "Helsinki"
        assert town.coord == Coord(10, -4)
        assert town.tax == 30

    def test_rename_is_validated(self):
        """Test that assignment goes through validation."""
        town = Town(id="a", name="A", x=0, y=0, tax=1)
        with pytest.raises(ValidationError):
            town.name = None

    def test_sentinels_are_distinct(self):
        """Test sentinel values."""
        assert NO_VALUE == -(2**31)
        assert NO_COORD == Coord(NO_VALUE, NO_VALUE)
        assert NO_TOWNID != NO_NAME


class TestTownStore:
    """Test the town store."""

    def setup_method(self):
        """Setup test fixtures."""
        self.store = TownStore()
        self.store.create("a", "Alpha", (3, 4), 10)
        self.store.create("b", "Beta", (0, 1), 20)
        self.store.create("c", "Alpha", (6, 8), 30)

    def test_create_and_read(self):
        """Test that data reads back exactly as written."""
        assert self.store.name_of("a") == "Alpha"
        assert self.store.coord_of("a") == Coord(3, 4)
        assert self.store.tax_of("a") == 10
        assert len(self.store) == 3
        assert "b" in self.store

    def test_duplicate_create_fails(self):
        """Test that re-adding an id keeps the original data."""
        assert not self.store.create("a", "Other", (9, 9), 99)
        assert self.store.name_of("a") == "Alpha"
        assert self.store.coord_of("a") == Coord(3, 4)
        assert self.store.tax_of("a") == 10

    def test_missing_town_sentinels(self):
        """Test sentinel results for unknown ids."""
        assert self.store.name_of("zzz") == NO_NAME
        assert self.store.coord_of("zzz") == NO_COORD
        assert self.store.tax_of("zzz") == NO_VALUE

    def test_rename(self):
        """Test renaming."""
        assert self.store.rename("b", "Gamma")
        assert self.store.name_of("b") == "Gamma"
        assert not self.store.rename("zzz", "Gamma")

    def test_find_by_name(self):
        """Test lookup by name returns every match."""
        assert sorted(self.store.find_by_name("Alpha")) == ["a", "c"]
        assert self.store.find_by_name("Nothing") == []

    def test_ids_by_name(self):
        """Test alphabetical ordering."""
        ordered = self.store.ids_by_name()
        assert sorted(ordered) == sorted(self.store.ids())
        names = [self.store.name_of(i) for i in ordered]
        assert names == sorted(names)

    def test_ids_by_distance(self):
        """Test ordering by distance from the origin."""
        assert self.store.ids_by_distance() == ["b", "a", "c"]

    def test_ids_by_distance_from_point(self):
        """Test ordering by distance from an arbitrary point."""
        assert self.store.ids_by_distance((6, 8)) == ["c", "a", "b"]

    def test_extremes(self):
        """Test nearest and furthest town from the origin."""
        assert self.store.nearest_to_origin() == "b"
        assert self.store.furthest_from_origin() == "c"

    def test_empty_store(self):
        """Test queries on an empty store."""
        store = TownStore()
        assert store.ids() == []
        assert store.ids_by_distance() == []
        assert store.nearest_to_origin() == NO_TOWNID
        assert store.furthest_from_origin() == NO_TOWNID

    def test_erase_and_clear(self):
        """Test removal of entries."""
        assert self.store.erase("a")
        assert not self.store.erase("a")
        assert self.store.name_of("a") == NO_NAME
        self.store.clear()
        assert len(self.store) == 0
