"""Tests for the road graph."""

from py_realm.core.roads import RoadGraph, canonical
from py_realm.core.towns import NO_TOWNID, TownStore


class TestRoadGraph:
    """Test adding, removing and listing roads."""

    def setup_method(self):
        """Setup test fixtures."""
        self.store = TownStore()
        for i, town_id in enumerate(["a", "b", "c", "d"]):
            self.store.create(town_id, town_id, (i, 0), 0)
        self.graph = RoadGraph(self.store)

    def test_canonical_pair(self):
        """Test that pairs are ordered smaller id first."""
        assert canonical("b", "a") == ("a", "b")
        assert canonical("a", "b") == ("a", "b")

    def test_add_edge_both_directions(self):
        """Test that a road is visible from both ends."""
        assert self.graph.add_edge("c", "a")
        assert self.graph.neighbors_of("c") == ["a"]
        assert self.graph.neighbors_of("a") == ["c"]
        assert self.graph.enumerate_edges() == [("a", "c")]

    def test_add_edge_rejections(self):
        """Test unknown towns, self loops and duplicates."""
        assert not self.graph.add_edge("a", "zzz")
        assert not self.graph.add_edge("zzz", "a")
        assert not self.graph.add_edge("a", "a")
        assert self.graph.add_edge("a", "b")
        assert not self.graph.add_edge("a", "b")
        assert not self.graph.add_edge("b", "a")
        assert self.graph.enumerate_edges() == [("a", "b")]
        assert self.graph.neighbors_of("a") == ["b"]

    def test_remove_edge(self):
        """Test removing a road in either orientation."""
        self.graph.add_edge("a", "b")
        self.graph.add_edge("b", "c")
        assert self.graph.remove_edge("b", "a")
        assert self.graph.neighbors_of("a") == []
        assert self.graph.neighbors_of("b") == ["c"]
        assert self.graph.enumerate_edges() == [("b", "c")]

    def test_remove_missing_edge(self):
        """Test removing roads that do not exist."""
        assert not self.graph.remove_edge("a", "b")
        assert not self.graph.remove_edge("a", "zzz")

    def test_neighbors_of_missing_town(self):
        """Test the not-found sentinel."""
        assert self.graph.neighbors_of("zzz") == [NO_TOWNID]
        assert self.graph.neighbors_of("d") == []

    def test_detach(self):
        """Test removing every road of a town."""
        self.graph.add_edge("a", "b")
        self.graph.add_edge("a", "c")
        self.graph.add_edge("c", "d")
        assert self.graph.detach("a") == 2
        assert self.graph.neighbors_of("b") == []
        assert self.graph.neighbors_of("c") == ["d"]
        assert self.graph.enumerate_edges() == [("c", "d")]

    def test_clear(self):
        """Test clearing every road."""
        self.graph.add_edge("a", "b")
        self.graph.clear()
        assert self.graph.enumerate_edges() == []
        assert self.graph.neighbors_of("a") == []
