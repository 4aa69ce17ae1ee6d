# tests/unit/engine/test_addressing.py
"""Tests for channel addressing between nodes."""

from __future__ import annotations

import pytest

from textubes.contracts import ChannelName, EdgeID, NodeID, PortName
from textubes.core.dag import Edge, GraphStore
from textubes.engine.addressing import gather_inputs, read_edge


@pytest.fixture
def store() -> GraphStore:
    s = GraphStore()
    s.add_node("split", {}, node_id="split", outputs={"output-0": "a", "output-1": "b"})
    s.add_node("source", {}, node_id="src", outputs={"value": "text"})
    s.add_node("concatenate", {}, node_id="join")
    s.add_edge(Edge(EdgeID("e1"), NodeID("split"), NodeID("join"), PortName("input-0"), ChannelName("output-1")))
    s.add_edge(Edge(EdgeID("e2"), NodeID("src"), NodeID("join"), PortName("input-1")))
    return s


class TestReadEdge:
    def test_named_channel(self, store: GraphStore) -> None:
        assert read_edge(store, store.edge("e1")) == "b"

    def test_default_channel(self, store: GraphStore) -> None:
        assert read_edge(store, store.edge("e2")) == "text"

    def test_vanished_channel_reads_empty(self, store: GraphStore) -> None:
        store.node("split").outputs = {ChannelName("output-0"): "a"}
        assert read_edge(store, store.edge("e1")) == ""


class TestGatherInputs:
    def test_only_connected_ports(self, store: GraphStore) -> None:
        assert gather_inputs(store, "join") == {"input-0": "b", "input-1": "text"}

    def test_no_inputs(self, store: GraphStore) -> None:
        assert gather_inputs(store, "src") == {}
