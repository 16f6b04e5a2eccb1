from __future__ import annotations

from typing import Iterable, List

import pytest

from nrflow import parse_flow


@pytest.fixture
def flow_set(nodes_flow):
    return parse_flow(nodes_flow)


def _names(nodes: Iterable) -> List[str]:
    return sorted(n.config["name"] for n in nodes)


def test_parses_all_flows(flow_set) -> None:
    assert list(flow_set.flows) == ["f1", "f2", "f3", "f4"]
    assert {"f1n1", "f1n2", "f1n3"} <= set(flow_set.flows["f1"].nodes)


class TestNextNodes:
    def test_single_node_on_single_output(self, flow_set) -> None:
        assert _names(flow_set.nodes["f1n1"].next_nodes()) == ["flow1-node2"]

    def test_no_node_on_output(self, flow_set) -> None:
        assert flow_set.nodes["f1n3"].next_nodes() == []

    def test_multiple_nodes_on_multiple_outputs(self, flow_set) -> None:
        nodes = flow_set.nodes["f2n2"].next_nodes()
        assert len(nodes) == 3
        assert _names(nodes) == ["flow2-node3", "flow2-node4", "flow2-node5"]

    def test_no_node_on_link_out_output(self, flow_set) -> None:
        assert flow_set.nodes["f3l1"].next_nodes() == []

    def test_virtual_link_on_link_out_output(self, flow_set) -> None:
        assert _names(flow_set.nodes["f3l1"].next_nodes(True)) == ["flow3-link2"]


class TestPreviousNodes:
    def test_single_node_on_input(self, flow_set) -> None:
        assert _names(flow_set.nodes["f1n3"].previous_nodes()) == ["flow1-node2"]

    def test_no_node_on_input(self, flow_set) -> None:
        assert flow_set.nodes["f1n1"].previous_nodes() == []

    def test_multiple_nodes_on_input(self, flow_set) -> None:
        assert _names(flow_set.nodes["f2n2"].previous_nodes()) == ["flow2-node1", "flow2-node6"]

    def test_no_node_on_link_in_input(self, flow_set) -> None:
        assert flow_set.nodes["f3l2"].previous_nodes() == []

    def test_virtual_link_on_link_in_input(self, flow_set) -> None:
        assert _names(flow_set.nodes["f3l2"].previous_nodes(follow_virtual=True)) == ["flow3-link1"]


class TestSiblingNodes:
    def test_single_node_on_input_and_output(self, flow_set) -> None:
        assert _names(flow_set.nodes["f1n2"].sibling_nodes()) == ["flow1-node1", "flow1-node3"]

    def test_previous_nodes_come_first(self, flow_set) -> None:
        ids = [n.id for n in flow_set.nodes["f2n2"].sibling_nodes()]
        assert ids[:2] == ["f2n1", "f2n6"]
        assert sorted(ids[2:]) == ["f2n3", "f2n4", "f2n5"]

    def test_link_in_siblings(self, flow_set) -> None:
        link_in = flow_set.nodes["f3l2"]
        assert _names(link_in.sibling_nodes()) == ["flow3-node2"]
        assert _names(link_in.sibling_nodes(True)) == ["flow3-link1", "flow3-node2"]

    def test_link_out_siblings(self, flow_set) -> None:
        link_out = flow_set.nodes["f3l1"]
        assert _names(link_out.sibling_nodes()) == ["flow3-node1"]
        assert _names(link_out.sibling_nodes(True)) == ["flow3-link2", "flow3-node1"]

    def test_self_loop_appears_on_both_sides(self, flow_set) -> None:
        node = flow_set.nodes["f4e"]
        assert node.sibling_nodes() == [node, node]


class TestReachability:
    def test_downstream_chain(self, flow_set) -> None:
        assert _names(flow_set.nodes["f1n1"].downstream_nodes()) == ["flow1-node2", "flow1-node3"]

    def test_upstream_chain(self, flow_set) -> None:
        assert _names(flow_set.nodes["f1n3"].upstream_nodes()) == ["flow1-node1", "flow1-node2"]

    def test_downstream_stops_at_link_without_virtual(self, flow_set) -> None:
        assert _names(flow_set.nodes["f3n1"].downstream_nodes()) == ["flow3-link1"]

    def test_downstream_follows_link_with_virtual(self, flow_set) -> None:
        nodes = flow_set.nodes["f3n1"].downstream_nodes(follow_virtual=True)
        assert _names(nodes) == ["flow3-link1", "flow3-link2", "flow3-node2"]

    def test_upstream_follows_link_with_virtual(self, flow_set) -> None:
        nodes = flow_set.nodes["f3n2"].upstream_nodes(True)
        assert _names(nodes) == ["flow3-link1", "flow3-link2", "flow3-node1"]

    def test_downstream_on_cycle_terminates_without_origin(self, flow_set) -> None:
        nodes = flow_set.nodes["f4a"].downstream_nodes()
        assert [n.id for n in nodes].count("f4a") == 0
        assert sorted(n.id for n in nodes) == ["f4b", "f4c", "f4d"]

    def test_upstream_on_cycle_terminates_without_origin(self, flow_set) -> None:
        nodes = flow_set.nodes["f4a"].upstream_nodes()
        assert sorted(n.id for n in nodes) == ["f4b", "f4c"]

    def test_connected_includes_origin_once(self, flow_set) -> None:
        nodes = flow_set.nodes["f4b"].connected_nodes()
        ids = [n.id for n in nodes]
        assert ids[0] == "f4b"
        assert sorted(ids) == ["f4a", "f4b", "f4c", "f4d"]

    def test_connected_across_link_only_with_virtual(self, flow_set) -> None:
        node = flow_set.nodes["f3n1"]
        assert sorted(n.id for n in node.connected_nodes()) == ["f3l1", "f3n1"]
        assert sorted(n.id for n in node.connected_nodes(True)) == ["f3l1", "f3l2", "f3n1", "f3n2"]

    def test_self_loop_is_not_its_own_downstream(self, flow_set) -> None:
        node = flow_set.nodes["f4e"]
        assert node.downstream_nodes() == []
        assert node.upstream_nodes() == []
        assert node.connected_nodes() == [node]

    def test_isolated_node(self, flow_set) -> None:
        node = flow_set.nodes["f1n4"]
        assert node.downstream_nodes() == []
        assert node.upstream_nodes() == []
        assert node.sibling_nodes() == []
        assert node.connected_nodes() == [node]

    def test_traversal_does_not_change_wires(self, flow_set) -> None:
        before = len(flow_set.wires)
        for node in flow_set.nodes.values():
            node.connected_nodes(True)
            node.downstream_nodes(True)
            node.upstream_nodes(True)
        assert len(flow_set.wires) == before


def test_fan_in_from_distinct_sources() -> None:
    flow_set = parse_flow(
        [
            {"id": "t", "type": "tab"},
            {"id": "a", "type": "inject", "z": "t", "x": 0, "y": 0, "wires": [["c"]]},
            {"id": "b", "type": "inject", "z": "t", "x": 0, "y": 0, "wires": [["c"]]},
            {"id": "c", "type": "debug", "z": "t", "x": 0, "y": 0, "wires": []},
        ]
    )
    assert sorted(n.id for n in flow_set.nodes["c"].previous_nodes()) == ["a", "b"]


def test_link_out_without_links_has_no_virtual_next() -> None:
    records = [
        {"id": "t", "type": "tab"},
        {"id": "lo", "type": "link out", "z": "t", "links": [], "x": 0, "y": 0, "wires": []},
        {"id": "li", "type": "link in", "z": "t", "links": [], "x": 0, "y": 0, "wires": []},
    ]
    assert parse_flow(records).nodes["lo"].next_nodes(True) == []

    records[1]["links"] = ["li"]
    link_out = parse_flow(records).nodes["lo"]
    assert [n.id for n in link_out.next_nodes(follow_virtual=True)] == ["li"]
    assert link_out.next_nodes(follow_virtual=False) == []
