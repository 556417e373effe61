import pytest

from fabric_topo_gen.planning.layout import generate_layout
from fabric_topo_gen.planning.topology_validation import assert_topology_valid, validate_topology
from fabric_topo_gen.types import Node, Topology, Vec3


@pytest.mark.parametrize("clusters,servers", [(0, False), (1, False), (2, True), (4, True)])
def test_generated_layouts_are_valid(clusters, servers):
    topo = generate_layout(clusters, servers)
    assert validate_topology(topo, clusters) == []
    assert_topology_valid(topo, clusters)


def test_detects_bad_membership_and_duplicates():
    origin = Vec3(0, 0, 0)
    topo = Topology(
        spines=[Node(node_id=1, type="spine", position=origin, label="s", cluster_id=0, group_id=2)],
        leafs=[Node(node_id=1, type="leaf", position=origin, label="l", cluster_id=0)],
        servers=[Node(node_id=2, type="server", position=origin, label="v", cluster_id=0, group_id=20)],
    )
    issues = validate_topology(topo)
    text = " | ".join(issues)
    assert "duplicate node id" in text
    assert "spine s has group_id 2" in text
    assert "leaf l missing cluster_id/group_id" in text
    assert "server v has cluster_id 0" in text
    assert "group_id 20 outside" in text


def test_detects_misplaced_type_and_counts():
    topo = generate_layout(1, False)
    mixed = Topology(spines=topo.leafs[:1], leafs=topo.leafs[1:])
    issues = validate_topology(mixed, 1)
    assert any("found in spine sequence" in i for i in issues)
    assert any("spine count" in i for i in issues)
    assert any("leaf count" in i for i in issues)


def test_detects_cluster_out_of_range():
    topo = generate_layout(2, False)
    issues = validate_topology(topo, 1)
    assert any("outside [0, 1)" in i for i in issues)


def test_assert_raises():
    with pytest.raises(ValueError):
        assert_topology_valid(generate_layout(2, False), 3)


def test_non_topology_input():
    assert validate_topology({"spines": []}) == ["topology is not a Topology"]
