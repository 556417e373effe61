import pytest

from fabric_topo_gen.planning.constraints import LayoutConstraintViolation
from fabric_topo_gen.planning.layout import generate_layout, server_base_z


@pytest.mark.parametrize("clusters", [0, 1, 2, 3, 5])
def test_spine_and_leaf_counts_scale_with_clusters(clusters):
    topo = generate_layout(clusters, False)
    assert len(topo.spines) == 64 * clusters
    assert len(topo.leafs) == 128 * clusters
    assert topo.servers == []


@pytest.mark.parametrize("clusters", [0, 1, 3])
def test_server_count_independent_of_clusters(clusters):
    topo = generate_layout(clusters, True)
    assert len(topo.servers) == 15 * 64 + 56 == 1016


def test_single_cluster_scenario(one_cluster):
    assert len(one_cluster.spines) == 64
    assert len(one_cluster.leafs) == 128
    assert len(one_cluster.servers) == 0
    assert all(s.position.y == 15 for s in one_cluster.spines)
    assert all(l.position.y == -5 for l in one_cluster.leafs)
    assert all(n.cluster_id == 0 for n in one_cluster.spines + one_cluster.leafs)


def test_leaf_membership_ranges():
    topo = generate_layout(3, False)
    for leaf in topo.leafs:
        assert 0 <= leaf.group_id <= 15
        assert 0 <= leaf.cluster_id < 3
    groups = [l.group_id for l in topo.leafs if l.cluster_id == 1]
    assert sorted(set(groups)) == list(range(16))
    assert all(groups.count(g) == 8 for g in range(16))


def test_membership_fields_by_type(two_clusters_with_servers):
    topo = two_clusters_with_servers
    assert all(s.group_id is None and s.cluster_id is not None for s in topo.spines)
    assert all(l.group_id is not None and l.cluster_id is not None for l in topo.leafs)
    assert all(s.cluster_id is None and s.group_id is not None for s in topo.servers)


def test_ids_unique_and_in_generation_order(two_clusters_with_servers):
    topo = two_clusters_with_servers
    ids = [n.node_id for n in topo.nodes()]
    assert len(ids) == len(set(ids))
    # cluster 0 spines+leafs come before cluster 1, servers last
    assert topo.spines[0].node_id == 0
    assert topo.leafs[0].node_id == 64
    assert topo.spines[64].node_id == 192
    assert topo.servers[0].node_id == 384


def test_spine_positions_centered():
    topo = generate_layout(2, False)
    first, last = topo.spines[0], topo.spines[63]
    assert first.position.x == pytest.approx(-78.75)
    assert last.position.x == pytest.approx(78.75)
    assert first.position.z == 0
    assert topo.spines[64].position.z == pytest.approx(-60.0)


def test_leaf_positions_spread_within_group():
    topo = generate_layout(2, False)
    group0 = [l for l in topo.leafs if l.cluster_id == 1 and l.group_id == 0]
    assert [l.slot for l in group0] == list(range(8))
    assert {l.position.x for l in group0} == {-75.0}
    zs = [l.position.z for l in group0]
    assert zs[0] == pytest.approx(-67.0)
    assert zs[-1] == pytest.approx(-53.0)
    assert sum(zs) / len(zs) == pytest.approx(-60.0)
    last_group = [l for l in topo.leafs if l.cluster_id == 0 and l.group_id == 15]
    assert {l.position.x for l in last_group} == {75.0}


def test_server_groups_and_reduced_group():
    topo = generate_layout(1, True)
    by_group = {}
    for s in topo.servers:
        by_group.setdefault(s.group_id, []).append(s)
    assert sorted(by_group) == list(range(16))
    assert len(by_group[15]) == 56
    assert all(len(by_group[g]) == 64 for g in range(15))
    assert all(s.position.y == -25 for s in topo.servers)
    zs = [s.position.z for s in by_group[0]]
    assert zs[0] == pytest.approx(-31.5)
    assert zs[-1] == pytest.approx(31.5)


@pytest.mark.parametrize("clusters,expected", [(0, 0.0), (1, 0.0), (2, -30.0), (3, -60.0), (5, -120.0)])
def test_server_base_depth(clusters, expected):
    assert server_base_z(clusters) == pytest.approx(expected)
    topo = generate_layout(clusters, True)
    group0 = [s for s in topo.servers if s.group_id == 0]
    center = sum(s.position.z for s in group0) / len(group0)
    assert center == pytest.approx(expected)


def test_labels():
    topo = generate_layout(2, True)
    assert topo.spines[0].label == "C1-Spine-1"
    assert topo.spines[64].label == "C2-Spine-1"
    assert topo.leafs[8].label == "C1-Leaf-G2-1"
    assert topo.leafs[-1].label == "C2-Leaf-G16-8"
    assert topo.servers[0].label == "Server-G1-1"
    assert topo.servers[-1].label == "Server-G16-56"


def test_zero_clusters_with_servers():
    topo = generate_layout(0, True)
    assert topo.spines == [] and topo.leafs == []
    assert len(topo.servers) == 1016
    assert topo.servers[0].node_id == 0


def test_regeneration_is_structurally_identical():
    a = generate_layout(2, True)
    b = generate_layout(2, True)
    assert a.counts() == b.counts()
    for x, y in zip(a.nodes(), b.nodes()):
        assert x.position == y.position
        assert x.label == y.label
        assert x.identity_key == y.identity_key


def test_larger_regeneration_is_full_recompute():
    small = generate_layout(1, True)
    big = generate_layout(2, True)
    # cluster 0 keeps its ids, servers are shifted behind the new cluster
    assert big.spines[0].node_id == small.spines[0].node_id
    assert big.servers[0].node_id != small.servers[0].node_id
    assert big.servers[0].position.z != small.servers[0].position.z


@pytest.mark.parametrize("bad", [-1, 1.5, 2.0, True, "2", None])
def test_invalid_cluster_counts_rejected(bad):
    with pytest.raises(LayoutConstraintViolation):
        generate_layout(bad, False)


def test_constraint_violation_is_value_error():
    with pytest.raises(ValueError):
        generate_layout(-3, False)


def test_include_servers_must_be_bool():
    with pytest.raises(LayoutConstraintViolation):
        generate_layout(1, 1)


def test_layout_logs_counts(caplog):
    caplog.set_level("INFO", logger="fabric_topo_gen.planning.layout")
    generate_layout(1, False)
    assert any("[layout]" in r.getMessage() and "spines=64" in r.getMessage() for r in caplog.records)


def test_reindex_picks_up_appended_nodes():
    topo = generate_layout(1, False)
    extra = generate_layout(2, False).spines[64]
    topo.spines.append(extra)
    assert ("spine", extra.node_id) not in topo.index.by_type_id
    topo.reindex()
    assert topo.index.by_type_id[("spine", extra.node_id)] is extra
    assert topo.index.spines_by_cluster[1] == [extra]
