from __future__ import annotations

from typing import List, Optional, Set

from ..constants import NODE_TYPES
from ..types import Topology
from .profile import DEFAULT_PROFILE, LayoutProfile


def validate_topology(
    topology: Topology,
    cluster_count: Optional[int] = None,
    profile: LayoutProfile = DEFAULT_PROFILE,
) -> List[str]:
    """Validate internal consistency of a generated topology.

    Returns a list of human-readable issues. Empty list means OK.

    Invariants checked:
    - Node ids are unique across all three sequences.
    - Each sequence only holds its own node type.
    - Spines carry a cluster and no group; leafs carry both; servers carry a
      group and no cluster.
    - Group ids fall in [0, leaf_groups) and, when ``cluster_count`` is
      given, cluster ids fall in [0, cluster_count) and the spine/leaf totals
      match the profile.
    """
    issues: List[str] = []
    if not isinstance(topology, Topology):
        return ["topology is not a Topology"]

    seen: Set[int] = set()
    dups: Set[int] = set()
    for node in topology.nodes():
        if node.node_id in seen:
            dups.add(node.node_id)
        seen.add(node.node_id)
        if node.type not in NODE_TYPES:
            issues.append(f"node {node.node_id} has unknown type {node.type!r}")
    if dups:
        issues.append(f"duplicate node id(s): {sorted(dups)[:20]}")

    for expected, seq in (("spine", topology.spines), ("leaf", topology.leafs), ("server", topology.servers)):
        for node in seq:
            if node.type != expected:
                issues.append(f"{node.label} ({node.type}) found in {expected} sequence")

    for node in topology.spines:
        if node.cluster_id is None:
            issues.append(f"spine {node.label} missing cluster_id")
        if node.group_id is not None:
            issues.append(f"spine {node.label} has group_id {node.group_id}")
    for node in topology.leafs:
        if node.cluster_id is None or node.group_id is None:
            issues.append(f"leaf {node.label} missing cluster_id/group_id")
    for node in topology.servers:
        if node.group_id is None:
            issues.append(f"server {node.label} missing group_id")
        if node.cluster_id is not None:
            issues.append(f"server {node.label} has cluster_id {node.cluster_id}")

    for node in topology.nodes():
        if node.group_id is not None and not (0 <= node.group_id < profile.leaf_groups):
            issues.append(f"{node.label} group_id {node.group_id} outside [0, {profile.leaf_groups})")
        if cluster_count is not None and node.cluster_id is not None and not (0 <= node.cluster_id < cluster_count):
            issues.append(f"{node.label} cluster_id {node.cluster_id} outside [0, {cluster_count})")

    if cluster_count is not None:
        want_spines = profile.spine_count * cluster_count
        want_leafs = profile.leafs_per_cluster * cluster_count
        if len(topology.spines) != want_spines:
            issues.append(f"spine count {len(topology.spines)} != expected {want_spines}")
        if len(topology.leafs) != want_leafs:
            issues.append(f"leaf count {len(topology.leafs)} != expected {want_leafs}")
    if topology.servers and len(topology.servers) != profile.total_servers:
        issues.append(f"server count {len(topology.servers)} != expected {profile.total_servers}")

    return issues


def assert_topology_valid(topology: Topology, cluster_count: Optional[int] = None, profile: LayoutProfile = DEFAULT_PROFILE) -> None:
    issues = validate_topology(topology, cluster_count, profile)
    if issues:
        raise ValueError("Topology validation failed: " + "; ".join(issues))
