from __future__ import annotations

import itertools
import logging
from typing import Iterator, List

from ..types import Node, Topology, Vec3
from .constraints import validate_cluster_count, validate_flag
from .profile import DEFAULT_PROFILE, LayoutProfile

logger = logging.getLogger(__name__)


def _centered_start(count: int, spacing: float) -> float:
    return -((count - 1) * spacing) / 2.0


def server_base_z(cluster_count: int, profile: LayoutProfile = DEFAULT_PROFILE) -> float:
    """Depth the server rows are centered on.

    Midway between the first cluster (z=0) and the last one when more than
    one cluster exists, otherwise 0.
    """
    if cluster_count > 1:
        return (0.0 + profile.cluster_offset(cluster_count - 1)) / 2.0
    return 0.0


def _cluster_nodes(c: int, ids: Iterator[int], profile: LayoutProfile, spines: List[Node], leafs: List[Node]) -> None:
    z_offset = profile.cluster_offset(c)

    spine_start_x = _centered_start(profile.spine_count, profile.spine_spacing)
    for i in range(profile.spine_count):
        spines.append(Node(
            node_id=next(ids),
            type="spine",
            cluster_id=c,
            position=Vec3(spine_start_x + i * profile.spine_spacing, profile.spine_y, z_offset),
            label=f"C{c + 1}-Spine-{i + 1}",
            slot=i,
        ))

    group_start_x = _centered_start(profile.leaf_groups, profile.group_spacing)
    for g in range(profile.leaf_groups):
        group_x = group_start_x + g * profile.group_spacing
        for l in range(profile.leafs_per_group):
            local_z = (l - (profile.leafs_per_group - 1) / 2.0) * profile.leaf_local_spacing_z
            leafs.append(Node(
                node_id=next(ids),
                type="leaf",
                cluster_id=c,
                group_id=g,
                position=Vec3(group_x, profile.leaf_y, local_z + z_offset),
                label=f"C{c + 1}-Leaf-G{g + 1}-{l + 1}",
                slot=l,
            ))


def _server_nodes(cluster_count: int, ids: Iterator[int], profile: LayoutProfile, servers: List[Node]) -> None:
    base_z = server_base_z(cluster_count, profile)
    group_start_x = _centered_start(profile.leaf_groups, profile.group_spacing)
    for g in range(profile.leaf_groups):
        group_x = group_start_x + g * profile.group_spacing
        count = profile.servers_in_group(g)
        total_length = (count - 1) * profile.server_spacing
        for s in range(count):
            z = s * profile.server_spacing - total_length / 2.0
            servers.append(Node(
                node_id=next(ids),
                type="server",
                group_id=g,
                position=Vec3(group_x, profile.server_y, base_z + z),
                label=f"Server-G{g + 1}-{s + 1}",
                slot=s,
            ))


def generate_layout(cluster_count: int, include_servers: bool, profile: LayoutProfile = DEFAULT_PROFILE) -> Topology:
    """Generate the full spine/leaf/server topology from scratch.

    Clusters are laid out along -z, each ``profile.cluster_spacing_z`` behind
    the previous one. Every call hands out fresh ids starting at 0 in
    generation order (all spines and leafs of cluster 0, then cluster 1, ...,
    then servers), so ids are not stable across calls with different
    parameters. Servers are generated once per group, not per cluster.

    Raises LayoutConstraintViolation for negative or non-integer cluster
    counts.
    """
    cluster_count = validate_cluster_count(cluster_count)
    include_servers = validate_flag("include_servers", include_servers)

    spines: List[Node] = []
    leafs: List[Node] = []
    servers: List[Node] = []
    ids = itertools.count()

    for c in range(cluster_count):
        _cluster_nodes(c, ids, profile, spines, leafs)

    if include_servers:
        _server_nodes(cluster_count, ids, profile, servers)

    topology = Topology(spines=spines, leafs=leafs, servers=servers)
    if logger.isEnabledFor(logging.INFO):
        logger.info(
            "[layout] clusters=%d servers=%s -> spines=%d leafs=%d servers=%d",
            cluster_count, include_servers, len(spines), len(leafs), len(servers),
        )
    return topology


__all__ = [
    'generate_layout',
    'server_base_z',
]
