from __future__ import annotations
"""Full-mesh and active-highlight line sets.

Segments are ``(a, b)`` point pairs. The full mesh starts each segment at the
spine or server end; highlight segments start at the focused node.
"""

import logging
from typing import List, Optional

from ..types import Node, Segment, Topology

logger = logging.getLogger(__name__)


def resolve_focus(topology: Topology, node: Optional[Node]) -> Optional[Node]:
    """Return the topology's own copy of ``node`` or None when it is stale.

    Matching is by (type, id) and the identity key (cluster, group, slot)
    must agree; a node carried over from an earlier layout whose id now
    belongs to something else resolves to None.
    """
    if node is None:
        return None
    found = topology.index.by_type_id.get((node.type, node.node_id))
    if found is None or found.identity_key != node.identity_key:
        return None
    return found


def build_full_mesh(topology: Topology) -> List[Segment]:
    """Every spine-leaf pair in the same cluster, every server-leaf pair in the same group."""
    segments: List[Segment] = []
    idx = topology.index
    for spine in topology.spines:
        for leaf in idx.leafs_by_cluster.get(spine.cluster_id, ()):
            segments.append((spine.position, leaf.position))
    spine_leaf = len(segments)
    for server in topology.servers:
        for leaf in idx.leafs_by_group.get(server.group_id, ()):
            segments.append((server.position, leaf.position))
    if logger.isEnabledFor(logging.INFO):
        logger.info(
            "[mesh] spine-leaf=%d server-leaf=%d total=%d",
            spine_leaf, len(segments) - spine_leaf, len(segments),
        )
    return segments


def adjacent_nodes(topology: Topology, focused: Optional[Node]) -> List[Node]:
    node = resolve_focus(topology, focused)
    if node is None:
        return []
    idx = topology.index
    if node.type == "spine":
        return list(idx.leafs_by_cluster.get(node.cluster_id, ()))
    if node.type == "leaf":
        return list(idx.spines_by_cluster.get(node.cluster_id, ())) + list(idx.servers_by_group.get(node.group_id, ()))
    if node.type == "server":
        return list(idx.leafs_by_group.get(node.group_id, ()))
    return []


def build_highlight(topology: Topology, focused: Optional[Node]) -> List[Segment]:
    node = resolve_focus(topology, focused)
    if node is None:
        if focused is not None:
            logger.debug("[highlight] stale focus %s id=%s ignored", focused.label, focused.node_id)
        return []
    segments = [(node.position, other.position) for other in adjacent_nodes(topology, node)]
    logger.debug("[highlight] %s -> %d segments", node.label, len(segments))
    return segments
