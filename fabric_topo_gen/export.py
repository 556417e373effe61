from __future__ import annotations
"""Flat buffers and the JSON scene payload handed to the renderer.

Line buffers are flat ``[x0, y0, z0, x1, y1, z1, ...]`` float lists, two
points per segment, ready for a position attribute with item size 3.
"""

import json
from typing import Any, Dict, Iterable, List, Optional

from .builders.display_state import DEFAULT_PALETTE, describe_node, label_anchor
from .session import VisualizerSession
from .types import Node, Segment


def flatten_segments(segments: Iterable[Segment]) -> List[float]:
    out: List[float] = []
    for a, b in segments:
        out.extend((a.x, a.y, a.z, b.x, b.y, b.z))
    return out


def flatten_positions(nodes: Iterable[Node]) -> List[float]:
    out: List[float] = []
    for n in nodes:
        out.extend((n.position.x, n.position.y, n.position.z))
    return out


def node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "id": node.node_id,
        "type": node.type,
        "cluster_id": node.cluster_id,
        "group_id": node.group_id,
        "slot": node.slot,
        "label": node.label,
        "position": list(node.position.as_tuple()),
    }


def overlay_stats(session: VisualizerSession) -> Dict[str, Any]:
    profile = session.profile
    return {
        "spines_per_cluster": profile.spine_count,
        "leafs_per_cluster": profile.leafs_per_cluster,
        "servers": profile.total_servers if session.server_mode else None,
        "clusters_active": session.cluster_count,
    }


def camera_target(session: VisualizerSession) -> List[float]:
    """Orbit target: centered on the middle of the cluster row."""
    if session.cluster_count < 1:
        return [0.0, 0.0, 0.0]
    return [0.0, 0.0, session.profile.cluster_offset(session.cluster_count - 1) / 2.0]


def build_scene_payload(session: VisualizerSession, include_nodes: bool = True) -> Dict[str, Any]:
    """Return a JSON-serializable snapshot of everything the renderer draws."""
    topology = session.topology
    focused: Optional[Node] = session.focused
    states = session.display_states()
    payload: Dict[str, Any] = {
        "state": {
            "cluster_count": session.cluster_count,
            "server_mode": session.server_mode,
            "escape_mode": session.escape_mode,
        },
        "counts": topology.counts(),
        "positions": {
            "spines": flatten_positions(topology.spines),
            "leafs": flatten_positions(topology.leafs),
            "servers": flatten_positions(topology.servers),
        },
        "colors": {k: [s.color for s in v] for k, v in states.items()},
        "lines": {
            "full_mesh": flatten_segments(session.full_mesh()),
            "highlight": flatten_segments(session.highlight()),
            "escape": flatten_segments(session.escape_routes()),
        },
        "palette": dict(DEFAULT_PALETTE),
        "overlay": overlay_stats(session),
        "camera_target": camera_target(session),
        "focus": None,
    }
    if focused is not None:
        payload["focus"] = {
            "card": describe_node(focused),
            "label_anchor": list(label_anchor(focused).as_tuple()),
        }
    if include_nodes:
        payload["nodes"] = {
            "spines": [node_to_dict(n) for n in topology.spines],
            "leafs": [node_to_dict(n) for n in topology.leafs],
            "servers": [node_to_dict(n) for n in topology.servers],
        }
    return payload


def write_scene_json(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f)
