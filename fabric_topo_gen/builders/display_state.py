from __future__ import annotations
"""Per-node display state derived from the focused node.

The renderer recolors instances from these values instead of editing color
buffers in place; everything here is a pure function of ``(node, focused)``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .. import constants as C
from ..types import Node, Topology, Vec3

DEFAULT_PALETTE: Dict[str, str] = {
    "spine": C.SPINE_COLOR,
    "leaf": C.LEAF_COLOR,
    "server": C.SERVER_COLOR,
    "focus": C.FOCUS_COLOR,
    "mesh": C.MESH_COLOR,
    "highlight": C.HIGHLIGHT_COLOR,
    "escape": C.ESCAPE_COLOR,
}


@dataclass(frozen=True)
class NodeDisplayState:
    state: str  # focused | related | dimmed | normal
    color: str


def _hex_to_rgb(value: str) -> Tuple[float, float, float]:
    v = value.lstrip("#")
    if len(v) != 6:
        raise ValueError(f"expected #rrggbb color, got {value!r}")
    return (int(v[0:2], 16) / 255.0, int(v[2:4], 16) / 255.0, int(v[4:6], 16) / 255.0)


def _rgb_to_hex(rgb: Tuple[float, float, float]) -> str:
    return "#" + "".join(f"{max(0, min(255, int(round(ch * 255)))):02x}" for ch in rgb)


def lerp_color(a: str, b: str, t: float) -> str:
    ra, rb = _hex_to_rgb(a), _hex_to_rgb(b)
    return _rgb_to_hex(tuple(x + (y - x) * t for x, y in zip(ra, rb)))  # type: ignore[arg-type]


def scale_color(a: str, factor: float) -> str:
    return _rgb_to_hex(tuple(x * factor for x in _hex_to_rgb(a)))  # type: ignore[arg-type]


def is_related(node: Node, focused: Node) -> bool:
    if {node.type, focused.type} == {"spine", "leaf"}:
        return node.cluster_id == focused.cluster_id
    if {node.type, focused.type} == {"leaf", "server"}:
        return node.group_id == focused.group_id
    return False


def compute_display_state(node: Node, focused: Optional[Node], palette: Dict[str, str] = DEFAULT_PALETTE) -> NodeDisplayState:
    base = palette[node.type]
    if focused is None:
        return NodeDisplayState("normal", base)
    if node.node_id == focused.node_id and node.type == focused.type:
        return NodeDisplayState("focused", palette["focus"])
    if is_related(node, focused):
        return NodeDisplayState("related", lerp_color(base, "#ffffff", C.RELATED_LERP))
    return NodeDisplayState("dimmed", scale_color(base, C.DIM_FACTOR))


def compute_display_states(topology: Topology, focused: Optional[Node], palette: Dict[str, str] = DEFAULT_PALETTE) -> Dict[str, List[NodeDisplayState]]:
    """Display state for every node, keyed by sequence name and aligned with it."""
    return {
        "spines": [compute_display_state(n, focused, palette) for n in topology.spines],
        "leafs": [compute_display_state(n, focused, palette) for n in topology.leafs],
        "servers": [compute_display_state(n, focused, palette) for n in topology.servers],
    }


def label_anchor(node: Node) -> Vec3:
    return node.position.offset(dy=C.LABEL_LIFT_Y)


def describe_node(node: Node) -> Dict[str, Any]:
    """Hover card fields; cluster and group numbers are shown 1-based."""
    card: Dict[str, Any] = {"label": node.label, "type": node.type}
    if node.cluster_id is not None:
        card["cluster"] = node.cluster_id + 1
    if node.group_id is not None:
        card["group"] = node.group_id + 1
    return card
