from __future__ import annotations
"""Visualizer session: the control surface the UI layer drives.

Holds the four independent inputs (cluster count, server mode, escape mode,
focused node) and memoizes each derived artifact against its own dependency
set:

    layout     <- cluster_count, server_mode
    full mesh  <- layout
    highlight  <- focused node, layout
    escape     <- escape_mode, cluster_count, layout

Any change to cluster count or server mode regenerates the layout, which
reassigns node ids. The focused node is then re-resolved by its identity key
(type, cluster, group, slot); if the new layout has no such node the focus is
cleared.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .builders.connections import build_full_mesh, build_highlight, resolve_focus
from .builders.display_state import NodeDisplayState, compute_display_states
from .builders.escape_routes import build_escape_routes
from .planning.constraints import LayoutConstraintViolation, validate_cluster_count, validate_flag
from .planning.layout import generate_layout
from .planning.profile import DEFAULT_PROFILE, LayoutProfile
from .types import Node, Segment, Topology

logger = logging.getLogger(__name__)


class VisualizerSession:
    def __init__(
        self,
        cluster_count: int = 1,
        include_servers: bool = False,
        escape_mode: bool = False,
        profile: LayoutProfile = DEFAULT_PROFILE,
    ):
        self.profile = profile
        self._cluster_count = validate_cluster_count(cluster_count)
        self._server_mode = validate_flag("include_servers", include_servers)
        self._escape_mode = validate_flag("escape_mode", escape_mode)
        self._focused: Optional[Node] = None
        self._topology: Optional[Topology] = None
        self._layout_key: Optional[Tuple[int, bool]] = None
        self._mesh: Optional[List[Segment]] = None
        self._highlight: Optional[List[Segment]] = None
        self._highlight_key: Optional[Tuple[str, int]] = None
        self._escape: Optional[List[Segment]] = None
        self._escape_key: Optional[Tuple[bool, int]] = None
        self.stats: Dict[str, int] = {"layout": 0, "mesh": 0, "highlight": 0, "escape": 0}

    # ---- inputs ----

    @property
    def cluster_count(self) -> int:
        return self._cluster_count

    @property
    def server_mode(self) -> bool:
        return self._server_mode

    @property
    def escape_mode(self) -> bool:
        return self._escape_mode

    @property
    def focused(self) -> Optional[Node]:
        return self._focused

    def request_layout(self, cluster_count: int, include_servers: bool) -> Topology:
        cluster_count = validate_cluster_count(cluster_count)
        include_servers = validate_flag("include_servers", include_servers)
        if cluster_count < self._cluster_count:
            raise LayoutConstraintViolation(
                f"cluster_count can only grow (current {self._cluster_count}, requested {cluster_count})"
            )
        self._cluster_count = cluster_count
        self._server_mode = include_servers
        return self.topology

    def add_cluster(self) -> Topology:
        return self.request_layout(self._cluster_count + 1, self._server_mode)

    def set_server_mode(self, enabled: bool) -> Topology:
        return self.request_layout(self._cluster_count, enabled)

    def set_escape_mode(self, enabled: bool) -> None:
        self._escape_mode = validate_flag("escape_mode", enabled)

    def set_focus(self, node: Optional[Node]) -> Optional[Node]:
        """Focus ``node`` (pointer enter) or clear focus with None (pointer leave).

        A node that is not part of the current layout clears the focus.
        """
        resolved = resolve_focus(self.topology, node)
        if node is not None and resolved is None:
            logger.debug("[session] focus on stale node %s ignored", node.label)
        self._focused = resolved
        return resolved

    # ---- derived ----

    @property
    def topology(self) -> Topology:
        key = (self._cluster_count, self._server_mode)
        if self._topology is None or key != self._layout_key:
            previous_focus = self._focused
            self._topology = generate_layout(key[0], key[1], self.profile)
            self._layout_key = key
            self._mesh = None
            self._highlight = None
            self._highlight_key = None
            self._escape = None
            self._escape_key = None
            self.stats["layout"] += 1
            self._focused = None
            if previous_focus is not None:
                self._focused = self._topology.index.by_identity.get(previous_focus.identity_key)
                logger.debug(
                    "[session] focus %s re-resolved -> %s",
                    previous_focus.label, self._focused.label if self._focused else None,
                )
        return self._topology

    def full_mesh(self) -> List[Segment]:
        topology = self.topology
        if self._mesh is None:
            self._mesh = build_full_mesh(topology)
            self.stats["mesh"] += 1
        return self._mesh

    def highlight(self) -> List[Segment]:
        topology = self.topology
        key = (self._focused.type, self._focused.node_id) if self._focused else None
        if self._highlight is None or key != self._highlight_key:
            self._highlight = build_highlight(topology, self._focused)
            self._highlight_key = key
            self.stats["highlight"] += 1
        return self._highlight

    def escape_routes(self) -> List[Segment]:
        topology = self.topology
        key = (self._escape_mode, self._cluster_count)
        if self._escape is None or key != self._escape_key:
            self._escape = build_escape_routes(topology, self._escape_mode, self._cluster_count, self.profile)
            self._escape_key = key
            self.stats["escape"] += 1
        return self._escape

    def display_states(self) -> Dict[str, List[NodeDisplayState]]:
        return compute_display_states(self.topology, self._focused)

    def find_node(self, node_type: str, cluster_id: Optional[int], group_id: Optional[int], slot: int) -> Optional[Node]:
        return self.topology.index.by_identity.get((node_type, cluster_id, group_id, slot))

    def summarize(self) -> Dict[str, Any]:
        topology = self.topology
        return {
            "cluster_count": self._cluster_count,
            "server_mode": self._server_mode,
            "escape_mode": self._escape_mode,
            "focused": self._focused.label if self._focused else None,
            "counts": topology.counts(),
            "full_mesh_segments": len(self.full_mesh()),
            "highlight_segments": len(self.highlight()),
            "escape_segments": len(self.escape_routes()),
        }
