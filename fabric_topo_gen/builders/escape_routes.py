from __future__ import annotations

import logging
from typing import List, Tuple

from ..planning.profile import DEFAULT_PROFILE, LayoutProfile
from ..types import Node, Segment, Topology, Vec3

logger = logging.getLogger(__name__)


def quadratic_bezier_points(start: Vec3, control: Vec3, end: Vec3, divisions: int) -> List[Vec3]:
    """Sample ``divisions + 1`` evenly spaced (in t) points along the curve."""
    if divisions < 1:
        raise ValueError(f"divisions must be >= 1, got {divisions}")
    points: List[Vec3] = []
    for k in range(divisions + 1):
        t = k / divisions
        a = (1 - t) * (1 - t)
        b = 2 * (1 - t) * t
        c = t * t
        points.append(Vec3(
            a * start.x + b * control.x + c * end.x,
            a * start.y + b * control.y + c * end.y,
            a * start.z + b * control.z + c * end.z,
        ))
    return points


def escape_curve(start: Vec3, end: Vec3, depth: float, divisions: int) -> List[Segment]:
    """A curve from ``start`` to ``end`` sagging ``depth`` below the chord midpoint, as segments."""
    mid = start.lerp(end, 0.5)
    control = mid.offset(dy=-depth)
    pts = quadratic_bezier_points(start, control, end, divisions)
    return [(pts[k], pts[k + 1]) for k in range(len(pts) - 1)]


def escape_leaf_pairs(topology: Topology, cluster_count: int, profile: LayoutProfile = DEFAULT_PROFILE) -> List[Tuple[Node, Node]]:
    """Pair the boundary group's leafs of each cluster with the next cluster's, slot by slot.

    Pairs with a missing endpoint are skipped.
    """
    pairs: List[Tuple[Node, Node]] = []
    group = profile.escape_group
    lookup = topology.index.leaf_slots
    for c in range(cluster_count - 1):
        for slot in range(profile.leafs_per_group):
            a = lookup.get((c, group, slot))
            b = lookup.get((c + 1, group, slot))
            if a is not None and b is not None:
                pairs.append((a, b))
    return pairs


def build_escape_routes(
    topology: Topology,
    enabled: bool,
    cluster_count: int,
    profile: LayoutProfile = DEFAULT_PROFILE,
) -> List[Segment]:
    if not enabled or cluster_count < 2:
        return []
    segments: List[Segment] = []
    pairs = escape_leaf_pairs(topology, cluster_count, profile)
    for a, b in pairs:
        segments.extend(escape_curve(a.position, b.position, profile.escape_curve_depth, profile.escape_curve_segments))
    if logger.isEnabledFor(logging.INFO):
        logger.info("[escape] clusters=%d pairs=%d segments=%d", cluster_count, len(pairs), len(segments))
    return segments
