from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def lerp(self, other: "Vec3", t: float) -> "Vec3":
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Vec3":
        return Vec3(self.x + dx, self.y + dy, self.z + dz)


# A line segment is an ordered pair of points.
Segment = Tuple[Vec3, Vec3]


@dataclass(frozen=True)
class Node:
    node_id: int
    type: str  # spine | leaf | server
    position: Vec3
    label: str
    cluster_id: Optional[int] = None  # spine and leaf only
    group_id: Optional[int] = None  # leaf and server only
    # Index within the group (leaf, server) or within the cluster's spine row.
    slot: int = 0

    @property
    def identity_key(self) -> Tuple[str, Optional[int], Optional[int], int]:
        """Key that survives a layout recomputation (unlike ``node_id``)."""
        return (self.type, self.cluster_id, self.group_id, self.slot)


@dataclass
class TopologyIndex:
    spines_by_cluster: Dict[int, List[Node]] = field(default_factory=dict)
    leafs_by_cluster: Dict[int, List[Node]] = field(default_factory=dict)
    leafs_by_group: Dict[int, List[Node]] = field(default_factory=dict)
    servers_by_group: Dict[int, List[Node]] = field(default_factory=dict)
    leaf_slots: Dict[Tuple[int, int, int], Node] = field(default_factory=dict)
    by_type_id: Dict[Tuple[str, int], Node] = field(default_factory=dict)
    by_identity: Dict[Tuple[str, Optional[int], Optional[int], int], Node] = field(default_factory=dict)


@dataclass
class Topology:
    """Ordered spine, leaf and server sequences plus lookup tables over them.

    The index is built once at construction; callers that change the lists
    afterwards must call ``reindex()``.
    """

    spines: List[Node] = field(default_factory=list)
    leafs: List[Node] = field(default_factory=list)
    servers: List[Node] = field(default_factory=list)
    index: TopologyIndex = field(default_factory=TopologyIndex, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.reindex()

    def reindex(self) -> None:
        idx = TopologyIndex()
        for n in self.spines:
            idx.spines_by_cluster.setdefault(n.cluster_id, []).append(n)
        for n in self.leafs:
            idx.leafs_by_cluster.setdefault(n.cluster_id, []).append(n)
            idx.leafs_by_group.setdefault(n.group_id, []).append(n)
            idx.leaf_slots[(n.cluster_id, n.group_id, n.slot)] = n
        for n in self.servers:
            idx.servers_by_group.setdefault(n.group_id, []).append(n)
        for n in self.nodes():
            idx.by_type_id[(n.type, n.node_id)] = n
            idx.by_identity[n.identity_key] = n
        self.index = idx

    def nodes(self) -> Iterator[Node]:
        yield from self.spines
        yield from self.leafs
        yield from self.servers

    def counts(self) -> Dict[str, int]:
        return {
            "spines": len(self.spines),
            "leafs": len(self.leafs),
            "servers": len(self.servers),
        }

    def is_empty(self) -> bool:
        return not (self.spines or self.leafs or self.servers)
