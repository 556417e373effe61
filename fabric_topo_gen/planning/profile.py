from __future__ import annotations
"""Layout profiles.

A profile carries every constant the layout generator and the escape-route
builder need. The default profile reproduces the stock 64-spine / 16x8-leaf
fabric; alternative shapes can be loaded from YAML, e.g.::

    leaf_groups: 8
    leafs_per_group: 4
    reduced_server_group: 7
    cluster_spacing_z: 40

Only keys present in the document override the defaults.
"""

import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from jsonschema import Draft7Validator

from .. import constants as C

logger = logging.getLogger(__name__)


class ProfileError(ValueError):
    pass


@dataclass(frozen=True)
class LayoutProfile:
    spine_count: int = C.SPINE_COUNT
    leaf_groups: int = C.LEAF_GROUPS
    leafs_per_group: int = C.LEAFS_PER_GROUP
    servers_per_group: int = C.SERVERS_PER_GROUP_STD
    servers_reduced_group: int = C.SERVERS_LAST_GROUP
    # Server group that gets servers_reduced_group servers; must be < leaf_groups.
    reduced_server_group: int = C.REDUCED_SERVER_GROUP
    spine_y: float = C.SPINE_Y
    leaf_y: float = C.LEAF_Y
    server_y: float = C.SERVER_Y
    spine_spacing: float = C.SPINE_SPACING
    group_spacing: float = C.GROUP_SPACING
    leaf_local_spacing_z: float = C.LEAF_LOCAL_SPACING_Z
    cluster_spacing_z: float = C.CLUSTER_SPACING_Z
    server_spacing: float = C.SERVER_SPACING
    escape_curve_depth: float = C.ESCAPE_CURVE_DEPTH
    escape_curve_segments: int = C.ESCAPE_CURVE_SEGMENTS

    @property
    def leafs_per_cluster(self) -> int:
        return self.leaf_groups * self.leafs_per_group

    @property
    def escape_group(self) -> int:
        return self.leaf_groups - 1

    def servers_in_group(self, group_id: int) -> int:
        if group_id == self.reduced_server_group:
            return self.servers_reduced_group
        return self.servers_per_group

    @property
    def total_servers(self) -> int:
        return sum(self.servers_in_group(g) for g in range(self.leaf_groups))

    def cluster_offset(self, cluster_id: int) -> float:
        return 0.0 - cluster_id * self.cluster_spacing_z

    def __post_init__(self) -> None:
        if not (0 <= self.reduced_server_group < self.leaf_groups):
            raise ProfileError(
                f"reduced_server_group: {self.reduced_server_group} is outside [0, {self.leaf_groups})"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_PROFILE = LayoutProfile()

_INT_KEYS = ("spine_count", "leaf_groups", "leafs_per_group", "servers_per_group", "servers_reduced_group")
_FLOAT_KEYS = (
    "spine_y",
    "leaf_y",
    "server_y",
    "spine_spacing",
    "group_spacing",
    "leaf_local_spacing_z",
    "cluster_spacing_z",
    "server_spacing",
    "escape_curve_depth",
)

PROFILE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        **{k: {"type": "integer", "minimum": 1} for k in _INT_KEYS},
        "reduced_server_group": {"type": "integer", "minimum": 0},
        **{k: {"type": "number"} for k in _FLOAT_KEYS},
        "escape_curve_segments": {"type": "integer", "minimum": 16},
    },
}


def validate_profile_doc(doc: Any, base: LayoutProfile = DEFAULT_PROFILE) -> Tuple[bool, List[str]]:
    """Validate a profile mapping against PROFILE_SCHEMA (draft-07).

    Keys missing from ``doc`` are taken from ``base`` for the cross-field
    check that reduced_server_group lies in [0, leaf_groups).

    Returns: (ok, errors)
    """
    v = Draft7Validator(PROFILE_SCHEMA)
    errors = sorted(v.iter_errors(doc), key=lambda e: list(e.path))
    msgs: List[str] = []
    for e in errors:
        loc = ".".join([str(p) for p in e.path])
        msgs.append(f"{loc}: {e.message}" if loc else e.message)
    if not msgs and isinstance(doc, dict):
        groups = doc.get("leaf_groups", base.leaf_groups)
        reduced = doc.get("reduced_server_group", base.reduced_server_group)
        if reduced >= groups:
            msgs.append(f"reduced_server_group: {reduced} is outside [0, {groups})")
    return (not msgs), msgs


def profile_from_dict(doc: Dict[str, Any], base: LayoutProfile = DEFAULT_PROFILE) -> LayoutProfile:
    ok, errors = validate_profile_doc(doc, base)
    if not ok:
        raise ProfileError("Invalid layout profile: " + "; ".join(errors))
    known = {f.name for f in fields(LayoutProfile)}
    overrides = {k: v for k, v in doc.items() if k in known}
    for k in _FLOAT_KEYS:
        if k in overrides:
            overrides[k] = float(overrides[k])
    profile = replace(base, **overrides)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("[profile] overrides=%s", sorted(overrides))
    return profile


def load_profile_yaml(path: str | Path) -> LayoutProfile:
    """Load a YAML layout profile; an empty document yields the default profile."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"Layout profile {p} is not valid YAML: {e}") from e
    if not isinstance(doc, dict):
        raise ProfileError("Layout profile YAML must be a mapping at the document root")
    profile = profile_from_dict(doc)
    logger.info("[profile] loaded %s (%d overrides)", p, len(doc))
    return profile
