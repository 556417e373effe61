"""Planning subpackage initialization and public layout helpers.

Purpose: turn the scale parameters (cluster count, server visibility) and a
layout profile into a positioned topology, and check that topology against
the fat-tree invariants. The session, the CLI and the tests share these
entry points.
"""

from .constraints import LayoutConstraintViolation, validate_cluster_count  # noqa: F401
from .profile import DEFAULT_PROFILE, LayoutProfile, ProfileError, load_profile_yaml  # noqa: F401
from .layout import generate_layout  # noqa: F401
from .topology_validation import assert_topology_valid, validate_topology  # noqa: F401

__all__ = [
    "LayoutConstraintViolation",
    "validate_cluster_count",
    "DEFAULT_PROFILE",
    "LayoutProfile",
    "ProfileError",
    "load_profile_yaml",
    "generate_layout",
    "validate_topology",
    "assert_topology_valid",
]
