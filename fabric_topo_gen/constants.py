"""Small, shared constants used across fabric_topo_gen.

Keep this module dependency-free to avoid import cycles.
"""

NODE_TYPES = ("spine", "leaf", "server")

# Fat-tree shape (per cluster unless noted)
SPINE_COUNT: int = 64
LEAF_GROUPS: int = 16
LEAFS_PER_GROUP: int = 8
# Server groups mirror leaf groups and are generated once, not per cluster.
SERVERS_PER_GROUP_STD: int = 64
SERVERS_LAST_GROUP: int = 56
REDUCED_SERVER_GROUP: int = 15

# Heights (y axis)
SPINE_Y: float = 15.0
LEAF_Y: float = -5.0
SERVER_Y: float = -25.0

# Spacing (x is width, z is depth)
SPINE_SPACING: float = 2.5
GROUP_SPACING: float = 10.0
LEAF_LOCAL_SPACING_Z: float = 2.0
CLUSTER_SPACING_Z: float = 60.0
SERVER_SPACING: float = 1.0

# Escape route curves
ESCAPE_CURVE_DEPTH: float = 25.0
ESCAPE_CURVE_SEGMENTS: int = 20

LABEL_LIFT_Y: float = 2.5

# Palette (hex strings, renderer-agnostic)
SPINE_COLOR = "#76b900"
LEAF_COLOR = "#006039"
SERVER_COLOR = "#ccff00"
FOCUS_COLOR = "#ffffff"
MESH_COLOR = "#76b900"
HIGHLIGHT_COLOR = "#ffffff"
ESCAPE_COLOR = "#ff3333"
RELATED_LERP: float = 0.5
DIM_FACTOR: float = 0.3
