import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so imports like 'fabric_topo_gen.planning' work
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fabric_topo_gen.planning.layout import generate_layout  # noqa: E402


@pytest.fixture(scope="session")
def one_cluster():
    return generate_layout(1, False)


@pytest.fixture(scope="session")
def two_clusters_with_servers():
    return generate_layout(2, True)
