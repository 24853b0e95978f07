"""Shared test fixtures and factories."""

from pathlib import Path

import pytest

from wgraph.config.paths import ENV_VAR, get_wgraph_home
from wgraph.store import GraphStore
from wgraph.types import Node

TESTDATA = Path(__file__).parent / "testdata"

# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def json_path() -> Path:
    return TESTDATA / "graph.json"


@pytest.fixture
def yaml_path() -> Path:
    return TESTDATA / "graph.yaml"


@pytest.fixture
def graph_00_body() -> dict[str, dict[str, float]]:
    """The eight-node weighted graph stored under ``graph_00``."""
    return {
        "S": {"A": 100, "B": 14, "C": 200},
        "A": {"S": 15, "B": 5, "D": 20, "T": 44},
        "B": {"S": 14, "A": 5, "D": 30, "E": 18},
        "C": {"S": 9, "E": 24},
        "D": {"A": 20, "B": 30, "E": 2, "F": 11, "T": 16},
        "E": {"B": 18, "C": 24, "D": 2, "F": 6, "T": 19},
        "F": {"D": 11, "E": 6, "T": 6},
        "T": {"A": 44, "D": 16, "F": 6, "E": 19},
    }


def make_store(*node_ids: str, graph_id: str = "test") -> GraphStore:
    store = GraphStore(graph_id)
    for node_id in node_ids:
        store.add_node(Node.create(node_id))
    return store


def assert_mirrored(store: GraphStore) -> None:
    """Children and parents tables are exact inverses and reference live nodes."""
    with store._lock.read_locked():
        children = {s: dict(t) for s, t in store._children.items()}
        parents = {t: dict(s) for t, s in store._parents.items()}
        nodes = set(store._nodes)

    forward = {(s, t): w for s, targets in children.items() for t, w in targets.items()}
    backward = {(s, t): w for t, sources in parents.items() for s, w in sources.items()}
    assert forward == backward
    for s, t in forward:
        assert s in nodes
        assert t in nodes
    assert all(children.values())
    assert all(parents.values())


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def wgraph_home(tmp_path: Path, monkeypatch) -> Path:
    """Point WGRAPH_HOME at a temporary directory."""
    home = tmp_path / ".wgraph"
    home.mkdir()
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv("WGRAPH_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    get_wgraph_home.cache_clear()
    yield home
    get_wgraph_home.cache_clear()
