import pytest
import yaml

from ketaring.core.cluster.ketama import KetamaClusterModel
from ketaring.core.models.cluster import ClusterNodeSpec, ClusterSpec
from tests.utils import make_nodes


@pytest.fixture
def nodes() -> list[ClusterNodeSpec]:
    return make_nodes(4)


@pytest.fixture
def cluster_spec(nodes) -> ClusterSpec:
    return ClusterSpec.of(nodes)


@pytest.fixture
def model(cluster_spec) -> KetamaClusterModel:
    return KetamaClusterModel(cluster_spec)


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "ketaring.yaml"

    data = {
        "cluster": {
            "type": "consistent-hash",
            "nodes": [
                {"host": "10.0.0.1", "port": 6379},
                {"host": "10.0.0.2", "port": 6380, "db": 2},
                {"host": "10.0.0.3"},
            ]
        },
        "ketama": {
            "replication_constant": 40,
            "min_slots_per_node": 2,
        }
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def test_config_env(monkeypatch, config_file):
    monkeypatch.setenv("TEST_KETARINGCONFIG", str(config_file))
    return config_file
