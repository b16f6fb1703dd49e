from ketaring.core.models.cluster import ClusterNodeSpec


def make_nodes(count: int, base_port: int = 6379) -> list[ClusterNodeSpec]:
    return [
        ClusterNodeSpec(host=f"10.0.0.{i + 1}", port=base_port)
        for i in range(count)
    ]
