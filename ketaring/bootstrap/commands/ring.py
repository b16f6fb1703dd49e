import argparse
from typing import Any

from ketaring.bootstrap.deps import get_dispatcher
from ketaring.core.cluster.ketama import KetamaClusterModel

dispatcher = get_dispatcher()


@dispatcher.command("locate")
def locate(model: KetamaClusterModel, namespace: argparse.Namespace) -> dict[str, Any]:
    return {
        key: model.get_node_for_key(key.encode("utf-8")).node_id
        for key in namespace.keys
    }


@dispatcher.command("replicas")
def replicas(model: KetamaClusterModel, namespace: argparse.Namespace) -> dict[str, Any]:
    nodes = model.get_nodes_for_key(namespace.key.encode("utf-8"), namespace.count)
    return {namespace.key: [node.node_id for node in nodes]}


@dispatcher.command("ring")
def ring(model: KetamaClusterModel, namespace: argparse.Namespace) -> dict[str, Any]:
    spec = model.cluster_spec
    return {
        "cluster": {
            "type": str(spec.cluster_type),
            "nodes": spec.node_count,
            "replication_count": model.node_replication_cnt,
            "slots_per_node": model.slots_per_node,
            "vnodes": model.node_map.size(),
        },
        "distribution": {
            node_id: {"vnodes": share.vnodes, "share": round(share.share, 6)}
            for node_id, share in model.distribution().items()
        },
    }
