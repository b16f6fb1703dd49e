from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Self


class ClusterType(StrEnum):
    """
    Describes how keys of a cluster are distributed across its nodes.
    Cluster models declare which of these types they can serve.
    """
    consistent_hash = "consistent-hash"
    modulo_hash = "modulo-hash"


@dataclass(frozen=True, slots=True)
class ClusterNodeSpec:
    """
    Identity of a single cluster member.

    The ring never owns a node's lifecycle: it only stores references to
    these specs and hands them back to the router that resolves them.
    """
    host: str
    """
    Hostname or IP address of the node.
    """

    port: int
    """
    TCP port the node listens on.
    """

    db: int = 0
    """
    Logical database selected on the node. Not part of the node identity
    on the ring: two specs differing only by db share their vnodes.
    """

    @property
    def node_id(self) -> str:
        """Stable identifier of the node, `host:port`."""
        return f"{self.host}:{self.port}"

    def key_for_replication_instance(self, slot: int) -> bytes:
        """
        Return the digest input of the given replication slot.

        Keys are distinct across slots of the same node and stable across
        calls, so every slot lands on its own set of ring positions.
        """
        return f"{self.node_id}-{slot}".encode("utf-8")

    def to_dict(self) -> dict[str, str | int]:
        return {"host": self.host, "port": self.port, "db": self.db}


@dataclass(frozen=True, slots=True)
class ClusterSpec:
    """
    Static description of a cluster: its member nodes and its type.

    Node specs behave like a set keyed by node id (later duplicates are
    dropped) but keep their declaration order, so building a ring from a
    spec is reproducible.
    """
    node_specs: tuple[ClusterNodeSpec, ...]
    cluster_type: ClusterType = ClusterType.consistent_hash

    def __post_init__(self) -> None:
        unique: dict[str, ClusterNodeSpec] = {}
        for node in self.node_specs:
            unique.setdefault(node.node_id, node)
        object.__setattr__(self, "node_specs", tuple(unique.values()))
        object.__setattr__(self, "cluster_type", ClusterType(self.cluster_type))

    @classmethod
    def of(
        cls,
        nodes: Iterable[ClusterNodeSpec],
        cluster_type: ClusterType | str = ClusterType.consistent_hash,
    ) -> Self:
        return cls(node_specs=tuple(nodes), cluster_type=ClusterType(cluster_type))

    @property
    def node_count(self) -> int:
        return len(self.node_specs)
