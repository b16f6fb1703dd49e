import logging
import math
from dataclasses import dataclass

from ketaring.core.errors import InvariantViolation, UnsupportedOperation
from ketaring.core.models.cluster import ClusterNodeSpec, ClusterSpec, ClusterType
from ketaring.core.ports.hashing import ChunkedHash
from ketaring.core.space.hashing import KetamaHash
from ketaring.core.space.nodemap import NodeMap

REPLICATION_CONSTANT = 10.0


def replication_count(
    node_count: int,
    replication_constant: float = REPLICATION_CONSTANT,
) -> int:
    """
    Return the total vnode weight of each node in a cluster of `node_count`.

    Per the original consistent hashing paper, each bucket is replicated
    k*log(C) times, where C is the number of buckets (nodes). The constant
    k is empirical and configurable.
    """
    if node_count < 1:
        raise ValueError(f"node_count must be >= 1, got {node_count}")
    return int(math.log(node_count) * replication_constant)


@dataclass(frozen=True, slots=True)
class NodeShare:
    """
    Diagnostic view of how much of the ring a single node owns.
    """
    node: ClusterNodeSpec
    vnodes: int
    share: float
    """
    Fraction of the token space, in [0, 1], routed to this node.
    """


class KetamaClusterModel:
    """
    Static Ketama consistent-hashing cluster model.

    The constructor computes a replication count from the number of nodes,
    places `slots * 4` vnodes per node on a NodeMap (one digest per slot,
    four tokens per digest), then checks the ring size. The model is fully
    built when the constructor returns and is never mutated afterwards:
    lookups may run concurrently from any number of threads.

    Nodes cannot be added or removed; a different node set means a new
    model.
    """
    def __init__(
        self,
        cluster_spec: ClusterSpec,
        *,
        hasher: ChunkedHash | None = None,
        replication_constant: float = REPLICATION_CONSTANT,
        min_slots_per_node: int = 1,
    ) -> None:
        if hasher is None:
            hasher = KetamaHash()
        if not isinstance(hasher, ChunkedHash):
            raise UnsupportedOperation(
                f"[BUG] KetamaClusterModel requires a Ketama chunked hash, "
                f"got {type(hasher).__name__}"
            )
        if not self.supports(cluster_spec.cluster_type):
            raise UnsupportedOperation(
                f"KetamaClusterModel does not support "
                f"'{cluster_spec.cluster_type}' clusters"
            )
        if min_slots_per_node < 0:
            raise ValueError(
                f"min_slots_per_node must be >= 0, got {min_slots_per_node}"
            )
        if replication_constant <= 0:
            raise ValueError(
                f"replication_constant must be > 0, got {replication_constant}"
            )

        self._cluster_spec = cluster_spec
        self._hasher = hasher
        self._replication_constant = replication_constant
        self._min_slots_per_node = min_slots_per_node
        self._logger = logging.getLogger("core.cluster.ketama")
        self._initialize_model()

    @property
    def cluster_spec(self) -> ClusterSpec:
        return self._cluster_spec

    @property
    def node_replication_cnt(self) -> int:
        return self._node_replication_cnt

    @property
    def slots_per_node(self) -> int:
        """Number of digests computed per node, each yielding four vnodes."""
        return self._slots_per_node

    @property
    def node_map(self) -> NodeMap:
        return self._node_map

    def get_node_for_key(self, key: bytes) -> ClusterNodeSpec:
        """
        Return the node owning `key`.

        The key is hashed onto the ring. An exact vnode hit is served
        directly, otherwise the first vnode clockwise from the hash is
        used, wrapping to the smallest token past the end of the ring.

        Complexity: O(log n)
        """
        token = self._hasher.hash_key(key)
        if not self._node_map.contains_exact(token):
            token = self._node_map.ceiling_or_wrap(token)
        return self._node_map.get(token)

    def get_nodes_for_key(self, key: bytes, count: int) -> list[ClusterNodeSpec]:
        """
        Return up to `count` distinct nodes for `key`, starting with its owner.

        The method walks the ring clockwise from the key's position and
        selects vnodes belonging to different physical nodes, skipping
        additional vnodes of nodes already selected.
        """
        if count <= 0:
            return []

        token = self._hasher.hash_key(key)
        result: list[ClusterNodeSpec] = []
        seen: set[str] = set()

        for vnode in self._node_map.iter_from(token):
            if vnode.node_id not in seen:
                result.append(self._node_map.get(vnode.token))
                seen.add(vnode.node_id)
            if len(result) == count:
                break

        return result

    def supports_reconfiguration(self) -> bool:
        return False

    def supports(self, cluster_type: ClusterType | str) -> bool:
        try:
            return ClusterType(cluster_type) is ClusterType.consistent_hash
        except ValueError:
            return False

    def on_node_addition(self, node: ClusterNodeSpec) -> None:
        raise UnsupportedOperation(
            "[BUG] basic KetamaClusterModel does NOT support reconfiguration of nodes"
        )

    def on_node_removal(self, node: ClusterNodeSpec) -> None:
        raise UnsupportedOperation(
            "[BUG] basic KetamaClusterModel does NOT support reconfiguration of nodes"
        )

    def distribution(self) -> dict[str, NodeShare]:
        """
        Return, per node id, its vnode count and share of the token space.

        Each vnode owns the arc between its predecessor's token (exclusive)
        and its own token (inclusive); the first vnode also owns the arc
        that wraps past the end of the token space.
        """
        tokens = self._node_map.tokens()
        owned: dict[str, int] = {}
        vnodes: dict[str, int] = {}

        for i, token in enumerate(tokens):
            previous = tokens[i - 1]
            arc = (token - previous) % KetamaHash.MAX or KetamaHash.MAX
            node_id = self._node_map.get(token).node_id
            owned[node_id] = owned.get(node_id, 0) + arc
            vnodes[node_id] = vnodes.get(node_id, 0) + 1

        return {
            node.node_id: NodeShare(
                node=node,
                vnodes=vnodes.get(node.node_id, 0),
                share=owned.get(node.node_id, 0) / KetamaHash.MAX,
            )
            for node in self._cluster_spec.node_specs
        }

    def _initialize_model(self) -> None:
        nodes = self._cluster_spec.node_specs
        if not nodes:
            raise ValueError("Cannot build a Ketama ring without nodes")

        self._node_map = NodeMap()
        self._node_replication_cnt = replication_count(
            len(nodes), self._replication_constant
        )
        self._slots_per_node = max(
            self._node_replication_cnt // KetamaHash.CHUNKS,
            self._min_slots_per_node,
        )
        self._map_nodes()

    def _map_nodes(self) -> None:
        nodes = self._cluster_spec.node_specs
        for node in nodes:
            self._map_node(node)

        expected = self._slots_per_node * KetamaHash.CHUNKS * len(nodes)
        if self._node_map.size() != expected:
            self._logger.error(
                f"nodeMap size: {self._node_map.size()} | expected: {expected}"
            )
            raise InvariantViolation(
                "[BUG]: expecting node map size to be slots per node * 4 * cluster node count"
            )
        if not self._node_map.size():
            self._logger.error(
                f"Ketama ring is empty for {len(nodes)} node(s): "
                f"replication count {self._node_replication_cnt} gives no slot"
            )
            raise InvariantViolation(
                "[BUG]: Ketama ring has no vnodes; raise min_slots_per_node"
            )

        self._logger.debug(
            f"Ketama ring built: {len(nodes)} nodes, "
            f"replication={self._node_replication_cnt}, "
            f"slots={self._slots_per_node}, vnodes={self._node_map.size()}"
        )

    def _map_node(self, node: ClusterNodeSpec) -> None:
        # One digest per slot, reused for four vnodes.
        for slot in range(self._slots_per_node):
            digest = self._hasher.digest(node.key_for_replication_instance(slot))
            for chunk in range(KetamaHash.CHUNKS):
                self._node_map.insert(self._hasher.hash_chunk(digest, chunk), node)
