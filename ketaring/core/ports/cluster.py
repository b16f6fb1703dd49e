from typing import Protocol

from ketaring.core.models.cluster import ClusterNodeSpec, ClusterSpec, ClusterType


class ClusterModel(Protocol):
    """
    Capability interface shared by every cluster model.

    A cluster model maps operation keys to the node that must serve them.
    Implementations are fully initialized by their constructor: a caller
    never observes a model whose node mapping is still being built.
    """

    @property
    def cluster_spec(self) -> ClusterSpec:
        """The static cluster description this model was built from."""

    def get_node_for_key(self, key: bytes) -> ClusterNodeSpec:
        """
        Return the node responsible for `key`.

        The result is deterministic for a given key and node set.
        """

    def get_nodes_for_key(self, key: bytes, count: int) -> list[ClusterNodeSpec]:
        """
        Return up to `count` distinct nodes for `key`, the owner first.
        """

    def supports_reconfiguration(self) -> bool:
        """Report whether nodes may be added or removed after construction."""

    def supports(self, cluster_type: ClusterType | str) -> bool:
        """Report whether this model can serve clusters of the given type."""

    def on_node_addition(self, node: ClusterNodeSpec) -> None:
        """Integrate a new node into the mapping."""

    def on_node_removal(self, node: ClusterNodeSpec) -> None:
        """Remove a node from the mapping."""
