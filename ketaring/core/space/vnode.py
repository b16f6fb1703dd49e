from typing import Self


class VNode(tuple):
    """
    VNode represents a virtual node on the 32-bit Ketama ring.

    The token defines the vnode's position on the ring. The node_id
    identifies the physical cluster node this position routes to.
    Both are fixed for the lifetime of the ring.
    """

    __slots__ = ()

    def __new__(cls, node_id: str, token: int) -> Self:
        return super().__new__(cls, (node_id, token))

    @property
    def node_id(self) -> str:
        """The identifier of the physical node owning this vnode."""
        return self[0]

    @property
    def token(self) -> int:
        """The 32-bit token of this vnode."""
        return self[1]

    def repr_token(self) -> str:
        return f"Token(hash={self.token}, hex={self.token:08x})"

    def __repr__(self) -> str:
        return f"VNode(node_id={self.node_id}, token={self.repr_token()})"
