import bisect
from typing import Generator, Iterator

from ketaring.core.errors import EmptyRingError
from ketaring.core.models.cluster import ClusterNodeSpec
from ketaring.core.space.vnode import VNode


class NodeMap:
    """
    Ordered map from ring token to cluster node: the Ketama ring itself.

    Tokens are kept in a sorted list next to a token -> node dictionary.
    The sorted list drives successor lookups through `bisect`, the
    dictionary answers exact lookups in O(1).

    Key properties:
        - Insertion order does not matter, only token order does.
        - Inserting an existing token overwrites its node (last write wins);
          collisions are not otherwise handled.
        - Successor lookups wrap around at the end of the token space,
          preserving the circular structure required by consistent hashing.

    A NodeMap is only written while a cluster model builds it. Once the
    model is published, nothing mutates it, so concurrent readers need no
    locking.
    """
    def __init__(self) -> None:
        self._tokens: list[int] = []
        self._nodes: dict[int, ClusterNodeSpec] = {}

    def insert(self, token: int, node: ClusterNodeSpec) -> None:
        """
        Map `token` to `node`, overwriting any previous owner of `token`.

        Complexity: O(log n) search, O(n) list insertion
        """
        if token not in self._nodes:
            bisect.insort(self._tokens, token)
        self._nodes[token] = node

    def size(self) -> int:
        return len(self._tokens)

    def contains_exact(self, token: int) -> bool:
        return token in self._nodes

    def ceiling_or_wrap(self, token: int) -> int:
        """
        Return the smallest stored token greater than or equal to `token`.

        `bisect_left` returns the index of the first stored token that is
        not lower than the search token. If every stored token is lower,
        the search wraps around to index 0, i.e. the smallest token of the
        whole ring.

        Complexity: O(log n)
        """
        if not self._tokens:
            raise EmptyRingError("Cannot resolve a token on an empty ring")

        idx = bisect.bisect_left(self._tokens, token)
        if idx == len(self._tokens):
            idx = 0  # wrap-around
        return self._tokens[idx]

    def get(self, token: int) -> ClusterNodeSpec:
        """Return the node stored at exactly `token` (KeyError otherwise)."""
        return self._nodes[token]

    def first_token(self) -> int:
        if not self._tokens:
            raise EmptyRingError("Empty ring has no first token")
        return self._tokens[0]

    def tokens(self) -> list[int]:
        return list(self._tokens)

    def iter_from(self, token: int) -> Generator[VNode, None, None]:
        """
        Yield vnodes in ring order, starting from the owner of `token`.

        The iteration wraps around at the end of the token list, ensuring
        full traversal of the ring. This is used for successor walks such
        as replica selection.
        """
        start = bisect.bisect_left(self._tokens, self.ceiling_or_wrap(token))
        for i in range(len(self._tokens)):
            current = self._tokens[(start + i) % len(self._tokens)]
            yield VNode(self._nodes[current].node_id, current)

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._nodes

    def __iter__(self) -> Iterator[VNode]:
        for token in self._tokens:
            yield VNode(self._nodes[token].node_id, token)
