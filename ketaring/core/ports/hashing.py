from typing import Protocol, runtime_checkable


@runtime_checkable
class ChunkedHash(Protocol):
    """
    Hash function placing keys and vnodes on the same token space.

    `hash_key` positions a lookup key on the ring, `hash_chunk` derives one
    of several vnode tokens from a single digest. Both must return values
    from the same numeric domain so that tokens inserted at build time and
    tokens computed at lookup time are comparable.
    """

    def digest(self, data: bytes) -> bytes:
        """Return the digest that `hash_chunk` slices."""

    def hash_key(self, key: bytes) -> int:
        """Return the ring token of an arbitrary lookup key."""

    def hash_chunk(self, digest: bytes, chunk: int) -> int:
        """Return the token stored in the `chunk`-th group of `digest`."""
