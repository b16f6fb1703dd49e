from typing import Protocol


class Digest(Protocol):
    """
    Produces a fixed-length digest for an arbitrary byte sequence.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - total over well-formed input

    The digest is used as a source of pseudo-random ring positions,
    not as a security primitive.
    """

    @property
    def size(self) -> int:
        """Length in bytes of every digest produced by this provider."""

    def digest(self, data: bytes) -> bytes:
        """Return the digest of `data`."""
