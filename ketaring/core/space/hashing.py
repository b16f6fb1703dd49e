import struct

from ketaring.core.ports.digest import Digest
from ketaring.core.space.digest import Md5Digest

_CHUNK = struct.Struct("<I")


class KetamaHash:
    """
    Ketama hash function over the 32-bit token space.

    A single 16-byte digest is cut into four non-overlapping 4-byte groups,
    each read as a little-endian unsigned 32-bit integer. This yields four
    independent vnode tokens for the cost of one digest computation.

    The byte interpretation is fixed: changing the byte order or the group
    boundaries changes which node a given key maps to, and breaks
    compatibility with other Ketama clients of the same cluster.
    """
    CHUNKS = 4
    CHUNK_SIZE = _CHUNK.size
    MAX = 1 << (8 * CHUNK_SIZE)

    def __init__(self, digest: Digest | None = None) -> None:
        self._digest = digest or Md5Digest()
        if self._digest.size < self.CHUNKS * self.CHUNK_SIZE:
            raise ValueError(
                f"Ketama hashing needs a digest of at least "
                f"{self.CHUNKS * self.CHUNK_SIZE} bytes, got {self._digest.size}"
            )

    def digest(self, data: bytes) -> bytes:
        return self._digest.digest(data)

    def hash_key(self, key: bytes) -> int:
        """
        Return the ring token of a lookup key.

        The key is digested and its first chunk is used, so lookup tokens
        live in the same [0, 2^32) domain as vnode tokens.
        """
        return self.hash_chunk(self.digest(key), 0)

    def hash_chunk(self, digest: bytes, chunk: int) -> int:
        """
        Return the token held by the `chunk`-th 4-byte group of `digest`.

        Complexity: O(1)
        """
        if not 0 <= chunk < self.CHUNKS:
            raise ValueError(f"chunk must be in [0, {self.CHUNKS}), got {chunk}")
        if len(digest) < self.CHUNKS * self.CHUNK_SIZE:
            raise ValueError(
                f"digest must hold {self.CHUNKS * self.CHUNK_SIZE} bytes, "
                f"got {len(digest)}"
            )
        return _CHUNK.unpack_from(digest, chunk * self.CHUNK_SIZE)[0]

    def tokens_for(self, digest: bytes) -> list[int]:
        """Return the four vnode tokens carried by `digest`, in chunk order."""
        return [self.hash_chunk(digest, chunk) for chunk in range(self.CHUNKS)]
