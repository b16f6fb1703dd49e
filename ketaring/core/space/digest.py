import hashlib


class Md5Digest:
    """
    Default digest provider of the Ketama ring: plain MD5.

    MD5 is only used here as a fast, well-distributed mixing function for
    vnode placement; it carries no security property.
    """
    SIZE = 16

    @property
    def size(self) -> int:
        return self.SIZE

    def digest(self, data: bytes) -> bytes:
        return hashlib.md5(data, usedforsecurity=False).digest()
