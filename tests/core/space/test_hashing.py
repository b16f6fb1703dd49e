import hashlib

import pytest

from ketaring.core.space.digest import Md5Digest
from ketaring.core.space.hashing import KetamaHash

# md5(b"") = d41d8cd9 8f00b204 e9800998 ecf8427e
EMPTY_MD5 = bytes.fromhex("d41d8cd98f00b204e9800998ecf8427e")


class ShortDigest:
    size = 8

    def digest(self, data: bytes) -> bytes:
        return hashlib.md5(data).digest()[:8]


@pytest.mark.ut
def test_md5_digest_matches_hashlib():
    d = Md5Digest()
    assert d.size == 16
    assert d.digest(b"") == EMPTY_MD5
    assert d.digest(b"hello") == hashlib.md5(b"hello").digest()


@pytest.mark.ut
def test_md5_digest_is_deterministic():
    d = Md5Digest()
    assert d.digest(b"node-1") == d.digest(b"node-1")


@pytest.mark.ut
def test_hash_chunk_reads_little_endian_groups():
    h = KetamaHash()
    assert h.hash_chunk(EMPTY_MD5, 0) == 0xD98C1DD4
    assert h.hash_chunk(EMPTY_MD5, 1) == 0x04B2008F
    assert h.hash_chunk(EMPTY_MD5, 2) == 0x980980E9
    assert h.hash_chunk(EMPTY_MD5, 3) == 0x7E42F8EC


@pytest.mark.ut
def test_hash_chunk_uses_non_overlapping_groups():
    digest = bytes(range(16))
    h = KetamaHash()
    assert h.tokens_for(digest) == [
        int.from_bytes(digest[i:i + 4], "little") for i in range(0, 16, 4)
    ]


@pytest.mark.ut
def test_hash_key_is_first_chunk_of_key_digest():
    h = KetamaHash()
    assert h.hash_key(b"") == 0xD98C1DD4
    assert h.hash_key(b"foo") == h.hash_chunk(hashlib.md5(b"foo").digest(), 0)


@pytest.mark.ut
def test_hash_key_and_chunks_share_the_32_bit_domain():
    h = KetamaHash()
    for key in (b"a", b"b", b"user:42", b"\x00" * 64):
        assert 0 <= h.hash_key(key) < KetamaHash.MAX
        for token in h.tokens_for(h.digest(key)):
            assert 0 <= token < KetamaHash.MAX


@pytest.mark.ut
def test_hash_key_is_deterministic():
    assert KetamaHash().hash_key(b"session:1") == KetamaHash().hash_key(b"session:1")


@pytest.mark.ut
@pytest.mark.parametrize("chunk", [-1, 4, 10])
def test_hash_chunk_rejects_out_of_range_chunk(chunk):
    with pytest.raises(ValueError):
        KetamaHash().hash_chunk(EMPTY_MD5, chunk)


@pytest.mark.ut
def test_hash_chunk_rejects_short_digest():
    with pytest.raises(ValueError):
        KetamaHash().hash_chunk(b"\x00" * 15, 0)


@pytest.mark.ut
def test_short_digest_provider_is_rejected():
    with pytest.raises(ValueError):
        KetamaHash(ShortDigest())
