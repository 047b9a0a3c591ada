"""Content hashing for comparing recorded digests with current file content.

Provenance records name the algorithm used for each script's environment
(md5 by default). Supported algorithms:
- every hashlib algorithm available on this interpreter (md5, sha1, sha256,
  sha512, blake2b, ...)
- crc32 (zlib), xxhash32 and xxhash64 (xxhash), murmur32 (mmh3, seed 0),
  all reported as zero-padded lowercase hex

Algorithm names are matched case-insensitively with dashes ignored, so
"SHA-256" and "sha256" are the same algorithm.
"""

import hashlib
import zlib
from typing import Iterable, Union

import mmh3
import xxhash


class UnsupportedAlgorithmError(ValueError):
    """Raised when a recorded hash algorithm cannot be computed here."""
    pass


class _Crc32:
    def __init__(self):
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def hexdigest(self) -> str:
        return format(self._value & 0xFFFFFFFF, "08x")


class _Murmur32:
    def __init__(self):
        self._hasher = mmh3.mmh3_32(seed=0)

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def hexdigest(self) -> str:
        return format(self._hasher.uintdigest(), "08x")


_NON_CRYPTO_HASHERS = {
    "crc32": _Crc32,
    "xxhash32": xxhash.xxh32,
    "xxhash64": xxhash.xxh64,
    "murmur32": _Murmur32,
}


def normalize_algorithm(algorithm: str) -> str:
    return algorithm.strip().lower().replace("-", "")


def new_hasher(algorithm: str):
    """Return an object with update(bytes) and hexdigest() for algorithm."""
    name = normalize_algorithm(algorithm)
    if name in _NON_CRYPTO_HASHERS:
        return _NON_CRYPTO_HASHERS[name]()
    # shake digests need an explicit length, which provenance never records
    if name not in hashlib.algorithms_available or name.startswith("shake"):
        raise UnsupportedAlgorithmError(f"Unsupported hash algorithm: {algorithm}")
    return hashlib.new(name)


def hash_chunks(chunks: Iterable[bytes], algorithm: str) -> str:
    hasher = new_hasher(algorithm)
    for chunk in chunks:
        hasher.update(chunk)
    return hasher.hexdigest()


def hash_content(content: Union[str, bytes], algorithm: str = "md5") -> str:
    """Hash in-memory content (str is encoded as UTF-8)."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hash_chunks([content], algorithm)


def hashes_equal(recorded: str, current: str, algorithm: str) -> bool:
    """Compare digests; integer-valued digests are compared numerically since leading zeros may be dropped."""
    if normalize_algorithm(algorithm) in _NON_CRYPTO_HASHERS:
        try:
            return int(recorded, 16) == int(current, 16)
        except ValueError:
            return False
    return recorded.strip().lower() == current.strip().lower()
