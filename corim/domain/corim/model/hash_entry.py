"""Hash entries: (algorithm, digest) pairs from the IANA Named Information registry."""

from __future__ import annotations

from corim.domain.shared.model.value import ValueObject

# alg-id -> (name, digest length in bytes)
HASH_ALGORITHMS: dict[int, tuple[str, int]] = {
    1: ("sha-256", 32),
    2: ("sha-256-128", 16),
    3: ("sha-256-120", 15),
    4: ("sha-256-96", 12),
    5: ("sha-256-64", 8),
    6: ("sha-256-32", 4),
    7: ("sha-384", 48),
    8: ("sha-512", 64),
    9: ("sha3-224", 28),
    10: ("sha3-256", 32),
    11: ("sha3-384", 48),
    12: ("sha3-512", 64),
}

_ALG_IDS_BY_NAME: dict[str, int] = {name: alg_id for alg_id, (name, _) in HASH_ALGORITHMS.items()}


def alg_id_from_name(name: str) -> int:
    """Look up an algorithm id by registry name, e.g. "sha-256" -> 1."""
    try:
        return _ALG_IDS_BY_NAME[name]
    except KeyError:
        raise ValueError(f"unknown hash algorithm name {name!r}") from None


class HashEntry(ValueObject):
    """Digest of a referenced artifact. Not validated on construction."""

    alg_id: int
    value: bytes

    @property
    def alg_name(self) -> str | None:
        known = HASH_ALGORITHMS.get(self.alg_id)
        return known[0] if known else None

    def validate(self) -> None:
        """Raise ValueError if the algorithm is unknown or the digest has the wrong length."""
        known = HASH_ALGORITHMS.get(self.alg_id)
        if known is None:
            raise ValueError(f"unknown hash algorithm {self.alg_id}")
        name, size = known
        if len(self.value) != size:
            raise ValueError(
                f"length mismatch for hash algorithm {name}: want {size} bytes, got {len(self.value)}"
            )
