from __future__ import annotations

from enum import StrEnum

from corim.domain.corim.model.hash_entry import HashEntry
from corim.domain.shared.model.value import RootValueObject, ValueObject


class TagKind(StrEnum):
    """Sub-manifest formats that can be embedded in the tags array."""

    COMID = "comid"
    COSWID = "coswid"

    @property
    def cbor_tag(self) -> int:
        return _CBOR_TAGS[self]

    @property
    def prefix(self) -> bytes:
        """Encoded CBOR tag header written in front of the sub-manifest bytes."""
        return _PREFIXES[self]


_CBOR_TAGS: dict[TagKind, int] = {
    TagKind.COMID: 506,
    TagKind.COSWID: 505,
}

# d9 01fa # tag(506), d9 01f9 # tag(505)
_PREFIXES: dict[TagKind, bytes] = {
    TagKind.COMID: bytes([0xD9, 0x01, 0xFA]),
    TagKind.COSWID: bytes([0xD9, 0x01, 0xF9]),
}


class Tag(RootValueObject[bytes]):
    """One embedded sub-manifest: tag prefix followed by its CBOR encoding.

    The payload is never parsed here. On the read path the leading prefix is
    only used to classify the tag; unrecognized prefixes are carried as-is.
    """

    @classmethod
    def wrap(cls, kind: TagKind, payload: bytes) -> Tag:
        return cls(kind.prefix + payload)

    @property
    def kind(self) -> TagKind | None:
        for kind in TagKind:
            if self.root.startswith(kind.prefix):
                return kind
        return None

    @property
    def payload(self) -> bytes:
        kind = self.kind
        if kind is None:
            return self.root
        return self.root[len(kind.prefix) :]

    def __len__(self) -> int:
        return len(self.root)

    def __bytes__(self) -> bytes:
        return self.root

    def validate(self) -> None:
        # not much to check on opaque bytes beyond non-emptiness
        if len(self.root) == 0:
            raise ValueError("empty tag")


class Locator(ValueObject):
    """corim-locator-map: where to fetch a dependent manifest, optionally pinned by digest."""

    href: str
    thumbprint: HashEntry | None = None

    def validate(self) -> None:
        if not self.href:
            raise ValueError("empty href")
        if self.thumbprint is not None:
            try:
                self.thumbprint.validate()
            except ValueError as e:
                raise ValueError(f"invalid locator thumbprint: {e}") from e
