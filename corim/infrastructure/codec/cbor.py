"""CBOR codec for the unsigned-corim-map.

Integer keys and value encodings follow the CoRIM CDDL:

    unsigned-corim-map = {
      0 => corim-id            ; tstr / uuid as 16-byte bstr
      1 => [ + bstr ]          ; tag prefix + sub-manifest
      ? 2 => [ + corim-locator-map ]
      ? 3 => [ + profile ]     ; tstr URI / #6.111(bstr) OID
    }
    corim-locator-map = { 0 => #6.32(tstr), ? 1 => [ alg-id, bstr ] }

Optional keys are left out when absent, never encoded as null. Decoding
rebuilds the aggregate without validating it.
"""

from __future__ import annotations

import io
import logging
from typing import Any
from uuid import UUID

import cbor2

from corim.domain.corim.model.aggregate import UnsignedCorim
from corim.domain.corim.model.hash_entry import HashEntry
from corim.domain.corim.model.profile import Profile
from corim.domain.corim.model.tag_id import TagID
from corim.domain.corim.model.value import Locator, Tag
from corim.domain.shared.error import CodecError
from corim.infrastructure.codec.config import CodecConfig
from corim.infrastructure.codec.oid import decode_oid, encode_oid

logger = logging.getLogger(__name__)

# unsigned-corim-map keys
CORIM_ID = 0
TAGS = 1
DEPENDENT_RIMS = 2
PROFILES = 3

# corim-locator-map keys
HREF = 0
THUMBPRINT = 1

URI_TAG = 32
OID_TAG = 111


class CborCodec:
    """Encodes UnsignedCorim to CBOR bytes and back."""

    format = "cbor"

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()

    @property
    def config(self) -> CodecConfig:
        return self._config

    def encode(self, corim: UnsignedCorim) -> bytes:
        try:
            return cbor2.dumps(self.to_map(corim), canonical=self._config.canonical)
        except (cbor2.CBOREncodeError, ValueError) as e:
            logger.debug("CBOR encode failed: %s", e)
            raise CodecError(f"cannot encode unsigned corim: {e}", format=self.format) from e

    def decode(self, data: bytes) -> UnsignedCorim:
        try:
            fp = io.BytesIO(data)
            raw = cbor2.CBORDecoder(fp).decode()
        except (cbor2.CBORDecodeError, TypeError) as e:
            logger.debug("CBOR decode failed: %s", e)
            raise CodecError(f"malformed CBOR: {e}", format=self.format) from e
        if fp.read():
            logger.debug("CBOR decode failed: trailing data")
            raise CodecError("trailing data after unsigned-corim-map", format=self.format)
        try:
            return self.from_map(raw)
        except (ValueError, TypeError) as e:
            logger.debug("CBOR unsigned-corim-map rejected: %s", e)
            raise CodecError(f"cannot decode unsigned corim: {e}", format=self.format) from e

    # --- aggregate <-> map ---

    def to_map(self, corim: UnsignedCorim) -> dict[int, Any]:
        out: dict[int, Any] = {
            CORIM_ID: _tag_id_to_cbor(corim.id),
            TAGS: [bytes(tag) for tag in corim.tags],
        }
        if corim.dependent_rims is not None:
            out[DEPENDENT_RIMS] = [_locator_to_cbor(loc) for loc in corim.dependent_rims]
        if corim.profiles is not None:
            out[PROFILES] = [_profile_to_cbor(p) for p in corim.profiles]
        return out

    def from_map(self, raw: Any) -> UnsignedCorim:
        if not isinstance(raw, dict):
            raise ValueError(f"unsigned-corim-map must be a map, got {type(raw).__name__}")
        self._check_keys(raw, {CORIM_ID, TAGS, DEPENDENT_RIMS, PROFILES}, "unsigned-corim-map")

        dependent_rims = None
        if DEPENDENT_RIMS in raw:
            dependent_rims = [
                self._locator_from_cbor(v) for v in _array(raw[DEPENDENT_RIMS], "dependent-rims")
            ]
        profiles = None
        if PROFILES in raw:
            profiles = [_profile_from_cbor(v) for v in _array(raw[PROFILES], "profiles")]

        return UnsignedCorim(
            id=_tag_id_from_cbor(raw.get(CORIM_ID)),
            tags=[_tag_from_cbor(v) for v in _array(raw.get(TAGS, []), "tags")],
            dependent_rims=dependent_rims,
            profiles=profiles,
        )

    def _locator_from_cbor(self, raw: Any) -> Locator:
        if not isinstance(raw, dict):
            raise ValueError("corim-locator-map must be a map")
        self._check_keys(raw, {HREF, THUMBPRINT}, "corim-locator-map")

        href = raw.get(HREF, "")
        if isinstance(href, cbor2.CBORTag):
            if href.tag != URI_TAG:
                raise ValueError(f"href: unexpected CBOR tag {href.tag}")
            href = href.value
        if not isinstance(href, str):
            raise ValueError("href must be a URI text string")

        thumbprint = None
        if THUMBPRINT in raw:
            thumbprint = _hash_entry_from_cbor(raw[THUMBPRINT])
        return Locator(href=href, thumbprint=thumbprint)

    def _check_keys(self, raw: dict, known: set[int], what: str) -> None:
        if self._config.allow_unknown_keys:
            return
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"unknown keys in {what}: {sorted(unknown, key=str)}")


def _array(raw: Any, what: str) -> list:
    if not isinstance(raw, list):
        raise ValueError(f"{what} must be an array")
    return raw


def _tag_id_to_cbor(tag_id: TagID) -> str | bytes:
    if tag_id.is_empty:
        raise ValueError("corim-id is empty")
    if isinstance(tag_id.value, UUID):
        return tag_id.value.bytes
    return str(tag_id.value)


def _tag_id_from_cbor(raw: Any) -> TagID:
    if raw is None:
        return TagID()
    if isinstance(raw, str):
        return TagID(value=raw)
    if isinstance(raw, bytes) and len(raw) == 16:
        return TagID(value=UUID(bytes=raw))
    raise ValueError("corim-id must be a text string or a 16-byte UUID")


def _tag_from_cbor(raw: Any) -> Tag:
    if not isinstance(raw, bytes):
        raise ValueError("tags entries must be byte strings")
    return Tag(raw)


def _locator_to_cbor(locator: Locator) -> dict[int, Any]:
    out: dict[int, Any] = {HREF: cbor2.CBORTag(URI_TAG, locator.href)}
    if locator.thumbprint is not None:
        out[THUMBPRINT] = [locator.thumbprint.alg_id, locator.thumbprint.value]
    return out


def _hash_entry_from_cbor(raw: Any) -> HashEntry:
    if not isinstance(raw, list) or len(raw) != 2:
        raise ValueError("hash-entry must be a two-element array")
    alg_id, value = raw
    if not isinstance(alg_id, int) or not isinstance(value, bytes):
        raise ValueError("hash-entry must be [int, bstr]")
    return HashEntry(alg_id=alg_id, value=value)


def _profile_to_cbor(profile: Profile) -> str | cbor2.CBORTag:
    profile.validate()
    if profile.uri is not None:
        return profile.uri
    if profile.oid is not None:
        return cbor2.CBORTag(OID_TAG, encode_oid(profile.oid))
    raise ValueError("profile should be OID or URI")


def _profile_from_cbor(raw: Any) -> Profile:
    if isinstance(raw, str):
        return Profile(uri=raw)
    if isinstance(raw, cbor2.CBORTag):
        if raw.tag != OID_TAG:
            raise ValueError(f"profile: unexpected CBOR tag {raw.tag}")
        raw = raw.value
    if isinstance(raw, bytes):
        return Profile(oid=decode_oid(raw))
    raise ValueError("profile must be a URI text string or an OID")
