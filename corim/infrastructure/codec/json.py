"""JSON codec for the unsigned-corim-map.

Field names: "corim-id", "tags", "dependent-rims", "profiles"; locators use
"href" and "thumbprint". Tags are base64 strings, thumbprints are
"<alg-name>;<base64 digest>", profiles are URI or dotted-decimal OID strings.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from corim.domain.corim.model.aggregate import UnsignedCorim
from corim.domain.corim.model.hash_entry import HashEntry, alg_id_from_name
from corim.domain.corim.model.profile import Profile
from corim.domain.corim.model.tag_id import TagID
from corim.domain.corim.model.value import Locator, Tag
from corim.domain.shared.error import CodecError
from corim.infrastructure.codec.config import CodecConfig

logger = logging.getLogger(__name__)

CORIM_ID = "corim-id"
TAGS = "tags"
DEPENDENT_RIMS = "dependent-rims"
PROFILES = "profiles"

HREF = "href"
THUMBPRINT = "thumbprint"


class JsonCodec:
    """Encodes UnsignedCorim to JSON text and back."""

    format = "json"

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()

    @property
    def config(self) -> CodecConfig:
        return self._config

    def encode(self, corim: UnsignedCorim) -> str:
        try:
            doc = self.to_dict(corim)
        except ValueError as e:
            logger.debug("JSON encode failed: %s", e)
            raise CodecError(f"cannot encode unsigned corim: {e}", format=self.format) from e
        return json.dumps(doc, indent=self._config.json_indent, sort_keys=self._config.json_sort_keys)

    def decode(self, data: str | bytes) -> UnsignedCorim:
        try:
            raw = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            logger.debug("JSON decode failed: %s", e)
            raise CodecError(f"malformed JSON: {e}", format=self.format) from e
        try:
            return self.from_dict(raw)
        except (ValueError, TypeError) as e:
            logger.debug("JSON unsigned-corim-map rejected: %s", e)
            raise CodecError(f"cannot decode unsigned corim: {e}", format=self.format) from e

    # --- aggregate <-> dict ---

    def to_dict(self, corim: UnsignedCorim) -> dict[str, Any]:
        if corim.id.is_empty:
            raise ValueError("corim-id is empty")
        out: dict[str, Any] = {
            CORIM_ID: str(corim.id),
            TAGS: [base64.b64encode(bytes(tag)).decode("ascii") for tag in corim.tags],
        }
        if corim.dependent_rims is not None:
            out[DEPENDENT_RIMS] = [_locator_to_json(loc) for loc in corim.dependent_rims]
        if corim.profiles is not None:
            out[PROFILES] = [_profile_to_json(p) for p in corim.profiles]
        return out

    def from_dict(self, raw: Any) -> UnsignedCorim:
        if not isinstance(raw, dict):
            raise ValueError("unsigned-corim-map must be a JSON object")
        self._check_keys(raw, {CORIM_ID, TAGS, DEPENDENT_RIMS, PROFILES}, "unsigned-corim-map")

        dependent_rims = None
        if DEPENDENT_RIMS in raw:
            dependent_rims = [
                self._locator_from_json(v) for v in _array(raw[DEPENDENT_RIMS], DEPENDENT_RIMS)
            ]
        profiles = None
        if PROFILES in raw:
            profiles = [_profile_from_json(v) for v in _array(raw[PROFILES], PROFILES)]

        return UnsignedCorim(
            id=_tag_id_from_json(raw.get(CORIM_ID)),
            tags=[_tag_from_json(v) for v in _array(raw.get(TAGS, []), TAGS)],
            dependent_rims=dependent_rims,
            profiles=profiles,
        )

    def _locator_from_json(self, raw: Any) -> Locator:
        if not isinstance(raw, dict):
            raise ValueError("corim-locator-map must be a JSON object")
        self._check_keys(raw, {HREF, THUMBPRINT}, "corim-locator-map")

        href = raw.get(HREF, "")
        if not isinstance(href, str):
            raise ValueError("href must be a string")
        thumbprint = None
        if THUMBPRINT in raw:
            thumbprint = _hash_entry_from_json(raw[THUMBPRINT])
        return Locator(href=href, thumbprint=thumbprint)

    def _check_keys(self, raw: dict, known: set[str], what: str) -> None:
        if self._config.allow_unknown_keys:
            return
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"unknown keys in {what}: {sorted(unknown)}")


def _array(raw: Any, what: str) -> list:
    if not isinstance(raw, list):
        raise ValueError(f"{what} must be an array")
    return raw


def _b64decode(s: Any, what: str) -> bytes:
    if not isinstance(s, str):
        raise ValueError(f"{what} must be a base64 string")
    try:
        return base64.b64decode(s, validate=True)
    except binascii.Error as e:
        raise ValueError(f"{what}: invalid base64: {e}") from e


def _tag_id_from_json(raw: Any) -> TagID:
    if raw is None or raw == "":
        return TagID()
    if not isinstance(raw, str):
        raise ValueError("corim-id must be a string")
    return TagID.from_value(raw)


def _tag_from_json(raw: Any) -> Tag:
    return Tag(_b64decode(raw, "tags entry"))


def _locator_to_json(locator: Locator) -> dict[str, Any]:
    out: dict[str, Any] = {HREF: locator.href}
    if locator.thumbprint is not None:
        out[THUMBPRINT] = _hash_entry_to_json(locator.thumbprint)
    return out


def _hash_entry_to_json(entry: HashEntry) -> str:
    alg = entry.alg_name or str(entry.alg_id)
    return f"{alg};{base64.b64encode(entry.value).decode('ascii')}"


def _hash_entry_from_json(raw: Any) -> HashEntry:
    if not isinstance(raw, str) or ";" not in raw:
        raise ValueError('thumbprint must be "<alg>;<base64 digest>"')
    alg, digest = raw.split(";", 1)
    alg_id = int(alg) if alg.isdigit() else alg_id_from_name(alg)
    return HashEntry(alg_id=alg_id, value=_b64decode(digest, "thumbprint digest"))


def _profile_to_json(profile: Profile) -> str:
    profile.validate()
    return str(profile)


def _profile_from_json(raw: Any) -> Profile:
    if not isinstance(raw, str):
        raise ValueError("profile must be a string")
    return Profile.parse(raw)

