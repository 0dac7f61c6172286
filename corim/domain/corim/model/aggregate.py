from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from corim.domain.corim.model.hash_entry import HashEntry
from corim.domain.corim.model.profile import Profile
from corim.domain.corim.model.result import BuildResult
from corim.domain.corim.model.tag_id import TagID
from corim.domain.corim.model.value import Locator, Tag, TagKind
from corim.domain.corim.port.sub_manifest import SubManifest
from corim.domain.shared.error import BuildError, CorimValidationError, ValidationCategory
from corim.domain.shared.model.aggregate import Aggregate

if TYPE_CHECKING:
    from corim.infrastructure.codec.config import CodecConfig

logger = logging.getLogger(__name__)


class UnsignedCorim(Aggregate):
    """unsigned-corim-map: the tagged sub-manifests plus dependent RIMs and profiles.

    Built empty and filled in with the builder operations. Each builder
    operation returns a BuildResult; a failed operation leaves the container
    exactly as it was. dependent_rims and profiles stay None until their
    first element is added.
    """

    id: TagID = TagID()
    tags: list[Tag] = []
    dependent_rims: list[Locator] | None = None
    profiles: list[Profile] | None = None

    # --- builder operations ---

    def set_id(self, value: Any) -> BuildResult:
        """Set the corim-id from a UUID (object, string or 16 raw bytes) or a non-empty string."""
        try:
            tag_id = TagID.from_value(value)
        except ValueError as e:
            return self._fail("set_id", f"invalid corim-id: {e}", e)
        self.id = tag_id
        return BuildResult(corim=self)

    def get_id(self) -> str:
        return str(self.id)

    def add_sub_manifest(self, doc: SubManifest, kind: TagKind) -> BuildResult:
        """Validate and encode `doc`, prefix it with the tag for `kind` and append it to tags."""
        operation = f"add_{kind.value}"
        try:
            doc.validate()
        except Exception as e:
            return self._fail(operation, f"{kind.value} validation failed: {e}", e)
        try:
            payload = doc.to_cbor()
        except Exception as e:
            return self._fail(operation, f"{kind.value} encoding failed: {e}", e)

        self.tags.append(Tag.wrap(kind, payload))
        return BuildResult(corim=self)

    def add_comid(self, doc: SubManifest) -> BuildResult:
        return self.add_sub_manifest(doc, TagKind.COMID)

    def add_coswid(self, doc: SubManifest) -> BuildResult:
        return self.add_sub_manifest(doc, TagKind.COSWID)

    def add_dependent_rim(self, href: str, thumbprint: HashEntry | None = None) -> BuildResult:
        """Append a locator. Its contents are only checked by validate()."""
        locator = Locator(href=href, thumbprint=thumbprint)
        if self.dependent_rims is None:
            self.dependent_rims = []
        self.dependent_rims.append(locator)
        return BuildResult(corim=self)

    def add_profile(self, url_or_oid: str) -> BuildResult:
        try:
            profile = Profile.parse(url_or_oid)
        except ValueError as e:
            return self._fail("add_profile", f"invalid profile: {e}", e)
        if self.profiles is None:
            self.profiles = []
        self.profiles.append(profile)
        return BuildResult(corim=self)

    def _fail(self, operation: str, message: str, cause: Exception) -> BuildResult:
        logger.debug("%s rejected: %s", operation, message)
        return BuildResult(error=BuildError(message, operation=operation, cause=cause))

    # --- validation ---

    def validate(self) -> None:
        """Check the container's structure, raising CorimValidationError on the first failure.

        Checks run in a fixed order (id, tags, each tag, each dependent RIM,
        each profile) and stop at the first failing element.
        """
        if self.id.is_empty:
            raise CorimValidationError("empty id", category=ValidationCategory.ID)

        if len(self.tags) == 0:
            raise CorimValidationError(
                "tags validation failed: no tags", category=ValidationCategory.TAGS, cause="no tags"
            )

        for i, tag in enumerate(self.tags):
            self._check(tag.validate, ValidationCategory.TAG, "tag", i)

        if self.dependent_rims is not None:
            for i, locator in enumerate(self.dependent_rims):
                self._check(locator.validate, ValidationCategory.DEPENDENT_RIM, "dependent RIM", i)

        if self.profiles is not None:
            for i, profile in enumerate(self.profiles):
                self._check(profile.validate, ValidationCategory.PROFILE, "profile", i)

    @staticmethod
    def _check(check: Any, category: ValidationCategory, label: str, position: int) -> None:
        try:
            check()
        except ValueError as e:
            raise CorimValidationError(
                f"{label} validation failed at pos {position}: {e}",
                category=category,
                position=position,
                cause=str(e),
            ) from e

    # --- serialization ---

    def to_cbor(self, config: CodecConfig | None = None) -> bytes:
        from corim.infrastructure.codec.cbor import CborCodec

        return CborCodec(config).encode(self)

    @classmethod
    def from_cbor(cls, data: bytes, config: CodecConfig | None = None) -> UnsignedCorim:
        from corim.infrastructure.codec.cbor import CborCodec

        return CborCodec(config).decode(data)

    def to_json(self, config: CodecConfig | None = None) -> str:
        from corim.infrastructure.codec.json import JsonCodec

        return JsonCodec(config).encode(self)

    @classmethod
    def from_json(cls, data: str | bytes, config: CodecConfig | None = None) -> UnsignedCorim:
        from corim.infrastructure.codec.json import JsonCodec

        return JsonCodec(config).decode(data)
